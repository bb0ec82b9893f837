"""
Booking model for short-stay reservations.
Totals are computed at request time and stored as submitted; no overlap checks exist.
"""

from sqlalchemy import Date, Integer, Numeric, Text, Uuid, ForeignKey, Index, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from stayhub.database import Base
from datetime import date
from decimal import Decimal
import enum
import uuid
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from stayhub.models.property import Property


class BookingStatus(str, enum.Enum):
    """Booking lifecycle status."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Booking(Base):
    """Booking request made by a signed-in user for a property."""

    __tablename__ = "bookings"

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    check_in: Mapped[date] = mapped_column(Date, nullable=False)

    check_out: Mapped[date] = mapped_column(Date, nullable=False)

    total_price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        comment="Grand total in KES including the service fee"
    )

    guests: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[BookingStatus] = mapped_column(
        SQLEnum(BookingStatus, name="booking_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True
    )

    property_rel: Mapped["Property"] = relationship(
        "Property",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, property_id={self.property_id}, status={self.status})>"

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "property_id": str(self.property_id),
            "user_id": str(self.user_id),
            "check_in": self.check_in.isoformat(),
            "check_out": self.check_out.isoformat(),
            "nights": self.nights,
            "total_price": float(self.total_price),
            "guests": self.guests,
            "notes": self.notes,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


user_bookings_index = Index(
    "idx_bookings_user_created",
    Booking.user_id,
    Booking.created_at.desc()
)
