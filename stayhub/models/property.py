"""
Property model for long-term rentals and short stays.
Handles listing data, pricing, amenities and image relationships.
"""

from sqlalchemy import String, Text, Integer, Numeric, Boolean, JSON, Uuid, Enum as SQLEnum, Index, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from stayhub.database import Base
from decimal import Decimal
import enum
import uuid
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from stayhub.models.image import PropertyImage


class PropertyType(str, enum.Enum):
    """Listing type: monthly/weekly rentals or nightly stays."""
    LONG_TERM = "long-term"
    SHORT_STAY = "short-stay"


class PricePeriod(str, enum.Enum):
    """Period the listed price covers."""
    MONTH = "month"
    WEEK = "week"
    NIGHT = "night"


AMENITIES_OPTIONS = [
    "WiFi", "Air Conditioning", "Parking", "Pool", "Gym", "Security",
    "Laundry", "Kitchen", "Balcony", "Garden", "Pet Friendly", "Furnished",
    "Water Tank", "Generator", "CCTV", "Elevator",
]


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Property(Base):
    """
    Property listing.
    Prices are always stored in KES; conversion happens at display time.
    """

    __tablename__ = "properties"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Property listing title"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Detailed property description"
    )

    property_type: Mapped[PropertyType] = mapped_column(
        SQLEnum(PropertyType, name="property_type", values_callable=_enum_values),
        nullable=False,
        index=True,
        comment="long-term or short-stay"
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        index=True,
        comment="Price in KES per price period"
    )

    price_period: Mapped[PricePeriod] = mapped_column(
        SQLEnum(PricePeriod, name="price_period", values_callable=_enum_values),
        nullable=False,
        default=PricePeriod.MONTH,
        comment="month, week or night"
    )

    location: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Neighbourhood and city, e.g. 'Westlands, Nairobi'"
    )

    address: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        default="",
        comment="Street address"
    )

    latitude: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=10, scale=8),
        nullable=True
    )

    longitude: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=11, scale=8),
        nullable=True
    )

    bedrooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        index=True
    )

    bathrooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1
    )

    amenities: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Amenity labels"
    )

    is_available: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True
    )

    featured: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True
    )

    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Profile that created the listing"
    )

    images: Mapped[List["PropertyImage"]] = relationship(
        "PropertyImage",
        back_populates="property_rel",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="PropertyImage.sort_order.asc()"
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, title={self.title[:30]}, price={self.price})>"

    @property
    def primary_image(self) -> Optional["PropertyImage"]:
        """Primary image, falling back to the first image in sort order."""
        for image in self.images:
            if image.is_primary:
                return image
        return self.images[0] if self.images else None

    @property
    def image_urls(self) -> List[str]:
        return [image.image_url for image in self.images]

    @property
    def is_nightly(self) -> bool:
        """Only short stays are priced per night and can be booked."""
        return self.property_type == PropertyType.SHORT_STAY

    @property
    def is_bookable(self) -> bool:
        return self.is_nightly and bool(self.is_available)

    def validate_price(self) -> None:
        """
        Validate property price.

        Raises:
            ValueError: If price is invalid
        """
        if self.price is None or self.price <= 0:
            raise ValueError("Property price must be greater than 0")

        if self.price > Decimal("9999999999.99"):
            raise ValueError("Property price exceeds maximum allowed value")

    def validate_rooms(self) -> None:
        if self.bedrooms is not None and self.bedrooms < 0:
            raise ValueError("Number of bedrooms cannot be negative")
        if self.bathrooms is not None and self.bathrooms < 0:
            raise ValueError("Number of bathrooms cannot be negative")

    def validate_all(self) -> None:
        """
        Run all validation checks on the property.

        Raises:
            ValueError: If any validation fails
        """
        self.validate_price()
        self.validate_rooms()

    def to_dict(self, include_images: bool = False) -> dict:
        """
        Convert property to dictionary.

        Args:
            include_images: Whether to include image information

        Returns:
            Dictionary representation of property
        """
        result = {
            "id": str(self.id),
            "title": self.title,
            "description": self.description,
            "property_type": self.property_type.value,
            "price": float(self.price),
            "price_period": self.price_period.value,
            "location": self.location,
            "address": self.address,
            "latitude": float(self.latitude) if self.latitude is not None else None,
            "longitude": float(self.longitude) if self.longitude is not None else None,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "amenities": list(self.amenities or []),
            "is_available": self.is_available,
            "featured": self.featured,
            "created_by": str(self.created_by) if self.created_by else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

        if include_images:
            result["images"] = [image.to_dict() for image in self.images]

        return result


# Listing pages filter by type and availability, newest first
type_available_index = Index(
    "idx_properties_type_available",
    Property.property_type,
    Property.is_available,
    Property.created_at.desc()
)

featured_index = Index(
    "idx_properties_featured",
    Property.featured,
    Property.is_available
)
