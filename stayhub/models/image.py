"""
PropertyImage model for listing galleries.
Images are referenced by public URL; ordering and the primary flag drive the carousel.
"""

from sqlalchemy import String, Integer, Boolean, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from stayhub.database import Base
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stayhub.models.property import Property


class PropertyImage(Base):
    """Image belonging to a property."""

    __tablename__ = "property_images"

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the property this image belongs to"
    )

    image_url: Mapped[str] = mapped_column(
        String(1000),
        nullable=False,
        comment="Public URL of the image"
    )

    is_primary: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether this is the cover image for the property"
    )

    sort_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Position in the gallery"
    )

    property_rel: Mapped["Property"] = relationship(
        "Property",
        back_populates="images",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<PropertyImage(id={self.id}, property_id={self.property_id}, sort_order={self.sort_order})>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "property_id": str(self.property_id),
            "image_url": self.image_url,
            "is_primary": self.is_primary,
            "sort_order": self.sort_order,
        }


property_images_order_index = Index(
    "idx_property_images_property_order",
    PropertyImage.property_id,
    PropertyImage.sort_order.asc()
)
