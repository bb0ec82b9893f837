"""
Pydantic schemas for property gallery images.
Images are referenced by URL or by object path inside the image bucket.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional


class PropertyImageInput(BaseModel):
    """Image entry of a create/update payload."""

    image_url: str = Field(
        ...,
        min_length=1,
        max_length=1000,
        description="Absolute URL or bucket object path",
        examples=["https://images.unsplash.com/photo-1502672260266-1c1ef2d93688?w=800&q=80"]
    )

    is_primary: bool = Field(
        False,
        description="Whether this is the cover image"
    )

    sort_order: Optional[int] = Field(
        None,
        ge=0,
        description="Gallery position; list order is used when omitted"
    )

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v):
        if not v.strip():
            raise ValueError("Image URL cannot be empty")
        return v.strip()


class PropertyImageResponse(BaseModel):
    """Stored gallery image."""

    id: str
    property_id: str
    image_url: str
    is_primary: bool
    sort_order: int
