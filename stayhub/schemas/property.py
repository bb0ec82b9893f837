"""
Pydantic schemas for property requests and responses.
Handles admin create/update payloads, availability toggles and the public views.
"""

from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Optional, List, Union
from datetime import datetime
from decimal import Decimal
from stayhub.models.property import PropertyType, PricePeriod, AMENITIES_OPTIONS
from stayhub.schemas.image import PropertyImageInput, PropertyImageResponse


def _clean_amenities(values: Optional[List[str]]) -> Optional[List[str]]:
    if values is None:
        return None
    cleaned: List[str] = []
    for amenity in values:
        if amenity not in AMENITIES_OPTIONS:
            raise ValueError(f"Unknown amenity: {amenity}")
        if amenity not in cleaned:
            cleaned.append(amenity)
    return cleaned


def _required_text(value: Optional[str], label: str) -> Optional[str]:
    if value is None:
        return None
    if not value.strip():
        raise ValueError(f"{label} cannot be empty")
    return value.strip()


class PropertyBase(BaseModel):
    """Base property schema with common fields."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Listing title",
        examples=["Modern Luxury Apartment in Westlands"]
    )

    description: str = Field(
        "",
        max_length=5000,
        description="Listing description"
    )

    property_type: PropertyType = Field(
        PropertyType.LONG_TERM,
        description="long-term rental or short-stay",
        examples=["long-term"]
    )

    price: Decimal = Field(
        ...,
        gt=0,
        description="Price in KES per price period",
        examples=[150000]
    )

    price_period: PricePeriod = Field(
        PricePeriod.MONTH,
        description="month, week or night"
    )

    location: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Area and city",
        examples=["Westlands, Nairobi"]
    )

    address: Optional[str] = Field(None, max_length=500)

    latitude: Optional[Decimal] = Field(None, ge=-90, le=90)

    longitude: Optional[Decimal] = Field(None, ge=-180, le=180)

    bedrooms: int = Field(1, ge=0, le=50)

    bathrooms: int = Field(1, ge=0, le=50)

    amenities: List[str] = Field(
        default_factory=list,
        description=f"Subset of: {', '.join(AMENITIES_OPTIONS)}"
    )

    is_available: bool = True

    featured: bool = False

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return _required_text(v, "Title")

    @field_validator("location")
    @classmethod
    def validate_location(cls, v):
        return _required_text(v, "Location")

    @field_validator("amenities")
    @classmethod
    def validate_amenities(cls, v):
        return _clean_amenities(v)


class PropertyCreate(PropertyBase):
    """Admin create payload; images are referenced by URL."""

    images: List[PropertyImageInput] = Field(default_factory=list)


class PropertyUpdate(BaseModel):
    """
    Admin update payload. Omitted fields are left unchanged.
    When images is given the gallery is replaced with it.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    property_type: Optional[PropertyType] = None
    price: Optional[Decimal] = Field(None, gt=0)
    price_period: Optional[PricePeriod] = None
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(None, ge=-180, le=180)
    bedrooms: Optional[int] = Field(None, ge=0, le=50)
    bathrooms: Optional[int] = Field(None, ge=0, le=50)
    amenities: Optional[List[str]] = None
    is_available: Optional[bool] = None
    featured: Optional[bool] = None
    images: Optional[List[PropertyImageInput]] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return _required_text(v, "Title")

    @field_validator("location")
    @classmethod
    def validate_location(cls, v):
        return _required_text(v, "Location")

    @field_validator("amenities")
    @classmethod
    def validate_amenities(cls, v):
        return _clean_amenities(v)


class AvailabilityUpdate(BaseModel):
    is_available: bool


class PropertyResponse(BaseModel):
    """Property as returned by detail and admin endpoints."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    property_type: PropertyType
    price: float
    price_period: PricePeriod
    display_price: str
    location: str
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    bedrooms: int
    bathrooms: int
    amenities: List[str]
    is_available: bool
    featured: bool
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    images: List[PropertyImageResponse] = Field(default_factory=list)


class PropertyDetailResponse(PropertyResponse):
    """Public detail view with gallery URLs and the guest picker range."""

    gallery: List[str]
    guest_options: List[int]
    bookable: bool


class PropertyCard(BaseModel):
    """Listing grid card."""

    id: str
    title: str
    location: str
    property_type: PropertyType
    price: float
    price_period: PricePeriod
    display_price: str
    images: List[str]
    bedrooms: int
    bathrooms: int
    amenities: List[str]
    is_available: bool
    featured: bool
    nights: Optional[int] = None
    display_stay_total: Optional[str] = None


class ListingFilters(BaseModel):
    search: str
    location: str
    bedrooms: Union[str, int]
    min_price: int
    max_price: int
    check_in: Optional[str] = None
    check_out: Optional[str] = None


class ListingResponse(BaseModel):
    """Rentals or short-stays page."""

    property_type: PropertyType
    currency: str
    total: int
    count: int
    properties: List[PropertyCard]
    locations: List[str]
    filters: ListingFilters
    active_filters: int
    max_price: int


class AdminPropertyRow(BaseModel):
    """Row of the admin property table."""

    id: str
    title: str
    location: str
    property_type: PropertyType
    price: float
    display_price: str
    price_period: PricePeriod
    is_available: bool
    featured: bool
    primary_image: Optional[str] = None
    created_at: Optional[datetime] = None


class DashboardResponse(BaseModel):
    total_properties: int
    long_term_rentals: int
    short_stays: int
    available_properties: int


class AmenitiesResponse(BaseModel):
    amenities: List[str]
