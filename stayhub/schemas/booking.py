"""
Pydantic schemas for quotes and booking requests.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import date
import uuid


class BookingCreate(BaseModel):
    """Booking request for a short stay."""

    property_id: uuid.UUID = Field(..., description="Property to book")
    check_in: Optional[date] = Field(None, description="Arrival date", examples=["2024-06-01"])
    check_out: Optional[date] = Field(None, description="Departure date", examples=["2024-06-04"])
    guests: int = Field(1, description="Number of guests, 1 to bedrooms*2", examples=[2])
    notes: Optional[str] = Field(None, max_length=2000, description="Special requests")

    @field_validator("notes")
    @classmethod
    def clean_notes(cls, v):
        if v is None:
            return None
        return v.strip() or None


class QuoteResponse(BaseModel):
    """Price breakdown for a stay."""

    property_id: str
    nightly_price: float
    nights: int
    subtotal: float
    service_fee: int
    total: float
    currency: str
    display_nightly_price: str
    display_subtotal: str
    display_service_fee: str
    display_total: str
    guest_options: List[int]


class BookingResponse(BaseModel):
    id: str
    property_id: str
    property_title: Optional[str] = None
    user_id: str
    check_in: date
    check_out: date
    nights: int
    total_price: float
    display_total: str
    guests: int
    notes: Optional[str] = None
    status: str
    created_at: Optional[str] = None


class BookingListResponse(BaseModel):
    bookings: List[BookingResponse]
    total: int
