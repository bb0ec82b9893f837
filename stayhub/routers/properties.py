"""
Public property endpoints: featured listings, detail view and stay quotes.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from datetime import date
import uuid
from stayhub.models.property import AMENITIES_OPTIONS
from stayhub.services.booking import BookingService
from stayhub.services.currency import CurrencyConverter, get_currency_converter
from stayhub.services.listing import ListingService
from stayhub.services.property import PropertyService
from stayhub.schemas.booking import QuoteResponse
from stayhub.schemas.property import PropertyCard, PropertyDetailResponse, AmenitiesResponse
from stayhub.schemas.error import COMMON_ERROR_RESPONSES
from stayhub.utils.dependencies import get_booking_service, get_listing_service, get_property_service


router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get(
    "/featured",
    response_model=List[PropertyCard],
    status_code=status.HTTP_200_OK,
    summary="Featured properties",
    description="Featured available properties for the home page, newest first"
)
async def featured_properties(
    limit: int = Query(6, ge=1, le=50),
    listing_service: ListingService = Depends(get_listing_service),
    converter: CurrencyConverter = Depends(get_currency_converter)
) -> List[PropertyCard]:
    return await listing_service.featured(converter, limit=limit)


@router.get(
    "/amenities",
    response_model=AmenitiesResponse,
    status_code=status.HTTP_200_OK,
    summary="Amenity options",
    description="Fixed list of amenities a property can carry"
)
async def amenity_options() -> AmenitiesResponse:
    return AmenitiesResponse(amenities=list(AMENITIES_OPTIONS))


@router.get(
    "/{property_id}",
    response_model=PropertyDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Property detail",
    description="Property with its gallery, formatted price and guest range",
    responses={404: COMMON_ERROR_RESPONSES[404]}
)
async def get_property(
    property_id: uuid.UUID,
    property_service: PropertyService = Depends(get_property_service),
    converter: CurrencyConverter = Depends(get_currency_converter)
) -> PropertyDetailResponse:
    property_obj = await property_service.get_property(property_id)
    return property_service.serialize_detail(property_obj, converter)


@router.get(
    "/{property_id}/quote",
    response_model=QuoteResponse,
    status_code=status.HTTP_200_OK,
    summary="Stay quote",
    description="Nights, subtotal, 10% service fee and total for the chosen dates; short stays only",
    responses={400: COMMON_ERROR_RESPONSES[400], 404: COMMON_ERROR_RESPONSES[404], 422: COMMON_ERROR_RESPONSES[422]}
)
async def quote_stay(
    property_id: uuid.UUID,
    check_in: Optional[date] = Query(None, description="Arrival date"),
    check_out: Optional[date] = Query(None, description="Departure date"),
    booking_service: BookingService = Depends(get_booking_service),
    converter: CurrencyConverter = Depends(get_currency_converter)
) -> QuoteResponse:
    property_obj, quote = await booking_service.quote(property_id, check_in, check_out)
    return booking_service.serialize_quote(property_obj, quote, converter)
