"""
Listing pages: long-term rentals and short stays.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Optional
from datetime import date
from stayhub.models.property import PropertyType
from stayhub.services.currency import CurrencyConverter, get_currency_converter
from stayhub.services.listing import ListingService, ListingFilter, ALL_LOCATIONS, ANY_BEDROOMS
from stayhub.schemas.property import ListingResponse
from stayhub.schemas.error import COMMON_ERROR_RESPONSES
from stayhub.utils.dependencies import get_listing_service


router = APIRouter(tags=["Listings"])


@router.get(
    "/rentals",
    response_model=ListingResponse,
    status_code=status.HTTP_200_OK,
    summary="Long-term rentals",
    description="Available long-term rentals, newest first, narrowed by search, location, bedrooms and price",
    responses={422: COMMON_ERROR_RESPONSES[422]}
)
async def list_rentals(
    search: Optional[str] = Query(None, description="Matches title or location"),
    location: str = Query(ALL_LOCATIONS, description="Area name or 'All Locations'"),
    bedrooms: str = Query(ANY_BEDROOMS, description="Exact bedroom count or 'any'"),
    min_price: Optional[float] = Query(None, ge=0, description="Minimum price in KES"),
    max_price: Optional[float] = Query(None, ge=0, description="Maximum price in KES"),
    listing_service: ListingService = Depends(get_listing_service),
    converter: CurrencyConverter = Depends(get_currency_converter)
) -> ListingResponse:
    listing_filter = ListingFilter(
        property_type=PropertyType.LONG_TERM,
        search=search,
        location=location,
        bedrooms=bedrooms,
        min_price=min_price,
        max_price=max_price
    )
    return await listing_service.listing_page(listing_filter, converter)


@router.get(
    "/airbnb",
    response_model=ListingResponse,
    status_code=status.HTTP_200_OK,
    summary="Short stays",
    description="Available short stays, newest first; stay dates price each card for the chosen nights",
    responses={422: COMMON_ERROR_RESPONSES[422]}
)
async def list_short_stays(
    search: Optional[str] = Query(None, description="Matches title or location"),
    location: str = Query(ALL_LOCATIONS, description="Area name or 'All Locations'"),
    bedrooms: str = Query(ANY_BEDROOMS, description="Exact bedroom count or 'any'"),
    min_price: Optional[float] = Query(None, ge=0, description="Minimum nightly price in KES"),
    max_price: Optional[float] = Query(None, ge=0, description="Maximum nightly price in KES"),
    check_in: Optional[date] = Query(None, description="Arrival date"),
    check_out: Optional[date] = Query(None, description="Departure date"),
    listing_service: ListingService = Depends(get_listing_service),
    converter: CurrencyConverter = Depends(get_currency_converter)
) -> ListingResponse:
    listing_filter = ListingFilter(
        property_type=PropertyType.SHORT_STAY,
        search=search,
        location=location,
        bedrooms=bedrooms,
        min_price=min_price,
        max_price=max_price,
        check_in=check_in,
        check_out=check_out
    )
    return await listing_service.listing_page(listing_filter, converter)
