"""
Booking request endpoints.
"""

from fastapi import APIRouter, Depends, status
from stayhub.models.profile import Profile
from stayhub.services.booking import BookingService
from stayhub.services.currency import CurrencyConverter, get_currency_converter
from stayhub.schemas.booking import BookingCreate, BookingResponse, BookingListResponse
from stayhub.schemas.error import COMMON_ERROR_RESPONSES
from stayhub.utils.dependencies import get_booking_service, get_booking_user, get_current_user


router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request a booking",
    description="Create a pending booking priced at nights x nightly price plus the service fee",
    responses={
        400: COMMON_ERROR_RESPONSES[400],
        401: COMMON_ERROR_RESPONSES[401],
        404: COMMON_ERROR_RESPONSES[404],
        422: COMMON_ERROR_RESPONSES[422]
    }
)
async def create_booking(
    booking_data: BookingCreate,
    current_user: Profile = Depends(get_booking_user),
    booking_service: BookingService = Depends(get_booking_service),
    converter: CurrencyConverter = Depends(get_currency_converter)
) -> BookingResponse:
    """
    Raises:
        UnauthorizedError: If not signed in
        PropertyNotFoundError: If the property does not exist
        PropertyNotBookableError: If the property is a long-term rental
        InvalidDateRangeError: If check-out is not after check-in
        GuestLimitError: If guests is outside 1..bedrooms*2
    """
    booking = await booking_service.create_booking(
        property_id=booking_data.property_id,
        check_in=booking_data.check_in,
        check_out=booking_data.check_out,
        guests=booking_data.guests,
        current_user=current_user,
        notes=booking_data.notes
    )
    return booking_service.serialize_booking(booking, converter)


@router.get(
    "/me",
    response_model=BookingListResponse,
    status_code=status.HTTP_200_OK,
    summary="My bookings",
    description="Bookings made by the signed-in account, newest first",
    responses={401: COMMON_ERROR_RESPONSES[401]}
)
async def my_bookings(
    current_user: Profile = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
    converter: CurrencyConverter = Depends(get_currency_converter)
) -> BookingListResponse:
    bookings = await booking_service.list_user_bookings(current_user)
    return BookingListResponse(
        bookings=[booking_service.serialize_booking(booking, converter) for booking in bookings],
        total=len(bookings)
    )
