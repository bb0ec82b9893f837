"""
Booking quotes and booking requests for short stays.
Totals are computed server-side; there is no availability or overlap check.
"""

from datetime import date
from typing import Optional, List, Dict, Any, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from stayhub.repositories.booking import BookingRepository
from stayhub.repositories.property import PropertyRepository
from stayhub.models.booking import Booking, BookingStatus
from stayhub.models.property import Property
from stayhub.models.profile import Profile
from stayhub.services.currency import CurrencyConverter
from stayhub.services.pricing import BookingQuote, calculate_quote, max_guests, guest_options
from stayhub.utils.exceptions import (
    PropertyNotFoundError,
    PropertyNotBookableError,
    PropertyUnavailableError,
    InvalidDateRangeError,
    GuestLimitError,
    ValidationError
)
import uuid
import logging

logger = logging.getLogger(__name__)


def validate_stay(check_in: Optional[date], check_out: Optional[date]) -> None:
    """
    Raises:
        ValidationError: If a date is missing
        InvalidDateRangeError: If check-out is not after check-in
    """
    if check_in is None or check_out is None:
        raise ValidationError("Please select check-in and check-out dates")
    if check_out <= check_in:
        raise InvalidDateRangeError()


def validate_guests(guests: int, bedrooms: int) -> None:
    limit = max_guests(bedrooms)
    if guests < 1 or guests > limit:
        raise GuestLimitError(guests, limit)


class BookingService:
    """Quote and booking operations."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.booking_repo = BookingRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def _get_property(self, property_id: uuid.UUID) -> Property:
        property_obj = await self.property_repo.get_by_id(property_id)
        if not property_obj:
            raise PropertyNotFoundError(str(property_id))
        return property_obj

    async def _get_nightly_property(self, property_id: uuid.UUID) -> Property:
        property_obj = await self._get_property(property_id)
        if not property_obj.is_nightly:
            raise PropertyNotBookableError(str(property_id))
        return property_obj

    async def quote(
        self,
        property_id: uuid.UUID,
        check_in: Optional[date],
        check_out: Optional[date]
    ) -> Tuple[Property, BookingQuote]:
        """
        Price breakdown for a stay. Missing dates give a zero-night quote.
        Only short stays are quoted.

        Returns:
            Tuple of (property, quote)
        """
        property_obj = await self._get_nightly_property(property_id)
        if check_in is not None and check_out is not None and check_out <= check_in:
            raise InvalidDateRangeError()
        return property_obj, calculate_quote(property_obj.price, check_in, check_out)

    async def create_booking(
        self,
        property_id: uuid.UUID,
        check_in: Optional[date],
        check_out: Optional[date],
        guests: int,
        current_user: Profile,
        notes: Optional[str] = None
    ) -> Booking:
        """
        Create a pending booking priced at the computed grand total.

        Raises:
            PropertyNotFoundError: If the property does not exist
            PropertyNotBookableError: If the property is a long-term rental
            PropertyUnavailableError: If the property is marked unavailable
            InvalidDateRangeError: If check-out is not after check-in
            GuestLimitError: If guests is outside 1..bedrooms*2
        """
        validate_stay(check_in, check_out)
        property_obj = await self._get_nightly_property(property_id)

        if not property_obj.is_available:
            raise PropertyUnavailableError(str(property_id))

        validate_guests(guests, property_obj.bedrooms)

        quote = calculate_quote(property_obj.price, check_in, check_out)
        booking = await self.booking_repo.create_booking({
            "property_id": property_obj.id,
            "user_id": current_user.id,
            "check_in": check_in,
            "check_out": check_out,
            "total_price": quote.total,
            "guests": guests,
            "notes": notes or None,
            "status": BookingStatus.PENDING,
        })

        logger.info(
            f"Booking request {booking.id} by {current_user.email}: "
            f"{quote.nights} nights, total {quote.total}"
        )
        return booking

    async def list_user_bookings(self, current_user: Profile) -> List[Booking]:
        return await self.booking_repo.list_for_user(current_user.id)

    @staticmethod
    def serialize_quote(
        property_obj: Property,
        quote: BookingQuote,
        converter: CurrencyConverter
    ) -> Dict[str, Any]:
        return {
            "property_id": str(property_obj.id),
            "nightly_price": float(quote.nightly_price),
            "nights": quote.nights,
            "subtotal": float(quote.subtotal),
            "service_fee": quote.service_fee,
            "total": float(quote.total),
            "currency": converter.currency.value,
            "display_nightly_price": converter.format_price(quote.nightly_price),
            "display_subtotal": converter.format_price(quote.subtotal),
            "display_service_fee": converter.format_price(quote.service_fee),
            "display_total": converter.format_price(quote.total),
            "guest_options": guest_options(property_obj.bedrooms),
        }

    @staticmethod
    def serialize_booking(booking: Booking, converter: CurrencyConverter) -> Dict[str, Any]:
        data = booking.to_dict()
        data["display_total"] = converter.format_price(booking.total_price)
        if booking.property_rel is not None:
            data["property_title"] = booking.property_rel.title
        return data
