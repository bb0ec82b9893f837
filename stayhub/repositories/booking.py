"""
Booking repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from stayhub.repositories.base import BaseRepository
from stayhub.models.booking import Booking
from typing import List
import uuid
import logging

logger = logging.getLogger(__name__)


class BookingRepository(BaseRepository[Booking]):
    """Repository for booking requests."""

    def __init__(self, db: AsyncSession):
        super().__init__(Booking, db)

    async def create_booking(self, booking_data: dict) -> Booking:
        created_booking = await self.create(booking_data)
        logger.info(
            f"Created booking {created_booking.id} for property {created_booking.property_id} "
            f"({created_booking.check_in} -> {created_booking.check_out})"
        )
        return await self.get_by_id(created_booking.id)

    async def list_for_user(self, user_id: uuid.UUID) -> List[Booking]:
        """Bookings made by a user, newest first."""
        return await self.get_multi(filters={"user_id": user_id}, order_by="-created_at")
