"""
Property repository for listing pages, the admin table and dashboard counts.
Listing pages fetch by type and filter in memory; no search is pushed down to SQL.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, desc, case
from stayhub.repositories.base import BaseRepository
from stayhub.models.property import Property, PropertyType
from typing import Optional, List, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    Images are eagerly loaded in sort order through the model relationship.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def create_property(self, property_data: Dict[str, Any]) -> Property:
        """
        Create a new property after model-level validation.

        Raises:
            ValueError: If validation fails
        """
        try:
            Property(**property_data).validate_all()

            created_property = await self.create(property_data)
            logger.info(f"Created property: {created_property.title} (ID: {created_property.id})")
            return created_property
        except ValueError as e:
            logger.error(f"Property validation failed: {e}")
            raise

    async def get_property_with_images(self, property_id: uuid.UUID) -> Optional[Property]:
        """Get a property with its gallery, or None."""
        return await self.get_by_id(property_id)

    async def list_properties(
        self,
        property_type: Optional[PropertyType] = None,
        available_only: bool = False,
        featured_only: bool = False,
        limit: Optional[int] = None
    ) -> List[Property]:
        """
        List properties newest first.

        Args:
            property_type: Restrict to long-term or short-stay listings
            available_only: Skip listings marked unavailable
            featured_only: Only featured listings
            limit: Maximum number of rows, None for all

        Returns:
            List of properties with images loaded
        """
        try:
            query = select(Property)

            if property_type is not None:
                query = query.where(Property.property_type == property_type)
            if available_only:
                query = query.where(Property.is_available.is_(True))
            if featured_only:
                query = query.where(Property.featured.is_(True))

            query = query.order_by(desc(Property.created_at))
            if limit is not None:
                query = query.limit(limit)

            result = await self.db.execute(query.execution_options(populate_existing=True))
            properties = list(result.scalars().all())

            logger.debug(
                f"Listed {len(properties)} properties "
                f"(type={property_type.value if property_type else 'any'}, available_only={available_only})"
            )
            return properties
        except Exception as e:
            logger.error(f"Failed to list properties: {e}")
            raise

    async def set_availability(self, property_id: uuid.UUID, is_available: bool) -> Optional[Property]:
        """
        Update the availability flag.

        Returns:
            Updated property or None if not found
        """
        updated_property = await self.update(property_id, {"is_available": is_available})
        if updated_property:
            state = "available" if is_available else "unavailable"
            logger.info(f"Property {property_id} marked as {state}")
        return updated_property

    async def get_dashboard_counts(self) -> Dict[str, int]:
        """
        Counts shown on the admin dashboard.

        Returns:
            Dictionary with total, long_term, short_stay and available counts
        """
        try:
            query = select(
                func.count(Property.id),
                func.sum(case((Property.property_type == PropertyType.LONG_TERM, 1), else_=0)),
                func.sum(case((Property.property_type == PropertyType.SHORT_STAY, 1), else_=0)),
                func.sum(case((Property.is_available.is_(True), 1), else_=0)),
            )
            result = await self.db.execute(query)
            total, long_term, short_stay, available = result.one()

            counts = {
                "total_properties": total or 0,
                "long_term_rentals": int(long_term or 0),
                "short_stays": int(short_stay or 0),
                "available_properties": int(available or 0),
            }
            logger.debug(f"Dashboard counts: {counts}")
            return counts
        except Exception as e:
            logger.error(f"Failed to compute dashboard counts: {e}")
            raise
