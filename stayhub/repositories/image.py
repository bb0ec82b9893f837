"""
Image repository for property galleries.
Saving a gallery replaces every image row of the property.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from stayhub.repositories.base import BaseRepository
from stayhub.models.image import PropertyImage
from typing import List, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class ImageRepository(BaseRepository[PropertyImage]):
    """Repository for property image rows."""

    def __init__(self, db_session: AsyncSession):
        super().__init__(PropertyImage, db_session)

    async def get_by_property_id(self, property_id: uuid.UUID) -> List[PropertyImage]:
        """Images of a property in gallery order."""
        try:
            query = (
                select(PropertyImage)
                .where(PropertyImage.property_id == property_id)
                .order_by(PropertyImage.sort_order.asc())
            )
            result = await self.db.execute(query)
            images = list(result.scalars().all())
            logger.debug(f"Retrieved {len(images)} images for property {property_id}")
            return images
        except Exception as e:
            logger.error(f"Failed to get images for property {property_id}: {e}")
            raise

    async def delete_by_property_id(self, property_id: uuid.UUID) -> int:
        """Delete all images of a property."""
        return await self.delete_where(property_id=property_id)

    async def replace_images(self, property_id: uuid.UUID, images: List[Dict[str, Any]]) -> List[PropertyImage]:
        """
        Replace the gallery of a property: delete existing rows, then insert the new list.

        Args:
            property_id: Owning property
            images: Dicts with image_url, is_primary and sort_order

        Returns:
            Newly created image rows
        """
        removed = await self.delete_by_property_id(property_id)
        if not images:
            logger.info(f"Cleared {removed} images from property {property_id}")
            return []

        created = await self.bulk_create([{**image, "property_id": property_id} for image in images])
        logger.info(f"Replaced {removed} images with {len(created)} for property {property_id}")
        return created
