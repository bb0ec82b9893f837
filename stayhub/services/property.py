"""
Property service for the public detail view and the admin property CMS.
Handles create/update with gallery replacement, deletion, availability and dashboard counts.
"""

from typing import List, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from stayhub.repositories.property import PropertyRepository
from stayhub.repositories.image import ImageRepository
from stayhub.models.property import Property
from stayhub.models.profile import Profile
from stayhub.schemas.property import PropertyCreate, PropertyUpdate
from stayhub.schemas.image import PropertyImageInput
from stayhub.services.currency import CurrencyConverter
from stayhub.services.pricing import guest_options
from stayhub.services.storage import StorageService
from stayhub.utils.exceptions import (
    PropertyNotFoundError,
    ValidationError,
    InsufficientPermissionsError
)
from stayhub.config import settings
import uuid
import logging

logger = logging.getLogger(__name__)


def normalize_gallery(images: List[PropertyImageInput]) -> List[Dict[str, Any]]:
    """
    Order a gallery and enforce a single primary image.

    Entries without a sort order keep their list position. When no entry is
    marked primary the first one becomes primary; when several are, only the
    first of them stays primary.
    """
    positioned = [
        (image.sort_order if image.sort_order is not None else index, index, image)
        for index, image in enumerate(images)
    ]
    positioned.sort(key=lambda item: (item[0], item[1]))

    gallery = []
    primary_seen = False
    for position, (_, _, image) in enumerate(positioned):
        is_primary = image.is_primary and not primary_seen
        primary_seen = primary_seen or is_primary
        gallery.append({
            "image_url": image.image_url,
            "is_primary": is_primary,
            "sort_order": position,
        })

    if gallery and not primary_seen:
        gallery[0]["is_primary"] = True

    return gallery


class PropertyService:
    """
    Property service for the detail page and the staff CMS.
    Authorization happens in the route dependencies; the service only
    re-checks that the actor is staff before writes.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.image_repo = ImageRepository(db_session)
        self.storage = StorageService()

    async def get_property(self, property_id: uuid.UUID) -> Property:
        """
        Get a property with its gallery.

        Raises:
            PropertyNotFoundError: If the property does not exist
        """
        property_obj = await self.property_repo.get_property_with_images(property_id)
        if not property_obj:
            raise PropertyNotFoundError(str(property_id))
        return property_obj

    async def create_property(self, property_data: PropertyCreate, current_user: Profile) -> Property:
        """
        Create a listing and its gallery.

        Raises:
            InsufficientPermissionsError: If the actor is not staff
            ValidationError: If model validation fails
        """
        self._require_staff(current_user, "create properties")

        create_data = property_data.model_dump(exclude={"images"})
        create_data["amenities"] = list(create_data.get("amenities") or [])
        create_data["created_by"] = current_user.id

        try:
            property_obj = await self.property_repo.create_property(create_data)
        except ValueError as e:
            raise ValidationError(str(e))

        gallery = normalize_gallery(property_data.images)
        if gallery:
            await self.image_repo.replace_images(property_obj.id, gallery)

        logger.info(f"Property created by {current_user.email}: {property_obj.title} (ID: {property_obj.id})")
        return await self.get_property(property_obj.id)

    async def update_property(
        self,
        property_id: uuid.UUID,
        property_data: PropertyUpdate,
        current_user: Profile
    ) -> Property:
        """
        Update listing fields; a given image list replaces the whole gallery.

        Raises:
            PropertyNotFoundError: If the property does not exist
            ValidationError: If the merged values are invalid
        """
        self._require_staff(current_user, "update properties")
        existing = await self.get_property(property_id)

        update_data = property_data.model_dump(exclude_unset=True, exclude={"images"})
        for required in ("title", "price", "location"):
            if required in update_data and update_data[required] is None:
                raise ValidationError(f"{required.capitalize()} is required")

        if "price" in update_data and update_data["price"] <= 0:
            raise ValidationError("Property price must be greater than 0")

        if update_data:
            await self.property_repo.update(existing.id, update_data)

        if property_data.images is not None:
            await self.image_repo.replace_images(existing.id, normalize_gallery(property_data.images))

        logger.info(f"Property {property_id} updated by {current_user.email}: fields={sorted(update_data)}")
        return await self.get_property(property_id)

    async def delete_property(self, property_id: uuid.UUID, current_user: Profile) -> None:
        """
        Delete a listing; its images go with it.

        Raises:
            PropertyNotFoundError: If the property does not exist
        """
        self._require_staff(current_user, "delete properties")
        deleted = await self.property_repo.delete(property_id)
        if not deleted:
            raise PropertyNotFoundError(str(property_id))
        logger.info(f"Property {property_id} deleted by {current_user.email}")

    async def set_availability(self, property_id: uuid.UUID, is_available: bool, current_user: Profile) -> Property:
        self._require_staff(current_user, "update properties")
        property_obj = await self.property_repo.set_availability(property_id, is_available)
        if not property_obj:
            raise PropertyNotFoundError(str(property_id))
        return property_obj

    async def list_all(self) -> List[Property]:
        """Every property, newest first, for the admin table."""
        return await self.property_repo.list_properties()

    async def dashboard_counts(self) -> Dict[str, int]:
        return await self.property_repo.get_dashboard_counts()

    def serialize(self, property_obj: Property, converter: CurrencyConverter) -> Dict[str, Any]:
        """Property with formatted price and resolved image URLs."""
        data = property_obj.to_dict(include_images=True)
        data["display_price"] = converter.format_price(property_obj.price)
        for image in data["images"]:
            image["image_url"] = self.storage.public_url(image["image_url"])
        return data

    def serialize_detail(self, property_obj: Property, converter: CurrencyConverter) -> Dict[str, Any]:
        data = self.serialize(property_obj, converter)
        data["gallery"] = [image["image_url"] for image in data["images"]] or [settings.placeholder_image_url]
        data["guest_options"] = guest_options(property_obj.bedrooms)
        data["bookable"] = property_obj.is_bookable
        return data

    def serialize_row(self, property_obj: Property, converter: CurrencyConverter) -> Dict[str, Any]:
        """Row of the admin property table."""
        primary = property_obj.primary_image
        return {
            "id": str(property_obj.id),
            "title": property_obj.title,
            "location": property_obj.location,
            "property_type": property_obj.property_type.value,
            "price": float(property_obj.price),
            "display_price": converter.format_price(property_obj.price),
            "price_period": property_obj.price_period.value,
            "is_available": property_obj.is_available,
            "featured": property_obj.featured,
            "primary_image": self.storage.public_url(primary.image_url) if primary else None,
            "created_at": property_obj.created_at,
        }

    @staticmethod
    def _require_staff(user: Profile, action: str) -> None:
        if not user.is_staff:
            raise InsufficientPermissionsError(action)
