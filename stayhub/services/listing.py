"""
Listing pages for long-term rentals and short stays.
Properties of one type are fetched newest first and narrowed in memory by ListingFilter.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Union
from sqlalchemy.ext.asyncio import AsyncSession
from stayhub.config import settings
from stayhub.models.property import Property, PropertyType
from stayhub.repositories.property import PropertyRepository
from stayhub.services.currency import CurrencyConverter
from stayhub.services.pricing import count_nights
from stayhub.services.storage import StorageService
from stayhub.utils.exceptions import ValidationError
import logging

logger = logging.getLogger(__name__)

ALL_LOCATIONS = "All Locations"
ANY_BEDROOMS = "any"


def default_max_price(property_type: PropertyType) -> int:
    """Upper end of the price slider for a listing page."""
    if property_type == PropertyType.SHORT_STAY:
        return settings.short_stays_max_price
    return settings.rentals_max_price


def location_options(properties: Sequence[Property]) -> List[str]:
    """'All Locations' followed by the distinct area names (text before the first comma)."""
    options = [ALL_LOCATIONS]
    for prop in properties:
        area = (prop.location or "").split(",")[0].strip()
        if area not in options:
            options.append(area)
    return options


class ListingFilter:
    """
    Search, location, bedroom and price filter for a listing page.

    Matching mirrors the browser behaviour: the free-text search is
    case-insensitive on title and location, the location filter is a plain
    substring test and bedrooms must match exactly.
    """

    def __init__(
        self,
        property_type: PropertyType = PropertyType.LONG_TERM,
        search: Optional[str] = None,
        location: Optional[str] = None,
        bedrooms: Union[str, int, None] = None,
        min_price: Union[int, float, Decimal, None] = None,
        max_price: Union[int, float, Decimal, None] = None,
        check_in: Optional[date] = None,
        check_out: Optional[date] = None
    ):
        self.property_type = property_type
        self.search = (search or "").strip()
        self.location = location or ALL_LOCATIONS
        self.bedrooms = self._parse_bedrooms(bedrooms)
        self.default_max_price = default_max_price(property_type)
        self.min_price = Decimal(str(min_price)) if min_price is not None else Decimal(0)
        self.max_price = Decimal(str(max_price)) if max_price is not None else Decimal(self.default_max_price)
        self.check_in = check_in
        self.check_out = check_out

        if self.min_price > self.max_price:
            raise ValidationError("Minimum price cannot be greater than maximum price")

    @staticmethod
    def _parse_bedrooms(value: Union[str, int, None]) -> Optional[int]:
        if value is None or value == "" or value == ANY_BEDROOMS:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid bedrooms filter: {value}")

    def matches_search(self, prop: Property) -> bool:
        if not self.search:
            return True
        needle = self.search.lower()
        return needle in prop.title.lower() or needle in prop.location.lower()

    def matches_location(self, prop: Property) -> bool:
        if self.location == ALL_LOCATIONS:
            return True
        return self.location in prop.location

    def matches_bedrooms(self, prop: Property) -> bool:
        return self.bedrooms is None or prop.bedrooms == self.bedrooms

    def matches_price(self, prop: Property) -> bool:
        return self.min_price <= Decimal(str(prop.price)) <= self.max_price

    def matches(self, prop: Property) -> bool:
        return (
            self.matches_search(prop)
            and self.matches_location(prop)
            and self.matches_bedrooms(prop)
            and self.matches_price(prop)
        )

    def apply(self, properties: Sequence[Property]) -> List[Property]:
        return [prop for prop in properties if self.matches(prop)]

    @property
    def active_count(self) -> int:
        """Number of filters moved away from their defaults; search is not counted."""
        active = [
            self.location != ALL_LOCATIONS,
            self.bedrooms is not None,
            self.min_price > 0 or self.max_price < self.default_max_price,
        ]
        if self.property_type == PropertyType.SHORT_STAY:
            active.append(self.check_in is not None)
        return sum(1 for flag in active if flag)

    @property
    def nights(self) -> int:
        return max(count_nights(self.check_in, self.check_out), 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "search": self.search,
            "location": self.location,
            "bedrooms": self.bedrooms if self.bedrooms is not None else ANY_BEDROOMS,
            "min_price": int(self.min_price),
            "max_price": int(self.max_price),
            "check_in": self.check_in.isoformat() if self.check_in else None,
            "check_out": self.check_out.isoformat() if self.check_out else None,
        }


class ListingService:
    """Builds the rentals and short-stays pages."""

    def __init__(self, db_session: AsyncSession):
        self.property_repo = PropertyRepository(db_session)
        self.storage = StorageService()

    def property_card(
        self,
        prop: Property,
        converter: CurrencyConverter,
        nights: int = 0
    ) -> Dict[str, Any]:
        """Card data shown in listing grids."""
        images = [self.storage.public_url(url) for url in prop.image_urls] or [settings.placeholder_image_url]
        card = {
            "id": str(prop.id),
            "title": prop.title,
            "location": prop.location,
            "property_type": prop.property_type.value,
            "price": float(prop.price),
            "price_period": prop.price_period.value,
            "display_price": converter.format_price(prop.price),
            "images": images,
            "bedrooms": prop.bedrooms,
            "bathrooms": prop.bathrooms,
            "amenities": list(prop.amenities or []),
            "is_available": prop.is_available,
            "featured": prop.featured,
        }
        if prop.property_type == PropertyType.SHORT_STAY:
            stay_total = prop.price * nights if nights > 0 else prop.price
            card["nights"] = nights
            card["display_stay_total"] = converter.format_price(stay_total)
        return card

    async def listing_page(self, listing_filter: ListingFilter, converter: CurrencyConverter) -> Dict[str, Any]:
        """
        Fetch available properties of the filter's type and apply the filter.

        Returns:
            Page payload with cards, location options and filter state
        """
        properties = await self.property_repo.list_properties(
            property_type=listing_filter.property_type,
            available_only=True
        )
        filtered = listing_filter.apply(properties)
        nights = listing_filter.nights

        logger.debug(
            f"Listing {listing_filter.property_type.value}: {len(filtered)} of {len(properties)} match"
        )

        return {
            "property_type": listing_filter.property_type.value,
            "currency": converter.currency.value,
            "total": len(properties),
            "count": len(filtered),
            "properties": [self.property_card(prop, converter, nights) for prop in filtered],
            "locations": location_options(properties),
            "filters": listing_filter.to_dict(),
            "active_filters": listing_filter.active_count,
            "max_price": listing_filter.default_max_price,
        }

    async def featured(self, converter: CurrencyConverter, limit: int = 6) -> List[Dict[str, Any]]:
        """Featured available properties for the home page."""
        properties = await self.property_repo.list_properties(
            available_only=True,
            featured_only=True,
            limit=limit
        )
        return [self.property_card(prop, converter) for prop in properties]
