"""
Tests for the in-memory listing filter and location options.
"""

import pytest
from datetime import date
from decimal import Decimal

from stayhub.models.property import Property, PropertyType
from stayhub.services.listing import ListingFilter, location_options, ALL_LOCATIONS
from stayhub.utils.exceptions import ValidationError


def make_property(title: str, location: str, price: int, bedrooms: int,
                  property_type: PropertyType = PropertyType.LONG_TERM) -> Property:
    return Property(
        title=title,
        location=location,
        price=Decimal(price),
        bedrooms=bedrooms,
        bathrooms=1,
        property_type=property_type
    )


@pytest.fixture
def rentals():
    return [
        make_property("Modern Luxury Apartment in Westlands", "Westlands, Nairobi", 150000, 3),
        make_property("Cozy Studio in Karen", "Karen, Nairobi", 45000, 1),
        make_property("Family Home in Lavington", "Lavington, Nairobi", 200000, 5),
        make_property("Elegant 2BR in Riverside", "Riverside, Nairobi", 120000, 2),
        make_property("Spacious Apartment in Kileleshwa", "Kileleshwa, Nairobi", 95000, 3),
    ]


class TestListingFilterMatching:
    """Test each predicate of the filter."""

    def test_defaults_match_everything(self, rentals):
        assert ListingFilter().apply(rentals) == rentals

    def test_search_matches_title_case_insensitively(self, rentals):
        result = ListingFilter(search="studio").apply(rentals)

        assert [p.title for p in result] == ["Cozy Studio in Karen"]

    def test_search_matches_location(self, rentals):
        result = ListingFilter(search="RIVERSIDE").apply(rentals)

        assert len(result) == 1
        assert result[0].location == "Riverside, Nairobi"

    def test_location_is_substring_match(self, rentals):
        result = ListingFilter(location="Karen").apply(rentals)

        assert [p.location for p in result] == ["Karen, Nairobi"]

    def test_location_match_is_case_sensitive(self, rentals):
        assert ListingFilter(location="karen").apply(rentals) == []

    def test_bedrooms_exact_match(self, rentals):
        result = ListingFilter(bedrooms="3").apply(rentals)

        assert {p.title for p in result} == {
            "Modern Luxury Apartment in Westlands",
            "Spacious Apartment in Kileleshwa"
        }

    def test_any_bedrooms(self, rentals):
        assert len(ListingFilter(bedrooms="any").apply(rentals)) == len(rentals)

    def test_price_range_is_inclusive(self, rentals):
        result = ListingFilter(min_price=100000, max_price=300000).apply(rentals)

        prices = sorted(int(p.price) for p in result)
        assert prices == [120000, 150000, 200000]
        assert all(p.price != 45000 for p in result)

    def test_price_bounds_include_edges(self, rentals):
        result = ListingFilter(min_price=45000, max_price=45000).apply(rentals)

        assert [p.title for p in result] == ["Cozy Studio in Karen"]

    def test_predicates_combine(self, rentals):
        result = ListingFilter(search="apartment", bedrooms=3, max_price=100000).apply(rentals)

        assert [p.title for p in result] == ["Spacious Apartment in Kileleshwa"]

    def test_invalid_bedrooms_rejected(self):
        with pytest.raises(ValidationError):
            ListingFilter(bedrooms="many")

    def test_inverted_price_range_rejected(self):
        with pytest.raises(ValidationError):
            ListingFilter(min_price=200000, max_price=100000)


class TestActiveFilterCount:
    """Test how many filters differ from their defaults."""

    def test_no_active_filters_by_default(self):
        assert ListingFilter().active_count == 0

    def test_search_is_not_counted(self):
        assert ListingFilter(search="villa").active_count == 0

    def test_location_bedrooms_and_price_each_count(self):
        listing_filter = ListingFilter(location="Karen", bedrooms="2", min_price=10000)

        assert listing_filter.active_count == 3

    def test_rental_price_ceiling(self):
        assert ListingFilter(max_price=300000).active_count == 0
        assert ListingFilter(max_price=250000).active_count == 1

    def test_short_stay_price_ceiling(self):
        assert ListingFilter(property_type=PropertyType.SHORT_STAY, max_price=50000).active_count == 0
        assert ListingFilter(property_type=PropertyType.SHORT_STAY, max_price=40000).active_count == 1

    def test_short_stay_dates_count(self):
        listing_filter = ListingFilter(
            property_type=PropertyType.SHORT_STAY,
            check_in=date(2024, 6, 1),
            check_out=date(2024, 6, 4)
        )

        assert listing_filter.active_count == 1
        assert listing_filter.nights == 3


class TestLocationOptions:
    """Test the location dropdown."""

    def test_distinct_areas_in_order(self, rentals):
        rentals.append(make_property("Garden Flat", "Karen, Nairobi", 60000, 2))

        assert location_options(rentals) == [
            ALL_LOCATIONS, "Westlands", "Karen", "Lavington", "Riverside", "Kileleshwa"
        ]

    def test_empty_list(self):
        assert location_options([]) == [ALL_LOCATIONS]
