"""
Tests for repository classes against an in-memory database.
"""

import pytest
from decimal import Decimal

from stayhub.models.profile import AppRole
from stayhub.models.property import PropertyType
from stayhub.repositories.profile import ProfileRepository
from stayhub.repositories.property import PropertyRepository
from stayhub.repositories.image import ImageRepository
from tests.conftest import ProfileFactory, PropertyFactory, at


class TestProfileRepository:
    """Test ProfileRepository operations."""

    async def test_create_profile_adds_user_role(self, profile_repository: ProfileRepository):
        profile = await ProfileFactory.create_profile(profile_repository, email="New@Example.com")

        assert profile.email == "new@example.com"
        assert profile.roles == [AppRole.USER]
        assert profile.verify_password("testpassword123")

    async def test_duplicate_email_rejected(self, profile_repository: ProfileRepository):
        await ProfileFactory.create_profile(profile_repository, email="dup@example.com")

        with pytest.raises(ValueError, match="already exists"):
            await ProfileFactory.create_profile(profile_repository, email="dup@example.com")

    async def test_authenticate(self, profile_repository: ProfileRepository, test_user):
        assert (await profile_repository.authenticate("guest@example.com", "testpassword123")).id == test_user.id
        assert await profile_repository.authenticate("guest@example.com", "wrongpassword") is None
        assert await profile_repository.authenticate("missing@example.com", "testpassword123") is None

    async def test_inactive_profile_cannot_authenticate(self, profile_repository: ProfileRepository, test_inactive_user):
        assert await profile_repository.authenticate(test_inactive_user.email, "testpassword123") is None

    async def test_remove_elevated_roles_keeps_user(self, profile_repository: ProfileRepository):
        profile = await ProfileFactory.create_profile(
            profile_repository, roles=[AppRole.ADMIN, AppRole.REALTOR]
        )

        removed = await profile_repository.remove_elevated_roles(profile.id)

        assert removed == 2
        assert await profile_repository.get_roles(profile.id) == [AppRole.USER]

    async def test_role_rows_load_their_profile(self, profile_repository: ProfileRepository, test_realtor):
        profile = await profile_repository.get_by_id(test_realtor.id)

        assert {row.profile.email for row in profile.role_rows} == {"realtor@example.com"}

    async def test_add_role_is_idempotent(self, profile_repository: ProfileRepository, test_user):
        await profile_repository.add_role(test_user.id, AppRole.REALTOR)
        await profile_repository.add_role(test_user.id, AppRole.REALTOR)

        roles = await profile_repository.get_roles(test_user.id)
        assert sorted(role.value for role in roles) == ["realtor", "user"]


class TestPropertyRepository:
    """Test PropertyRepository operations."""

    async def test_list_by_type_newest_first(self, property_repository: PropertyRepository):
        await PropertyFactory.create_property(property_repository, title="Older rental", created_at=at(1))
        await PropertyFactory.create_property(property_repository, title="Newer rental", created_at=at(5))
        await PropertyFactory.create_property(
            property_repository, title="Villa", property_type=PropertyType.SHORT_STAY, created_at=at(3)
        )

        rentals = await property_repository.list_properties(property_type=PropertyType.LONG_TERM)

        assert [p.title for p in rentals] == ["Newer rental", "Older rental"]

    async def test_available_only(self, property_repository: PropertyRepository):
        await PropertyFactory.create_property(property_repository, title="Open", is_available=True)
        await PropertyFactory.create_property(property_repository, title="Let", is_available=False)

        available = await property_repository.list_properties(available_only=True)

        assert [p.title for p in available] == ["Open"]

    async def test_images_loaded_in_sort_order(self, property_repository: PropertyRepository):
        prop = await PropertyFactory.create_property(
            property_repository, image_urls=["first.jpg", "second.jpg", "third.jpg"]
        )

        loaded = await property_repository.get_property_with_images(prop.id)

        assert loaded.image_urls == ["first.jpg", "second.jpg", "third.jpg"]
        assert loaded.primary_image.image_url == "first.jpg"

    async def test_dashboard_counts(self, property_repository: PropertyRepository):
        await PropertyFactory.create_property(property_repository)
        await PropertyFactory.create_property(property_repository, is_available=False)
        await PropertyFactory.create_property(property_repository, property_type=PropertyType.SHORT_STAY)

        counts = await property_repository.get_dashboard_counts()

        assert counts == {
            "total_properties": 3,
            "long_term_rentals": 2,
            "short_stays": 1,
            "available_properties": 2,
        }

    async def test_dashboard_counts_empty(self, property_repository: PropertyRepository):
        counts = await property_repository.get_dashboard_counts()

        assert counts["total_properties"] == 0
        assert counts["available_properties"] == 0

    async def test_invalid_price_rejected(self, property_repository: PropertyRepository):
        with pytest.raises(ValueError):
            await PropertyFactory.create_property(property_repository, price=Decimal("0"))

    async def test_delete_removes_images(
        self,
        property_repository: PropertyRepository,
        image_repository: ImageRepository
    ):
        prop = await PropertyFactory.create_property(property_repository, image_urls=["a.jpg", "b.jpg"])

        assert await property_repository.delete(prop.id) is True
        assert await property_repository.get_by_id(prop.id) is None
        assert await image_repository.get_by_property_id(prop.id) == []


class TestImageRepository:
    """Test ImageRepository gallery replacement."""

    async def test_replace_images(self, property_repository: PropertyRepository, image_repository: ImageRepository):
        prop = await PropertyFactory.create_property(property_repository, image_urls=["old-1.jpg", "old-2.jpg"])

        await image_repository.replace_images(prop.id, [
            {"image_url": "new.jpg", "is_primary": True, "sort_order": 0}
        ])

        images = await image_repository.get_by_property_id(prop.id)
        assert [image.image_url for image in images] == ["new.jpg"]

    async def test_images_load_their_property(
        self,
        property_repository: PropertyRepository,
        image_repository: ImageRepository
    ):
        prop = await PropertyFactory.create_property(property_repository, image_urls=["a.jpg"])

        images = await image_repository.get_by_property_id(prop.id)

        assert images[0].property_rel.id == prop.id

    async def test_replace_with_empty_list_clears_gallery(
        self,
        property_repository: PropertyRepository,
        image_repository: ImageRepository
    ):
        prop = await PropertyFactory.create_property(property_repository, image_urls=["old.jpg"])

        assert await image_repository.replace_images(prop.id, []) == []
        assert await image_repository.get_by_property_id(prop.id) == []
