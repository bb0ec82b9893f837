"""
Test configuration and fixtures for the StayHub API.
Provides an in-memory database per test, test data factories and auth helpers.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "testing"

import pytest
import uuid
from datetime import datetime, timezone
from typing import AsyncGenerator, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport
from decimal import Decimal

from stayhub.main import app
from stayhub.database import Base, get_db
from stayhub.models.profile import Profile, AppRole
from stayhub.models.property import Property, PropertyType, PricePeriod
from stayhub.repositories.profile import ProfileRepository
from stayhub.repositories.property import PropertyRepository
from stayhub.repositories.image import ImageRepository
from stayhub.repositories.booking import BookingRepository
from stayhub.services.auth import AuthService
from stayhub.services.booking import BookingService
from stayhub.services.listing import ListingService
from stayhub.services.property import PropertyService
from stayhub.services.user import UserService
from stayhub.utils.auth import create_access_token


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "testpassword123"


@pytest.fixture
async def db_engine():
    """Fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database session override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def profile_repository(db_session: AsyncSession) -> ProfileRepository:
    return ProfileRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def image_repository(db_session: AsyncSession) -> ImageRepository:
    return ImageRepository(db_session)


@pytest.fixture
def booking_repository(db_session: AsyncSession) -> BookingRepository:
    return BookingRepository(db_session)


# Service fixtures
@pytest.fixture
def auth_service(db_session: AsyncSession) -> AuthService:
    return AuthService(db_session)


@pytest.fixture
def property_service(db_session: AsyncSession) -> PropertyService:
    return PropertyService(db_session)


@pytest.fixture
def listing_service(db_session: AsyncSession) -> ListingService:
    return ListingService(db_session)


@pytest.fixture
def booking_service(db_session: AsyncSession) -> BookingService:
    return BookingService(db_session)


@pytest.fixture
def user_service(db_session: AsyncSession) -> UserService:
    return UserService(db_session)


# Test data factories
class ProfileFactory:
    """Factory for creating test profiles."""

    @staticmethod
    def create_profile_data(
        email: Optional[str] = None,
        password: str = TEST_PASSWORD,
        full_name: str = "Test User",
        roles: Optional[List[AppRole]] = None,
        is_active: bool = True
    ) -> dict:
        return {
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "full_name": full_name,
            "roles": roles or [],
            "is_active": is_active
        }

    @staticmethod
    async def create_profile(
        profile_repo: ProfileRepository,
        email: Optional[str] = None,
        password: str = TEST_PASSWORD,
        full_name: str = "Test User",
        roles: Optional[List[AppRole]] = None,
        is_active: bool = True
    ) -> Profile:
        """Create a test profile holding 'user' plus the given roles."""
        profile_data = ProfileFactory.create_profile_data(
            email=email,
            password=password,
            full_name=full_name,
            roles=roles,
            is_active=is_active
        )
        return await profile_repo.create_profile(profile_data)


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        title: str = "Modern Apartment in Westlands",
        description: str = "Bright apartment close to shops",
        property_type: PropertyType = PropertyType.LONG_TERM,
        price: Decimal = Decimal("150000"),
        price_period: Optional[PricePeriod] = None,
        location: str = "Westlands, Nairobi",
        bedrooms: int = 3,
        bathrooms: int = 2,
        amenities: Optional[List[str]] = None,
        is_available: bool = True,
        featured: bool = False,
        created_by: Optional[uuid.UUID] = None,
        created_at: Optional[datetime] = None
    ) -> dict:
        if price_period is None:
            price_period = PricePeriod.NIGHT if property_type == PropertyType.SHORT_STAY else PricePeriod.MONTH
        data = {
            "title": title,
            "description": description,
            "property_type": property_type,
            "price": price,
            "price_period": price_period,
            "location": location,
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
            "amenities": amenities or [],
            "is_available": is_available,
            "featured": featured,
            "created_by": created_by
        }
        if created_at is not None:
            data["created_at"] = created_at
        return data

    @staticmethod
    async def create_property(
        property_repo: PropertyRepository,
        image_urls: Optional[List[str]] = None,
        **overrides
    ) -> Property:
        """Create a test property; the first image URL is marked primary."""
        property_obj = await property_repo.create_property(PropertyFactory.create_property_data(**overrides))
        if image_urls:
            image_repo = ImageRepository(property_repo.db)
            await image_repo.replace_images(property_obj.id, [
                {"image_url": url, "is_primary": index == 0, "sort_order": index}
                for index, url in enumerate(image_urls)
            ])
        return await property_repo.get_property_with_images(property_obj.id)


def at(day: int, hour: int = 12) -> datetime:
    """Fixed creation timestamp so newest-first ordering is deterministic."""
    return datetime(2024, 1, day, hour, 0, 0, tzinfo=timezone.utc)


def auth_headers(profile: Profile) -> Dict[str, str]:
    token = create_access_token(user_id=profile.id, email=profile.email, roles=profile.roles)
    return {"Authorization": f"Bearer {token}"}


# Common profile fixtures
@pytest.fixture
async def test_user(profile_repository: ProfileRepository) -> Profile:
    return await ProfileFactory.create_profile(profile_repository, email="guest@example.com", full_name="Guest User")


@pytest.fixture
async def test_realtor(profile_repository: ProfileRepository) -> Profile:
    return await ProfileFactory.create_profile(
        profile_repository, email="realtor@example.com", full_name="Realtor User", roles=[AppRole.REALTOR]
    )


@pytest.fixture
async def test_admin(profile_repository: ProfileRepository) -> Profile:
    return await ProfileFactory.create_profile(
        profile_repository, email="admin@example.com", full_name="Admin User", roles=[AppRole.ADMIN]
    )


@pytest.fixture
async def test_inactive_user(profile_repository: ProfileRepository) -> Profile:
    return await ProfileFactory.create_profile(
        profile_repository, email="inactive@example.com", is_active=False
    )


@pytest.fixture
async def short_stay(property_repository: PropertyRepository, test_realtor: Profile) -> Property:
    return await PropertyFactory.create_property(
        property_repository,
        image_urls=["https://images.example.com/villa-1.jpg", "https://images.example.com/villa-2.jpg"],
        title="Beachfront Villa with Ocean Views",
        property_type=PropertyType.SHORT_STAY,
        price=Decimal("25000"),
        location="Diani Beach, Mombasa",
        bedrooms=3,
        created_by=test_realtor.id,
        created_at=at(2)
    )


@pytest.fixture
async def rental(property_repository: PropertyRepository, test_realtor: Profile) -> Property:
    return await PropertyFactory.create_property(
        property_repository,
        title="Modern Luxury Apartment in Westlands",
        price=Decimal("150000"),
        location="Westlands, Nairobi",
        created_by=test_realtor.id,
        created_at=at(1)
    )
