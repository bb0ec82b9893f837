"""
FastAPI dependency injection utilities for authentication and database sessions.
Staff and admin dependencies run the same ordered checks as browser route resolution.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from stayhub.database import get_db
from stayhub.models.profile import Profile
from stayhub.services.auth import AuthService
from stayhub.services.booking import BookingService
from stayhub.services.listing import ListingService
from stayhub.services.property import PropertyService
from stayhub.services.user import UserService
from stayhub.utils.exceptions import (
    APIException,
    UnauthorizedError,
    InsufficientPermissionsError
)
from stayhub.utils.route_guard import check_access, ADMIN_HOME_PATH, HOME_PATH
import logging

logger = logging.getLogger(__name__)

# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)

BOOKING_SIGN_IN_MESSAGE = "Please sign in to book this property"


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    return PropertyService(db)


async def get_listing_service(db: AsyncSession = Depends(get_db)) -> ListingService:
    return ListingService(db)


async def get_booking_service(db: AsyncSession = Depends(get_db)) -> BookingService:
    return BookingService(db)


async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Profile:
    """
    Get current authenticated profile from the bearer token.

    Raises:
        UnauthorizedError: If no token provided or token is invalid
        TokenExpiredError: If token is expired
        InactiveUserError: If the account is inactive
    """
    if not credentials:
        raise UnauthorizedError("Authentication token required")

    return await auth_service.get_current_user(credentials.credentials)


async def get_optional_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[Profile]:
    """
    Get current profile if a valid token is provided, otherwise None.
    Invalid tokens are treated as signed out.
    """
    if not credentials:
        return None

    try:
        return await auth_service.get_current_user(credentials.credentials)
    except APIException as e:
        logger.debug(f"Ignoring invalid credentials on optional auth: {e.detail}")
        return None


async def get_booking_user(
    current_user: Optional[Profile] = Depends(get_optional_current_user)
) -> Profile:
    """Signed-in profile for booking requests."""
    if current_user is None:
        raise UnauthorizedError(BOOKING_SIGN_IN_MESSAGE)
    return current_user


def _guard(current_user: Optional[Profile], require_admin: bool) -> Profile:
    decision = check_access(
        authenticated=current_user is not None,
        roles=current_user.roles if current_user else [],
        require_admin=require_admin
    )
    if decision.allowed:
        return current_user

    if decision.redirect_to == HOME_PATH:
        raise InsufficientPermissionsError("access the admin panel")
    if decision.redirect_to == ADMIN_HOME_PATH:
        raise InsufficientPermissionsError("manage users")
    raise UnauthorizedError()


async def get_current_staff_user(
    current_user: Optional[Profile] = Depends(get_optional_current_user)
) -> Profile:
    """
    Profile holding the admin or realtor role.

    Raises:
        UnauthorizedError: If not signed in
        InsufficientPermissionsError: If the profile is neither admin nor realtor
    """
    return _guard(current_user, require_admin=False)


async def get_current_admin_user(
    current_user: Optional[Profile] = Depends(get_optional_current_user)
) -> Profile:
    """
    Profile holding the admin role.

    Raises:
        UnauthorizedError: If not signed in
        InsufficientPermissionsError: If the profile is not an admin
    """
    return _guard(current_user, require_admin=True)
