"""
Utility modules for the StayHub API: JWT helpers, the exception hierarchy
and the role-gated route guard.
"""

from .auth import (
    create_access_token,
    create_refresh_token,
    verify_token,
    TokenPayload
)

from .exceptions import (
    APIException,
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    ConflictError,
    BadRequestError,
    InvalidCredentialsError,
    TokenExpiredError,
    InvalidTokenError,
    InactiveUserError,
    InsufficientPermissionsError,
    PropertyNotFoundError,
    PropertyNotBookableError,
    PropertyUnavailableError,
    InvalidDateRangeError,
    GuestLimitError,
    SelfRoleChangeError
)

from .route_guard import check_access, resolve_route, admin_menu, GuardOutcome

# Dependencies import services, so they are not re-exported here

__all__ = [
    "create_access_token",
    "create_refresh_token",
    "verify_token",
    "TokenPayload",

    "APIException",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "ConflictError",
    "BadRequestError",
    "InvalidCredentialsError",
    "TokenExpiredError",
    "InvalidTokenError",
    "InactiveUserError",
    "InsufficientPermissionsError",
    "PropertyNotFoundError",
    "PropertyNotBookableError",
    "PropertyUnavailableError",
    "InvalidDateRangeError",
    "GuestLimitError",
    "SelfRoleChangeError",

    "check_access",
    "resolve_route",
    "admin_menu",
    "GuardOutcome",
]
