"""
Pydantic schemas for request/response validation.
"""

# Authentication schemas
from .auth import (
    RegisterRequest,
    LoginRequest,
    RefreshTokenRequest,
    AccessTokenResponse,
    LoginResponse,
    SessionResponse,
    LogoutResponse
)

# User schemas
from .user import (
    UserResponse,
    UserListResponse,
    RoleUpdateRequest
)

# Property schemas
from .property import (
    PropertyBase,
    PropertyCreate,
    PropertyUpdate,
    AvailabilityUpdate,
    PropertyResponse,
    PropertyDetailResponse,
    PropertyCard,
    ListingResponse,
    AdminPropertyRow,
    DashboardResponse,
    AmenitiesResponse
)

# Image schemas
from .image import (
    PropertyImageInput,
    PropertyImageResponse
)

# Booking schemas
from .booking import (
    BookingCreate,
    QuoteResponse,
    BookingResponse,
    BookingListResponse
)

from .currency import CurrencyUpdate, CurrencyResponse
from .navigation import RouteDecisionResponse, MenuItem, AdminMenuResponse
from .error import APIErrorResponse, ErrorResponse, ErrorDetail, COMMON_ERROR_RESPONSES

__all__ = [
    # Authentication
    "RegisterRequest",
    "LoginRequest",
    "RefreshTokenRequest",
    "AccessTokenResponse",
    "LoginResponse",
    "SessionResponse",
    "LogoutResponse",

    # User
    "UserResponse",
    "UserListResponse",
    "RoleUpdateRequest",

    # Property
    "PropertyBase",
    "PropertyCreate",
    "PropertyUpdate",
    "AvailabilityUpdate",
    "PropertyResponse",
    "PropertyDetailResponse",
    "PropertyCard",
    "ListingResponse",
    "AdminPropertyRow",
    "DashboardResponse",
    "AmenitiesResponse",

    # Image
    "PropertyImageInput",
    "PropertyImageResponse",

    # Booking
    "BookingCreate",
    "QuoteResponse",
    "BookingResponse",
    "BookingListResponse",

    # Currency and navigation
    "CurrencyUpdate",
    "CurrencyResponse",
    "RouteDecisionResponse",
    "MenuItem",
    "AdminMenuResponse",

    # Errors
    "APIErrorResponse",
    "ErrorResponse",
    "ErrorDetail",
    "COMMON_ERROR_RESPONSES"
]
