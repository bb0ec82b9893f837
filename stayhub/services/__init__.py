"""
Service layer for business logic implementation.
Contains services for authentication, listings, properties, bookings, users and error handling.
"""

from .auth import AuthService
from .booking import BookingService
from .currency import CurrencyConverter, Currency
from .listing import ListingService, ListingFilter
from .property import PropertyService
from .storage import StorageService
from .user import UserService
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "BookingService",
    "CurrencyConverter",
    "Currency",
    "ListingService",
    "ListingFilter",
    "PropertyService",
    "StorageService",
    "UserService",
    "ErrorHandlerService"
]
