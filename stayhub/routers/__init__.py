"""
API route handlers for the StayHub API.
"""

from .admin import router as admin_router
from .auth import router as auth_router
from .bookings import router as bookings_router
from .currency import router as currency_router
from .listings import router as listings_router
from .navigation import router as navigation_router
from .properties import router as properties_router

__all__ = [
    "admin_router",
    "auth_router",
    "bookings_router",
    "currency_router",
    "listings_router",
    "navigation_router",
    "properties_router"
]
