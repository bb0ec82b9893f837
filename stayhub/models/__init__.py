"""
Database models for the StayHub API.
Includes Profile, UserRole, Property, PropertyImage and Booking models.
"""

from stayhub.models.profile import Profile, UserRole, AppRole
from stayhub.models.property import Property, PropertyType, PricePeriod, AMENITIES_OPTIONS
from stayhub.models.image import PropertyImage
from stayhub.models.booking import Booking, BookingStatus

__all__ = [
    "Profile",
    "UserRole",
    "AppRole",
    "Property",
    "PropertyType",
    "PricePeriod",
    "AMENITIES_OPTIONS",
    "PropertyImage",
    "Booking",
    "BookingStatus",
]
