"""
Repository layer for data access operations.
Each repository wraps one table and commits its own writes.
"""

from stayhub.repositories.base import BaseRepository
from stayhub.repositories.property import PropertyRepository
from stayhub.repositories.image import ImageRepository
from stayhub.repositories.booking import BookingRepository
from stayhub.repositories.profile import ProfileRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "ImageRepository",
    "BookingRepository",
    "ProfileRepository"
]
