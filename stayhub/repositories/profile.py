"""
Profile repository for authentication and role management.
Passwords are hashed before storage; roles are kept as separate tag rows.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from stayhub.repositories.base import BaseRepository
from stayhub.models.profile import Profile, UserRole, AppRole
from typing import Optional, List, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class ProfileRepository(BaseRepository[Profile]):
    """
    Repository for account profiles and their role tags.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Profile, db)

    async def create_profile(self, profile_data: Dict[str, Any]) -> Profile:
        """
        Create a profile with email validation, password hashing and the base 'user' role.

        Args:
            profile_data: Must include email and password; full_name is optional

        Returns:
            Created profile with roles loaded

        Raises:
            ValueError: If validation fails or the email is taken
        """
        try:
            data = dict(profile_data)
            email = Profile.validate_email_format(data["email"])

            existing_profile = await self.get_by_email(email)
            if existing_profile:
                raise ValueError(f"User with email {email} already exists")

            hashed_password = Profile.hash_password(data.pop("password"))
            extra_roles = [AppRole(role) for role in data.pop("roles", [])]

            role_rows = [UserRole(role=AppRole.USER)]
            role_rows.extend(UserRole(role=role) for role in extra_roles if role != AppRole.USER)

            created_profile = await self.create({
                **data,
                "email": email,
                "hashed_password": hashed_password,
                "is_active": data.get("is_active", True),
                "role_rows": role_rows,
            })
            logger.info(f"Created profile: {created_profile.email} (ID: {created_profile.id})")
            return await self.get_by_id(created_profile.id)
        except ValueError as e:
            logger.error(f"Profile validation failed: {e}")
            raise

    async def get_by_email(self, email: str) -> Optional[Profile]:
        """Get a profile by email address (case-insensitive)."""
        try:
            normalized_email = email.lower().strip()
            result = await self.db.execute(select(Profile).where(Profile.email == normalized_email))
            profile = result.scalar_one_or_none()

            if profile:
                logger.debug(f"Retrieved profile by email: {email}")
            else:
                logger.debug(f"Profile with email {email} not found")

            return profile
        except Exception as e:
            logger.error(f"Failed to get profile by email {email}: {e}")
            raise

    async def authenticate(self, email: str, password: str) -> Optional[Profile]:
        """
        Check credentials.

        Returns:
            Profile if the credentials match an active account, None otherwise
        """
        profile = await self.get_by_email(email)

        if not profile:
            logger.debug(f"Authentication failed: profile {email} not found")
            return None

        if not profile.is_active:
            logger.debug(f"Authentication failed: profile {email} is inactive")
            return None

        if not profile.verify_password(password):
            logger.debug(f"Authentication failed: invalid password for {email}")
            return None

        logger.info(f"Profile authenticated successfully: {email}")
        return profile

    async def list_profiles(self) -> List[Profile]:
        """All profiles, newest first, with their role tags."""
        return await self.get_multi(order_by="-created_at")

    async def get_roles(self, user_id: uuid.UUID) -> List[AppRole]:
        result = await self.db.execute(select(UserRole.role).where(UserRole.user_id == user_id))
        return list(result.scalars().all())

    async def add_role(self, user_id: uuid.UUID, role: AppRole) -> None:
        """Attach a role tag unless the profile already holds it."""
        try:
            if role in await self.get_roles(user_id):
                return
            self.db.add(UserRole(user_id=user_id, role=role))
            await self.db.commit()
            logger.debug(f"Added role {role.value} to profile {user_id}")
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to add role {role.value} to profile {user_id}: {e}")
            raise

    async def remove_elevated_roles(self, user_id: uuid.UUID) -> int:
        """Delete every role tag other than 'user'."""
        try:
            stmt = delete(UserRole).where(
                UserRole.user_id == user_id,
                UserRole.role != AppRole.USER
            )
            result = await self.db.execute(stmt)
            await self.db.commit()
            logger.debug(f"Removed {result.rowcount} elevated roles from profile {user_id}")
            return result.rowcount
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to remove roles from profile {user_id}: {e}")
            raise
