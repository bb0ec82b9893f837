"""
User management for the admin users screen.
"""

from typing import List, Optional, Union
from sqlalchemy.ext.asyncio import AsyncSession
from stayhub.repositories.profile import ProfileRepository
from stayhub.models.profile import Profile, AppRole
from stayhub.utils.exceptions import (
    NotFoundError,
    SelfRoleChangeError,
    InsufficientPermissionsError,
    ValidationError
)
import uuid
import logging

logger = logging.getLogger(__name__)

NO_ROLE = "none"
ROLE_CHOICES = [AppRole.ADMIN.value, AppRole.REALTOR.value, AppRole.USER.value, NO_ROLE]


def parse_role_choice(value: Union[str, AppRole]) -> Optional[AppRole]:
    """
    Parse a role picker value; 'none' maps to None.

    Raises:
        ValidationError: If the value is not a known choice
    """
    raw = value.value if isinstance(value, AppRole) else str(value).strip().lower()
    if raw not in ROLE_CHOICES:
        raise ValidationError(f"Role must be one of: {', '.join(ROLE_CHOICES)}")
    return None if raw == NO_ROLE else AppRole(raw)


class UserService:
    """Admin-only listing of accounts and role assignment."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.profile_repo = ProfileRepository(db_session)

    async def list_users(self, current_user: Profile) -> List[Profile]:
        self._require_admin(current_user, "view users")
        return await self.profile_repo.list_profiles()

    async def set_role(
        self,
        user_id: uuid.UUID,
        role_choice: Union[str, AppRole],
        current_user: Profile
    ) -> Profile:
        """
        Replace the elevated role of an account.

        Every role other than 'user' is removed first; the chosen role is then
        added unless it is 'user' or 'none'.

        Raises:
            SelfRoleChangeError: If an admin targets their own account
            NotFoundError: If the account does not exist
        """
        self._require_admin(current_user, "change user roles")
        new_role = parse_role_choice(role_choice)

        if user_id == current_user.id:
            raise SelfRoleChangeError()

        target = await self.profile_repo.get_by_id(user_id)
        if not target:
            raise NotFoundError("User", str(user_id))

        await self.profile_repo.remove_elevated_roles(user_id)
        if new_role is not None and new_role != AppRole.USER:
            await self.profile_repo.add_role(user_id, new_role)

        updated = await self.profile_repo.get_by_id(user_id)
        logger.info(
            f"Role of {updated.email} set to {new_role.value if new_role else NO_ROLE} by {current_user.email}"
        )
        return updated

    @staticmethod
    def _require_admin(user: Profile, action: str) -> None:
        if not user.is_admin:
            raise InsufficientPermissionsError(action)
