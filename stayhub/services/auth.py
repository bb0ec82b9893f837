"""
Authentication service for sign-up, sign-in, token refresh and session lookup.
Handles JWT token generation and validation on top of the profile repository.
"""

from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from stayhub.repositories.profile import ProfileRepository
from stayhub.models.profile import Profile
from stayhub.utils.auth import (
    create_access_token,
    create_refresh_token,
    verify_token
)
from stayhub.utils.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    InactiveUserError,
    ValidationError,
    DuplicateResourceError
)
from jose import JWTError
import uuid
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for managing sessions.
    Sign-out is stateless: tokens simply expire.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.profile_repo = ProfileRepository(db_session)

    async def register(self, email: str, password: str, full_name: Optional[str] = None) -> Profile:
        """
        Create an account holding the base 'user' role.

        Raises:
            DuplicateResourceError: If the email is already registered
            ValidationError: If email or password are invalid
        """
        try:
            normalized_email = Profile.validate_email_format(email)
        except ValueError as e:
            raise ValidationError(str(e))

        if await self.profile_repo.get_by_email(normalized_email):
            raise DuplicateResourceError("User", normalized_email)

        try:
            profile = await self.profile_repo.create_profile({
                "email": normalized_email,
                "password": password,
                "full_name": full_name
            })
        except ValueError as e:
            raise ValidationError(str(e))

        logger.info(f"Registered profile: {profile.email}")
        return profile

    async def authenticate_user(self, email: str, password: str) -> Profile:
        """
        Authenticate a profile with email and password.

        Raises:
            InvalidCredentialsError: If credentials are invalid
            InactiveUserError: If the account is inactive
            ValidationError: If input is missing
        """
        if not email or not email.strip():
            raise ValidationError("Email is required")

        if not password or not password.strip():
            raise ValidationError("Password is required")

        profile = await self.profile_repo.get_by_email(email)
        if profile and not profile.is_active:
            raise InactiveUserError()

        profile = await self.profile_repo.authenticate(email, password)
        if not profile:
            logger.warning(f"Failed authentication attempt for email: {email}")
            raise InvalidCredentialsError()

        return profile

    def create_tokens(self, profile: Profile) -> Tuple[str, str]:
        """
        Create access and refresh tokens for a profile.

        Returns:
            Tuple of (access_token, refresh_token)
        """
        access_token = create_access_token(
            user_id=profile.id,
            email=profile.email,
            roles=profile.roles
        )
        refresh_token = create_refresh_token(
            user_id=profile.id,
            email=profile.email
        )
        return access_token, refresh_token

    async def login(self, email: str, password: str) -> Tuple[Profile, str, str]:
        """
        Authenticate and create tokens.

        Returns:
            Tuple of (profile, access_token, refresh_token)
        """
        profile = await self.authenticate_user(email, password)
        access_token, refresh_token = self.create_tokens(profile)
        logger.info(f"Profile signed in: {profile.email}")
        return profile, access_token, refresh_token

    async def refresh_access_token(self, refresh_token: str) -> str:
        """
        Create a new access token from a refresh token.
        Roles are re-read so role changes show up on refresh.

        Raises:
            InvalidTokenError: If refresh token is invalid
            TokenExpiredError: If refresh token is expired
            InactiveUserError: If the account is inactive
        """
        profile = await self._profile_from_token(refresh_token, "refresh")
        return create_access_token(
            user_id=profile.id,
            email=profile.email,
            roles=profile.roles
        )

    async def get_current_user(self, token: str) -> Profile:
        """
        Resolve the profile behind an access token.

        Raises:
            InvalidTokenError: If token is invalid
            TokenExpiredError: If token is expired
            InactiveUserError: If the account is inactive
        """
        return await self._profile_from_token(token, "access")

    async def _profile_from_token(self, token: str, token_type: str) -> Profile:
        try:
            token_payload = verify_token(token, token_type=token_type)
            user_id = uuid.UUID(token_payload.user_id)
        except JWTError as e:
            if "expired" in str(e).lower():
                raise TokenExpiredError()
            raise InvalidTokenError(str(e))
        except ValueError:
            raise InvalidTokenError("Invalid token subject")

        profile = await self.profile_repo.get_by_id(user_id)
        if not profile:
            raise InvalidTokenError("User no longer exists")

        if not profile.is_active:
            raise InactiveUserError()

        return profile
