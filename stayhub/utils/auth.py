"""
JWT helpers for the session API.
Access tokens carry the role tags so clients can gate screens without another round trip.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any, List, Sequence
from jose import JWTError, jwt
from stayhub.config import settings
from stayhub.models.profile import AppRole
import uuid


class TokenPayload:
    """JWT token payload structure."""

    def __init__(self, user_id: str, email: str, roles: List[str], exp: datetime, token_type: str):
        self.user_id = user_id
        self.email = email
        self.roles = roles
        self.exp = exp
        self.token_type = token_type

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPayload":
        """Create TokenPayload from dictionary."""
        return cls(
            user_id=data["sub"],
            email=data["email"],
            roles=data.get("roles", []),  # Refresh tokens carry no roles
            exp=datetime.fromtimestamp(data["exp"], tz=timezone.utc),
            token_type=data.get("type", "access")
        )


def _encode(claims: Dict[str, Any], expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    to_encode = {**claims, "exp": now + expires_delta, "iat": now}
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(
    user_id: uuid.UUID,
    email: str,
    roles: Sequence[AppRole],
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create JWT access token with user claims.

    Args:
        user_id: Profile UUID
        email: Profile email address
        roles: Role tags held by the profile
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    claims = {
        "sub": str(user_id),
        "email": email,
        "roles": [AppRole(role).value for role in roles],
        "type": "access"
    }
    return _encode(claims, expires_delta or timedelta(minutes=settings.access_token_expire_minutes))


def create_refresh_token(
    user_id: uuid.UUID,
    email: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create JWT refresh token."""
    claims = {
        "sub": str(user_id),
        "email": email,
        "type": "refresh"
    }
    return _encode(claims, expires_delta or timedelta(days=settings.jwt_refresh_token_expire_days))


def verify_token(token: str, token_type: str = "access") -> TokenPayload:
    """
    Verify and decode JWT token.

    Args:
        token: JWT token string
        token_type: Expected token type ("access" or "refresh")

    Returns:
        Decoded payload

    Raises:
        JWTError: If token is invalid, expired or of the wrong type
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        raise
    except Exception as e:
        raise JWTError(f"Token validation error: {str(e)}")

    if payload.get("type") != token_type:
        raise JWTError(f"Invalid token type. Expected {token_type}")

    if not payload.get("sub") or not payload.get("email"):
        raise JWTError("Invalid token payload")

    return TokenPayload.from_dict(payload)


def access_token_lifetime_seconds() -> int:
    return settings.access_token_expire_minutes * 60
