"""
Pydantic schemas for authentication requests and responses.
Handles sign-up, sign-in, token refresh and the current session.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from stayhub.schemas.user import UserResponse


class RegisterRequest(BaseModel):
    """Sign-up request schema."""

    email: EmailStr = Field(
        ...,
        description="Account email address",
        examples=["guest@example.com"]
    )
    password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="Password (minimum 8 characters)",
        examples=["securepassword123"]
    )
    full_name: Optional[str] = Field(
        None,
        max_length=255,
        description="Display name",
        examples=["Jane Wanjiku"]
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()

    @field_validator("full_name")
    @classmethod
    def clean_full_name(cls, v):
        if v is None:
            return None
        return v.strip() or None


class LoginRequest(BaseModel):
    """Sign-in request schema."""

    email: EmailStr = Field(
        ...,
        description="Account email address",
        examples=["guest@example.com"]
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Account password"
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()


class RefreshTokenRequest(BaseModel):
    """Refresh token request schema."""

    refresh_token: str = Field(
        ...,
        description="Valid refresh token"
    )


class AccessTokenResponse(BaseModel):
    """Access token response schema."""

    access_token: str = Field(..., description="New JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token expiration time in seconds", examples=[3600])


class LoginResponse(BaseModel):
    """Complete sign-in response schema."""

    user: UserResponse = Field(..., description="Signed-in account")
    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token expiration time in seconds", examples=[3600])


class SessionResponse(BaseModel):
    """Current session with the role flags used to gate screens."""

    user: UserResponse
    roles: List[str]
    is_admin: bool
    is_realtor: bool


class LogoutResponse(BaseModel):
    message: str = "Signed out"
