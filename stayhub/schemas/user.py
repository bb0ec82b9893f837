"""
Pydantic schemas for accounts and role management.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from stayhub.models.profile import AppRole


class UserResponse(BaseModel):
    """Account data without credentials."""

    id: str = Field(
        ...,
        description="Account identifier",
        examples=["123e4567-e89b-12d3-a456-426614174000"]
    )
    email: str = Field(..., description="Account email address", examples=["guest@example.com"])
    full_name: Optional[str] = Field(None, description="Display name")
    roles: List[AppRole] = Field(..., description="Role tags held by the account")
    role: AppRole = Field(..., description="Highest role: admin > realtor > user")
    is_admin: bool
    is_realtor: bool
    is_active: bool
    created_at: Optional[datetime] = None


class UserListResponse(BaseModel):
    users: List[UserResponse]
    total: int


class RoleUpdateRequest(BaseModel):
    """Role picker value; 'none' and 'user' both leave only the base role."""

    role: str = Field(
        ...,
        description="admin, realtor, user or none",
        examples=["realtor"]
    )

    @field_validator("role")
    @classmethod
    def validate_role(cls, v):
        value = v.strip().lower()
        if value not in ("admin", "realtor", "user", "none"):
            raise ValueError("Role must be one of: admin, realtor, user, none")
        return value
