"""
Profile and role models for authentication and role-based access.
A profile holds the account; role tags (admin, realtor, user) live in user_roles.
"""

from sqlalchemy import String, Boolean, Uuid, ForeignKey, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from stayhub.database import Base
from passlib.context import CryptContext
from email_validator import validate_email, EmailNotValidError
import enum
import uuid
from typing import List, Optional

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class AppRole(str, enum.Enum):
    """Role tags. Admin outranks realtor; every account holds 'user'."""
    ADMIN = "admin"
    REALTOR = "realtor"
    USER = "user"


class Profile(Base):
    """
    Account profile used for authentication and authorization.
    Roles are a set of tags stored in a separate table.
    """

    __tablename__ = "profiles"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address - must be unique and valid"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    full_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Display name"
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Whether the account can sign in"
    )

    role_rows: Mapped[List["UserRole"]] = relationship(
        "UserRole",
        back_populates="profile",
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, email={self.email})>"

    @classmethod
    def validate_email_format(cls, email: str) -> str:
        """
        Validate email format using email-validator.

        Args:
            email: Email address to validate

        Returns:
            Normalized email address

        Raises:
            ValueError: If email format is invalid
        """
        try:
            valid_email = validate_email(email, check_deliverability=False)
            return valid_email.normalized.lower()
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email format: {str(e)}")

    @classmethod
    def hash_password(cls, password: str) -> str:
        """
        Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Hashed password string
        """
        if not password or len(password) < 8:
            raise ValueError("Password must be at least 8 characters long")

        return pwd_context.hash(password)

    def verify_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""
        return pwd_context.verify(password, self.hashed_password)

    @property
    def roles(self) -> List[AppRole]:
        return [row.role for row in self.role_rows]

    @property
    def is_admin(self) -> bool:
        """Check if user has admin role."""
        return AppRole.ADMIN in self.roles

    @property
    def is_realtor(self) -> bool:
        """Check if user has realtor role."""
        return AppRole.REALTOR in self.roles

    @property
    def is_staff(self) -> bool:
        """Admins and realtors may use the admin panel."""
        return self.is_admin or self.is_realtor

    @property
    def display_role(self) -> AppRole:
        if self.is_admin:
            return AppRole.ADMIN
        if self.is_realtor:
            return AppRole.REALTOR
        return AppRole.USER

    def to_dict(self) -> dict:
        """
        Convert profile to dictionary (excluding sensitive data).

        Returns:
            Dictionary representation of the profile
        """
        return {
            "id": str(self.id),
            "email": self.email,
            "full_name": self.full_name,
            "roles": [role.value for role in self.roles],
            "role": self.display_role.value,
            "is_admin": self.is_admin,
            "is_realtor": self.is_realtor,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class UserRole(Base):
    """Single role tag held by a profile."""

    __tablename__ = "user_roles"
    __table_args__ = (
        UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    role: Mapped[AppRole] = mapped_column(
        SQLEnum(AppRole, name="app_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        index=True
    )

    profile: Mapped["Profile"] = relationship(
        "Profile",
        back_populates="role_rows",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<UserRole(user_id={self.user_id}, role={self.role})>"
