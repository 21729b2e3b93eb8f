"""Pydantic schemas for users, credentials and tokens."""

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Roles a user record can hold."""

    USER = "user"
    ADMIN = "admin"


# ============================================================================
# Request Schemas
# ============================================================================


class UserCredentials(BaseModel):
    """Username and password as submitted for registration or login.

    Never persisted and never logged.
    """

    validation_message: ClassVar[str] = "Username and password required"

    username: str = Field(..., min_length=1, description="Unique username")
    password: str = Field(..., min_length=1, repr=False, description="Plain text password")


# ============================================================================
# Stored Records
# ============================================================================


class UserRecord(BaseModel):
    """A row from the users table.

    Only the store layer and the password check see ``password_hash``;
    everything returned to a client is built from UserResponse or
    UserProfile instead.
    """

    model_config = ConfigDict(frozen=True)

    username: str
    password_hash: str = Field(..., repr=False)
    role: Role = Role.USER
    created_at: str


# ============================================================================
# Response Schemas
# ============================================================================


class UserResponse(BaseModel):
    """Result of a successful registration."""

    username: str


class UserProfile(BaseModel):
    """Identity of an authenticated user."""

    username: str
    role: Role

    model_config = ConfigDict(use_enum_values=True)


class LoginResponse(BaseModel):
    """Result of a successful login."""

    message: str = "Logged in!"
    token: str


class AdminRegistrationResponse(BaseModel):
    """Result of bootstrapping the admin account."""

    message: str
    user: UserProfile


# ============================================================================
# Token Schemas
# ============================================================================


class TokenPayload(BaseModel):
    """Claims carried by an access token."""

    username: str = Field(..., min_length=1)
    role: Role = Role.USER
    iat: int
    exp: int | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
