"""Authentication Pydantic schemas for API validation."""

from .auth import (
    AdminRegistrationResponse,
    LoginResponse,
    Role,
    TokenPayload,
    UserCredentials,
    UserProfile,
    UserRecord,
    UserResponse,
)

__all__ = [
    "AdminRegistrationResponse",
    "LoginResponse",
    "Role",
    "TokenPayload",
    "UserCredentials",
    "UserProfile",
    "UserRecord",
    "UserResponse",
]
