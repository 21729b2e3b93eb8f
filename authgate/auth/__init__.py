"""Authentication module for AuthGate.

This module provides the authentication core:
- Password hashing and verification (passwords)
- Token issuance and verification (token)
- Registration and login orchestration (service)
- Access guards for protected endpoints (decorators)

Auth endpoints:
- POST /auth/register - Create a user account
- POST /auth/login - Authenticate and return a bearer token
- POST /admin/register - Create the admin account (localhost only, one-time)
- GET /auth/me - Get the identity carried by the current token
"""

from flask import current_app

from . import passwords, schemas, service, token

EXTENSION_KEY = "authgate"


def get_auth_service() -> "service.AuthService":
    """Return the AuthService registered on the current Flask app."""
    return current_app.extensions[EXTENSION_KEY]


__all__ = ["EXTENSION_KEY", "get_auth_service", "passwords", "schemas", "service", "token"]
