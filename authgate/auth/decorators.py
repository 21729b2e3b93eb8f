"""Access guards for protected endpoints.

The guard logic lives in two plain functions so it can be used without
Flask:
- authenticate_token(tokens, token) - token present and validly signed
- authorize_admin(claims) - claims carry the admin role

The decorators wrap them for Flask views:
- @auth_required - Requires a valid bearer token
- @admin_required - Requires a valid bearer token with the admin role
- @localhost_only - Restricts access to localhost only
- @first_time_only - Restricts access to first-time setup (no admin exists)

A rejected request never reaches the wrapped view.
"""

import logging
from functools import wraps

import jwt
from flask import current_app, g, request

from ..exceptions import Forbidden, Unauthorized
from . import get_auth_service
from .schemas import TokenPayload
from .token import TokenIssuer

logger = logging.getLogger(__name__)

LOCALHOST_ADDRESSES = {"127.0.0.1", "::1", "localhost"}


# ============================================================================
# Guard Logic
# ============================================================================


def authenticate_token(tokens: TokenIssuer, token: str | None) -> TokenPayload:
    """
    Verify a client-supplied token.

    Args:
        tokens: Token issuer holding the signing secret
        token: Raw token string, or None if the client sent none

    Returns:
        Decoded claims

    Raises:
        Unauthorized: If the token is absent, malformed, expired or
            signed with a different secret
    """
    if not token:
        logger.warning("Unauthenticated request to protected endpoint")
        raise Unauthorized("Authentication required", {"code": "missing_auth"})

    try:
        return tokens.verify(token)
    except jwt.ExpiredSignatureError:
        logger.warning("JWT token expired")
        raise Unauthorized("Token has expired", {"code": "token_expired"})
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid JWT token: {e}")
        raise Unauthorized("Invalid token", {"code": "invalid_token"})


def authorize_admin(claims: TokenPayload) -> TokenPayload:
    """
    Require the admin role on already-verified claims.

    Raises:
        Forbidden: If the claims do not carry the admin role
    """
    if not claims.is_admin:
        logger.warning(f"Non-admin user {claims.username} denied admin endpoint")
        raise Forbidden("Admin privileges required", {"code": "not_admin"})
    return claims


def _bearer_token_from_request() -> str | None:
    """
    Pull the token out of ``Authorization: Bearer <token>``.

    Returns None when the header is absent.

    Raises:
        Unauthorized: If the header is present but not a bearer header
    """
    auth_header = request.headers.get("Authorization")
    if auth_header is None:
        return None

    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.warning("Malformed Authorization header")
        raise Unauthorized(
            "Invalid authorization header format",
            {"expected": "Authorization: Bearer <token>"}
        )
    return parts[1]


def _authenticate_request() -> TokenPayload:
    """
    Shared authentication logic for requests.

    Stores authenticated user information in flask.g:
    - g.username: Username
    - g.role: Role claim

    Raises:
        Unauthorized: If no valid token was provided
    """
    service = get_auth_service()
    claims = authenticate_token(service.tokens, _bearer_token_from_request())

    g.username = claims.username
    g.role = claims.role

    logger.debug(f"JWT authentication successful for user {claims.username}")
    return claims


# ============================================================================
# Decorators
# ============================================================================


def auth_required(f):
    """
    Decorator to require a valid bearer token for endpoint access.

    Example:
    ```python
    @auth_required
    def protected_endpoint():
        return {"hello": g.username}
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        _authenticate_request()
        return f(*args, **kwargs)

    return wrapper


def admin_required(f):
    """
    Decorator to require a valid bearer token carrying the admin role.

    Missing or invalid tokens yield 401; valid non-admin tokens yield 403.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        authorize_admin(_authenticate_request())
        return f(*args, **kwargs)

    return wrapper


def localhost_only(f):
    """
    Decorator to restrict endpoint access to localhost only.

    When settings.bypass_localhost_check is True, every request is treated
    as non-localhost.

    Raises:
        Forbidden: If request is not from localhost
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        settings = current_app.config["AUTHGATE_SETTINGS"]
        remote_addr = request.remote_addr or ""

        if settings.bypass_localhost_check or remote_addr not in LOCALHOST_ADDRESSES:
            logger.warning(f"Protected endpoint accessed from non-localhost: {remote_addr}")
            raise Forbidden(
                "This endpoint is only accessible from localhost",
                {"remote_addr": remote_addr}
            )

        return f(*args, **kwargs)

    return wrapper


def first_time_only(f):
    """
    Decorator to restrict endpoint access to first-time setup only.

    Raises:
        Forbidden: If an admin user already exists
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        if get_auth_service().has_admin_user():
            logger.warning("First-time endpoint accessed after setup completed")
            raise Forbidden(
                "Setup has already been completed. This endpoint is disabled."
            )

        return f(*args, **kwargs)

    return wrapper
