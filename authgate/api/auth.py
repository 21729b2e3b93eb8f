"""Authentication API endpoints for AuthGate.

These endpoints handle registration and login and return JSON responses:
- User registration and login
- Admin bootstrap (localhost only, one-time)
- Current user retrieval

Request bodies may be JSON or form data.
"""

import logging

from flask import Blueprint, g, jsonify

from ..auth import get_auth_service
from ..auth.decorators import auth_required, first_time_only, localhost_only
from ..auth.schemas import AdminRegistrationResponse, UserCredentials, UserProfile
from .validation import validate_request

logger = logging.getLogger(__name__)


auth_bp = Blueprint("auth", __name__)


# ============================================================================
# Registration and Login
# ============================================================================


@auth_bp.route("/auth/register", methods=["POST"])
@validate_request
def register(data: UserCredentials):
    """
    Register a new user account.

    Example request:
    ```json
    {"username": "bob", "password": "hunter2"}
    ```

    Example response (201):
    ```json
    {"username": "bob"}
    ```

    Errors (400): ValidationError, ConflictError
    """
    user = get_auth_service().register(data.username, data.password)
    return jsonify(user.model_dump()), 201


@auth_bp.route("/auth/login", methods=["POST"])
@validate_request
def login(data: UserCredentials):
    """
    Authenticate credentials and return a bearer token.

    Example response:
    ```json
    {"message": "Logged in!", "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."}
    ```

    Errors (400): ValidationError, InvalidCredentials
    """
    result = get_auth_service().login(data.username, data.password)
    return jsonify(result.model_dump()), 200


# ============================================================================
# Admin Bootstrap (localhost only, one-time)
# ============================================================================


@auth_bp.route("/admin/register", methods=["POST"])
@localhost_only
@first_time_only
@validate_request
def admin_register(data: UserCredentials):
    """
    Create the admin account.

    Only reachable from localhost and only while no admin exists.

    Example response (201):
    ```json
    {
        "message": "Admin account created successfully",
        "user": {"username": "admin", "role": "admin"}
    }
    ```
    """
    user = get_auth_service().register_admin(data.username, data.password)
    logger.info(f"Admin account created: {user.username}")

    return jsonify(
        AdminRegistrationResponse(
            message="Admin account created successfully",
            user=user
        ).model_dump(mode="json")
    ), 201


# ============================================================================
# Current User
# ============================================================================


@auth_bp.route("/auth/me", methods=["GET"])
@auth_required
def get_current_user():
    """
    Return the identity carried by the bearer token.

    Example response:
    ```json
    {"username": "bob", "role": "user"}
    ```
    """
    return jsonify(UserProfile(username=g.username, role=g.role).model_dump(mode="json")), 200
