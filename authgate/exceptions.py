"""Custom exceptions for AuthGate.

Every exception carries a human-readable ``message``, an optional
``details`` dict and the HTTP status the error handlers map it to.
"""


class AuthGateError(Exception):
    """Base exception for all AuthGate errors."""

    status_code = 500

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(AuthGateError):
    """A required field is missing or malformed."""

    status_code = 400


class ConflictError(AuthGateError):
    """The username is already registered."""

    status_code = 400


class InvalidCredentials(AuthGateError):
    """Unknown username or wrong password.

    Both cases raise the same message so callers cannot tell which
    usernames exist.
    """

    status_code = 400

    def __init__(self, message: str = "Invalid username/password", details: dict | None = None):
        super().__init__(message, details)


class Unauthorized(AuthGateError):
    """Token missing, malformed or not signed with the current secret."""

    status_code = 401


class Forbidden(AuthGateError):
    """Authenticated, but without the privilege the endpoint requires."""

    status_code = 403


class InternalError(AuthGateError):
    """Unexpected storage or signing failure.

    The message and details stay server-side; clients get a generic
    response.
    """

    status_code = 500
