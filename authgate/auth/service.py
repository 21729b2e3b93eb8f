"""Authentication service: registration and login.

AuthService is the composition root of the auth core. It is built once
from Settings and receives the password hasher, token issuer and database
path explicitly; nothing here reads global configuration.

Flow:
- register: validate -> hash -> INSERT (UNIQUE constraint decides) -> username
- login: validate -> lookup -> bcrypt check -> token

Login performs no writes.
"""

import logging
import secrets
import sqlite3

from ..config import Settings
from ..db import get_core
from ..exceptions import (
    ConflictError,
    Forbidden,
    InternalError,
    InvalidCredentials,
    ValidationError,
)
from .passwords import PasswordHasher
from .schemas import LoginResponse, Role, UserProfile, UserResponse
from .token import TokenIssuer

logger = logging.getLogger(__name__)


def _require_credentials(username: str | None, password: str | None) -> None:
    if not username or not password:
        raise ValidationError("Username and password required")


class AuthService:
    """Registers users and authenticates logins."""

    def __init__(self, database_path: str, hasher: PasswordHasher, tokens: TokenIssuer):
        self.database_path = database_path
        self.hasher = hasher
        self.tokens = tokens
        # Unknown usernames are checked against this so a miss costs the
        # same bcrypt time as a wrong password.
        self._dummy_hash = hasher.hash(secrets.token_urlsafe(32))

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthService":
        """Build the service and its collaborators from configuration."""
        return cls(
            database_path=settings.database_path,
            hasher=PasswordHasher(work_factor=settings.bcrypt_work_factor),
            tokens=TokenIssuer(
                secret_key=settings.jwt_secret_key,
                algorithm=settings.jwt_algorithm,
                expiry_seconds=settings.jwt_expiry_seconds,
            ),
        )

    # ========================================================================
    # Registration
    # ========================================================================

    def register(self, username: str | None, password: str | None, role: Role = Role.USER) -> UserResponse:
        """
        Create a new user record.

        Args:
            username: Desired username
            password: Plain text password
            role: Role stored with the record

        Returns:
            UserResponse carrying the username only

        Raises:
            ValidationError: If username or password is empty or missing
            ConflictError: If the username is already taken
            Forbidden: If role is admin and an admin account already exists
            InternalError: On any other storage failure
        """
        _require_credentials(username, password)
        password_hash = self.hasher.hash(password)

        try:
            with get_core(self.database_path, atomic=True) as core:
                record = core.users.create(username, password_hash, role)
        except sqlite3.IntegrityError as e:
            raise self._constraint_error(username, role) from e
        except sqlite3.Error as e:
            logger.exception("Registration failed with a storage error")
            raise InternalError("Failed to store user record", {"cause": str(e)}) from e

        logger.info(f"Registered user: {record.username} (role={record.role.value})")
        return UserResponse(username=record.username)

    def register_admin(self, username: str | None, password: str | None) -> UserProfile:
        """
        Bootstrap the admin account.

        Only succeeds while no admin exists. The up-front check gives a
        fast answer; the single-admin unique index on users.role decides
        between concurrent bootstrap calls.

        Raises:
            Forbidden: If an admin account already exists
            ValidationError, ConflictError, InternalError: As for register()
        """
        if self.has_admin_user():
            logger.warning("Admin registration attempted when admin already exists")
            raise Forbidden("Admin account already exists. Registration is disabled.")

        user = self.register(username, password, role=Role.ADMIN)
        return UserProfile(username=user.username, role=Role.ADMIN)

    def _constraint_error(self, username: str, role: Role) -> Exception:
        """Map a failed INSERT to the constraint that rejected it.

        The INSERT can only violate the username primary key or, for an
        admin record, the single-admin index. If the username is stored,
        it was the former.
        """
        if Role(role) is not Role.ADMIN:
            logger.warning("Registration rejected: username already taken")
            return ConflictError("Username taken. Please pick another!")

        try:
            with get_core(self.database_path) as core:
                username_taken = core.users.get_by_username(username) is not None
        except sqlite3.Error as e:
            logger.exception("Constraint lookup failed with a storage error")
            return InternalError("Failed to read user records", {"cause": str(e)})

        if username_taken:
            logger.warning("Registration rejected: username already taken")
            return ConflictError("Username taken. Please pick another!")

        logger.warning("Admin registration rejected: admin already exists")
        return Forbidden("Admin account already exists. Registration is disabled.")

    def has_admin_user(self) -> bool:
        """Check whether an admin account has been created."""
        try:
            with get_core(self.database_path) as core:
                return core.users.has_admin()
        except sqlite3.Error as e:
            logger.exception("Admin lookup failed with a storage error")
            raise InternalError("Failed to read user records", {"cause": str(e)}) from e

    # ========================================================================
    # Login
    # ========================================================================

    def login(self, username: str | None, password: str | None) -> LoginResponse:
        """
        Authenticate credentials and issue an access token.

        Unknown usernames and wrong passwords raise the same
        InvalidCredentials error.

        Returns:
            LoginResponse with a success message and the token

        Raises:
            ValidationError: If username or password is empty or missing
            InvalidCredentials: If the credentials do not match a user
            InternalError: On a storage failure
        """
        _require_credentials(username, password)

        try:
            with get_core(self.database_path) as core:
                record = core.users.get_by_username(username)
        except sqlite3.Error as e:
            logger.exception("Login lookup failed with a storage error")
            raise InternalError("Failed to read user record", {"cause": str(e)}) from e

        password_hash = record.password_hash if record is not None else self._dummy_hash
        password_ok = self.hasher.verify(password, password_hash)

        if record is None or not password_ok:
            logger.warning("Failed login attempt")
            raise InvalidCredentials()

        token = self.tokens.issue(record.username, record.role)
        logger.info(f"Successful login: {record.username}")
        return LoginResponse(message="Logged in!", token=token)
