"""Password hashing and verification.

Uses bcrypt: the salt is generated per hash and embedded in the returned
string, so nothing besides the hash needs to be stored.
"""

import logging

import bcrypt

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

# bcrypt ignores everything past 72 bytes of input
BCRYPT_MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Salted one-way hashing with a fixed bcrypt work factor."""

    def __init__(self, work_factor: int = 12):
        self.work_factor = work_factor

    def hash(self, password: str, work_factor: int | None = None) -> str:
        """
        Hash a password using bcrypt.

        Args:
            password: Plain text password
            work_factor: bcrypt rounds, defaults to the hasher's configured value

        Returns:
            Bcrypt hash string (60 characters, salt included)

        Raises:
            ValidationError: If the password is empty or longer than 72 bytes
        """
        if not password:
            raise ValidationError("Password required")

        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes",
                {"field": "password"}
            )

        rounds = work_factor if work_factor is not None else self.work_factor
        salt = bcrypt.gensalt(rounds=rounds)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Check a password against a bcrypt hash.

        The comparison is constant-time. Malformed input (empty strings,
        a garbled hash, non-string values) returns False instead of raising.
        """
        if not password or not password_hash:
            return False

        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, TypeError, AttributeError) as e:
            logger.debug(f"Password verification rejected malformed input: {type(e).__name__}")
            return False
