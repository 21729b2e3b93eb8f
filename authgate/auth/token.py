"""
JWT token issuance and verification.

Tokens are HS256-signed JWTs carrying ``username``, ``role`` and ``iat``.
They are stateless: nothing is stored server-side, so a token stays valid
until the signing secret changes (or until ``exp`` passes, when expiry has
been switched on in settings).
"""

import logging

import jwt
from pydantic import ValidationError as PydanticValidationError

from ..utils import isodatetime
from .schemas import Role, TokenPayload

logger = logging.getLogger(__name__)


class TokenIssuer:
    """Signs and verifies access tokens with a process-wide secret."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expiry_seconds: int | None = None,
    ):
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expiry_seconds = expiry_seconds

    def issue(self, username: str, role: Role = Role.USER) -> str:
        """
        Generate a signed access token for a user.

        Args:
            username: Value of the username claim
            role: Value of the role claim

        Returns:
            Encoded JWT string
        """
        now_ts = isodatetime.now_unix()
        payload = {
            "username": username,
            "role": Role(role).value,
            "iat": now_ts,
        }
        if self.expiry_seconds is not None:
            payload["exp"] = now_ts + self.expiry_seconds

        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenPayload:
        """
        Validate a token and decode its claims.

        Args:
            token: Encoded JWT string

        Returns:
            TokenPayload with the decoded claims

        Raises:
            jwt.InvalidTokenError: If the signature does not verify, the token
                is structurally malformed, the claims are incomplete, or
                the token has expired
        """
        payload = jwt.decode(
            token,
            self._secret_key,
            algorithms=[self.algorithm],
            options={"require": ["username", "iat"]},
        )

        try:
            return TokenPayload(**payload)
        except PydanticValidationError as e:
            raise jwt.InvalidTokenError(f"Malformed token claims: {e.error_count()} error(s)") from e
