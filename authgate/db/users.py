"""User record operations (the credential store).

IMPORT CONVENTION:
- Core accesses these through the core.users property
- NO direct import needed when using Core API

Uniqueness of usernames is enforced by the PRIMARY KEY on users.username.
create() does not look the name up first; a duplicate surfaces as
sqlite3.IntegrityError from the INSERT itself.
"""

import sqlite3

from ..auth.schemas import Role, UserRecord
from ..utils import isodatetime


def _row_to_user_record(row: sqlite3.Row) -> UserRecord:
    return UserRecord(
        username=row["username"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        created_at=row["created_at"],
    )


class UserOperations:
    """Persistence for user records."""

    def __init__(self, conn: sqlite3.Connection):
        """Initialize user operations with a database connection.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def create(self, username: str, password_hash: str, role: Role = Role.USER) -> UserRecord:
        """Insert a new user record.

        Args:
            username: Unique username
            password_hash: Output of PasswordHasher.hash(), never a raw password
            role: Role to store with the record

        Returns:
            The stored UserRecord

        Raises:
            sqlite3.IntegrityError: If the username is already taken
        """
        now = isodatetime.now()
        self._conn.execute(
            """INSERT INTO users (username, password_hash, role, created_at)
               VALUES (?, ?, ?, ?)""",
            (username, password_hash, Role(role).value, now)
        )
        return UserRecord(
            username=username,
            password_hash=password_hash,
            role=role,
            created_at=now,
        )

    def get_by_username(self, username: str) -> UserRecord | None:
        """Look up a user record by exact username.

        Returns:
            UserRecord if found, None otherwise
        """
        cursor = self._conn.execute(
            """SELECT username, password_hash, role, created_at
               FROM users
               WHERE username = ?""",
            (username,)
        )
        row = cursor.fetchone()
        return _row_to_user_record(row) if row else None

    def count(self) -> int:
        """Count all user records."""
        cursor = self._conn.execute("SELECT COUNT(*) FROM users")
        return cursor.fetchone()[0]

    def has_admin(self) -> bool:
        """Check whether any record holds the admin role."""
        cursor = self._conn.execute(
            "SELECT 1 FROM users WHERE role = ? LIMIT 1",
            (Role.ADMIN.value,)
        )
        return cursor.fetchone() is not None
