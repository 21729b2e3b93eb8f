"""Database module for AuthGate.

Core encapsulates a sqlite3 connection and exposes the user operations
that make up the credential store.

ARCHITECTURE:
- Core owns its connection and is always used as a context manager
- atomic=True: commit on clean exit, rollback on exception
- atomic=False: read-only usage, the connection is simply closed on exit
- Each call to get_core() opens a fresh connection, so request handlers
  never share connection state

Usage:
    >>> with get_core(settings.database_path, atomic=True) as core:
    ...     core.users.create("bob", password_hash, Role.USER)
    ...     # commits on exit

    >>> with get_core(settings.database_path) as core:
    ...     record = core.users.get_by_username("bob")
"""

import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import TYPE_CHECKING

from ..schema import SCHEMA_PATH

if TYPE_CHECKING:
    from .users import UserOperations

logger = logging.getLogger(__name__)


class Core:
    """
    Database Core with user operations.

    Maintains its own connection and transaction state.
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
            atomic: If True, commit on exit (rollback on exception).
        """
        self._conn = connection
        self._atomic = atomic
        self._user_ops = None

    @property
    def users(self) -> "UserOperations":
        """User record operations.

        Lazy-loaded and cached on first access.
        """
        if self._user_ops is None:
            from .users import UserOperations
            self._user_ops = UserOperations(self._conn)
        return self._user_ops

    def __enter__(self) -> "Core":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back atomic work.

        The connection is always closed, even when commit fails.
        """
        try:
            if self._atomic:
                if exc_type is None:
                    self._conn.commit()
                else:
                    self._conn.rollback()
        finally:
            self._conn.close()


def _create_connection(database_path: str) -> sqlite3.Connection:
    """Create a fresh database connection.

    Returns:
        SQLite connection with row_factory set to sqlite3.Row
    """
    db_path = Path(database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    return conn


def get_core(database_path: str, atomic: bool = False) -> Core:
    """
    Get a database Core instance.

    Args:
        database_path: Path to the sqlite database file
        atomic: If True, the work done inside the with-block commits as one
                transaction on exit. Use for writes.

    Returns:
        Core instance, to be used as a context manager
    """
    conn = _create_connection(database_path)
    return Core(conn, atomic=atomic)


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

def init_db(database_path: str) -> None:
    """Initialize database by running schema.sql if not already initialized."""
    db_path = Path(database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with closing(sqlite3.connect(str(db_path))) as db:
        cursor = db.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            # Database already initialized, skip
            return

        db.executescript(SCHEMA_PATH.read_text())
        db.commit()
        logger.info(f"Database initialized at {db_path}")
