"""Database schema for AuthGate.

``schema.sql`` is the source of truth for the credential store layout.
"""

from pathlib import Path

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

__all__ = ["SCHEMA_PATH"]
