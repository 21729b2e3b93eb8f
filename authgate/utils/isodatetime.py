"""ISO 8601 and Unix timestamp helpers.

All timestamps written to the database or embedded in tokens go through
these functions so they are always UTC.
"""

from datetime import UTC, datetime

def to_timestamp(dt: datetime) -> str:
    """Convert datetime to ISO 8601 UTC timestamp string."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


def now() -> str:
    """Get current UTC timestamp as ISO 8601 string."""
    return to_timestamp(datetime.now(UTC))


def now_unix() -> int:
    """Get current UTC time as integer seconds since the epoch."""
    return int(datetime.now(UTC).timestamp())
