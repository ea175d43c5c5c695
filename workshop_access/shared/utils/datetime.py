"""UTC datetime helper.

All datetime values in the system are timezone-aware UTC.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info.

    Used for assignment timestamps and invalidation events.
    """
    return datetime.now(UTC)
