"""
Timestamp helpers.

Record creation times and deletion acknowledgements are UTC ISO-8601 strings,
which sort lexicographically in the same order as the instants they denote.
"""

from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Return the current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return datetime.now(timezone.utc).isoformat()
