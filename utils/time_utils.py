"""
utils/time_utils.py

Purpose: Time helpers

- Timezone-aware timestamps for documents and tokens
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """
    Returns the current UTC time as an aware datetime.
    """
    return datetime.now(timezone.utc)
