"""
Shared column helpers.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware current time, used as the Python-side column default."""
    return datetime.now(timezone.utc)
