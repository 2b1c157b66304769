# src/wikireview/db/time.py
"""Time utilities for database models."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def epoch_millis(moment: datetime) -> int:
    """Return ``moment`` as integer milliseconds since the Unix epoch."""
    return int(moment.timestamp() * 1000)
