"""Utilities for datetime handling."""

from datetime import datetime

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def now_local() -> datetime:
    """Get current local datetime."""
    return datetime.now()


def format_timestamp(dt: datetime) -> str:
    """Format a datetime the way generated headers print it."""
    return dt.strftime(TIMESTAMP_FORMAT)
