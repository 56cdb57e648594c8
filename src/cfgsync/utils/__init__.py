"""Utility modules."""

from .datetime import format_timestamp, now_local

__all__ = ["format_timestamp", "now_local"]
