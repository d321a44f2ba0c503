"""
Shared utility functions for Sentinel Notifier.

Clock and timestamp-formatting helpers used by the renderer and the
cooldown bookkeeping.
"""

from __future__ import annotations

from datetime import datetime

DISPLAY_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def local_now() -> datetime:
    """Return the current local time (naive, like a wall clock)."""
    return datetime.now()


def format_display_time(value: datetime | float) -> str:
    """Format a datetime or unix timestamp as ``YYYY-MM-DD HH:MM:SS``."""
    if not isinstance(value, datetime):
        value = datetime.fromtimestamp(value)
    return value.strftime(DISPLAY_TIME_FORMAT)
