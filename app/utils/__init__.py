"""Utility helpers for reusable functionality."""

from .datetime import (
    add_minutes,
    ensure_utc,
    get_app_timezone,
    isoformat_or_none,
    next_occurrence_of_hour,
    to_app_timezone,
    to_storage_datetime,
    utc_now,
)

__all__ = [
    "add_minutes",
    "ensure_utc",
    "get_app_timezone",
    "isoformat_or_none",
    "next_occurrence_of_hour",
    "to_app_timezone",
    "to_storage_datetime",
    "utc_now",
]
