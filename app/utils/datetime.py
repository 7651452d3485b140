"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    The timezone is resolved using the ``APP_TIMEZONE`` environment variable.
    Unknown names fall back to UTC. Engagement hours are bucketed in this
    timezone, so it should match where most recipients live.
    """

    settings = get_settings()
    tz_name = (settings.app_timezone or "").strip() or _DEFAULT_TIMEZONE
    return _resolve_timezone(tz_name)


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` as an aware UTC datetime.

    Naive values are assumed to already be expressed in UTC, which is how
    every timestamp is persisted.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_storage_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` as naive UTC, the representation stored in the database."""

    normalized = ensure_utc(value)
    if normalized is None:
        return None
    return normalized.replace(tzinfo=None)


def to_app_timezone(value: datetime) -> datetime:
    """Express ``value`` in the configured application timezone."""

    normalized = ensure_utc(value)
    if normalized is None:  # pragma: no cover - guarded by the signature
        msg = "A datetime value is required"
        raise ValueError(msg)
    return normalized.astimezone(get_app_timezone())


def add_minutes(value: datetime, minutes: int) -> datetime:
    """Return ``value`` shifted forward by ``minutes``."""

    return value + timedelta(minutes=minutes)


def next_occurrence_of_hour(earliest: datetime, hour: int) -> datetime:
    """Return the first ``hour``:00 in the app timezone not before ``earliest``.

    The result is returned in UTC.
    """

    if not 0 <= hour <= 23:
        msg = f"Hour must be between 0 and 23, got {hour}"
        raise ValueError(msg)

    local_earliest = to_app_timezone(earliest)
    candidate = local_earliest.replace(hour=hour, minute=0, second=0, microsecond=0)
    if candidate < local_earliest:
        candidate = candidate + timedelta(days=1)
    return candidate.astimezone(timezone.utc)


def isoformat_or_none(value: datetime | None) -> str | None:
    """Return the ISO 8601 representation of ``value`` in UTC."""

    normalized = ensure_utc(value)
    return normalized.isoformat() if normalized else None


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` into a ``timezone`` instance."""

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(tz_name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return timezone.utc
