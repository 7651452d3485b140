"""Common validation helpers for notification use cases."""

from collections.abc import Mapping
from typing import Any

from app.domain.entities import NotificationChannel


def require_text(value: str | None, field_name: str) -> str:
    """Return ``value`` stripped or raise ``ValueError`` when it is blank."""

    normalized = value.strip() if isinstance(value, str) else ""
    if not normalized:
        raise ValueError(f"{field_name} is required")
    return normalized


def ensure_channel(value: str | NotificationChannel) -> NotificationChannel:
    try:
        return NotificationChannel(value)
    except ValueError as exc:
        allowed = ", ".join(channel.value for channel in NotificationChannel)
        raise ValueError(f"channel must be one of: {allowed}") from exc


def ensure_min_delay(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError("min_delay_minutes must be a whole number of minutes")
    if value < 0:
        raise ValueError("min_delay_minutes must be zero or positive")
    return value


def ensure_data(value: Mapping[str, Any] | None) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError("data must be an object")
    return dict(value)
