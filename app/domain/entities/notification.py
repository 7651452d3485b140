"""Domain entities for outbound notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Notification:
    """A unit of outbound communication delivered at most once."""

    id: str | None
    org_id: str
    user_id: str | None
    type: str
    channel: str
    payload: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    read_at: datetime | None = None

    @property
    def is_processed(self) -> bool:
        """Return ``True`` once the dispatcher has consumed the record."""

        return self.read_at is not None


@dataclass
class ScheduledNotification:
    """Deferred instruction to create a notification no earlier than ``scheduled_for``."""

    id: str | None
    user_id: str
    notification_type: str
    title: str
    message: str
    channel: str
    scheduled_for: datetime
    status: str
    data: dict[str, Any] = field(default_factory=dict)
    org_id: str | None = None
    created_at: datetime | None = None
    sent_at: datetime | None = None
    error_message: str | None = None
    notification_id: str | None = None


@dataclass
class NotificationEvent:
    """Engagement signal recorded against a delivered notification."""

    id: str | None
    notification_id: str
    user_id: str | None
    channel: str
    event_type: str
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None


@dataclass(frozen=True)
class EngagementSample:
    """Minimal view of an engagement event used for send-time estimates."""

    event_type: str
    notification_type: str
    created_at: datetime


__all__ = [
    "EngagementSample",
    "Notification",
    "NotificationEvent",
    "ScheduledNotification",
]
