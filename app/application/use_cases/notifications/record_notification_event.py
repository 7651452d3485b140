"""Use case storing an engagement event for a delivered notification."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import EventResult, FailureReason, NotificationEvent, NotificationEventType
from app.infrastructure.repositories import NotificationEventRepository, NotificationRepository
from app.utils import ensure_utc, utc_now

logger = logging.getLogger(__name__)


def record_notification_event(
    session: Session,
    *,
    notification_id: str,
    event_type: str,
    metadata: dict[str, Any] | None = None,
    now: datetime | None = None,
) -> EventResult:
    """Record ``event_type`` against ``notification_id``.

    The user and channel are copied from the notification so engagement can
    be aggregated per user without further joins.
    """

    try:
        resolved_type = NotificationEventType(event_type)
    except ValueError:
        allowed = ", ".join(item.value for item in NotificationEventType)
        return EventResult(
            success=False,
            error=f"event_type must be one of: {allowed}",
            reason=FailureReason.INVALID_INPUT,
        )

    notification = NotificationRepository(session).get(notification_id)
    if notification is None:
        return EventResult(success=False, error="Notification not found", reason=FailureReason.NOT_FOUND)

    try:
        saved = NotificationEventRepository(session).create(
            NotificationEvent(
                id=None,
                notification_id=notification_id,
                user_id=notification.user_id,
                channel=notification.channel,
                event_type=resolved_type.value,
                metadata=dict(metadata or {}),
                created_at=ensure_utc(now) or utc_now(),
            )
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Could not record %s event for notification %s: %s", event_type, notification_id, exc)
        return EventResult(
            success=False,
            error="Failed to record notification event",
            reason=FailureReason.PERSISTENCE_ERROR,
        )

    logger.debug("Recorded %s event %s for notification %s", resolved_type.value, saved.id, notification_id)
    return EventResult(success=True, event_id=saved.id)


__all__ = ["record_notification_event"]
