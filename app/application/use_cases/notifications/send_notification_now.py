"""Use case for writing an in-app notification immediately."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import FailureReason, Notification, NotificationChannel, SendNowResult
from app.infrastructure.repositories import NotificationRepository
from app.utils import ensure_utc, utc_now

from .validators import require_text

logger = logging.getLogger(__name__)


def build_notification_payload(
    title: str, message: str, data: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Merge ``title`` and ``message`` with the producer supplied ``data``."""

    return {"title": title, "message": message, **(data or {})}


def send_notification_now(
    session: Session,
    *,
    org_id: str,
    user_id: str,
    notification_type: str,
    title: str,
    message: str,
    data: dict[str, Any] | None = None,
    now: datetime | None = None,
) -> SendNowResult:
    """Persist an unprocessed in-app notification for ``user_id``.

    ``org_id`` must be supplied by the caller; a blank tenant is reported as
    invalid input rather than stored.
    """

    try:
        org_id = require_text(org_id, "org_id")
        user_id = require_text(user_id, "user_id")
        notification_type = require_text(notification_type, "notification_type")
    except ValueError as exc:
        return SendNowResult(success=False, error=str(exc), reason=FailureReason.INVALID_INPUT)

    repository = NotificationRepository(session)
    try:
        saved = repository.create(
            Notification(
                id=None,
                org_id=org_id,
                user_id=user_id,
                type=notification_type,
                channel=NotificationChannel.IN_APP.value,
                payload=build_notification_payload(title, message, data),
                created_at=ensure_utc(now) or utc_now(),
                read_at=None,
            )
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Could not create %s notification for user %s: %s", notification_type, user_id, exc)
        return SendNowResult(
            success=False,
            error="Failed to send notification",
            reason=FailureReason.PERSISTENCE_ERROR,
        )

    logger.info("Created in-app %s notification %s for user %s", notification_type, saved.id, user_id)
    return SendNowResult(success=True, notification_id=saved.id)


__all__ = ["build_notification_payload", "send_notification_now"]
