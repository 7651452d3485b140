"""Use case for queueing an email notification for immediate dispatch."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import (
    FailureReason,
    Notification,
    NotificationChannel,
    NotificationType,
    SendNowResult,
)
from app.infrastructure.repositories import NotificationRepository
from app.utils import ensure_utc, utc_now

from .validators import ensure_data, require_text

logger = logging.getLogger(__name__)


def queue_email_notification(
    session: Session,
    *,
    org_id: str,
    user_id: str | None,
    notification_type: str,
    payload: Mapping[str, Any] | None = None,
    now: datetime | None = None,
) -> SendNowResult:
    """Store an unprocessed email notification ready for the dispatcher.

    ``notification_type`` must name a known email template exactly. Every
    type except ``company_invitation`` needs a ``user_id``; invitees are
    addressed through ``payload["email"]`` instead.
    """

    try:
        org_id = require_text(org_id, "org_id")
        notification_type = require_text(notification_type, "notification_type")
        data = ensure_data(payload)
    except (TypeError, ValueError) as exc:
        return SendNowResult(success=False, error=str(exc), reason=FailureReason.INVALID_INPUT)

    try:
        kind = NotificationType.parse(notification_type)
    except ValueError:
        return SendNowResult(
            success=False,
            error=f"Unknown email type: {notification_type}",
            reason=FailureReason.UNKNOWN_TYPE,
        )

    recipient_id = user_id.strip() if isinstance(user_id, str) else ""
    if not recipient_id and kind is not NotificationType.COMPANY_INVITATION:
        return SendNowResult(success=False, error="user_id is required", reason=FailureReason.INVALID_INPUT)

    repository = NotificationRepository(session)
    try:
        saved = repository.create(
            Notification(
                id=None,
                org_id=org_id,
                user_id=recipient_id or None,
                type=kind.value,
                channel=NotificationChannel.EMAIL.value,
                payload=data,
                created_at=ensure_utc(now) or utc_now(),
                read_at=None,
            )
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Could not queue %s email for user %s: %s", kind.value, recipient_id, exc)
        return SendNowResult(
            success=False,
            error="Failed to queue email notification",
            reason=FailureReason.PERSISTENCE_ERROR,
        )

    logger.info("Queued %s email notification %s", kind.value, saved.id)
    return SendNowResult(success=True, notification_id=saved.id)


__all__ = ["queue_email_notification"]
