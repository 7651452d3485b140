"""Use case promoting due scheduled notifications into deliverable records."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import Notification, PromotionSummary, ScheduledNotification
from app.infrastructure.repositories import NotificationRepository, ScheduledNotificationRepository
from app.utils import ensure_utc, utc_now

from .send_notification_now import build_notification_payload

logger = logging.getLogger(__name__)


class PromotionSkipped(Exception):
    """Raised when another run already promoted the scheduled notification."""


def _promote(
    session: Session,
    scheduled: ScheduledNotification,
    *,
    now: datetime,
) -> str:
    """Create the notification for ``scheduled`` and mark it sent in one transaction."""

    if not scheduled.org_id:
        raise ValueError("Scheduled notification has no organization")

    scheduled_repository = ScheduledNotificationRepository(session)
    notification_repository = NotificationRepository(session)

    notification = notification_repository.create(
        Notification(
            id=None,
            org_id=scheduled.org_id,
            user_id=scheduled.user_id,
            type=scheduled.notification_type,
            channel=scheduled.channel,
            payload=build_notification_payload(scheduled.title, scheduled.message, scheduled.data),
            created_at=now,
            read_at=None,
        ),
        commit=False,
    )
    claimed = scheduled_repository.mark_sent(
        scheduled.id,
        sent_at=now,
        notification_id=notification.id,
        commit=False,
    )
    if not claimed:
        raise PromotionSkipped(scheduled.id)
    session.commit()
    return notification.id


def process_due_notifications(
    session: Session,
    *,
    now: datetime | None = None,
    limit: int | None = None,
) -> PromotionSummary:
    """Turn pending scheduled notifications whose time has come into notifications.

    Each row is handled in its own transaction. Rows that fail are marked
    ``failed`` with the error message; rows promoted concurrently by another
    run are skipped.
    """

    current = ensure_utc(now) or utc_now()
    batch_size = limit if limit and limit > 0 else get_settings().scheduled_batch_size

    scheduled_repository = ScheduledNotificationRepository(session)
    due = scheduled_repository.list_due(now=current, limit=batch_size)
    logger.info("Processing %s due scheduled notifications", len(due))

    processed = successful = failed = 0
    notification_ids: list[str] = []
    for scheduled in due:
        processed += 1
        try:
            notification_id = _promote(session, scheduled, now=current)
        except PromotionSkipped:
            session.rollback()
            processed -= 1
            logger.info("Scheduled notification %s already promoted", scheduled.id)
            continue
        except (SQLAlchemyError, ValueError) as exc:
            session.rollback()
            failed += 1
            logger.error("Error processing scheduled notification %s: %s", scheduled.id, exc)
            try:
                scheduled_repository.mark_failed(scheduled.id, error_message=str(exc))
            except SQLAlchemyError as mark_exc:
                session.rollback()
                logger.error(
                    "Could not mark scheduled notification %s as failed: %s",
                    scheduled.id,
                    mark_exc,
                )
            continue

        successful += 1
        notification_ids.append(notification_id)
        logger.debug("Promoted scheduled notification %s to %s", scheduled.id, notification_id)

    logger.info(
        "Scheduled notification run finished: %s processed, %s successful, %s failed",
        processed,
        successful,
        failed,
    )
    return PromotionSummary(
        processed=processed,
        successful=successful,
        failed=failed,
        notification_ids=notification_ids,
    )


__all__ = ["process_due_notifications"]
