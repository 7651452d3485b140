"""Use case for deferring a notification to a later delivery time."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import (
    FailureReason,
    ScheduledNotification,
    ScheduledNotificationStatus,
    ScheduleResult,
)
from app.infrastructure.repositories import ScheduledNotificationRepository
from app.utils import add_minutes, ensure_utc, utc_now

from .send_time import SendTimeOptimizer, get_send_time_optimizer
from .validators import ensure_channel, ensure_data, ensure_min_delay, require_text

logger = logging.getLogger(__name__)

DEFAULT_MIN_DELAY_MINUTES = 15


def schedule_notification(
    session: Session,
    *,
    user_id: str,
    notification_type: str,
    title: str,
    message: str,
    channel: str,
    data: dict[str, Any] | None = None,
    use_smart_scheduling: bool = True,
    min_delay_minutes: int = DEFAULT_MIN_DELAY_MINUTES,
    org_id: str | None = None,
    optimizer: SendTimeOptimizer | None = None,
    now: datetime | None = None,
) -> ScheduleResult:
    """Store a pending notification to be delivered no earlier than ``min_delay_minutes``.

    With smart scheduling the optimiser proposes a time; if it fails, the
    fallback is exactly ``now + min_delay_minutes``. This function never
    raises: every failure is reported through the returned result.
    """

    try:
        user_id = require_text(user_id, "user_id")
        notification_type = require_text(notification_type, "notification_type")
        resolved_channel = ensure_channel(channel)
        min_delay_minutes = ensure_min_delay(min_delay_minutes)
        payload = ensure_data(data)
    except (TypeError, ValueError) as exc:
        return ScheduleResult(success=False, error=str(exc), reason=FailureReason.INVALID_INPUT)

    current = ensure_utc(now) or utc_now()
    earliest = add_minutes(current, min_delay_minutes)
    scheduled_for = earliest

    if use_smart_scheduling:
        strategy = optimizer or get_send_time_optimizer(session)
        try:
            candidate = ensure_utc(
                strategy.next_optimal_send_time(
                    user_id, notification_type, min_delay_minutes, current
                )
            )
        except Exception as exc:
            if isinstance(exc, SQLAlchemyError):
                # The failed lookup may have aborted the transaction the insert needs.
                session.rollback()
            logger.warning(
                "Optimal send time unavailable for user %s (%s); using %s minute delay",
                user_id,
                exc,
                min_delay_minutes,
            )
        else:
            if candidate is None:
                logger.warning(
                    "Optimiser returned no send time for user %s; using %s minute delay",
                    user_id,
                    min_delay_minutes,
                )
            else:
                scheduled_for = max(candidate, earliest)

    repository = ScheduledNotificationRepository(session)
    try:
        saved = repository.create(
            ScheduledNotification(
                id=None,
                user_id=user_id,
                org_id=(org_id or "").strip() or None,
                notification_type=notification_type,
                title=title,
                message=message,
                channel=resolved_channel.value,
                scheduled_for=scheduled_for,
                status=ScheduledNotificationStatus.PENDING.value,
                data=payload,
                created_at=current,
            )
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Could not schedule %s notification for user %s: %s", notification_type, user_id, exc)
        return ScheduleResult(
            success=False,
            error="Failed to schedule notification",
            reason=FailureReason.PERSISTENCE_ERROR,
        )

    logger.info(
        "Scheduled %s notification %s for user %s at %s",
        notification_type,
        saved.id,
        user_id,
        saved.scheduled_for.isoformat(),
    )
    return ScheduleResult(
        success=True,
        scheduled_for=saved.scheduled_for,
        scheduled_notification_id=saved.id,
    )


__all__ = ["DEFAULT_MIN_DELAY_MINUTES", "schedule_notification"]
