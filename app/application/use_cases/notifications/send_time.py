"""Strategies for choosing when a deferred notification should go out."""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timedelta
from typing import Protocol

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import ENGAGEMENT_WEIGHTS, NotificationEventType
from app.infrastructure.repositories import NotificationEventRepository
from app.utils import add_minutes, ensure_utc, next_occurrence_of_hour, to_app_timezone

logger = logging.getLogger(__name__)


class SendTimeUnavailableError(RuntimeError):
    """Raised when no reliable send time can be estimated."""


class SendTimeOptimizer(Protocol):
    def next_optimal_send_time(
        self,
        user_id: str,
        notification_type: str,
        min_delay_minutes: int,
        now: datetime,
    ) -> datetime:
        ...


class FixedDelayOptimizer:
    """Send exactly ``min_delay_minutes`` after the request."""

    def next_optimal_send_time(
        self,
        user_id: str,
        notification_type: str,
        min_delay_minutes: int,
        now: datetime,
    ) -> datetime:
        return add_minutes(ensure_utc(now), min_delay_minutes)


class EngagementSendTimeOptimizer:
    """Pick the hour of day at which the user engages most with notifications.

    Opens count once and clicks twice. Events for the same notification type
    are preferred when there are enough of them; otherwise every type is
    considered. Hours are bucketed in the application timezone and ties go to
    the earliest hour.
    """

    def __init__(
        self,
        session: Session,
        *,
        lookback_days: int | None = None,
        min_events: int | None = None,
    ) -> None:
        settings = get_settings()
        self.repository = NotificationEventRepository(session)
        self.lookback_days = lookback_days or settings.engagement_lookback_days
        self.min_events = min_events or settings.engagement_min_events

    def next_optimal_send_time(
        self,
        user_id: str,
        notification_type: str,
        min_delay_minutes: int,
        now: datetime,
    ) -> datetime:
        now = ensure_utc(now)
        samples = self.repository.list_engagement_for_user(
            user_id,
            since=now - timedelta(days=self.lookback_days),
            event_types=[event_type.value for event_type in ENGAGEMENT_WEIGHTS],
        )

        same_type = [sample for sample in samples if sample.notification_type == notification_type]
        selected = same_type if len(same_type) >= self.min_events else list(samples)
        if len(selected) < self.min_events:
            raise SendTimeUnavailableError(
                f"Only {len(selected)} engagement events for user {user_id}; "
                f"{self.min_events} required"
            )

        scores: Counter[int] = Counter()
        for sample in selected:
            weight = ENGAGEMENT_WEIGHTS[NotificationEventType(sample.event_type)]
            scores[to_app_timezone(sample.created_at).hour] += weight

        best_hour = min(scores, key=lambda hour: (-scores[hour], hour))
        earliest = add_minutes(now, min_delay_minutes)
        send_at = next_occurrence_of_hour(earliest, best_hour)
        logger.debug(
            "Best engagement hour for user %s is %02d:00 (score %s over %s events)",
            user_id,
            best_hour,
            scores[best_hour],
            len(selected),
        )
        return send_at


def get_send_time_optimizer(session: Session) -> SendTimeOptimizer:
    """Return the optimiser selected by ``SEND_TIME_STRATEGY``."""

    if get_settings().send_time_strategy == "fixed":
        return FixedDelayOptimizer()
    return EngagementSendTimeOptimizer(session)


__all__ = [
    "EngagementSendTimeOptimizer",
    "FixedDelayOptimizer",
    "SendTimeOptimizer",
    "SendTimeUnavailableError",
    "get_send_time_optimizer",
]
