"""Tests for the engagement based send-time optimiser."""

from __future__ import annotations

import types
from datetime import datetime, timedelta, timezone

import pytest

from app.application.use_cases.notifications import (
    EngagementSendTimeOptimizer,
    FixedDelayOptimizer,
    SendTimeUnavailableError,
    get_send_time_optimizer,
)
from app.application.use_cases.notifications import send_time as send_time_module
from app.domain.entities import NotificationEvent
from app.infrastructure.repositories import NotificationEventRepository

NOW = datetime(2025, 3, 10, 8, 0, tzinfo=timezone.utc)
USER = "user-42"


@pytest.fixture()
def engage(session, make_notification):
    """Record ``count`` engagement events at ``hour`` for notifications of a type."""

    repository = NotificationEventRepository(session)

    def _engage(
        hour: int,
        count: int = 1,
        *,
        event_type: str = "opened",
        notification_type: str = "job_match_alert",
        user_id: str = USER,
        days_ago: int = 1,
    ) -> None:
        for index in range(count):
            notification = make_notification(notification_type, user_id=user_id)
            moment = (NOW - timedelta(days=days_ago + index)).replace(hour=hour, minute=20)
            repository.create(
                NotificationEvent(
                    id=None,
                    notification_id=notification.id,
                    user_id=user_id,
                    channel="email",
                    event_type=event_type,
                    created_at=moment,
                )
            )

    return _engage


def _optimal(session, notification_type="job_match_alert", delay=15, **kwargs):
    optimizer = EngagementSendTimeOptimizer(session, **kwargs)
    return optimizer.next_optimal_send_time(USER, notification_type, delay, NOW)


def test_picks_hour_with_most_engagement(session, engage) -> None:
    engage(19, 5)
    engage(11, 2)

    assert _optimal(session) == datetime(2025, 3, 10, 19, 0, tzinfo=timezone.utc)


def test_clicks_weigh_more_than_opens(session, engage) -> None:
    engage(9, 3)
    engage(20, 2, event_type="clicked")

    assert _optimal(session) == datetime(2025, 3, 10, 20, 0, tzinfo=timezone.utc)


def test_ties_go_to_the_earliest_hour(session, engage) -> None:
    engage(18, 3)
    engage(9, 3)

    assert _optimal(session) == datetime(2025, 3, 10, 9, 0, tzinfo=timezone.utc)


def test_hour_already_passed_moves_to_next_day(session, engage) -> None:
    engage(7, 5)

    assert _optimal(session) == datetime(2025, 3, 11, 7, 0, tzinfo=timezone.utc)


def test_minimum_delay_pushes_past_best_hour(session, engage) -> None:
    engage(9, 5)

    # 08:00 + 90 minutes is after 09:00, so the next 09:00 is tomorrow.
    assert _optimal(session, delay=90) == datetime(2025, 3, 11, 9, 0, tzinfo=timezone.utc)


def test_too_little_history_is_unavailable(session, engage) -> None:
    engage(19, 4)

    with pytest.raises(SendTimeUnavailableError):
        _optimal(session)


def test_dismissals_do_not_count_as_engagement(session, engage) -> None:
    engage(19, 6, event_type="dismissed")

    with pytest.raises(SendTimeUnavailableError):
        _optimal(session)


def test_events_outside_lookback_are_ignored(session, engage) -> None:
    engage(19, 5, days_ago=40)

    with pytest.raises(SendTimeUnavailableError):
        _optimal(session, lookback_days=30)
    assert _optimal(session, lookback_days=90) == datetime(2025, 3, 10, 19, 0, tzinfo=timezone.utc)


def test_other_users_are_ignored(session, engage) -> None:
    engage(19, 5, user_id="someone-else")

    with pytest.raises(SendTimeUnavailableError):
        _optimal(session)


def test_same_type_history_is_preferred(session, engage) -> None:
    engage(10, 5, notification_type="job_match_alert")
    engage(21, 6, notification_type="weekly_digest")

    assert _optimal(session, "job_match_alert") == datetime(2025, 3, 10, 10, 0, tzinfo=timezone.utc)
    # Too few welcome events, so every type is considered.
    assert _optimal(session, "welcome") == datetime(2025, 3, 10, 21, 0, tzinfo=timezone.utc)


def test_min_events_can_be_lowered(session, engage) -> None:
    engage(16, 2)

    assert _optimal(session, min_events=2) == datetime(2025, 3, 10, 16, 0, tzinfo=timezone.utc)


def test_fixed_delay_optimizer() -> None:
    result = FixedDelayOptimizer().next_optimal_send_time(USER, "welcome", 25, NOW)

    assert result == NOW + timedelta(minutes=25)


def test_strategy_defaults_to_engagement(session) -> None:
    assert isinstance(get_send_time_optimizer(session), EngagementSendTimeOptimizer)


def test_fixed_strategy_from_settings(session, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        send_time_module,
        "get_settings",
        lambda: types.SimpleNamespace(send_time_strategy="fixed"),
    )

    assert isinstance(get_send_time_optimizer(session), FixedDelayOptimizer)
