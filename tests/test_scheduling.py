"""Tests for deferring notifications and writing in-app notifications."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.notifications import schedule_notification, send_notification_now
from app.domain.entities import FailureReason, NotificationChannel, ScheduledNotificationStatus
from app.infrastructure.models import ScheduledNotificationModel
from app.infrastructure.repositories import NotificationRepository, ScheduledNotificationRepository

NOW = datetime(2025, 3, 10, 8, 0, tzinfo=timezone.utc)


class StubOptimizer:
    def __init__(self, result=None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[tuple] = []

    def next_optimal_send_time(self, user_id, notification_type, min_delay_minutes, now):
        self.calls.append((user_id, notification_type, min_delay_minutes, now))
        if self.error is not None:
            raise self.error
        return self.result


def _schedule(session, **overrides):
    arguments = {
        "user_id": "user-1",
        "notification_type": "job_match_alert",
        "title": "New matches",
        "message": "We found jobs for you",
        "channel": "email",
        "org_id": "org-1",
        "now": NOW,
    }
    arguments.update(overrides)
    return schedule_notification(session, **arguments)


def test_falls_back_to_minimum_delay_without_history(session, caplog) -> None:
    with caplog.at_level(logging.WARNING):
        result = _schedule(session)

    assert result.success is True
    assert result.scheduled_for == NOW + timedelta(minutes=15)
    assert "Optimal send time unavailable" in caplog.text

    stored = ScheduledNotificationRepository(session).get(result.scheduled_notification_id)
    assert stored is not None
    assert stored.status == ScheduledNotificationStatus.PENDING.value
    assert stored.scheduled_for == NOW + timedelta(minutes=15)
    assert stored.org_id == "org-1"


def test_optimizer_failure_uses_requested_delay(session) -> None:
    optimizer = StubOptimizer(error=RuntimeError("analytics offline"))

    result = _schedule(session, min_delay_minutes=45, optimizer=optimizer)

    assert result.success is True
    assert result.scheduled_for == NOW + timedelta(minutes=45)
    assert optimizer.calls == [("user-1", "job_match_alert", 45, NOW)]


class BrokenQueryOptimizer:
    """Run a statement the database rejects, as a failing lookup would."""

    def __init__(self, session):
        self.session = session

    def next_optimal_send_time(self, user_id, notification_type, min_delay_minutes, now):
        self.session.execute(text("SELECT hour FROM missing_engagement_table"))


def test_optimizer_database_error_rolls_back_and_still_schedules(
    session, monkeypatch: pytest.MonkeyPatch
) -> None:
    rollbacks: list[bool] = []
    original_rollback = session.rollback

    def tracking_rollback():
        rollbacks.append(True)
        original_rollback()

    monkeypatch.setattr(session, "rollback", tracking_rollback)

    result = _schedule(session, optimizer=BrokenQueryOptimizer(session))

    assert result.success is True
    assert result.scheduled_for == NOW + timedelta(minutes=15)
    assert rollbacks == [True]
    assert ScheduledNotificationRepository(session).get(result.scheduled_notification_id) is not None


def test_optimizer_returning_nothing_uses_delay(session, caplog) -> None:
    with caplog.at_level(logging.WARNING):
        result = _schedule(session, optimizer=StubOptimizer(result=None))

    assert result.scheduled_for == NOW + timedelta(minutes=15)
    assert "Optimiser returned no send time" in caplog.text


def test_optimizer_candidate_is_used(session) -> None:
    candidate = NOW + timedelta(hours=11)

    result = _schedule(session, optimizer=StubOptimizer(result=candidate))

    assert result.scheduled_for == candidate


def test_early_candidate_is_clamped_to_minimum_delay(session) -> None:
    result = _schedule(session, min_delay_minutes=60, optimizer=StubOptimizer(result=NOW))

    assert result.scheduled_for == NOW + timedelta(minutes=60)


def test_smart_scheduling_disabled_skips_optimizer(session) -> None:
    optimizer = StubOptimizer(result=NOW + timedelta(days=2))

    result = _schedule(
        session, use_smart_scheduling=False, min_delay_minutes=30, optimizer=optimizer
    )

    assert result.scheduled_for == NOW + timedelta(minutes=30)
    assert optimizer.calls == []


def test_zero_delay_is_allowed(session) -> None:
    result = _schedule(session, use_smart_scheduling=False, min_delay_minutes=0)

    assert result.success is True
    assert result.scheduled_for == NOW


def test_naive_now_is_treated_as_utc(session) -> None:
    result = _schedule(session, use_smart_scheduling=False, now=NOW.replace(tzinfo=None))

    assert result.scheduled_for == NOW + timedelta(minutes=15)
    assert result.scheduled_for.tzinfo is not None


def test_blank_org_is_stored_as_missing(session) -> None:
    result = _schedule(session, use_smart_scheduling=False, org_id="  ")

    stored = ScheduledNotificationRepository(session).get(result.scheduled_notification_id)
    assert stored.org_id is None


def test_data_and_channel_are_persisted(session) -> None:
    result = _schedule(
        session,
        use_smart_scheduling=False,
        channel="in_app",
        data={"matchCount": 3},
    )

    stored = ScheduledNotificationRepository(session).get(result.scheduled_notification_id)
    assert stored.channel == NotificationChannel.IN_APP.value
    assert stored.data == {"matchCount": 3}
    assert stored.title == "New matches"


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"user_id": "  "}, "user_id is required"),
        ({"notification_type": ""}, "notification_type is required"),
        ({"channel": "sms"}, "channel must be one of"),
        ({"min_delay_minutes": -1}, "min_delay_minutes"),
        ({"min_delay_minutes": None}, "min_delay_minutes must be a whole number"),
        ({"min_delay_minutes": "15"}, "min_delay_minutes must be a whole number"),
        ({"min_delay_minutes": True}, "min_delay_minutes must be a whole number"),
        ({"user_id": 42}, "user_id is required"),
        ({"data": ["matchCount"]}, "data must be an object"),
    ],
)
def test_invalid_input_is_rejected(session, overrides, message) -> None:
    result = _schedule(session, **overrides)

    assert result.success is False
    assert result.reason is FailureReason.INVALID_INPUT
    assert message in result.error
    assert session.query(ScheduledNotificationModel).count() == 0


def test_storage_failure_is_reported(session, monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_create(self, scheduled):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(ScheduledNotificationRepository, "create", broken_create)

    result = _schedule(session, use_smart_scheduling=False)

    assert result.success is False
    assert result.reason is FailureReason.PERSISTENCE_ERROR
    assert result.error == "Failed to schedule notification"


def test_send_now_creates_unprocessed_in_app_notification(session) -> None:
    result = send_notification_now(
        session,
        org_id="org-1",
        user_id="user-1",
        notification_type="achievement_unlocked",
        title="Well done",
        message="You unlocked an achievement",
        data={"achievementName": "First Steps"},
        now=NOW,
    )

    assert result.success is True
    stored = NotificationRepository(session).get(result.notification_id)
    assert stored.channel == NotificationChannel.IN_APP.value
    assert stored.read_at is None
    assert stored.created_at == NOW
    assert stored.payload == {
        "title": "Well done",
        "message": "You unlocked an achievement",
        "achievementName": "First Steps",
    }


def test_send_now_requires_org(session) -> None:
    result = send_notification_now(
        session,
        org_id="",
        user_id="user-1",
        notification_type="welcome",
        title="Hi",
        message="Hello",
    )

    assert result.success is False
    assert result.reason is FailureReason.INVALID_INPUT
    assert result.error == "org_id is required"
