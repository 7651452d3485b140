"""Tests for email dispatch of stored notifications and direct template sends."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.notifications import (
    dispatch_notification_email,
    send_template_email,
)
from app.domain.entities import FailureReason, NotificationType
from app.infrastructure.email import EmailConfigurationError, EmailDeliveryError
from app.infrastructure.email_templates import SAMPLE_PAYLOADS
from app.infrastructure.models import NotificationModel
from app.infrastructure.repositories import NotificationRepository, ProfileRepository

NOW = datetime(2025, 3, 10, 8, 0, tzinfo=timezone.utc)
BASE_URL = "https://app.example.com"

APPLICATION = {"jobTitle": "Data Analyst", "company": "Northwind"}
INVITATION = {
    "organizationName": "Northwind",
    "inviterName": "Jordan",
    "role": "recruiter",
    "inviteLink": "https://app.example.com/invite/abc",
    "expiresAt": "March 20",
}


def _dispatch(session, notification_id, sender):
    return dispatch_notification_email(
        session,
        notification_id=notification_id,
        sender=sender,
        base_url=BASE_URL,
        now=NOW,
    )


def test_sends_email_and_marks_processed(session, profile, make_notification, email_sender) -> None:
    notification = make_notification("application_submitted", APPLICATION, user_id=profile.user_id)

    result = _dispatch(session, notification.id, email_sender)

    assert result.success is True
    assert result.email_id == "msg-1"
    assert result.recipient == "jo@example.com"
    assert len(email_sender.sent) == 1
    sent = email_sender.sent[0]
    assert sent.recipient == "jo@example.com"
    assert sent.subject == "Application submitted: Data Analyst at Northwind"
    assert "Hi Jo," in sent.html
    assert NotificationRepository(session).get(notification.id).read_at == NOW


def test_second_dispatch_does_not_resend(session, profile, make_notification, email_sender) -> None:
    notification = make_notification("welcome", user_id=profile.user_id)

    first = _dispatch(session, notification.id, email_sender)
    second = _dispatch(session, notification.id, email_sender)

    assert first.success is True
    assert second.success is False
    assert second.reason is FailureReason.NOT_FOUND
    assert second.error == "Notification not found or already sent"
    assert len(email_sender.sent) == 1


def test_already_processed_notification_is_not_found(
    session, profile, make_notification, email_sender
) -> None:
    notification = make_notification("welcome", user_id=profile.user_id, read_at=NOW)

    result = _dispatch(session, notification.id, email_sender)

    assert result.reason is FailureReason.NOT_FOUND
    assert email_sender.sent == []


def test_missing_notification_is_not_found(session, email_sender) -> None:
    result = _dispatch(session, "does-not-exist", email_sender)

    assert result.success is False
    assert result.is_not_found
    assert email_sender.sent == []


def test_in_app_notification_is_not_dispatched(
    session, profile, make_notification, email_sender
) -> None:
    notification = make_notification("welcome", user_id=profile.user_id, channel="in_app")

    result = _dispatch(session, notification.id, email_sender)

    assert result.reason is FailureReason.NOT_FOUND
    assert NotificationRepository(session).get(notification.id).read_at is None


def test_unknown_type_is_left_unprocessed(session, profile, make_notification, email_sender) -> None:
    notification = make_notification("quarterly_newsletter", user_id=profile.user_id)

    result = _dispatch(session, notification.id, email_sender)

    assert result.success is False
    assert result.reason is FailureReason.UNKNOWN_TYPE
    assert "Unknown email type: quarterly_newsletter" in result.error
    assert email_sender.sent == []
    assert NotificationRepository(session).get(notification.id).read_at is None


@pytest.mark.parametrize("stored_type", ["interview-scheduled", "Welcome"])
def test_stored_type_is_matched_exactly(
    session, profile, make_notification, email_sender, stored_type
) -> None:
    notification = make_notification(stored_type, user_id=profile.user_id)

    result = _dispatch(session, notification.id, email_sender)

    assert result.reason is FailureReason.UNKNOWN_TYPE
    assert email_sender.sent == []
    assert NotificationRepository(session).get(notification.id).read_at is None


def test_invalid_payload_is_left_unprocessed(session, profile, make_notification, email_sender) -> None:
    notification = make_notification(
        "application_submitted", {"company": "Northwind"}, user_id=profile.user_id
    )

    result = _dispatch(session, notification.id, email_sender)

    assert result.reason is FailureReason.INVALID_PAYLOAD
    assert "jobTitle" in result.error
    assert NotificationRepository(session).get(notification.id).read_at is None


def test_provider_failure_releases_claim(session, profile, make_notification, email_sender) -> None:
    email_sender.error = EmailDeliveryError("SendGrid responded with status 503", status_code=503)
    notification = make_notification("welcome", user_id=profile.user_id)

    result = _dispatch(session, notification.id, email_sender)

    assert result.success is False
    assert result.reason is FailureReason.PROVIDER_ERROR
    assert result.recipient == "jo@example.com"
    assert "503" in result.error
    assert NotificationRepository(session).get(notification.id).read_at is None

    email_sender.error = None
    retry = _dispatch(session, notification.id, email_sender)
    assert retry.success is True
    assert len(email_sender.sent) == 2


def test_unexpected_sender_exception_is_provider_error(
    session, profile, make_notification, email_sender
) -> None:
    email_sender.error = ConnectionError("connection reset")
    notification = make_notification("welcome", user_id=profile.user_id)

    result = _dispatch(session, notification.id, email_sender)

    assert result.reason is FailureReason.PROVIDER_ERROR
    assert result.error == "Email provider error: connection reset"
    assert NotificationRepository(session).get(notification.id).read_at is None


def test_missing_configuration_is_reported(session, profile, make_notification, email_sender) -> None:
    email_sender.error = EmailConfigurationError("SendGrid is not configured")
    notification = make_notification("welcome", user_id=profile.user_id)

    result = _dispatch(session, notification.id, email_sender)

    assert result.reason is FailureReason.CONFIGURATION_ERROR
    assert NotificationRepository(session).get(notification.id).read_at is None


def test_recipient_without_profile_is_not_found(session, make_notification, email_sender) -> None:
    notification = make_notification("welcome", user_id=None)

    result = _dispatch(session, notification.id, email_sender)

    assert result.reason is FailureReason.NOT_FOUND
    assert email_sender.sent == []


def test_company_invitation_uses_payload_email(session, make_notification, email_sender) -> None:
    notification = make_notification(
        "company_invitation", {**INVITATION, "email": "new.hire@example.com"}
    )

    result = _dispatch(session, notification.id, email_sender)

    assert result.success is True
    assert result.recipient == "new.hire@example.com"
    assert email_sender.sent[0].subject == "You're invited to join Northwind"
    assert "Hello," in email_sender.sent[0].html


def test_company_invitation_without_email(session, make_notification, email_sender) -> None:
    notification = make_notification("company_invitation", INVITATION)

    result = _dispatch(session, notification.id, email_sender)

    assert result.success is False
    assert result.reason is FailureReason.INVALID_PAYLOAD
    assert result.error == "No email found in company_invitation payload"


def test_recipient_is_resolved_through_profile_directory(
    session, profile, make_notification, email_sender, monkeypatch: pytest.MonkeyPatch
) -> None:
    looked_up: list[str] = []
    original_get = ProfileRepository.get

    def tracking_get(self, user_id):
        looked_up.append(user_id)
        return original_get(self, user_id)

    monkeypatch.setattr(ProfileRepository, "get", tracking_get)
    notification = make_notification("welcome", user_id=profile.user_id)

    result = _dispatch(session, notification.id, email_sender)

    assert result.success is True
    assert looked_up == [profile.user_id]


def test_profile_lookup_failure_is_persistence_error(
    session, profile, make_notification, email_sender, monkeypatch: pytest.MonkeyPatch
) -> None:
    def broken_get(self, user_id):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(ProfileRepository, "get", broken_get)
    notification = make_notification("welcome", user_id=profile.user_id)

    result = _dispatch(session, notification.id, email_sender)

    assert result.reason is FailureReason.PERSISTENCE_ERROR
    assert email_sender.sent == []
    assert NotificationRepository(session).get(notification.id).read_at is None


def test_profile_without_name_is_greeted_generically(session, make_notification, email_sender) -> None:
    anonymous = ProfileRepository(session).create(email="anon@example.com")
    notification = make_notification("welcome", user_id=anonymous.user_id)

    result = _dispatch(session, notification.id, email_sender)

    assert result.success is True
    assert "Hi there," in email_sender.sent[0].html


def test_claim_is_exclusive_and_release_requires_its_token(session, make_notification) -> None:
    repository = NotificationRepository(session)
    notification = make_notification("welcome")

    token = repository.claim(notification.id, processed_at=NOW)

    assert token is not None
    assert repository.claim(notification.id, processed_at=NOW) is None
    assert repository.release(notification.id, claim_token="someone-else") is False
    assert repository.release(notification.id, claim_token=token) is True
    assert repository.get(notification.id).read_at is None


class RoundingSender:
    """Fail after the database has dropped the fraction of ``read_at``."""

    def __init__(self, session, notification_id: str) -> None:
        self.session = session
        self.notification_id = notification_id

    def send(self, recipient: str, subject: str, html_content: str) -> str | None:
        self.session.query(NotificationModel).filter(
            NotificationModel.id == self.notification_id
        ).update(
            {NotificationModel.read_at: datetime(2025, 3, 10, 8, 0)},
            synchronize_session=False,
        )
        self.session.commit()
        raise EmailDeliveryError("SendGrid responded with status 503", status_code=503)


def test_provider_failure_releases_claim_when_timestamp_was_rounded(
    session, profile, make_notification
) -> None:
    notification = make_notification("welcome", user_id=profile.user_id)

    result = dispatch_notification_email(
        session,
        notification_id=notification.id,
        sender=RoundingSender(session, notification.id),
        base_url=BASE_URL,
        now=datetime(2025, 3, 10, 8, 0, 0, 123456, tzinfo=timezone.utc),
    )

    assert result.reason is FailureReason.PROVIDER_ERROR
    assert NotificationRepository(session).get(notification.id).read_at is None


def test_send_template_email_direct(email_sender) -> None:
    result = send_template_email(
        template="interview-scheduled",
        to="candidate@example.com",
        data={
            "userName": "Riley",
            "jobTitle": "Data Analyst",
            "company": "Northwind",
            "interviewDate": "March 12",
            "interviewTime": "10:00 AM",
            "interviewType": "Video",
        },
        sender=email_sender,
        base_url=BASE_URL,
    )

    assert result.success is True
    assert result.recipient == "candidate@example.com"
    sent = email_sender.sent[0]
    assert sent.subject == "Interview scheduled: Data Analyst at Northwind"
    assert "Hi Riley," in sent.html


def test_send_template_email_subject_override(email_sender) -> None:
    result = send_template_email(
        template="welcome",
        to="candidate@example.com",
        data={},
        subject="Custom subject",
        sender=email_sender,
        base_url=BASE_URL,
    )

    assert result.success is True
    assert email_sender.sent[0].subject == "Custom subject"
    assert "Hi there," in email_sender.sent[0].html


@pytest.mark.parametrize(
    ("template", "to", "reason"),
    [
        ("welcome", " ", FailureReason.INVALID_INPUT),
        ("quarterly_newsletter", "a@example.com", FailureReason.UNKNOWN_TYPE),
        ("application_submitted", "a@example.com", FailureReason.INVALID_PAYLOAD),
    ],
)
def test_send_template_email_failures(email_sender, template, to, reason) -> None:
    result = send_template_email(
        template=template, to=to, data={}, sender=email_sender, base_url=BASE_URL
    )

    assert result.success is False
    assert result.reason is reason
    assert email_sender.sent == []


def test_send_template_email_provider_failure(email_sender) -> None:
    email_sender.error = EmailDeliveryError("rejected", status_code=400)

    result = send_template_email(
        template="welcome", to="a@example.com", data={}, sender=email_sender, base_url=BASE_URL
    )

    assert result.reason is FailureReason.PROVIDER_ERROR
    assert result.error == "rejected"
    assert result.recipient == "a@example.com"


@pytest.mark.parametrize("notification_type", list(NotificationType))
def test_every_type_dispatches_with_sample_payload(
    session, profile, make_notification, email_sender, notification_type
) -> None:
    notification = make_notification(
        notification_type.value, SAMPLE_PAYLOADS[notification_type], user_id=profile.user_id
    )

    result = _dispatch(session, notification.id, email_sender)

    assert result.success is True
    assert email_sender.sent[0].subject
    assert email_sender.sent[0].html.startswith("<!DOCTYPE html>")
