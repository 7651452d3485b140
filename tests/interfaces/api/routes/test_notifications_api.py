"""HTTP tests for the notification endpoints."""

from __future__ import annotations

import types

import pytest
from fastapi import HTTPException

from app.infrastructure.email import EmailDeliveryError
from app.infrastructure.repositories import NotificationRepository, ScheduledNotificationRepository
from app.interfaces.api import dependencies

APPLICATION = {"jobTitle": "Data Analyst", "company": "Northwind"}


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_schedule_returns_time_and_id(client, session) -> None:
    response = client.post(
        "/notifications/schedule",
        json={
            "userId": "user-1",
            "notificationType": "job_match_alert",
            "title": "New matches",
            "message": "We found jobs for you",
            "channel": "email",
            "data": {"matchCount": 3},
            "useSmartScheduling": False,
            "minDelayMinutes": 30,
            "orgId": "org-1",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["scheduledFor"]
    stored = ScheduledNotificationRepository(session).get(body["scheduledNotificationId"])
    assert stored.data == {"matchCount": 3}
    assert stored.status == "pending"


def test_schedule_rejects_unknown_channel(client) -> None:
    response = client.post(
        "/notifications/schedule",
        json={
            "userId": "user-1",
            "notificationType": "welcome",
            "title": "Hi",
            "message": "Hello",
            "channel": "sms",
        },
    )

    assert response.status_code == 422


def test_send_now_creates_notification(client, session) -> None:
    response = client.post(
        "/notifications/send-now",
        json={
            "orgId": "org-1",
            "userId": "user-1",
            "notificationType": "welcome",
            "title": "Welcome",
            "message": "Glad you are here",
        },
    )

    assert response.status_code == 200
    notification_id = response.json()["notificationId"]
    stored = NotificationRepository(session).get(notification_id)
    assert stored.channel == "in_app"


def test_send_now_blank_org_is_bad_request(client) -> None:
    response = client.post(
        "/notifications/send-now",
        json={
            "orgId": " ",
            "userId": "user-1",
            "notificationType": "welcome",
            "title": "Welcome",
            "message": "Glad you are here",
        },
    )

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "org_id is required",
        "reason": "invalid_input",
    }


def test_queued_email_can_be_dispatched(client, profile, email_sender) -> None:
    queued = client.post(
        "/notifications/email",
        json={
            "orgId": "org-1",
            "userId": profile.user_id,
            "notificationType": "application_submitted",
            "payload": APPLICATION,
        },
    )

    assert queued.status_code == 201
    notification_id = queued.json()["notificationId"]

    dispatched = client.post("/notifications/dispatch", json={"notificationId": notification_id})

    assert dispatched.status_code == 200
    assert dispatched.json() == {"success": True, "emailId": "msg-1"}
    assert email_sender.sent[0].recipient == "jo@example.com"


def test_queue_email_unknown_type_is_bad_request(client) -> None:
    response = client.post(
        "/notifications/email",
        json={"orgId": "org-1", "userId": "user-1", "notificationType": "quarterly_newsletter"},
    )

    assert response.status_code == 400
    assert response.json()["reason"] == "unknown_type"


def test_dispatch_sends_stored_notification(client, profile, make_notification, email_sender) -> None:
    notification = make_notification("application_submitted", APPLICATION, user_id=profile.user_id)

    response = client.post("/notifications/dispatch", json={"notificationId": notification.id})

    assert response.status_code == 200
    assert response.json() == {"success": True, "emailId": "msg-1"}
    assert email_sender.sent[0].recipient == "jo@example.com"
    assert "https://app.example.com/applications" in email_sender.sent[0].html


def test_dispatch_twice_returns_not_found(client, profile, make_notification, email_sender) -> None:
    notification = make_notification("welcome", user_id=profile.user_id)

    client.post("/notifications/dispatch", json={"notificationId": notification.id})
    response = client.post("/notifications/dispatch", json={"notificationId": notification.id})

    assert response.status_code == 404
    assert response.json()["reason"] == "not_found"
    assert len(email_sender.sent) == 1


def test_dispatch_provider_failure_is_bad_gateway(
    client, profile, make_notification, email_sender
) -> None:
    email_sender.error = EmailDeliveryError("SendGrid responded with status 500", status_code=500)
    notification = make_notification("welcome", user_id=profile.user_id)

    response = client.post("/notifications/dispatch", json={"notificationId": notification.id})

    assert response.status_code == 502
    assert response.json()["reason"] == "provider_error"


def test_dispatch_direct_template(client, email_sender) -> None:
    response = client.post(
        "/notifications/dispatch",
        json={
            "template": "application-submitted",
            "to": "candidate@example.com",
            "data": {**APPLICATION, "userName": "Riley"},
            "subject": "Thanks for applying",
        },
    )

    assert response.status_code == 200
    assert response.json()["success"] is True
    sent = email_sender.sent[0]
    assert sent.recipient == "candidate@example.com"
    assert sent.subject == "Thanks for applying"
    assert "Hi Riley," in sent.html


def test_dispatch_direct_unknown_template(client, email_sender) -> None:
    response = client.post(
        "/notifications/dispatch",
        json={"template": "newsletter", "to": "candidate@example.com"},
    )

    assert response.status_code == 400
    assert response.json()["reason"] == "unknown_type"
    assert email_sender.sent == []


def test_dispatch_without_target_is_bad_request(client) -> None:
    response = client.post("/notifications/dispatch", json={})

    assert response.status_code == 400
    assert response.json()["error"] == "notificationId is required"


def test_trigger_endpoints_require_key_when_configured(
    client, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(
        dependencies,
        "get_settings",
        lambda: types.SimpleNamespace(dispatch_api_key="s3cret"),
    )

    missing = client.post("/notifications/dispatch", json={"notificationId": "x"})
    wrong = client.post(
        "/notifications/scheduled/process", headers={"X-Api-Key": "nope"}
    )
    allowed = client.post(
        "/notifications/scheduled/process", headers={"X-Api-Key": "s3cret"}
    )

    assert missing.status_code == 401
    assert missing.json()["detail"] == "Invalid or missing API key"
    assert wrong.status_code == 401
    assert allowed.status_code == 200


def test_non_ascii_key_is_rejected_as_unauthorized(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        dependencies,
        "get_settings",
        lambda: types.SimpleNamespace(dispatch_api_key="s3cret"),
    )

    with pytest.raises(HTTPException) as exc_info:
        dependencies.require_dispatch_key("clé-secrète")

    assert exc_info.value.status_code == 401


def test_process_scheduled_without_body(client) -> None:
    response = client.post("/notifications/scheduled/process")

    assert response.status_code == 200
    assert response.json() == {
        "processed": 0,
        "successful": 0,
        "failed": 0,
        "notificationIds": [],
    }


def test_process_scheduled_rejects_zero_limit(client) -> None:
    response = client.post("/notifications/scheduled/process", json={"limit": 0})

    assert response.status_code == 422


def test_record_event(client, make_notification) -> None:
    notification = make_notification("welcome", user_id="user-1")

    response = client.post(
        f"/notifications/{notification.id}/events",
        json={"eventType": "opened", "metadata": {"userAgent": "test"}},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["eventId"]


def test_record_event_for_missing_notification(client) -> None:
    response = client.post("/notifications/missing/events", json={"eventType": "clicked"})

    assert response.status_code == 404
    assert response.json()["reason"] == "not_found"


def test_record_event_rejects_unknown_event_type(client, make_notification) -> None:
    notification = make_notification("welcome")

    response = client.post(
        f"/notifications/{notification.id}/events", json={"eventType": "bounced"}
    )

    assert response.status_code == 422


def test_preview_uses_sample_payload(client) -> None:
    response = client.post("/notifications/templates/interview-scheduled/preview")

    assert response.status_code == 200
    body = response.json()
    assert body["subject"].startswith("Interview scheduled:")
    assert "Hi there," in body["html"]


def test_preview_with_data_and_name(client) -> None:
    response = client.post(
        "/notifications/templates/application_submitted/preview",
        json={"recipientName": "Jo", "data": APPLICATION},
    )

    assert response.status_code == 200
    assert response.json()["subject"] == "Application submitted: Data Analyst at Northwind"
    assert "Hi Jo," in response.json()["html"]


@pytest.mark.parametrize(
    ("template", "body", "reason"),
    [
        ("newsletter", None, "unknown_type"),
        ("application_submitted", {"data": {"company": "Northwind"}}, "invalid_payload"),
    ],
)
def test_preview_errors(client, template, body, reason) -> None:
    response = client.post(f"/notifications/templates/{template}/preview", json=body)

    assert response.status_code == 400
    assert response.json()["reason"] == reason
