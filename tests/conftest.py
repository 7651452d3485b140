"""Shared fixtures for the notification service test-suite."""

from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_BASE_URL"] = "https://app.example.com"
os.environ["APP_TIMEZONE"] = "UTC"
for _name in ("SENDGRID_API_KEY", "SENDGRID_SENDER", "DISPATCH_API_KEY", "SEND_TIME_STRATEGY"):
    os.environ.pop(_name, None)

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.domain.entities import Notification, NotificationChannel, Recipient
from app.infrastructure.database import initialize_database
from app.infrastructure.repositories import NotificationRepository, ProfileRepository

BASE_URL = "https://app.example.com"
NOW = datetime(2025, 3, 10, 8, 0, tzinfo=timezone.utc)


@dataclass
class SentEmail:
    recipient: str
    subject: str
    html: str


@dataclass
class FakeEmailSender:
    """Collect outgoing emails instead of calling SendGrid."""

    error: Exception | None = None
    message_id: str = "msg-1"
    sent: list[SentEmail] = field(default_factory=list)

    def send(self, recipient: str, subject: str, html_content: str) -> str | None:
        self.sent.append(SentEmail(recipient, subject, html_content))
        if self.error is not None:
            raise self.error
        return self.message_id


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    initialize_database(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def session(session_factory) -> Session:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def email_sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest.fixture()
def profile(session: Session) -> Recipient:
    return ProfileRepository(session).create(email="jo@example.com", full_name="Jo")


@pytest.fixture()
def make_notification(session: Session) -> Callable[..., Notification]:
    """Return a factory storing unprocessed notifications."""

    def _make(
        notification_type: str,
        payload: dict[str, Any] | None = None,
        *,
        user_id: str | None = None,
        channel: str = NotificationChannel.EMAIL.value,
        org_id: str = "org-1",
        read_at: datetime | None = None,
    ) -> Notification:
        return NotificationRepository(session).create(
            Notification(
                id=None,
                org_id=org_id,
                user_id=user_id,
                type=notification_type,
                channel=channel,
                payload=payload or {},
                created_at=NOW,
                read_at=read_at,
            )
        )

    return _make


@pytest.fixture()
def client(session_factory, email_sender):
    """Return a test client whose sessions and email sender are test doubles."""

    from fastapi.testclient import TestClient

    from app.infrastructure.database import get_db
    from app.interfaces.api.dependencies import get_email_sender
    from main import create_app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app = create_app()
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    with TestClient(app) as test_client:
        yield test_client
