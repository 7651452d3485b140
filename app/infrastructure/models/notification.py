"""SQLAlchemy models for persisted notifications and their engagement."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, JSON, String, Text
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base

from .common import generate_id, storage_now


class NotificationModel(Base):
    """Queue of notifications awaiting delivery to a single recipient."""

    __tablename__ = "notification"

    id = Column(String(36), primary_key=True, default=generate_id)
    org_id = Column(String(64), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profile.id"), nullable=True, index=True)
    type = Column(String(60), nullable=False)
    channel = Column(String(20), nullable=False, default="in_app")
    payload = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(), nullable=False, default=storage_now)
    read_at = Column(DateTime(), nullable=True)
    # Identifies the dispatcher that marked the record processed.
    claim_token = Column(String(36), nullable=True)

    __table_args__ = (Index("ix_notification_channel_read_at", "channel", "read_at"),)


class ScheduledNotificationModel(Base):
    """Deferred notification waiting for its ``scheduled_for`` time."""

    __tablename__ = "scheduled_notification"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), nullable=False, index=True)
    org_id = Column(String(64), nullable=True)
    notification_type = Column(String(60), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    channel = Column(String(20), nullable=False)
    scheduled_for = Column(DateTime(), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(), nullable=False, default=storage_now)
    sent_at = Column(DateTime(), nullable=True)
    error_message = Column(Text, nullable=True)
    notification_id = Column(String(36), nullable=True)

    __table_args__ = (
        Index("ix_scheduled_notification_status_due", "status", "scheduled_for"),
    )


class NotificationEventModel(Base):
    """Engagement signal (open, click, ...) attached to a notification."""

    __tablename__ = "notification_event"

    id = Column(String(36), primary_key=True, default=generate_id)
    notification_id = Column(
        String(36), ForeignKey("notification.id"), nullable=False, index=True
    )
    user_id = Column(String(36), nullable=True, index=True)
    channel = Column(String(20), nullable=False)
    event_type = Column(String(30), nullable=False)
    # ``metadata`` is reserved on declarative classes.
    event_metadata = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(DateTime(), nullable=False, default=storage_now)

    notification = relationship("NotificationModel", lazy="select")


__all__ = [
    "NotificationEventModel",
    "NotificationModel",
    "ScheduledNotificationModel",
]
