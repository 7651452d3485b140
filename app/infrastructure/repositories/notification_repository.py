"""Persistence helpers for notification entities."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import Notification, NotificationChannel
from app.infrastructure.models import NotificationModel
from app.infrastructure.models.common import generate_id
from app.utils import ensure_utc, to_storage_datetime, utc_now


class NotificationRepository:
    """Provide storage operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: str) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            return None
        return self._to_entity(model)

    def create(self, notification: Notification, *, commit: bool = True) -> Notification:
        model = NotificationModel()
        if notification.id:
            model.id = notification.id
        model.org_id = notification.org_id
        model.user_id = notification.user_id
        model.type = notification.type
        model.channel = notification.channel
        model.payload = notification.payload or {}
        model.created_at = to_storage_datetime(notification.created_at or utc_now())
        model.read_at = to_storage_datetime(notification.read_at)
        self.session.add(model)
        if commit:
            self.session.commit()
            self.session.refresh(model)
        else:
            self.session.flush()
        return self._to_entity(model)

    def get_pending_email(self, notification_id: str) -> Notification | None:
        """Return the notification if it is an unprocessed email.

        ``None`` means the record does not exist, is not an email, or was
        already processed.
        """

        model = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id == notification_id)
            .filter(NotificationModel.channel == NotificationChannel.EMAIL.value)
            .filter(NotificationModel.read_at.is_(None))
            .first()
        )
        if model is None:
            return None
        return self._to_entity(model)

    def claim(self, notification_id: str, *, processed_at: datetime) -> str | None:
        """Mark the record processed only if it is still unprocessed.

        Returns the claim token when this call performed the transition and
        ``None`` otherwise. The token, not the timestamp, identifies the
        claim: databases may round ``read_at`` when storing it.
        """

        token = generate_id()
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.read_at.is_(None),
            )
            .update(
                {
                    NotificationModel.read_at: to_storage_datetime(processed_at),
                    NotificationModel.claim_token: token,
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return token if updated == 1 else None

    def release(self, notification_id: str, *, claim_token: str) -> bool:
        """Undo the claim identified by ``claim_token`` so the record can be retried."""

        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.claim_token == claim_token,
            )
            .update(
                {NotificationModel.read_at: None, NotificationModel.claim_token: None},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated == 1

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            org_id=model.org_id,
            user_id=model.user_id,
            type=model.type,
            channel=model.channel,
            payload=dict(model.payload or {}),
            created_at=ensure_utc(model.created_at),
            read_at=ensure_utc(model.read_at),
        )


__all__ = ["NotificationRepository"]
