"""Persistence helpers for deferred notifications."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import ScheduledNotification, ScheduledNotificationStatus
from app.infrastructure.models import ScheduledNotificationModel
from app.utils import ensure_utc, to_storage_datetime, utc_now


class ScheduledNotificationRepository:
    """Provide storage operations for :class:`ScheduledNotification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, scheduled_id: str) -> ScheduledNotification | None:
        model = self.session.get(ScheduledNotificationModel, scheduled_id)
        if model is None:
            return None
        return self._to_entity(model)

    def create(self, scheduled: ScheduledNotification) -> ScheduledNotification:
        model = ScheduledNotificationModel(
            user_id=scheduled.user_id,
            org_id=scheduled.org_id,
            notification_type=scheduled.notification_type,
            title=scheduled.title,
            message=scheduled.message,
            data=scheduled.data or {},
            channel=scheduled.channel,
            scheduled_for=to_storage_datetime(scheduled.scheduled_for),
            status=scheduled.status,
            created_at=to_storage_datetime(scheduled.created_at or utc_now()),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_due(self, *, now: datetime, limit: int) -> Sequence[ScheduledNotification]:
        """Return pending notifications whose delivery time has passed, oldest first."""

        query = (
            self.session.query(ScheduledNotificationModel)
            .filter(
                ScheduledNotificationModel.status
                == ScheduledNotificationStatus.PENDING.value
            )
            .filter(ScheduledNotificationModel.scheduled_for <= to_storage_datetime(now))
            .order_by(
                ScheduledNotificationModel.scheduled_for.asc(),
                ScheduledNotificationModel.created_at.asc(),
            )
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def mark_sent(
        self,
        scheduled_id: str,
        *,
        sent_at: datetime,
        notification_id: str | None,
        commit: bool = True,
    ) -> bool:
        """Transition ``pending -> sent``; returns ``False`` if another run got there first."""

        updated = (
            self.session.query(ScheduledNotificationModel)
            .filter(
                ScheduledNotificationModel.id == scheduled_id,
                ScheduledNotificationModel.status
                == ScheduledNotificationStatus.PENDING.value,
            )
            .update(
                {
                    ScheduledNotificationModel.status: ScheduledNotificationStatus.SENT.value,
                    ScheduledNotificationModel.sent_at: to_storage_datetime(sent_at),
                    ScheduledNotificationModel.notification_id: notification_id,
                    ScheduledNotificationModel.error_message: None,
                },
                synchronize_session=False,
            )
        )
        if commit:
            self.session.commit()
        return updated == 1

    def mark_failed(self, scheduled_id: str, *, error_message: str) -> bool:
        updated = (
            self.session.query(ScheduledNotificationModel)
            .filter(
                ScheduledNotificationModel.id == scheduled_id,
                ScheduledNotificationModel.status
                == ScheduledNotificationStatus.PENDING.value,
            )
            .update(
                {
                    ScheduledNotificationModel.status: ScheduledNotificationStatus.FAILED.value,
                    ScheduledNotificationModel.error_message: error_message,
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated == 1

    @staticmethod
    def _to_entity(model: ScheduledNotificationModel) -> ScheduledNotification:
        return ScheduledNotification(
            id=model.id,
            user_id=model.user_id,
            org_id=model.org_id,
            notification_type=model.notification_type,
            title=model.title,
            message=model.message,
            data=dict(model.data or {}),
            channel=model.channel,
            scheduled_for=ensure_utc(model.scheduled_for),
            status=model.status,
            created_at=ensure_utc(model.created_at),
            sent_at=ensure_utc(model.sent_at),
            error_message=model.error_message,
            notification_id=model.notification_id,
        )


__all__ = ["ScheduledNotificationRepository"]
