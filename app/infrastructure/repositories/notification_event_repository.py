"""Persistence helpers for notification engagement events."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import EngagementSample, NotificationEvent
from app.infrastructure.models import NotificationEventModel, NotificationModel
from app.utils import ensure_utc, to_storage_datetime, utc_now


class NotificationEventRepository:
    """Store engagement events and expose them for send-time estimates."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, event: NotificationEvent) -> NotificationEvent:
        model = NotificationEventModel(
            notification_id=event.notification_id,
            user_id=event.user_id,
            channel=event.channel,
            event_type=event.event_type,
            event_metadata=event.metadata or {},
            created_at=to_storage_datetime(event.created_at or utc_now()),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_engagement_for_user(
        self,
        user_id: str,
        *,
        since: datetime,
        event_types: Iterable[str],
    ) -> Sequence[EngagementSample]:
        """Return ``event_types`` events of ``user_id`` newer than ``since``."""

        types = list(event_types)
        if not types:
            return []
        rows = (
            self.session.query(
                NotificationEventModel.event_type,
                NotificationModel.type,
                NotificationEventModel.created_at,
            )
            .join(
                NotificationModel,
                NotificationModel.id == NotificationEventModel.notification_id,
            )
            .filter(NotificationEventModel.user_id == user_id)
            .filter(NotificationEventModel.event_type.in_(types))
            .filter(NotificationEventModel.created_at >= to_storage_datetime(since))
            .order_by(NotificationEventModel.created_at.asc())
            .all()
        )
        return [
            EngagementSample(
                event_type=event_type,
                notification_type=notification_type,
                created_at=ensure_utc(created_at),
            )
            for event_type, notification_type, created_at in rows
        ]

    @staticmethod
    def _to_entity(model: NotificationEventModel) -> NotificationEvent:
        return NotificationEvent(
            id=model.id,
            notification_id=model.notification_id,
            user_id=model.user_id,
            channel=model.channel,
            event_type=model.event_type,
            metadata=dict(model.event_metadata or {}),
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["NotificationEventRepository"]
