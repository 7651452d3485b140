"""Schemas for notification scheduling and dispatch endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.entities import NotificationChannel, NotificationEventType


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON with the web client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScheduleNotificationRequest(CamelModel):
    user_id: str = Field(min_length=1)
    notification_type: str = Field(min_length=1)
    title: str
    message: str
    channel: NotificationChannel
    data: dict[str, Any] = Field(default_factory=dict)
    use_smart_scheduling: bool = True
    min_delay_minutes: int | None = Field(default=None, ge=0)
    org_id: str | None = None


class ScheduleNotificationResponse(CamelModel):
    success: bool
    scheduled_for: datetime | None = None
    scheduled_notification_id: str | None = None


class SendNotificationNowRequest(CamelModel):
    org_id: str
    user_id: str
    notification_type: str
    title: str
    message: str
    data: dict[str, Any] = Field(default_factory=dict)


class SendNotificationNowResponse(CamelModel):
    success: bool
    notification_id: str | None = None


class QueueEmailNotificationRequest(CamelModel):
    org_id: str
    user_id: str | None = None
    notification_type: str
    payload: dict[str, Any] = Field(default_factory=dict)


class DispatchRequest(CamelModel):
    """Either ``notificationId`` or a direct ``template`` + ``to`` pair."""

    notification_id: str | None = None
    template: str | None = None
    to: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    subject: str | None = None

    @property
    def is_direct(self) -> bool:
        return not self.notification_id and bool(self.template)


class DispatchResponse(CamelModel):
    success: bool
    email_id: str | None = None


class ErrorResponse(CamelModel):
    success: bool = False
    error: str
    reason: str | None = None


class ProcessScheduledRequest(CamelModel):
    limit: int | None = Field(default=None, ge=1)


class ProcessScheduledResponse(CamelModel):
    processed: int
    successful: int
    failed: int
    notification_ids: list[str] = Field(default_factory=list)


class NotificationEventRequest(CamelModel):
    event_type: NotificationEventType
    metadata: dict[str, Any] = Field(default_factory=dict)


class NotificationEventResponse(CamelModel):
    success: bool
    event_id: str | None = None


class TemplatePreviewRequest(CamelModel):
    recipient_name: str | None = None
    data: dict[str, Any] | None = None


class TemplatePreviewResponse(CamelModel):
    subject: str
    html: str
