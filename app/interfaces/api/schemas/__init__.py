"""Pydantic schemas exposed by the HTTP API."""

from .notification import (
    DispatchRequest,
    DispatchResponse,
    ErrorResponse,
    NotificationEventRequest,
    NotificationEventResponse,
    ProcessScheduledRequest,
    ProcessScheduledResponse,
    QueueEmailNotificationRequest,
    ScheduleNotificationRequest,
    ScheduleNotificationResponse,
    SendNotificationNowRequest,
    SendNotificationNowResponse,
    TemplatePreviewRequest,
    TemplatePreviewResponse,
)

__all__ = [
    "DispatchRequest",
    "DispatchResponse",
    "ErrorResponse",
    "NotificationEventRequest",
    "NotificationEventResponse",
    "ProcessScheduledRequest",
    "ProcessScheduledResponse",
    "QueueEmailNotificationRequest",
    "ScheduleNotificationRequest",
    "ScheduleNotificationResponse",
    "SendNotificationNowRequest",
    "SendNotificationNowResponse",
    "TemplatePreviewRequest",
    "TemplatePreviewResponse",
]
