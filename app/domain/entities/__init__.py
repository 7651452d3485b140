"""Domain entities exposed by the application."""

from .notification import (
    EngagementSample,
    Notification,
    NotificationEvent,
    ScheduledNotification,
)
from .notification_type import (
    ENGAGEMENT_WEIGHTS,
    NotificationChannel,
    NotificationEventType,
    NotificationType,
    ScheduledNotificationStatus,
)
from .recipient import DEFAULT_RECIPIENT_NAME, Recipient
from .results import (
    DispatchResult,
    EventResult,
    FailureReason,
    PipelineResult,
    PromotionSummary,
    ScheduleResult,
    SendNowResult,
)

__all__ = [
    "DEFAULT_RECIPIENT_NAME",
    "ENGAGEMENT_WEIGHTS",
    "DispatchResult",
    "EngagementSample",
    "EventResult",
    "FailureReason",
    "Notification",
    "NotificationChannel",
    "NotificationEvent",
    "NotificationEventType",
    "NotificationType",
    "PipelineResult",
    "PromotionSummary",
    "Recipient",
    "ScheduleResult",
    "ScheduledNotification",
    "ScheduledNotificationStatus",
    "SendNowResult",
]
