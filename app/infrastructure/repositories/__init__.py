"""Repository implementations for infrastructure layer."""

from .notification_event_repository import NotificationEventRepository
from .notification_repository import NotificationRepository
from .profile_repository import ProfileRepository
from .scheduled_notification_repository import ScheduledNotificationRepository

__all__ = [
    "NotificationEventRepository",
    "NotificationRepository",
    "ProfileRepository",
    "ScheduledNotificationRepository",
]
