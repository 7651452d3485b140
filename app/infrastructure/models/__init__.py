"""ORM models used by the application infrastructure."""

from .profile import ProfileModel
from .notification import (
    NotificationEventModel,
    NotificationModel,
    ScheduledNotificationModel,
)

__all__ = [
    "NotificationEventModel",
    "NotificationModel",
    "ProfileModel",
    "ScheduledNotificationModel",
]
