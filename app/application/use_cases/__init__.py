"""Aggregate application use cases."""

from .notifications import (
    dispatch_notification_email,
    process_due_notifications,
    schedule_notification,
    send_notification_now,
    send_template_email,
)

__all__ = [
    "dispatch_notification_email",
    "process_due_notifications",
    "schedule_notification",
    "send_notification_now",
    "send_template_email",
]
