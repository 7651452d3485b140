"""Notification scheduling, promotion and email dispatch use cases."""

from .dispatch_notification_email import dispatch_notification_email
from .preview_template import preview_template
from .process_due_notifications import process_due_notifications
from .queue_email_notification import queue_email_notification
from .record_notification_event import record_notification_event
from .schedule_notification import schedule_notification
from .send_notification_now import send_notification_now
from .send_template_email import send_template_email
from .send_time import (
    EngagementSendTimeOptimizer,
    FixedDelayOptimizer,
    SendTimeOptimizer,
    SendTimeUnavailableError,
    get_send_time_optimizer,
)

__all__ = [
    "EngagementSendTimeOptimizer",
    "FixedDelayOptimizer",
    "SendTimeOptimizer",
    "SendTimeUnavailableError",
    "dispatch_notification_email",
    "get_send_time_optimizer",
    "preview_template",
    "process_due_notifications",
    "queue_email_notification",
    "record_notification_event",
    "schedule_notification",
    "send_notification_now",
    "send_template_email",
]
