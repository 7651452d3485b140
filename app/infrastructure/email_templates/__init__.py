"""HTML email templates for every notification type."""

from .builders import RenderedEmail, TemplateContext
from .registry import (
    TEMPLATES,
    NotificationTemplateError,
    TemplatePayloadError,
    UnknownNotificationTypeError,
    render_notification_email,
    resolve_notification_type,
    resolve_template_name,
)
from .samples import SAMPLE_PAYLOADS, sample_payload

__all__ = [
    "NotificationTemplateError",
    "RenderedEmail",
    "SAMPLE_PAYLOADS",
    "TEMPLATES",
    "TemplateContext",
    "TemplatePayloadError",
    "UnknownNotificationTypeError",
    "render_notification_email",
    "resolve_notification_type",
    "resolve_template_name",
    "sample_payload",
]
