"""Use case sending a template email straight to an address."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from app.config import get_settings
from app.domain.entities import DispatchResult, FailureReason
from app.infrastructure.email import EmailSender, get_email_sender
from app.infrastructure.email_templates import (
    TemplatePayloadError,
    UnknownNotificationTypeError,
    render_notification_email,
    resolve_template_name,
)

from .dispatch_notification_email import describe_send_failure, render_failure
from .validators import require_text

logger = logging.getLogger(__name__)


def send_template_email(
    *,
    template: str,
    to: str,
    data: Mapping[str, Any] | None,
    subject: str | None = None,
    sender: EmailSender | None = None,
    base_url: str | None = None,
) -> DispatchResult:
    """Render ``template`` with ``data`` and send it to ``to``.

    No notification record is read or written. The greeting uses
    ``data["userName"]`` when present and ``subject`` overrides the
    template's own subject line.
    """

    try:
        address = require_text(to, "to")
        template = require_text(template, "template")
    except ValueError as exc:
        return DispatchResult(success=False, error=str(exc), reason=FailureReason.INVALID_INPUT)

    payload = dict(data or {})
    try:
        rendered = render_notification_email(
            resolve_template_name(template),
            payload,
            recipient_name=str(payload.get("userName") or ""),
            base_url=base_url or get_settings().normalized_base_url,
        )
    except (UnknownNotificationTypeError, TemplatePayloadError) as exc:
        logger.warning("Template email '%s' cannot be rendered: %s", template, exc)
        return render_failure(exc)

    email_sender = sender or get_email_sender()
    final_subject = (subject or "").strip() or rendered.subject
    try:
        email_id = email_sender.send(address, final_subject, rendered.html)
    except Exception as exc:
        reason, message = describe_send_failure(exc)
        logger.error("Template email '%s' to %s failed: %s", template, address, message)
        return DispatchResult(success=False, error=message, reason=reason, recipient=address)

    logger.info("Sent '%s' template email to %s", template, address)
    return DispatchResult(success=True, email_id=email_id, recipient=address)


__all__ = ["send_template_email"]
