"""Use case rendering a template without sending it."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.config import get_settings
from app.infrastructure.email_templates import (
    RenderedEmail,
    render_notification_email,
    resolve_template_name,
    sample_payload,
)


def preview_template(
    template: str,
    *,
    data: Mapping[str, Any] | None = None,
    recipient_name: str | None = None,
    base_url: str | None = None,
) -> RenderedEmail:
    """Render ``template`` with ``data`` or, when omitted, its sample payload.

    Raises the template errors of :func:`render_notification_email`.
    """

    notification_type = resolve_template_name(template)
    payload = dict(data) if data is not None else sample_payload(notification_type)
    return render_notification_email(
        notification_type,
        payload,
        recipient_name=recipient_name,
        base_url=base_url or get_settings().normalized_base_url,
    )


__all__ = ["preview_template"]
