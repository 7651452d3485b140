"""Use case delivering a stored email notification exactly once at most."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import (
    DispatchResult,
    FailureReason,
    Notification,
    NotificationType,
    Recipient,
)
from app.infrastructure.email import (
    EmailConfigurationError,
    EmailDeliveryError,
    EmailSender,
    get_email_sender,
)
from app.infrastructure.email_templates import (
    RenderedEmail,
    TemplatePayloadError,
    UnknownNotificationTypeError,
    render_notification_email,
)
from app.infrastructure.repositories import NotificationRepository, ProfileRepository
from app.utils import ensure_utc, utc_now

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Notification not found or already sent"


def describe_send_failure(exc: Exception) -> tuple[FailureReason, str]:
    """Map an exception raised by an :class:`EmailSender` to a failure reason."""

    if isinstance(exc, EmailConfigurationError):
        return FailureReason.CONFIGURATION_ERROR, str(exc)
    if isinstance(exc, EmailDeliveryError):
        return FailureReason.PROVIDER_ERROR, str(exc)
    return FailureReason.PROVIDER_ERROR, f"Email provider error: {exc}"


def render_failure(exc: Exception) -> DispatchResult:
    """Convert a rendering exception into a failed :class:`DispatchResult`."""

    if isinstance(exc, UnknownNotificationTypeError):
        reason = FailureReason.UNKNOWN_TYPE
    else:
        reason = FailureReason.INVALID_PAYLOAD
    return DispatchResult(success=False, error=str(exc), reason=reason)


def _resolve_recipient(session: Session, notification: Notification) -> Recipient | DispatchResult:
    if notification.user_id:
        profile = ProfileRepository(session).get(notification.user_id)
        if profile is not None and profile.email:
            return profile

    # Invitees may not have a profile yet; their address travels in the payload.
    if notification.type == NotificationType.COMPANY_INVITATION.value:
        address = str(notification.payload.get("email") or "").strip()
        if not address:
            return DispatchResult(
                success=False,
                error="No email found in company_invitation payload",
                reason=FailureReason.INVALID_PAYLOAD,
            )
        return Recipient(email=address)

    return DispatchResult(success=False, error=NOT_FOUND_MESSAGE, reason=FailureReason.NOT_FOUND)


def _render(
    notification: Notification, recipient: Recipient, base_url: str
) -> RenderedEmail | DispatchResult:
    payload: Mapping[str, Any] = notification.payload
    try:
        return render_notification_email(
            notification.type,
            payload,
            recipient_name=recipient.full_name,
            base_url=base_url,
        )
    except (UnknownNotificationTypeError, TemplatePayloadError) as exc:
        logger.warning("Notification %s cannot be rendered: %s", notification.id, exc)
        return render_failure(exc)


def dispatch_notification_email(
    session: Session,
    *,
    notification_id: str,
    sender: EmailSender | None = None,
    base_url: str | None = None,
    now: datetime | None = None,
) -> DispatchResult:
    """Render and send the email notification ``notification_id``.

    The record is claimed with a conditional update before the provider is
    called, so concurrent invocations deliver at most one email. When the
    provider fails the claim is released and the record stays unprocessed.
    """

    repository = NotificationRepository(session)
    try:
        notification = repository.get_pending_email(notification_id)
        recipient = None if notification is None else _resolve_recipient(session, notification)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Could not load notification %s: %s", notification_id, exc)
        return DispatchResult(
            success=False,
            error="Failed to load notification",
            reason=FailureReason.PERSISTENCE_ERROR,
        )

    if notification is None:
        logger.info("Notification %s not found or already sent", notification_id)
        return DispatchResult(success=False, error=NOT_FOUND_MESSAGE, reason=FailureReason.NOT_FOUND)

    if isinstance(recipient, DispatchResult):
        return recipient

    rendered = _render(notification, recipient, base_url or get_settings().normalized_base_url)
    if isinstance(rendered, DispatchResult):
        return rendered

    processed_at = ensure_utc(now) or utc_now()
    try:
        claim_token = repository.claim(notification_id, processed_at=processed_at)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Could not claim notification %s: %s", notification_id, exc)
        return DispatchResult(
            success=False,
            error="Failed to claim notification",
            reason=FailureReason.PERSISTENCE_ERROR,
        )
    if claim_token is None:
        logger.info("Notification %s was claimed by another dispatcher", notification_id)
        return DispatchResult(success=False, error=NOT_FOUND_MESSAGE, reason=FailureReason.NOT_FOUND)

    email_sender = sender or get_email_sender()
    try:
        email_id = email_sender.send(recipient.email, rendered.subject, rendered.html)
    except Exception as exc:
        reason, message = describe_send_failure(exc)
        logger.error("Email for notification %s failed: %s", notification_id, message)
        try:
            repository.release(notification_id, claim_token=claim_token)
        except SQLAlchemyError as release_exc:
            session.rollback()
            logger.error("Could not release notification %s: %s", notification_id, release_exc)
        return DispatchResult(success=False, error=message, reason=reason, recipient=recipient.email)

    logger.info(
        "Sent %s email for notification %s to %s",
        notification.type,
        notification_id,
        recipient.email,
    )
    return DispatchResult(success=True, email_id=email_id, recipient=recipient.email)


__all__ = [
    "NOT_FOUND_MESSAGE",
    "describe_send_failure",
    "dispatch_notification_email",
    "render_failure",
]
