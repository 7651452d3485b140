"""Transactional email delivery via SendGrid."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import From, Mail

from app.config import get_settings

logger = logging.getLogger(__name__)


class EmailConfigurationError(RuntimeError):
    """Raised when SendGrid credentials are missing."""


class EmailDeliveryError(RuntimeError):
    """Raised when SendGrid rejects a message or cannot be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmailSender(Protocol):
    """Anything able to deliver a rendered email and report its message id."""

    def send(self, recipient: str, subject: str, html_content: str) -> str | None:
        ...


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                field = item.get("field")
                if message and field:
                    messages.append(f"{message} (field: {field})")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_failure(status_code: int | None, details: str | None, fallback: str) -> str:
    if status_code and details:
        return f"SendGrid request failed with status {status_code}: {details}"
    if status_code:
        return f"SendGrid request failed with status {status_code}"
    if details:
        return f"SendGrid request failed: {details}"
    return f"SendGrid request failed: {fallback}"


def _extract_message_id(response: Any) -> str | None:
    headers = getattr(response, "headers", None)
    if headers is None:
        return None
    try:
        message_id = headers.get("X-Message-Id")
    except AttributeError:
        return None
    return str(message_id) if message_id else None


class SendGridEmailSender:
    """Deliver HTML emails with the configured SendGrid account."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        sender: str | None = None,
        sender_name: str | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key or settings.sendgrid_api_key
        self._sender = sender or settings.sendgrid_sender
        self._sender_name = sender_name or settings.sendgrid_sender_name

    def send(self, recipient: str, subject: str, html_content: str) -> str | None:
        """Send one message and return the provider message id.

        Raises :class:`EmailConfigurationError` when credentials are missing
        and :class:`EmailDeliveryError` for any provider side failure.
        """

        if not (self._api_key and self._sender):
            raise EmailConfigurationError(
                "SendGrid configuration incomplete; set SENDGRID_API_KEY and SENDGRID_SENDER"
            )

        message = Mail(
            from_email=From(self._sender, self._sender_name),
            to_emails=recipient,
            subject=subject,
            html_content=html_content,
        )

        try:
            client = SendGridAPIClient(self._api_key)
            response = client.send(message)
        except Exception as exc:
            status_code = getattr(exc, "status_code", None)
            details = _extract_sendgrid_error_details(getattr(exc, "body", None))
            description = _describe_failure(status_code, details, str(exc) or type(exc).__name__)
            logger.error("Email to %s not delivered. %s", recipient, description)
            raise EmailDeliveryError(description, status_code=status_code) from exc

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            details = _extract_sendgrid_error_details(getattr(response, "body", None))
            description = _describe_failure(status_code, details, "unexpected response")
            logger.error("Email to %s not delivered. %s", recipient, description)
            raise EmailDeliveryError(description, status_code=status_code)

        message_id = _extract_message_id(response)
        logger.info("Email '%s' accepted by SendGrid for %s (id=%s)", subject, recipient, message_id)
        return message_id


def get_email_sender() -> EmailSender:
    """Return the default email sender."""

    return SendGridEmailSender()


__all__ = [
    "EmailConfigurationError",
    "EmailDeliveryError",
    "EmailSender",
    "SendGridEmailSender",
    "get_email_sender",
]
