"""FastAPI dependency utilities."""

from secrets import compare_digest

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    SendTimeOptimizer,
    get_send_time_optimizer as build_send_time_optimizer,
)
from app.config import get_settings
from app.infrastructure.database import get_db
from app.infrastructure.email import EmailSender, get_email_sender as build_email_sender


def get_email_sender() -> EmailSender:
    """Return the email sender used by dispatch endpoints."""

    return build_email_sender()


def get_send_time_optimizer(db: Session = Depends(get_db)) -> SendTimeOptimizer:
    """Return the configured send-time strategy bound to the request session."""

    return build_send_time_optimizer(db)


def require_dispatch_key(x_api_key: str | None = Header(default=None, alias="X-Api-Key")) -> None:
    """Reject trigger requests without the shared key when one is configured."""

    expected = get_settings().dispatch_api_key
    if not expected:
        return
    if x_api_key is None or not compare_digest(x_api_key.encode(), expected.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
        )
