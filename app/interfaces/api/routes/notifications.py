"""Endpoints for scheduling, promoting and dispatching notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    SendTimeOptimizer,
    dispatch_notification_email as dispatch_notification_email_uc,
    preview_template as preview_template_uc,
    process_due_notifications as process_due_notifications_uc,
    queue_email_notification as queue_email_notification_uc,
    record_notification_event as record_notification_event_uc,
    schedule_notification as schedule_notification_uc,
    send_notification_now as send_notification_now_uc,
    send_template_email as send_template_email_uc,
)
from app.config import get_settings
from app.domain.entities import FailureReason, PipelineResult
from app.infrastructure.database import get_db
from app.infrastructure.email import EmailSender
from app.infrastructure.email_templates import (
    NotificationTemplateError,
    UnknownNotificationTypeError,
)
from app.interfaces.api.dependencies import (
    get_email_sender,
    get_send_time_optimizer,
    require_dispatch_key,
)
from app.interfaces.api.schemas import (
    DispatchRequest,
    DispatchResponse,
    ErrorResponse,
    NotificationEventRequest,
    NotificationEventResponse,
    ProcessScheduledRequest,
    ProcessScheduledResponse,
    QueueEmailNotificationRequest,
    ScheduleNotificationRequest,
    ScheduleNotificationResponse,
    SendNotificationNowRequest,
    SendNotificationNowResponse,
    TemplatePreviewRequest,
    TemplatePreviewResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])

FAILURE_STATUS_CODES: dict[FailureReason, int] = {
    FailureReason.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    FailureReason.UNKNOWN_TYPE: status.HTTP_400_BAD_REQUEST,
    FailureReason.INVALID_PAYLOAD: status.HTTP_400_BAD_REQUEST,
    FailureReason.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureReason.PROVIDER_ERROR: status.HTTP_502_BAD_GATEWAY,
    FailureReason.CONFIGURATION_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
    FailureReason.PERSISTENCE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse},
    status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
}


def _error_response(error: str, reason: FailureReason | None) -> JSONResponse:
    status_code = FAILURE_STATUS_CODES.get(reason, status.HTTP_500_INTERNAL_SERVER_ERROR)
    body = ErrorResponse(error=error, reason=reason.value if reason else None)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


def _failure_response(result: PipelineResult) -> JSONResponse:
    return _error_response(result.error or "Request failed", result.reason)


@router.post(
    "/schedule",
    response_model=ScheduleNotificationResponse,
    responses=ERROR_RESPONSES,
)
def schedule_notification(
    payload: ScheduleNotificationRequest,
    db: Session = Depends(get_db),
    optimizer: SendTimeOptimizer = Depends(get_send_time_optimizer),
):
    """Store a notification to be delivered at the user's best engagement time."""

    min_delay = payload.min_delay_minutes
    if min_delay is None:
        min_delay = get_settings().default_min_delay_minutes

    result = schedule_notification_uc(
        db,
        user_id=payload.user_id,
        notification_type=payload.notification_type,
        title=payload.title,
        message=payload.message,
        channel=payload.channel.value,
        data=payload.data,
        use_smart_scheduling=payload.use_smart_scheduling,
        min_delay_minutes=min_delay,
        org_id=payload.org_id,
        optimizer=optimizer,
    )
    if not result.success:
        return _failure_response(result)
    return ScheduleNotificationResponse(
        success=True,
        scheduled_for=result.scheduled_for,
        scheduled_notification_id=result.scheduled_notification_id,
    )


@router.post(
    "/send-now",
    response_model=SendNotificationNowResponse,
    responses=ERROR_RESPONSES,
)
def send_notification_now(
    payload: SendNotificationNowRequest,
    db: Session = Depends(get_db),
):
    """Create an in-app notification immediately."""

    result = send_notification_now_uc(
        db,
        org_id=payload.org_id,
        user_id=payload.user_id,
        notification_type=payload.notification_type,
        title=payload.title,
        message=payload.message,
        data=payload.data,
    )
    if not result.success:
        return _failure_response(result)
    return SendNotificationNowResponse(success=True, notification_id=result.notification_id)


@router.post(
    "/email",
    response_model=SendNotificationNowResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def queue_email_notification(
    payload: QueueEmailNotificationRequest,
    db: Session = Depends(get_db),
):
    """Queue an email notification for the dispatcher."""

    result = queue_email_notification_uc(
        db,
        org_id=payload.org_id,
        user_id=payload.user_id,
        notification_type=payload.notification_type,
        payload=payload.payload,
    )
    if not result.success:
        return _failure_response(result)
    return SendNotificationNowResponse(success=True, notification_id=result.notification_id)


@router.post(
    "/dispatch",
    response_model=DispatchResponse,
    responses=ERROR_RESPONSES,
    dependencies=[Depends(require_dispatch_key)],
)
def dispatch_email(
    payload: DispatchRequest,
    db: Session = Depends(get_db),
    sender: EmailSender = Depends(get_email_sender),
):
    """Send the email for a stored notification, or a template straight to an address."""

    if payload.is_direct:
        result = send_template_email_uc(
            template=payload.template or "",
            to=payload.to or "",
            data=payload.data,
            subject=payload.subject,
            sender=sender,
        )
    elif payload.notification_id:
        result = dispatch_notification_email_uc(
            db,
            notification_id=payload.notification_id,
            sender=sender,
        )
    else:
        return _error_response("notificationId is required", FailureReason.INVALID_INPUT)

    if not result.success:
        return _failure_response(result)
    return DispatchResponse(success=True, email_id=result.email_id)


@router.post(
    "/scheduled/process",
    response_model=ProcessScheduledResponse,
    dependencies=[Depends(require_dispatch_key)],
)
def process_scheduled_notifications(
    payload: ProcessScheduledRequest | None = None,
    db: Session = Depends(get_db),
) -> ProcessScheduledResponse:
    """Promote due scheduled notifications into deliverable records."""

    summary = process_due_notifications_uc(db, limit=payload.limit if payload else None)
    return ProcessScheduledResponse(
        processed=summary.processed,
        successful=summary.successful,
        failed=summary.failed,
        notification_ids=summary.notification_ids,
    )


@router.post(
    "/{notification_id}/events",
    response_model=NotificationEventResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def record_notification_event(
    notification_id: str,
    payload: NotificationEventRequest,
    db: Session = Depends(get_db),
):
    """Record an engagement signal (open, click, ...) for a notification."""

    result = record_notification_event_uc(
        db,
        notification_id=notification_id,
        event_type=payload.event_type.value,
        metadata=payload.metadata,
    )
    if not result.success:
        return _failure_response(result)
    return NotificationEventResponse(success=True, event_id=result.event_id)


@router.post(
    "/templates/{template}/preview",
    response_model=TemplatePreviewResponse,
    responses=ERROR_RESPONSES,
)
def preview_template(
    template: str,
    payload: TemplatePreviewRequest | None = None,
):
    """Render a template without sending it; omitted data uses a sample payload."""

    request = payload or TemplatePreviewRequest()
    try:
        rendered = preview_template_uc(
            template,
            data=request.data,
            recipient_name=request.recipient_name,
        )
    except UnknownNotificationTypeError as exc:
        return _error_response(str(exc), FailureReason.UNKNOWN_TYPE)
    except NotificationTemplateError as exc:
        return _error_response(str(exc), FailureReason.INVALID_PAYLOAD)
    return TemplatePreviewResponse(subject=rendered.subject, html=rendered.html)
