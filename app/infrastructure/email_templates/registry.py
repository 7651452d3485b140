"""Lookup table from notification type to payload model and builder."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from app.domain.entities import DEFAULT_RECIPIENT_NAME, NotificationType

from . import builders
from .builders import RenderedEmail, TemplateContext
from .payloads import (
    ABTestResultsPayload,
    AchievementPayload,
    AgencyJobPostedPayload,
    ApplicationFollowupPayload,
    ApplicationSubmittedPayload,
    BadgeAwardedPayload,
    CompanyInvitationPayload,
    FeedbackRequestPayload,
    GoalProgressPayload,
    InterviewReminderPayload,
    InterviewScheduledPayload,
    JobMatchAlertPayload,
    LearningStreakPayload,
    MentorshipRequestReceivedPayload,
    MentorshipRequestResponsePayload,
    RelationshipApprovedPayload,
    RelationshipDeclinedPayload,
    ResumeAnalysisPayload,
    SessionPayload,
    TemplatePayload,
    WeeklyDigestPayload,
    WelcomePayload,
)

logger = logging.getLogger(__name__)


class NotificationTemplateError(ValueError):
    """Base class for rendering failures."""


class UnknownNotificationTypeError(NotificationTemplateError):
    """Raised when no template exists for the requested type."""

    def __init__(self, notification_type: object) -> None:
        super().__init__(f"Unknown email type: {notification_type}")
        self.notification_type = notification_type


class TemplatePayloadError(NotificationTemplateError):
    """Raised when a payload does not satisfy its template's model."""

    def __init__(self, notification_type: NotificationType, errors: list[str]) -> None:
        detail = "; ".join(errors) if errors else "invalid payload"
        super().__init__(f"Invalid payload for {notification_type.value}: {detail}")
        self.notification_type = notification_type
        self.errors = errors


@dataclass(frozen=True)
class EmailTemplate:
    payload_model: type[TemplatePayload]
    build: Callable[[Any, TemplateContext], RenderedEmail]


TEMPLATES: Mapping[NotificationType, EmailTemplate] = {
    NotificationType.WELCOME: EmailTemplate(WelcomePayload, builders.build_welcome),
    NotificationType.APPLICATION_SUBMITTED: EmailTemplate(
        ApplicationSubmittedPayload, builders.build_application_submitted
    ),
    NotificationType.INTERVIEW_SCHEDULED: EmailTemplate(
        InterviewScheduledPayload, builders.build_interview_scheduled
    ),
    NotificationType.JOB_MATCH_ALERT: EmailTemplate(
        JobMatchAlertPayload, builders.build_job_match_alert
    ),
    NotificationType.MENTORSHIP_REQUEST_RECEIVED: EmailTemplate(
        MentorshipRequestReceivedPayload, builders.build_mentorship_request_received
    ),
    NotificationType.MENTORSHIP_REQUEST_RESPONSE: EmailTemplate(
        MentorshipRequestResponsePayload, builders.build_mentorship_request_response
    ),
    NotificationType.SESSION_SCHEDULED: EmailTemplate(
        SessionPayload, builders.build_session_scheduled
    ),
    NotificationType.SESSION_REMINDER: EmailTemplate(
        SessionPayload, builders.build_session_reminder
    ),
    NotificationType.FEEDBACK_REQUEST: EmailTemplate(
        FeedbackRequestPayload, builders.build_feedback_request
    ),
    NotificationType.RESUME_ANALYSIS_COMPLETE: EmailTemplate(
        ResumeAnalysisPayload, builders.build_resume_analysis_complete
    ),
    NotificationType.ACHIEVEMENT_UNLOCKED: EmailTemplate(
        AchievementPayload, builders.build_achievement_unlocked
    ),
    NotificationType.LEARNING_STREAK_MILESTONE: EmailTemplate(
        LearningStreakPayload, builders.build_learning_streak_milestone
    ),
    NotificationType.GOAL_PROGRESS_UPDATE: EmailTemplate(
        GoalProgressPayload, builders.build_goal_progress_update
    ),
    NotificationType.WEEKLY_DIGEST: EmailTemplate(
        WeeklyDigestPayload, builders.build_weekly_digest
    ),
    NotificationType.INTERVIEW_REMINDER_24H: EmailTemplate(
        InterviewReminderPayload, builders.build_interview_reminder_24h
    ),
    NotificationType.APPLICATION_FOLLOWUP_REMINDER: EmailTemplate(
        ApplicationFollowupPayload, builders.build_application_followup_reminder
    ),
    NotificationType.AB_TEST_RESULTS: EmailTemplate(
        ABTestResultsPayload, builders.build_ab_test_results
    ),
    NotificationType.COMPANY_INVITATION: EmailTemplate(
        CompanyInvitationPayload, builders.build_company_invitation
    ),
    NotificationType.AGENCY_JOB_POSTED: EmailTemplate(
        AgencyJobPostedPayload, builders.build_agency_job_posted
    ),
    NotificationType.RELATIONSHIP_APPROVED: EmailTemplate(
        RelationshipApprovedPayload, builders.build_relationship_approved
    ),
    NotificationType.RELATIONSHIP_DECLINED: EmailTemplate(
        RelationshipDeclinedPayload, builders.build_relationship_declined
    ),
    NotificationType.BADGE_AWARDED: EmailTemplate(
        BadgeAwardedPayload, builders.build_badge_awarded
    ),
}


def _ensure_exhaustive(templates: Mapping[NotificationType, EmailTemplate]) -> None:
    missing = [member.value for member in NotificationType if member not in templates]
    if missing:
        raise RuntimeError(f"Email templates missing for: {', '.join(missing)}")


_ensure_exhaustive(TEMPLATES)


def resolve_notification_type(value: NotificationType | str) -> NotificationType:
    """Return the enum member stored as ``value`` or raise :class:`UnknownNotificationTypeError`."""

    if isinstance(value, NotificationType):
        return value
    try:
        return NotificationType.parse(value)
    except (TypeError, ValueError) as exc:
        raise UnknownNotificationTypeError(value) from exc


def resolve_template_name(value: NotificationType | str) -> NotificationType:
    """Like :func:`resolve_notification_type` but also accepting kebab-case names."""

    if isinstance(value, NotificationType):
        return value
    try:
        return NotificationType.from_template_name(value)
    except (AttributeError, TypeError, ValueError) as exc:
        raise UnknownNotificationTypeError(value) from exc


def _format_validation_errors(exc: ValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "payload"
        if error.get("type") == "missing":
            messages.append(f"missing field '{location}'")
        else:
            messages.append(f"invalid field '{location}': {error.get('msg')}")
    return messages


def parse_payload(
    notification_type: NotificationType, payload: Mapping[str, Any] | None
) -> TemplatePayload:
    template = TEMPLATES[notification_type]
    try:
        return template.payload_model.model_validate(dict(payload or {}))
    except ValidationError as exc:
        raise TemplatePayloadError(notification_type, _format_validation_errors(exc)) from exc


def render_notification_email(
    notification_type: NotificationType | str,
    payload: Mapping[str, Any] | None,
    *,
    recipient_name: str | None,
    base_url: str,
) -> RenderedEmail:
    """Render the email for ``notification_type``.

    Raises :class:`UnknownNotificationTypeError` for types without a template
    and :class:`TemplatePayloadError` when the payload is missing required
    fields or carries values of the wrong shape.
    """

    resolved = resolve_notification_type(notification_type)
    parsed = parse_payload(resolved, payload)
    context = TemplateContext(
        recipient_name=(recipient_name or "").strip() or DEFAULT_RECIPIENT_NAME,
        base_url=base_url,
    )
    rendered = TEMPLATES[resolved].build(parsed, context)
    logger.debug("Rendered %s email with subject '%s'", resolved.value, rendered.subject)
    return rendered


__all__ = [
    "EmailTemplate",
    "NotificationTemplateError",
    "TEMPLATES",
    "TemplatePayloadError",
    "UnknownNotificationTypeError",
    "parse_payload",
    "render_notification_email",
    "resolve_notification_type",
    "resolve_template_name",
]
