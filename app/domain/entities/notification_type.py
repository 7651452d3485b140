"""Closed enumerations describing notification kinds and delivery channels."""

from __future__ import annotations

from enum import Enum


class NotificationType(str, Enum):
    """Notification kinds that can be delivered by email."""

    WELCOME = "welcome"
    APPLICATION_SUBMITTED = "application_submitted"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    JOB_MATCH_ALERT = "job_match_alert"
    MENTORSHIP_REQUEST_RECEIVED = "mentorship_request_received"
    MENTORSHIP_REQUEST_RESPONSE = "mentorship_request_response"
    SESSION_SCHEDULED = "session_scheduled"
    SESSION_REMINDER = "session_reminder"
    FEEDBACK_REQUEST = "feedback_request"
    RESUME_ANALYSIS_COMPLETE = "resume_analysis_complete"
    ACHIEVEMENT_UNLOCKED = "achievement_unlocked"
    LEARNING_STREAK_MILESTONE = "learning_streak_milestone"
    GOAL_PROGRESS_UPDATE = "goal_progress_update"
    WEEKLY_DIGEST = "weekly_digest"
    INTERVIEW_REMINDER_24H = "interview_reminder_24h"
    APPLICATION_FOLLOWUP_REMINDER = "application_followup_reminder"
    AB_TEST_RESULTS = "ab_test_results"
    COMPANY_INVITATION = "company_invitation"
    AGENCY_JOB_POSTED = "agency_job_posted"
    RELATIONSHIP_APPROVED = "relationship_approved"
    RELATIONSHIP_DECLINED = "relationship_declined"
    BADGE_AWARDED = "badge_awarded"

    @classmethod
    def parse(cls, value: str) -> "NotificationType":
        """Return the member whose value is exactly ``value``.

        Raises ``ValueError`` for unknown kinds.
        """

        return cls(value)

    @classmethod
    def from_template_name(cls, value: str) -> "NotificationType":
        """Return the member named by a direct template request.

        Template names may use the kebab-case form (``interview-scheduled``)
        as well as the stored snake_case value.
        """

        return cls((value or "").strip().replace("-", "_"))


class NotificationChannel(str, Enum):
    """Medium through which a notification is delivered."""

    EMAIL = "email"
    IN_APP = "in_app"
    PUSH = "push"


class ScheduledNotificationStatus(str, Enum):
    """Lifecycle states of a deferred notification."""

    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"
    CANCELLED = "cancelled"


class NotificationEventType(str, Enum):
    """Engagement signals recorded for delivered notifications."""

    DELIVERED = "delivered"
    OPENED = "opened"
    CLICKED = "clicked"
    DISMISSED = "dismissed"


ENGAGEMENT_WEIGHTS: dict[NotificationEventType, int] = {
    NotificationEventType.OPENED: 1,
    NotificationEventType.CLICKED: 2,
}


__all__ = [
    "ENGAGEMENT_WEIGHTS",
    "NotificationChannel",
    "NotificationEventType",
    "NotificationType",
    "ScheduledNotificationStatus",
]
