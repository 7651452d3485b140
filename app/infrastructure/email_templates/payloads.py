"""Typed payloads accepted by each notification email.

Producers write camelCase keys (``jobTitle``, ``topMatches``) into the
notification payload; every model accepts those aliases as well as the
snake_case field names. Unknown keys are ignored so producers can attach
extra context (``title``, ``message``, ``userName``) without breaking
rendering.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Text = Annotated[str, Field(min_length=1)]
Count = Annotated[int, Field(ge=0)]


class TemplatePayload(BaseModel):
    """Base model with camelCase aliases for template payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class WelcomePayload(TemplatePayload):
    pass


class ApplicationSubmittedPayload(TemplatePayload):
    job_title: Text
    company: Text


class InterviewScheduledPayload(TemplatePayload):
    job_title: Text
    company: Text
    interview_date: Text
    interview_time: Text
    interview_type: Text
    location: str | None = None
    interview_url: str | None = None


class InterviewReminderPayload(InterviewScheduledPayload):
    meeting_link: str | None = None


class JobMatch(TemplatePayload):
    title: Text
    company: Text
    location: str | None = None
    match_score: float | None = None


class JobMatchAlertPayload(TemplatePayload):
    match_count: Count
    top_matches: list[JobMatch] = Field(default_factory=list)


class MentorshipRequestReceivedPayload(TemplatePayload):
    mentee_name: Text
    message: str | None = None


class MentorshipRequestResponsePayload(TemplatePayload):
    mentor_name: Text
    status: Text
    response_message: str | None = None

    @property
    def is_accepted(self) -> bool:
        return self.status.lower() == "accepted"


class SessionPayload(TemplatePayload):
    other_party_name: Text
    scheduled_date: Text
    scheduled_time: Text
    meeting_link: str | None = None


class FeedbackRequestPayload(TemplatePayload):
    other_party_name: Text
    session_date: Text


class ResumeAnalysisPayload(TemplatePayload):
    resume_score: Annotated[float, Field(ge=0, le=100)]
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)


class AchievementPayload(TemplatePayload):
    achievement_name: Text
    achievement_type: str | None = None
    achievement_description: str | None = None


class LearningStreakPayload(TemplatePayload):
    streak_days: Count
    longest_streak: Count | None = None


class GoalProgressPayload(TemplatePayload):
    goal_title: Text
    progress_percentage: Annotated[int, Field(ge=0, le=100)]
    milestone_name: str | None = None


class UpcomingInterview(TemplatePayload):
    company: Text
    date: Text


class UpcomingSession(TemplatePayload):
    mentor_name: Text
    date: Text


class WeekStats(TemplatePayload):
    new_job_matches: Count = 0
    applications_submitted: Count = 0
    upcoming_interviews: list[UpcomingInterview] = Field(default_factory=list)
    learning_minutes: Count = 0
    achievements_earned: Count = 0
    upcoming_sessions: list[UpcomingSession] = Field(default_factory=list)


class WeeklyDigestPayload(TemplatePayload):
    week_stats: WeekStats = Field(default_factory=WeekStats)


class FollowupApplication(TemplatePayload):
    company: Text
    job_title: Text
    days_since_applied: Count


class ApplicationFollowupPayload(TemplatePayload):
    applications: list[FollowupApplication] = Field(default_factory=list)


class VariantStats(TemplatePayload):
    opens: Count = 0
    clicks: Count = 0
    interviews: Count = 0


class ABTestResults(TemplatePayload):
    version_a: VariantStats = Field(default_factory=VariantStats)
    version_b: VariantStats = Field(default_factory=VariantStats)


class ABTestResultsPayload(TemplatePayload):
    test_name: Text
    winning_version: Literal["A", "B"]
    results: ABTestResults = Field(default_factory=ABTestResults)

    @property
    def winner(self) -> VariantStats:
        return self.results.version_a if self.winning_version == "A" else self.results.version_b

    @property
    def runner_up(self) -> VariantStats:
        return self.results.version_b if self.winning_version == "A" else self.results.version_a


class CompanyInvitationPayload(TemplatePayload):
    organization_name: Text
    inviter_name: Text
    role: Text
    invite_link: Text
    expires_at: Text
    email: str | None = None


class AgencyJobPostedPayload(TemplatePayload):
    job_title: Text
    agency_name: Text
    company: Text
    location: Text
    posted_date: Text


class RelationshipApprovedPayload(TemplatePayload):
    employer_name: Text
    start_date: Text
    reviewed_date: Text


class RelationshipDeclinedPayload(TemplatePayload):
    employer_name: Text
    reviewed_date: Text
    notes: str | None = None


class BadgeAwardedPayload(TemplatePayload):
    badge_name: Text
    badge_type: str | None = None
    description: str | None = None
    awarded_date: Text


__all__ = [
    "ABTestResults",
    "ABTestResultsPayload",
    "AchievementPayload",
    "AgencyJobPostedPayload",
    "ApplicationFollowupPayload",
    "ApplicationSubmittedPayload",
    "BadgeAwardedPayload",
    "CompanyInvitationPayload",
    "FeedbackRequestPayload",
    "FollowupApplication",
    "GoalProgressPayload",
    "InterviewReminderPayload",
    "InterviewScheduledPayload",
    "JobMatch",
    "JobMatchAlertPayload",
    "LearningStreakPayload",
    "MentorshipRequestReceivedPayload",
    "MentorshipRequestResponsePayload",
    "RelationshipApprovedPayload",
    "RelationshipDeclinedPayload",
    "ResumeAnalysisPayload",
    "SessionPayload",
    "TemplatePayload",
    "UpcomingInterview",
    "UpcomingSession",
    "VariantStats",
    "WeekStats",
    "WeeklyDigestPayload",
    "WelcomePayload",
]
