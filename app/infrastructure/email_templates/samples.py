"""Representative payloads used to preview templates without real data."""

from __future__ import annotations

from typing import Any

from app.domain.entities import NotificationType

SAMPLE_PAYLOADS: dict[NotificationType, dict[str, Any]] = {
    NotificationType.WELCOME: {},
    NotificationType.APPLICATION_SUBMITTED: {
        "jobTitle": "Senior Data Analyst",
        "company": "Northwind",
    },
    NotificationType.INTERVIEW_SCHEDULED: {
        "jobTitle": "Senior Data Analyst",
        "company": "Northwind",
        "interviewDate": "March 12, 2025",
        "interviewTime": "10:00 AM",
        "interviewType": "Video call",
        "location": "Remote",
    },
    NotificationType.JOB_MATCH_ALERT: {
        "matchCount": 2,
        "topMatches": [
            {"title": "Data Engineer", "company": "Contoso", "location": "Lisbon", "matchScore": 92},
            {"title": "Analytics Lead", "company": "Fabrikam", "location": "Remote", "matchScore": 87},
        ],
    },
    NotificationType.MENTORSHIP_REQUEST_RECEIVED: {
        "menteeName": "Sam Rivera",
        "message": "I'd love guidance on moving into product management.",
    },
    NotificationType.MENTORSHIP_REQUEST_RESPONSE: {
        "mentorName": "Alex Kim",
        "status": "accepted",
        "responseMessage": "Happy to help, let's meet next week.",
    },
    NotificationType.SESSION_SCHEDULED: {
        "otherPartyName": "Alex Kim",
        "scheduledDate": "March 14, 2025",
        "scheduledTime": "4:00 PM",
        "meetingLink": "https://meet.example.com/abc-defg",
    },
    NotificationType.SESSION_REMINDER: {
        "otherPartyName": "Alex Kim",
        "scheduledDate": "March 14, 2025",
        "scheduledTime": "4:00 PM",
        "meetingLink": "https://meet.example.com/abc-defg",
    },
    NotificationType.FEEDBACK_REQUEST: {
        "otherPartyName": "Alex Kim",
        "sessionDate": "March 14, 2025",
    },
    NotificationType.RESUME_ANALYSIS_COMPLETE: {
        "resumeScore": 82,
        "strengths": ["Clear impact statements", "Relevant keywords"],
        "improvements": ["Add measurable results to recent roles"],
    },
    NotificationType.ACHIEVEMENT_UNLOCKED: {
        "achievementName": "First Application",
        "achievementType": "first_application",
        "achievementDescription": "You submitted your first application.",
    },
    NotificationType.LEARNING_STREAK_MILESTONE: {"streakDays": 30, "longestStreak": 45},
    NotificationType.GOAL_PROGRESS_UPDATE: {
        "goalTitle": "Land a product role",
        "progressPercentage": 50,
        "milestoneName": "Portfolio published",
    },
    NotificationType.WEEKLY_DIGEST: {
        "weekStats": {
            "newJobMatches": 12,
            "applicationsSubmitted": 3,
            "upcomingInterviews": [{"company": "Northwind", "date": "Mar 12"}],
            "learningMinutes": 95,
            "achievementsEarned": 1,
            "upcomingSessions": [{"mentorName": "Alex Kim", "date": "Mar 14"}],
        }
    },
    NotificationType.INTERVIEW_REMINDER_24H: {
        "jobTitle": "Senior Data Analyst",
        "company": "Northwind",
        "interviewDate": "March 12, 2025",
        "interviewTime": "10:00 AM",
        "interviewType": "Video call",
        "location": "Remote",
        "meetingLink": "https://meet.example.com/xyz",
    },
    NotificationType.APPLICATION_FOLLOWUP_REMINDER: {
        "applications": [
            {"company": "Contoso", "jobTitle": "Data Engineer", "daysSinceApplied": 9},
        ]
    },
    NotificationType.AB_TEST_RESULTS: {
        "testName": "Skills-first layout",
        "winningVersion": "B",
        "results": {
            "versionA": {"opens": 40, "clicks": 12, "interviews": 2},
            "versionB": {"opens": 44, "clicks": 19, "interviews": 5},
        },
    },
    NotificationType.COMPANY_INVITATION: {
        "organizationName": "Northwind",
        "inviterName": "Jordan Lee",
        "role": "hiring_manager",
        "inviteLink": "https://app.careersync.com/invite/accept?token=sample",
        "expiresAt": "March 20, 2025",
        "email": "invitee@example.com",
    },
    NotificationType.AGENCY_JOB_POSTED: {
        "jobTitle": "Backend Engineer",
        "agencyName": "TalentBridge",
        "company": "Northwind",
        "location": "Porto",
        "postedDate": "March 10, 2025",
    },
    NotificationType.RELATIONSHIP_APPROVED: {
        "employerName": "Northwind",
        "startDate": "April 1, 2025",
        "reviewedDate": "March 10, 2025",
    },
    NotificationType.RELATIONSHIP_DECLINED: {
        "employerName": "Northwind",
        "reviewedDate": "March 10, 2025",
        "notes": "We are not adding agency partners this quarter.",
    },
    NotificationType.BADGE_AWARDED: {
        "badgeName": "Top Placer",
        "badgeType": "milestone",
        "description": "Ten successful placements.",
        "awardedDate": "March 10, 2025",
    },
}


def sample_payload(notification_type: NotificationType) -> dict[str, Any]:
    """Return a copy of the preview payload for ``notification_type``."""

    return dict(SAMPLE_PAYLOADS.get(notification_type, {}))


__all__ = ["SAMPLE_PAYLOADS", "sample_payload"]
