"""Pure builders turning a typed payload into a subject line and HTML body."""

from __future__ import annotations

from dataclasses import dataclass

from .layout import (
    BRAND_NAME,
    Html,
    button,
    card,
    fact_box,
    format_number,
    greet,
    highlight_box,
    link,
    note,
    paragraph,
    quote_box,
    render_document,
    strong,
    tips_box,
)
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
    WeeklyDigestPayload,
    WelcomePayload,
)


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html: str


@dataclass(frozen=True)
class TemplateContext:
    """Values every builder needs besides its payload."""

    recipient_name: str
    base_url: str

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


DASHBOARD_PATH = "/dashboard"
APPLICATIONS_PATH = "/applications"
JOBS_PATH = "/jobs"
COACHING_REQUESTS_PATH = "/coaching-requests"
COACH_PATH = "/coach"
RESUMES_PATH = "/resumes"
CAREER_DEVELOPMENT_PATH = "/career-development"
AB_TESTING_PATH = "/resume-ab-testing"
AGENCY_JOBS_PATH = "/admin/jobs"
AGENCY_CLIENTS_PATH = "/agency-clients"
LEADERBOARD_PATH = "/recruiter-leaderboard"

ACHIEVEMENT_ICONS = {
    "profile_created": "🎉",
    "quarter_complete": "⭐",
    "half_complete": "🌟",
    "three_quarter_complete": "✨",
    "fully_complete": "🏆",
    "first_application": "📝",
    "first_interview": "🎯",
    "learning_streak": "🔥",
}
BADGE_ICONS = {
    "milestone": "🏆",
    "achievement": "⭐",
    "quality": "💎",
    "revenue": "💰",
}
DEFAULT_AWARD_ICON = "🎖️"

STREAK_MILESTONES = {
    7: ("1 Week Streak!", "You've completed a full week of learning! That's dedication! 🎉"),
    30: ("1 Month Streak!", "A full month of consistent learning! You're unstoppable! 🚀"),
    90: ("3 Month Streak!", "Three months of dedication! You're in the top 5% of learners! 🌟"),
    365: ("1 Year Streak!", "A FULL YEAR! You're a learning legend! 🏆👑"),
}
STREAK_ENCOURAGEMENT = "Your consistency is paying off! Keep learning every day! 💪"

GOAL_ENCOURAGEMENT = {
    25: "You're 25% there! Great start on your journey! 🌱",
    50: "Halfway there! You're making excellent progress! 🎯",
    75: "You're so close! Just 25% to go! 💪",
    100: "🎉 GOAL COMPLETE! Time to celebrate your achievement! 🏆",
}
GOAL_DEFAULT_ENCOURAGEMENT = "You're making steady progress toward your goal! 🚀"

CENTERED = "text-align: center;"


def _meeting_link(url: str | None) -> Html | None:
    return link(url) if url else None


def build_welcome(payload: WelcomePayload, context: TemplateContext) -> RenderedEmail:
    html = render_document(
        heading=f"Welcome to {BRAND_NAME}! 🚀",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph(
                "We're thrilled to have you join our platform! You're now part of a "
                "community dedicated to helping professionals like you find their dream careers."
            ),
            tips_box(
                "🎯 Next Steps to Get Started:",
                [
                    "Complete your profile to unlock AI job matching",
                    "Upload your resume for personalized insights",
                    "Set your job preferences and target roles",
                    "Explore AI-powered career coaching",
                ],
                bullet="✓",
            ),
            button("Go to Dashboard", context.url(DASHBOARD_PATH)),
        ],
        footer="Questions? Reply to this email or visit our help center.",
    )
    return RenderedEmail(subject=f"Welcome to {BRAND_NAME}! 🚀", html=html)


def build_application_submitted(
    payload: ApplicationSubmittedPayload, context: TemplateContext
) -> RenderedEmail:
    html = render_document(
        heading="Application Submitted ✅",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph("Great news! Your application has been successfully submitted."),
            fact_box([("Position", payload.job_title), ("Company", payload.company)]),
            paragraph("We'll keep you updated on the status of your application. In the meantime:"),
            tips_box(
                "💡 Next Steps:",
                [
                    "Research the company culture and recent news",
                    "Prepare for potential interview questions",
                    "Set a reminder to follow up in 7-10 days",
                ],
            ),
            button("View Application Details", context.url(APPLICATIONS_PATH)),
        ],
        footer="Good luck! We're rooting for you 🚀",
    )
    return RenderedEmail(
        subject=f"Application submitted: {payload.job_title} at {payload.company}",
        html=html,
    )


def build_interview_scheduled(
    payload: InterviewScheduledPayload, context: TemplateContext
) -> RenderedEmail:
    html = render_document(
        heading="Interview Scheduled 📅",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph(f"Congratulations! Your interview has been scheduled with {payload.company}."),
            fact_box(
                [
                    ("Position", payload.job_title),
                    ("Company", payload.company),
                    ("Date & Time", f"{payload.interview_date} at {payload.interview_time}"),
                    ("Interview Type", payload.interview_type),
                    ("Location", payload.location),
                ]
            ),
            tips_box(
                "🎯 Interview Preparation Tips:",
                [
                    "Research the company and role thoroughly",
                    "Prepare answers to common interview questions",
                    "Review your resume and relevant experiences",
                    "Prepare questions to ask the interviewer",
                    "Test your tech setup (for virtual interviews)",
                    "Plan your outfit and arrive 10 minutes early",
                ],
                bullet="✓",
            ),
            button(
                "View Interview Details",
                payload.interview_url or context.url(APPLICATIONS_PATH),
            ),
            note("📧 You'll receive a reminder 24 hours before your interview."),
        ],
        footer="You've got this! Best of luck 🌟",
    )
    return RenderedEmail(
        subject=f"Interview scheduled: {payload.job_title} at {payload.company}",
        html=html,
    )


def build_job_match_alert(payload: JobMatchAlertPayload, context: TemplateContext) -> RenderedEmail:
    jobs_url = context.url(JOBS_PATH)
    matches = [
        card(
            paragraph(strong(match.title), style="margin: 0 0 4px 0;"),
            paragraph(match.company, style="font-size: 14px; margin: 0 0 4px 0;"),
            paragraph(f"📍 {match.location}", style="font-size: 13px; margin: 0 0 8px 0;")
            if match.location
            else None,
            paragraph(
                f"Match Score: {format_number(match.match_score)}%",
                style="color: #059669; font-size: 14px; font-weight: bold; margin: 8px 0 0 0;",
            )
            if match.match_score is not None
            else None,
        )
        for match in payload.top_matches
    ]
    html = render_document(
        heading="New Job Matches! 🎯",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph(
                "Great news! Our AI has found ",
                strong(f"{payload.match_count} new job opportunities"),
                " that match your profile and preferences.",
            ),
            paragraph(strong("🌟 Top Matches:")) if matches else None,
            *matches,
            paragraph(
                "These positions align with your skills, experience, and career goals. "
                "Don't wait, the best opportunities go fast!"
            ),
            button("View All Matches", jobs_url),
            tips_box(
                "💡 Pro Tips:",
                [
                    "Apply within the first 48 hours for better visibility",
                    "Customize your resume for each application",
                    "Use our AI cover letter generator",
                ],
            ),
        ],
        footer=Html(
            "Want fewer/more alerts? Update your "
            f"{link(context.url(DASHBOARD_PATH), 'notification preferences')}"
        ),
    )
    return RenderedEmail(subject=f"{payload.match_count} new job matches found!", html=html)


def build_mentorship_request_received(
    payload: MentorshipRequestReceivedPayload, context: TemplateContext
) -> RenderedEmail:
    html = render_document(
        heading="New Mentorship Request 🤝",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph("You have a new mentorship request from ", strong(payload.mentee_name), "."),
            quote_box(f"Message from {payload.mentee_name}", payload.message),
            paragraph(
                "This is a great opportunity to share your expertise and help someone "
                "grow in their career!"
            ),
            button("View Request & Respond", context.url(COACHING_REQUESTS_PATH)),
            tips_box(
                "💡 Mentorship Tips:",
                [
                    "Review their profile before responding",
                    "Set clear expectations for sessions",
                    "Suggest a time that works for both of you",
                ],
            ),
        ],
        footer="Thank you for giving back to the community! 🌟",
    )
    return RenderedEmail(subject="New mentorship request received", html=html)


def build_mentorship_request_response(
    payload: MentorshipRequestResponsePayload, context: TemplateContext
) -> RenderedEmail:
    requests_url = context.url(COACHING_REQUESTS_PATH)
    if payload.is_accepted:
        heading = "Mentorship Request Accepted! 🎉"
        follow_up = [
            paragraph("Great news! You can now schedule your first session together."),
            button("Schedule First Session", requests_url),
            tips_box(
                "🎯 Make the Most of Your Mentorship:",
                [
                    "Come prepared with specific questions and goals",
                    "Be open to feedback and suggestions",
                    "Follow up on action items between sessions",
                    "Show appreciation for your mentor's time",
                ],
            ),
        ]
        footer = "Exciting times ahead! 🚀"
    else:
        heading = "Mentorship Request Update"
        follow_up = [
            paragraph(
                "Don't be discouraged! There are many other mentors who might be a "
                "better fit for your needs."
            ),
            button("Browse Other Mentors", requests_url),
        ]
        footer = "Keep going, the right mentor is out there!"

    html = render_document(
        heading=heading,
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph(strong(payload.mentor_name), f" has {payload.status} your mentorship request."),
            quote_box(f"Message from {payload.mentor_name}", payload.response_message),
            *follow_up,
        ],
        footer=footer,
    )
    return RenderedEmail(subject=f"Mentorship request {payload.status}", html=html)


def build_session_scheduled(payload: SessionPayload, context: TemplateContext) -> RenderedEmail:
    html = render_document(
        heading="Mentorship Session Scheduled 📅",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph(
                "Your mentorship session with ",
                strong(payload.other_party_name),
                " has been scheduled!",
            ),
            fact_box(
                [
                    ("Session Date", payload.scheduled_date),
                    ("Session Time", payload.scheduled_time),
                    ("Meeting Link", _meeting_link(payload.meeting_link)),
                ]
            ),
            paragraph(
                "Make sure to add this to your calendar and prepare any topics you'd like to discuss."
            ),
            button("View Session Details", context.url(COACH_PATH)),
            note("📧 You'll receive a reminder 1 hour before the session."),
        ],
        footer="Looking forward to a productive session! 💪",
    )
    return RenderedEmail(subject="Mentorship session scheduled", html=html)


def build_session_reminder(payload: SessionPayload, context: TemplateContext) -> RenderedEmail:
    if payload.meeting_link:
        action = button("Join Meeting Now", payload.meeting_link)
    else:
        action = button("View Session Details", context.url(COACH_PATH))
    html = render_document(
        heading="Session Reminder ⏰",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph(
                strong("Reminder:"),
                " Your mentorship session with ",
                strong(payload.other_party_name),
                " is coming up soon!",
            ),
            fact_box(
                [
                    ("Session Time", f"{payload.scheduled_date} at {payload.scheduled_time}"),
                    (
                        "Join Meeting",
                        link(payload.meeting_link, "Click here to join")
                        if payload.meeting_link
                        else None,
                    ),
                ],
                variant="warning",
            ),
            tips_box(
                "✅ Quick Checklist:",
                [
                    "Test your audio and video setup",
                    "Have your questions/topics ready",
                    "Find a quiet space for the call",
                    "Have a notepad ready for key takeaways",
                ],
            ),
            action,
        ],
        footer="See you soon! 👋",
    )
    return RenderedEmail(subject="Reminder: Upcoming mentorship session", html=html)


def build_feedback_request(
    payload: FeedbackRequestPayload, context: TemplateContext
) -> RenderedEmail:
    html = render_document(
        heading="How Was Your Session? ⭐",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph(
                "Thank you for completing your mentorship session with ",
                strong(payload.other_party_name),
                f" on {payload.session_date}!",
            ),
            paragraph(
                "We'd love to hear about your experience. Your feedback helps us improve "
                "the mentorship experience for everyone."
            ),
            tips_box(
                "Your feedback will help with:",
                [
                    "Improving match quality",
                    "Recognizing outstanding mentors",
                    "Enhancing the platform for everyone",
                ],
                bullet="✓",
            ),
            button("Share Your Feedback", context.url(COACH_PATH)),
            note("This will only take 2 minutes ⏱️"),
        ],
        footer="Thank you for being part of our community! 🙏",
    )
    return RenderedEmail(subject="Session feedback requested", html=html)


def build_resume_analysis_complete(
    payload: ResumeAnalysisPayload, context: TemplateContext
) -> RenderedEmail:
    html = render_document(
        heading="Resume Analysis Complete! 📊",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph("Great news! We've completed the AI analysis of your resume."),
            highlight_box(
                paragraph("Your Resume Score", style="color: #6b7280; font-size: 14px; margin: 0;"),
                paragraph(
                    f"{format_number(payload.resume_score)}/100",
                    style="color: #1f2937; font-size: 48px; font-weight: bold; margin: 12px 0;",
                ),
                variant="info",
            ),
            tips_box("💪 Key Strengths:", payload.strengths, bullet="✓", variant="info"),
            tips_box(
                "🎯 Areas for Improvement:", payload.improvements, bullet="⚠️", variant="warning"
            ),
            button("View Detailed Analysis", context.url(RESUMES_PATH)),
            note("💡 Tip: Higher scores lead to better job matches!"),
        ],
        footer="Keep refining to stand out from the competition! 🚀",
    )
    return RenderedEmail(subject="Your resume analysis is ready!", html=html)


def build_achievement_unlocked(
    payload: AchievementPayload, context: TemplateContext
) -> RenderedEmail:
    icon = ACHIEVEMENT_ICONS.get(payload.achievement_type or "", DEFAULT_AWARD_ICON)
    html = render_document(
        heading="Achievement Unlocked!",
        hero_icon=icon,
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph("Congratulations! You've earned a new achievement:"),
            highlight_box(
                paragraph(
                    payload.achievement_name,
                    style="color: #1f2937; font-size: 24px; font-weight: bold; margin: 12px 0;",
                ),
                paragraph(
                    payload.achievement_description,
                    style="color: #6b7280; font-size: 16px; margin: 8px 0;",
                )
                if payload.achievement_description
                else None,
            ),
            paragraph(
                "Keep up the momentum! Every step brings you closer to your career goals.",
                style=CENTERED,
            ),
            button("View All Achievements", context.url(DASHBOARD_PATH)),
            tips_box(
                "🎯 What's Next:",
                [
                    "Complete your profile to 100%",
                    "Apply to at least 5 jobs this week",
                    "Upload an optimized resume",
                    "Connect with a mentor",
                ],
            ),
        ],
        footer="You're doing amazing! Keep it up! 💪",
    )
    return RenderedEmail(subject=f"Achievement unlocked: {payload.achievement_name}!", html=html)


def streak_milestone(streak_days: int) -> tuple[str, str]:
    """Return the milestone label and encouragement for ``streak_days``."""

    return STREAK_MILESTONES.get(
        streak_days, (f"{streak_days} Day Streak!", STREAK_ENCOURAGEMENT)
    )


def build_learning_streak_milestone(
    payload: LearningStreakPayload, context: TemplateContext
) -> RenderedEmail:
    milestone, encouragement = streak_milestone(payload.streak_days)
    longest = payload.longest_streak if payload.longest_streak is not None else payload.streak_days
    html = render_document(
        heading="Learning Streak Milestone!",
        hero_icon="🔥",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph(encouragement),
            highlight_box(
                paragraph("Current Streak", style="color: #6b7280; font-size: 14px; margin: 0;"),
                paragraph(
                    f"{payload.streak_days} 🔥",
                    style="color: #f59e0b; font-size: 56px; font-weight: bold; margin: 12px 0;",
                ),
                paragraph(
                    milestone,
                    style="color: #1f2937; font-size: 18px; font-weight: bold; margin: 8px 0;",
                ),
                paragraph(
                    f"Longest Streak: {longest} days",
                    style="color: #6b7280; font-size: 14px; margin: 12px 0 0 0;",
                ),
            ),
            paragraph(
                "Don't break the chain! Keep learning today to maintain your streak.",
                style=f"{CENTERED} font-weight: bold; color: #1f2937;",
            ),
            button("Continue Learning", context.url(CAREER_DEVELOPMENT_PATH)),
            tips_box(
                "💡 Streak Benefits:",
                [
                    "Higher profile visibility to recruiters",
                    "Priority job match recommendations",
                    "Exclusive learning content unlocked",
                    "Community recognition and badges",
                ],
                bullet="✓",
            ),
        ],
        footer="Consistency is the key to success! 🌟",
    )
    return RenderedEmail(
        subject=f"{payload.streak_days} day learning streak! 🔥", html=html
    )


def _progress_bar(percentage: int) -> Html:
    return Html(
        '<div style="background-color: #e5e7eb; height: 24px; border-radius: 12px; '
        'overflow: hidden; margin: 16px 0;">'
        f'<div style="background-color: #10b981; height: 100%; width: {percentage}%;"></div>'
        "</div>"
    )


def build_goal_progress_update(
    payload: GoalProgressPayload, context: TemplateContext
) -> RenderedEmail:
    percentage = payload.progress_percentage
    complete = percentage >= 100
    goal_url = context.url(CAREER_DEVELOPMENT_PATH)
    if complete:
        follow_up = [
            paragraph(
                "🏆 Congratulations on achieving your goal! 🏆",
                style=f"{CENTERED} font-size: 18px; font-weight: bold; color: #059669;",
            ),
            button("Set Your Next Goal", goal_url),
            tips_box(
                "🎉 What's Next:",
                [
                    "Reflect on what you learned",
                    "Share your success story with the community",
                    "Set an even more ambitious goal",
                    "Help others working toward similar goals",
                ],
            ),
        ]
    else:
        follow_up = [
            paragraph(
                "Keep pushing forward! Every action brings you closer to achieving this goal."
            ),
            button("View Goal Details", goal_url),
            tips_box(
                "💡 Stay on Track:",
                [
                    "Break down remaining tasks into smaller steps",
                    "Set a daily reminder to work on this goal",
                    "Share your progress with your mentor",
                    "Celebrate small wins along the way",
                ],
            ),
        ]

    html = render_document(
        heading="Goal Progress Update! 🎯",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph(GOAL_ENCOURAGEMENT.get(percentage, GOAL_DEFAULT_ENCOURAGEMENT)),
            fact_box(
                [
                    ("Your Goal", payload.goal_title),
                    ("Milestone Reached", payload.milestone_name),
                ]
            ),
            _progress_bar(percentage),
            paragraph(
                f"{percentage}% Complete",
                style=f"{CENTERED} color: #6b7280; font-weight: bold;",
            ),
            *follow_up,
        ],
        footer="You did it! Amazing work! 🌟" if complete else "You're making great progress! 💪",
    )
    return RenderedEmail(subject=f"Progress update: {payload.goal_title}", html=html)


def build_weekly_digest(payload: WeeklyDigestPayload, context: TemplateContext) -> RenderedEmail:
    stats = payload.week_stats
    html = render_document(
        heading="Your Weekly Summary 📊",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph("Here's what happened in your career journey this week:"),
            fact_box(
                [
                    ("New Job Matches", stats.new_job_matches),
                    ("Applications", stats.applications_submitted),
                    ("Learning Time", f"{stats.learning_minutes} min"),
                    ("Achievements", stats.achievements_earned),
                ]
            ),
            tips_box(
                "📅 Upcoming Interviews:",
                [f"{item.company} - {item.date}" for item in stats.upcoming_interviews],
                bullet="📅",
            ),
            tips_box(
                "👥 Upcoming Mentorship Sessions:",
                [f"{item.mentor_name} - {item.date}" for item in stats.upcoming_sessions],
                bullet="👥",
            ),
            button("View Full Dashboard", context.url(DASHBOARD_PATH)),
            tips_box(
                "🎯 This Week's Focus:",
                [
                    "Apply to at least 5 jobs",
                    "Complete one learning module",
                    "Update your profile with new skills",
                    "Connect with one new professional",
                ],
            ),
        ],
        footer="Keep up the momentum! 🚀",
    )
    return RenderedEmail(subject="Your weekly career summary", html=html)


def build_interview_reminder_24h(
    payload: InterviewReminderPayload, context: TemplateContext
) -> RenderedEmail:
    html = render_document(
        heading="Interview Tomorrow! ⏰",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph(
                strong("Reminder:"),
                " Your interview with ",
                strong(payload.company),
                " is scheduled for tomorrow!",
            ),
            fact_box(
                [
                    ("Position", payload.job_title),
                    ("Company", payload.company),
                    ("When", f"{payload.interview_date} at {payload.interview_time}"),
                    ("Type", payload.interview_type),
                    ("Location", payload.location),
                    ("Meeting Link", _meeting_link(payload.meeting_link)),
                ],
                variant="warning",
            ),
            tips_box(
                "✅ Final Preparation Checklist:",
                [
                    "Review your resume and the job description",
                    "Research the company's recent news and culture",
                    "Prepare 3-5 questions to ask the interviewer",
                    "Practice your STAR method answers",
                    "Test your tech setup (camera, mic, internet)",
                    "Plan your outfit and background",
                    "Get a good night's sleep tonight",
                ],
                bullet="✓",
            ),
            button(
                "View Interview Details",
                payload.interview_url or context.url(APPLICATIONS_PATH),
            ),
            tips_box(
                "💡 Last-Minute Tips:",
                [
                    "Arrive 10 minutes early (or log in 5 min early for virtual)",
                    "Have a notepad ready to jot down key points",
                    "Remember to smile and make eye contact",
                    "Send a thank-you email within 24 hours",
                ],
            ),
        ],
        footer="You've got this! Believe in yourself! 🌟💪",
    )
    return RenderedEmail(
        subject=f"Interview tomorrow: {payload.job_title} at {payload.company}",
        html=html,
    )


def build_application_followup_reminder(
    payload: ApplicationFollowupPayload, context: TemplateContext
) -> RenderedEmail:
    applications = [
        card(
            paragraph(strong(item.job_title), style="margin: 0 0 4px 0;"),
            paragraph(item.company, style="color: #6b7280; font-size: 14px; margin: 0;"),
            paragraph(
                f"Applied {item.days_since_applied} days ago",
                style="color: #f59e0b; font-size: 13px; font-weight: bold; margin: 8px 0 0 0;",
            ),
        )
        for item in payload.applications
    ]
    html = render_document(
        heading="Time to Follow Up! 📧",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph(
                "You applied to these positions over a week ago. Following up can "
                "significantly increase your chances of getting an interview!"
            ),
            *applications,
            paragraph(
                "Research shows that following up within 7-10 days of applying can "
                "increase response rates by up to 30%."
            ),
            button("Generate Follow-Up Emails", context.url(APPLICATIONS_PATH)),
            tips_box(
                "📝 Follow-Up Best Practices:",
                [
                    "Keep it brief and professional (3-4 sentences)",
                    "Reaffirm your interest in the role",
                    "Mention a specific skill or achievement",
                    "Ask about the hiring timeline",
                    "Send between 10am-2pm on Tuesday-Thursday",
                ],
            ),
            tips_box(
                "💡 Quick Tip:",
                ["Use our AI follow-up email generator to create personalized messages in seconds!"],
                bullet="→",
                variant="info",
            ),
        ],
        footer="Persistence pays off! Keep pushing forward! 💪",
    )
    return RenderedEmail(subject="Time to follow up on your applications", html=html)


def interview_improvement(payload: ABTestResultsPayload) -> str:
    """Describe how much better the winning version performed.

    A runner-up without interviews has no baseline, so the winner is
    reported as the best performer instead of a percentage.
    """

    baseline = payload.runner_up.interviews
    if baseline <= 0:
        return "Best performer"
    improvement = round((payload.winner.interviews - baseline) / baseline * 100)
    if improvement <= 0:
        return "Best performer"
    return f"{improvement}% more interviews"


def build_ab_test_results(
    payload: ABTestResultsPayload, context: TemplateContext
) -> RenderedEmail:
    variants = []
    for name, stats in (("A", payload.results.version_a), ("B", payload.results.version_b)):
        crown = " 🏆" if payload.winning_version == name else ""
        variants.append(
            fact_box(
                [
                    ("Opens", stats.opens),
                    ("Clicks", stats.clicks),
                    ("Interviews", stats.interviews),
                ],
                title=f"Version {name}{crown}",
                variant="info" if crown else "tips",
            )
        )

    html = render_document(
        heading="A/B Test Results Are In! 📊",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph(
                "Your resume A/B test \"",
                strong(payload.test_name),
                "\" has collected enough data. Here are the results:",
            ),
            highlight_box(
                paragraph("Winning Version", style="color: #6b7280; font-size: 14px; margin: 0;"),
                paragraph(
                    f"Version {payload.winning_version} 🏆",
                    style="color: #10b981; font-size: 48px; font-weight: bold; margin: 12px 0;",
                ),
                paragraph(
                    interview_improvement(payload),
                    style="color: #059669; font-size: 18px; font-weight: bold; margin: 0;",
                ),
                variant="info",
            ),
            *variants,
            paragraph(
                f"We recommend using Version {payload.winning_version} for all your future applications."
            ),
            button("View Detailed Analysis", context.url(AB_TESTING_PATH)),
            tips_box(
                "💡 Key Takeaways:",
                [
                    "The winning version had better keyword optimization",
                    "Format and readability made a significant difference",
                    "Continue testing different approaches",
                    "Small changes can lead to big improvements",
                ],
            ),
        ],
        footer="Data-driven decisions lead to better results! 📈",
    )
    return RenderedEmail(subject=f"A/B Test results: {payload.test_name}", html=html)


def format_role(role: str) -> str:
    return role.replace("_", " ").upper()


def build_company_invitation(
    payload: CompanyInvitationPayload, context: TemplateContext
) -> RenderedEmail:
    html = render_document(
        heading=f"You're Invited to Join {payload.organization_name}! 🚀",
        greeting="Hello,",
        blocks=[
            paragraph(
                strong(payload.inviter_name),
                " has invited you to join ",
                strong(payload.organization_name),
                " on our platform.",
            ),
            fact_box(
                [
                    ("Organization", payload.organization_name),
                    ("Your Role", format_role(payload.role)),
                    ("Invited By", payload.inviter_name),
                ]
            ),
            paragraph("Click the button below to accept this invitation and get started:"),
            button("Accept Invitation", payload.invite_link),
            highlight_box(
                paragraph(
                    "⚠️ This invitation will expire on ",
                    strong(payload.expires_at),
                    ". Please accept it before then.",
                    style="margin: 0;",
                ),
            ),
            paragraph(
                "If you don't have an account yet, you'll be prompted to create one "
                "during the acceptance process."
            ),
        ],
        footer="If you didn't expect this invitation, you can safely ignore this email.",
    )
    return RenderedEmail(
        subject=f"You're invited to join {payload.organization_name}", html=html
    )


def build_agency_job_posted(
    payload: AgencyJobPostedPayload, context: TemplateContext
) -> RenderedEmail:
    html = render_document(
        heading="Job Posted on Your Behalf 📋",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph(
                strong(payload.agency_name),
                " has posted a new job on behalf of your organization.",
            ),
            fact_box(
                [
                    ("Position", payload.job_title),
                    ("Company", payload.company),
                    ("Location", payload.location),
                    ("Posted On", payload.posted_date),
                    ("Posted By", payload.agency_name),
                ]
            ),
            paragraph(
                "You can review the job details, monitor applications, and manage the "
                "posting through your dashboard."
            ),
            button("View Job Posting", context.url(AGENCY_JOBS_PATH)),
            tips_box(
                "💡 What You Can Do:",
                [
                    "Review and edit job details if needed",
                    "Monitor incoming applications",
                    "Provide feedback to your agency partner",
                    "Track hiring progress",
                ],
            ),
        ],
        footer=f"Questions about this posting? Contact {payload.agency_name} directly.",
    )
    return RenderedEmail(subject=f"Job posted on your behalf: {payload.job_title}", html=html)


def build_relationship_approved(
    payload: RelationshipApprovedPayload, context: TemplateContext
) -> RenderedEmail:
    html = render_document(
        heading="Partnership Approved! 🎉",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph(
                "Great news! ",
                strong(payload.employer_name),
                " has approved your agency partnership request.",
            ),
            fact_box(
                [
                    ("Employer", payload.employer_name),
                    ("Partnership Start Date", payload.start_date),
                    ("Approved On", payload.reviewed_date),
                ]
            ),
            paragraph(
                f"You can now start posting jobs on behalf of {payload.employer_name} "
                "and manage their hiring needs."
            ),
            button("View Partnership Details", context.url(AGENCY_CLIENTS_PATH)),
            tips_box(
                "🚀 Next Steps:",
                [
                    "Review partnership terms and agreement",
                    "Schedule a kickoff call with the employer",
                    "Understand their hiring needs and preferences",
                    "Start posting jobs on their behalf",
                    "Maintain regular communication",
                ],
            ),
        ],
        footer="Congratulations on the new partnership! 🤝",
    )
    return RenderedEmail(
        subject=f"Partnership approved with {payload.employer_name}! 🎉", html=html
    )


def build_relationship_declined(
    payload: RelationshipDeclinedPayload, context: TemplateContext
) -> RenderedEmail:
    html = render_document(
        heading="Partnership Request Update",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph(
                "We wanted to inform you that ",
                strong(payload.employer_name),
                " has declined your agency partnership request.",
            ),
            fact_box(
                [
                    ("Employer", payload.employer_name),
                    ("Decision Date", payload.reviewed_date),
                ],
                variant="warning",
            ),
            quote_box("Notes from Employer", payload.notes, variant="warning"),
            paragraph(
                "Don't be discouraged! There are many other employers looking for agency "
                "partnerships. Keep building relationships and exploring opportunities."
            ),
            button("Explore Other Opportunities", context.url(AGENCY_CLIENTS_PATH)),
            tips_box(
                "💡 Moving Forward:",
                [
                    "Review your partnership proposal",
                    "Consider feedback for future requests",
                    "Connect with other employers",
                    "Focus on building your agency reputation",
                ],
            ),
        ],
        footer="Keep going, the right partnerships are out there! 💪",
    )
    return RenderedEmail(
        subject=f"Partnership request update: {payload.employer_name}", html=html
    )


def build_badge_awarded(payload: BadgeAwardedPayload, context: TemplateContext) -> RenderedEmail:
    icon = BADGE_ICONS.get(payload.badge_type or "", DEFAULT_AWARD_ICON)
    html = render_document(
        heading=f"New Badge Earned! {icon}",
        greeting=greet(context.recipient_name),
        blocks=[
            paragraph("Congratulations! You've earned a new badge for your outstanding performance!"),
            highlight_box(
                paragraph(icon, style="font-size: 64px; margin: 0 0 16px 0;"),
                paragraph(
                    payload.badge_name,
                    style="color: #1f2937; font-size: 28px; font-weight: bold; margin: 0 0 8px 0;",
                ),
                paragraph(payload.description, style="color: #6b7280; margin: 0;")
                if payload.description
                else None,
                paragraph(
                    f"Awarded on {payload.awarded_date}",
                    style="color: #6b7280; font-size: 14px; margin: 16px 0 0 0;",
                ),
                variant="info",
            ),
            paragraph(
                "This badge recognizes your dedication and excellence as a recruiter. "
                "Your hard work is making a real difference!"
            ),
            button("View Your Badges", context.url(LEADERBOARD_PATH)),
            tips_box(
                "🚀 Keep Up The Momentum:",
                [
                    "Share your achievement with your team",
                    "Check the leaderboard to see where you rank",
                    "View other badges you can earn",
                    "Continue delivering exceptional results",
                ],
            ),
        ],
        footer="You're doing amazing work! Keep it up! 🌟",
    )
    return RenderedEmail(subject=f"🎉 New Badge Earned: {payload.badge_name}!", html=html)
