"""Tagged success/failure results returned by the notification pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class FailureReason(str, Enum):
    """Machine readable cause attached to a failed result."""

    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    UNKNOWN_TYPE = "unknown_type"
    INVALID_PAYLOAD = "invalid_payload"
    PROVIDER_ERROR = "provider_error"
    CONFIGURATION_ERROR = "configuration_error"
    PERSISTENCE_ERROR = "persistence_error"


@dataclass(frozen=True)
class PipelineResult:
    """Base shape shared by every pipeline operation."""

    success: bool
    error: str | None = None
    reason: FailureReason | None = None

    @property
    def is_not_found(self) -> bool:
        return self.reason is FailureReason.NOT_FOUND


@dataclass(frozen=True)
class ScheduleResult(PipelineResult):
    """Outcome of scheduling a deferred notification."""

    scheduled_for: datetime | None = None
    scheduled_notification_id: str | None = None


@dataclass(frozen=True)
class SendNowResult(PipelineResult):
    """Outcome of writing an immediate in-app notification."""

    notification_id: str | None = None


@dataclass(frozen=True)
class DispatchResult(PipelineResult):
    """Outcome of a single email dispatch attempt."""

    email_id: str | None = None
    recipient: str | None = None


@dataclass(frozen=True)
class EventResult(PipelineResult):
    """Outcome of recording an engagement event."""

    event_id: str | None = None


@dataclass(frozen=True)
class PromotionSummary:
    """Counters describing one run of the due-notification promoter."""

    processed: int = 0
    successful: int = 0
    failed: int = 0
    notification_ids: list[str] = field(default_factory=list)


__all__ = [
    "DispatchResult",
    "EventResult",
    "FailureReason",
    "PipelineResult",
    "PromotionSummary",
    "ScheduleResult",
    "SendNowResult",
]
