"""Domain entity describing who receives an email."""

from dataclasses import dataclass

DEFAULT_RECIPIENT_NAME = "there"


@dataclass(frozen=True)
class Recipient:
    """Contact information resolved for a notification."""

    email: str
    full_name: str | None = None
    user_id: str | None = None

    @property
    def display_name(self) -> str:
        """Return the name used in greetings."""

        name = (self.full_name or "").strip()
        return name or DEFAULT_RECIPIENT_NAME


__all__ = ["DEFAULT_RECIPIENT_NAME", "Recipient"]
