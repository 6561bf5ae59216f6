"""Input DTOs and result types for the application services."""

from dataclasses import dataclass

KIND_VALIDATION_ERROR = "ValidationError"
KIND_NOT_FOUND = "NotFound"


@dataclass(frozen=True)
class ContactData:
    """Contact fields supplied by a caller. lastContactedAt is never part of it."""

    full_name: str
    relationship: str = "friend"
    phone_number: str | None = None
    email: str | None = None
    frequency_days: int = 30
    priority: int = 1


@dataclass(frozen=True)
class InteractionPayload:
    """Optional content of an outreach event. message is kept only for texts."""

    message: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class SettingsUpdate:
    """Settings changes. Fields left as None keep their current value."""

    mode: str | None = None
    count_daily: int | None = None
    count_weekly: int | None = None
    default_frequencies: list[int] | None = None


# --- failure results ---


@dataclass(frozen=True)
class Invalid:
    """Input was malformed or out of range. Nothing was changed."""

    reason: str
    kind: str = KIND_VALIDATION_ERROR


@dataclass(frozen=True)
class NotFound:
    """The referenced contact does not exist. Nothing was changed."""

    contact_id: str
    kind: str = KIND_NOT_FOUND

    @property
    def reason(self) -> str:
        return f"Contact {self.contact_id} not found"
