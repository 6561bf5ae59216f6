"""Domain entities: Contact, Interaction, and Settings."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

RELATIONSHIPS = ("friend", "family", "business", "other")
INTERACTION_CALL = "call"
INTERACTION_TEXT = "text"
INTERACTION_TYPES = (INTERACTION_CALL, INTERACTION_TEXT)
MODE_DAILY = "daily"
MODE_WEEKLY = "weekly"
MODES = (MODE_DAILY, MODE_WEEKLY)

PRIORITY_MIN = 1
PRIORITY_MAX = 5
MESSAGE_PREVIEW_MAX_LENGTH = 140


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive timestamps are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


@dataclass(frozen=True)
class Contact:
    """
    A person the user wants to stay in touch with.
    last_contacted_at is a projection of the interaction ledger; stores ignore it on write.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    full_name: str = field(default="")
    relationship: str = "friend"
    phone_number: str | None = None
    email: str | None = None
    frequency_days: int = 30
    priority: int = PRIORITY_MIN
    last_contacted_at: datetime | None = None

    def __post_init__(self):
        name = (self.full_name or "").strip()
        if not name:
            raise ValueError("Contact fullName must be non-empty.")
        object.__setattr__(self, "full_name", name)

        if self.relationship not in RELATIONSHIPS:
            raise ValueError(
                f"Contact relationship must be one of {', '.join(RELATIONSHIPS)}."
            )
        if not _is_positive_int(self.frequency_days):
            raise ValueError("Contact frequencyDays must be a positive integer.")
        if (
            not isinstance(self.priority, int)
            or isinstance(self.priority, bool)
            or not PRIORITY_MIN <= self.priority <= PRIORITY_MAX
        ):
            raise ValueError(
                f"Contact priority must be an integer between {PRIORITY_MIN} and {PRIORITY_MAX}."
            )

        email = (self.email or "").strip()
        object.__setattr__(self, "email", email or None)
        phone = (self.phone_number or "").strip()
        object.__setattr__(self, "phone_number", phone or None)


@dataclass(frozen=True)
class Interaction:
    """
    One outreach event (a call or a text).
    An Interaction is immutable once created; the ledger only grows.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    contact_id: str = field(default="")
    type: str = INTERACTION_CALL
    message_preview: str | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        object.__setattr__(self, "created_at", as_utc(self.created_at))
        if not self.contact_id:
            raise ValueError("Interaction must reference a contact.")
        if self.type not in INTERACTION_TYPES:
            raise ValueError(
                f"Interaction type must be one of {', '.join(INTERACTION_TYPES)}."
            )
        if self.type == INTERACTION_CALL and self.message_preview is not None:
            raise ValueError("Call interactions do not carry a messagePreview.")
        if (
            self.message_preview is not None
            and len(self.message_preview) > MESSAGE_PREVIEW_MAX_LENGTH
        ):
            raise ValueError(
                f"messagePreview must be at most {MESSAGE_PREVIEW_MAX_LENGTH} characters."
            )


DEFAULT_FREQUENCIES = (7, 14, 30, 90)


@dataclass(frozen=True)
class Settings:
    """
    Process-wide recommendation settings.
    default_frequencies is advisory: non-positive entries are dropped, never rejected.
    """

    mode: str = MODE_DAILY
    count_daily: int = 3
    count_weekly: int = 10
    default_frequencies: tuple[int, ...] = DEFAULT_FREQUENCIES

    def __post_init__(self):
        if self.mode not in MODES:
            raise ValueError(f"Settings mode must be one of {', '.join(MODES)}.")
        if not _is_positive_int(self.count_daily):
            raise ValueError("Settings countDaily must be a positive integer.")
        if not _is_positive_int(self.count_weekly):
            raise ValueError("Settings countWeekly must be a positive integer.")
        frequencies = tuple(
            f for f in (self.default_frequencies or ()) if _is_positive_int(f)
        )
        object.__setattr__(self, "default_frequencies", frequencies)

    def count_for(self, mode: str) -> int:
        """Default suggestion batch size for the given mode."""
        return self.count_weekly if mode == MODE_WEEKLY else self.count_daily
