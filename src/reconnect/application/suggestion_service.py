"""Suggest who to contact next, from a fresh snapshot on every call."""

from collections.abc import Callable
from datetime import datetime

from reconnect.application.dto import Invalid
from reconnect.application.ports import ContactStore
from reconnect.application.settings_manager import SettingsManager
from reconnect.domain import Contact, recommend
from reconnect.domain.entities import MODES, utcnow


class SuggestionService:
    """Resolves mode and count from Settings, then runs the recommendation engine."""

    def __init__(
        self,
        contacts: ContactStore,
        settings: SettingsManager,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._contacts = contacts
        self._settings = settings
        self._clock = clock

    def suggest(
        self,
        mode: str | None = None,
        count: int | None = None,
        now: datetime | None = None,
    ) -> list[Contact] | Invalid:
        settings = self._settings.get()
        mode = mode or settings.mode
        if mode not in MODES:
            return Invalid(reason=f"mode must be one of {', '.join(MODES)}.")
        if count is None:
            count = settings.count_for(mode)
        if count <= 0:
            return Invalid(reason="count must be a positive integer.")
        return recommend(self._contacts.list_all(), now or self._clock(), count)
