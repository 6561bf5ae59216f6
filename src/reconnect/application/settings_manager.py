"""Read and update the single Settings instance."""

import dataclasses
import logging
import threading

from reconnect.application.dto import Invalid, SettingsUpdate
from reconnect.application.ports import SettingsRepository
from reconnect.domain import Settings

logger = logging.getLogger(__name__)


class SettingsManager:
    """Owns Settings. Updates are merged, validated, then stored as one whole object."""

    def __init__(self, repository: SettingsRepository) -> None:
        self._repo = repository
        self._lock = threading.Lock()

    def get(self) -> Settings:
        """Return the current settings, or the defaults if none were ever saved."""
        return self._repo.get() or Settings()

    def update(self, changes: SettingsUpdate) -> Settings | Invalid:
        """Apply changes on top of the current settings. Omitted fields are kept."""
        provided = {
            name: value
            for name, value in dataclasses.asdict(changes).items()
            if value is not None
        }
        if "default_frequencies" in provided:
            provided["default_frequencies"] = tuple(provided["default_frequencies"])
        with self._lock:
            try:
                updated = dataclasses.replace(self.get(), **provided)
            except ValueError as e:
                return Invalid(reason=str(e))
            self._repo.save(updated)
        logger.info(
            "Settings updated: mode=%s countDaily=%d countWeekly=%d",
            updated.mode,
            updated.count_daily,
            updated.count_weekly,
        )
        return updated
