"""Application layer: use cases, ports, and DTOs. Depends only on domain."""

from reconnect.application.contact_service import ContactService
from reconnect.application.dto import (
    ContactData,
    InteractionPayload,
    Invalid,
    NotFound,
    SettingsUpdate,
)
from reconnect.application.interaction_recorder import InteractionRecorder
from reconnect.application.ports import ContactStore, InteractionLedger, SettingsRepository
from reconnect.application.settings_manager import SettingsManager
from reconnect.application.suggestion_service import SuggestionService
from reconnect.application.templates import message_templates

__all__ = [
    "ContactData",
    "ContactService",
    "ContactStore",
    "InteractionLedger",
    "InteractionPayload",
    "InteractionRecorder",
    "Invalid",
    "NotFound",
    "SettingsManager",
    "SettingsRepository",
    "SettingsUpdate",
    "SuggestionService",
    "message_templates",
]
