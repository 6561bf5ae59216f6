"""
Reconnect core: clean-architecture layout.

- domain: entities (Contact, Interaction, Settings) and the recommendation engine. No outer dependencies.
- application: use cases (ContactService, InteractionRecorder, SettingsManager, SuggestionService), ports, DTOs.
- infrastructure: adapters (in-memory and Neo4j stores, phone normalization).
"""

from reconnect.application import (
    ContactData,
    ContactService,
    ContactStore,
    InteractionLedger,
    InteractionPayload,
    InteractionRecorder,
    Invalid,
    NotFound,
    SettingsManager,
    SettingsRepository,
    SettingsUpdate,
    SuggestionService,
)
from reconnect.domain import Contact, Interaction, Settings, recommend
from reconnect.infrastructure import (
    InMemoryContactStore,
    InMemoryInteractionLedger,
    InMemorySettingsRepository,
    Neo4jContactStore,
    Neo4jInteractionLedger,
    Neo4jSettingsRepository,
)

__all__ = [
    "Contact",
    "ContactData",
    "ContactService",
    "ContactStore",
    "InMemoryContactStore",
    "InMemoryInteractionLedger",
    "InMemorySettingsRepository",
    "Interaction",
    "InteractionLedger",
    "InteractionPayload",
    "InteractionRecorder",
    "Invalid",
    "Neo4jContactStore",
    "Neo4jInteractionLedger",
    "Neo4jSettingsRepository",
    "NotFound",
    "Settings",
    "SettingsManager",
    "SettingsRepository",
    "SettingsUpdate",
    "SuggestionService",
    "recommend",
]
