"""Infrastructure layer: concrete implementations of application ports."""

from reconnect.infrastructure.memory_repository import (
    InMemoryContactStore,
    InMemoryInteractionLedger,
    InMemorySettingsRepository,
)
from reconnect.infrastructure.persistence.neo4j_repository import (
    Neo4jContactStore,
    Neo4jInteractionLedger,
    Neo4jSettingsRepository,
    ensure_constraints,
)
from reconnect.infrastructure.phone import normalize_phone, phone_normalizer

__all__ = [
    "InMemoryContactStore",
    "InMemoryInteractionLedger",
    "InMemorySettingsRepository",
    "Neo4jContactStore",
    "Neo4jInteractionLedger",
    "Neo4jSettingsRepository",
    "ensure_constraints",
    "normalize_phone",
    "phone_normalizer",
]
