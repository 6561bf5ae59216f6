"""Domain layer: entities and the recommendation engine. No dependencies on outer layers."""

from reconnect.domain.entities import Contact, Interaction, Settings
from reconnect.domain.recommendation import ContactScore, rank, recommend, score_contact

__all__ = [
    "Contact",
    "ContactScore",
    "Interaction",
    "Settings",
    "rank",
    "recommend",
    "score_contact",
]
