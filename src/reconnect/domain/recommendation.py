"""Recommendation engine: rank contacts by how overdue they are for outreach.

Pure functions over a snapshot of contacts. Nothing here reads storage or
settings; callers pass the current time and the batch size explicitly.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from reconnect.domain.entities import Contact, as_utc

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class ContactScore:
    """Overdueness of one contact at a point in time."""

    contact: Contact
    days_since: float
    overdue_ratio: float
    score: float

    @property
    def due(self) -> bool:
        return self.overdue_ratio >= 1


def days_since(last_contacted_at: datetime | None, now: datetime) -> float:
    """Whole days elapsed since the last contact; inf if never contacted, never negative."""
    if last_contacted_at is None:
        return math.inf
    elapsed = as_utc(now) - as_utc(last_contacted_at)
    return max(0, elapsed // _ONE_DAY)


def priority_weight(priority: int) -> int:
    return priority


def score_contact(contact: Contact, now: datetime) -> ContactScore:
    days = days_since(contact.last_contacted_at, now)
    ratio = days / contact.frequency_days
    return ContactScore(
        contact=contact,
        days_since=days,
        overdue_ratio=ratio,
        score=ratio * priority_weight(contact.priority),
    )


def _ranking_key(scored: ContactScore):
    c = scored.contact
    return (-scored.score, -c.priority, c.full_name.casefold(), c.id)


def rank(contacts: list[Contact], now: datetime) -> list[ContactScore]:
    """Score every contact and order them most overdue first."""
    return sorted((score_contact(c, now) for c in contacts), key=_ranking_key)


def recommend(contacts: list[Contact], now: datetime, count: int) -> list[Contact]:
    """Return up to count contacts, most overdue first.

    Never-contacted contacts score infinity and outrank every contacted one.
    Ties on score fall back to priority (high first), then full name
    (case-insensitive), then id. Fewer contacts than count returns them all.
    """
    if count <= 0:
        return []
    return [scored.contact for scored in rank(contacts, now)[:count]]
