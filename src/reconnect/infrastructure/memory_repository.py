"""In-memory implementations of the storage ports (no DB)."""

import dataclasses
import threading
from datetime import datetime

from reconnect.domain import Contact, Interaction, Settings


class InMemoryContactStore:
    """Stores contacts in memory. Order preserved by insertion.
    last_contacted_at is only moved by mark_contacted, which the ledger calls.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_id: dict[str, Contact] = {}
        self._order: list[str] = []

    def add(self, contact: Contact) -> None:
        with self._lock:
            if contact.id in self._by_id:
                return
            self._by_id[contact.id] = dataclasses.replace(contact, last_contacted_at=None)
            self._order.append(contact.id)

    def update(self, contact: Contact) -> bool:
        with self._lock:
            current = self._by_id.get(contact.id)
            if current is None:
                return False
            self._by_id[contact.id] = dataclasses.replace(
                contact, last_contacted_at=current.last_contacted_at
            )
            return True

    def get_by_id(self, contact_id: str) -> Contact | None:
        return self._by_id.get(contact_id)

    def list_all(self) -> list[Contact]:
        with self._lock:
            return [self._by_id[cid] for cid in self._order if cid in self._by_id]

    def delete(self, contact_id: str) -> bool:
        with self._lock:
            if self._by_id.pop(contact_id, None) is None:
                return False
            self._order.remove(contact_id)
            return True

    def mark_contacted(self, contact_id: str, at: datetime) -> bool:
        """Advance last_contacted_at to at unless a later contact is already recorded."""
        with self._lock:
            current = self._by_id.get(contact_id)
            if current is None:
                return False
            last = current.last_contacted_at
            if last is None or at > last:
                self._by_id[contact_id] = dataclasses.replace(current, last_contacted_at=at)
            return True


class InMemoryInteractionLedger:
    """Append-only list of interactions, projecting last_contacted_at onto an InMemoryContactStore."""

    def __init__(self, contacts: InMemoryContactStore) -> None:
        self._contacts = contacts
        self._lock = threading.Lock()
        self._entries: list[Interaction] = []

    def append(self, interaction: Interaction) -> bool:
        with self._lock:
            if not self._contacts.mark_contacted(interaction.contact_id, interaction.created_at):
                return False
            self._entries.append(interaction)
            return True

    def list_all(self) -> list[Interaction]:
        with self._lock:
            newest_last = list(self._entries)
        # Stable sort: equal timestamps keep latest-appended first.
        return sorted(reversed(newest_last), key=lambda i: i.created_at, reverse=True)

    def list_for_contact(self, contact_id: str) -> list[Interaction]:
        return [i for i in self.list_all() if i.contact_id == contact_id]


class InMemorySettingsRepository:
    """Holds one Settings object; save swaps the reference."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings

    def get(self) -> Settings | None:
        return self._settings

    def save(self, settings: Settings) -> None:
        self._settings = settings
