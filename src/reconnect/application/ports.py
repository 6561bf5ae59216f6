"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from reconnect.domain import Contact, Interaction, Settings


class ContactStore(Protocol):
    """Persists Contact records. last_contacted_at on incoming contacts is ignored;
    only the InteractionLedger moves it."""

    def add(self, contact: Contact) -> None:
        """Store a new contact."""
        ...

    def update(self, contact: Contact) -> bool:
        """Replace the editable fields of a stored contact. Returns False if not found."""
        ...

    def get_by_id(self, contact_id: str) -> Contact | None:
        """Return the contact with the given id, or None."""
        ...

    def list_all(self) -> list[Contact]:
        """Return all contacts in creation order."""
        ...

    def delete(self, contact_id: str) -> bool:
        """Remove the contact. Its interactions stay in the ledger. Returns False if not found."""
        ...


class InteractionLedger(Protocol):
    """Append-only history of interactions and sole writer of last_contacted_at."""

    def append(self, interaction: Interaction) -> bool:
        """Append the interaction and advance the contact's last_contacted_at in one step.
        Returns False, with no effect, if the contact does not exist."""
        ...

    def list_all(self) -> list[Interaction]:
        """Return every interaction, newest first."""
        ...

    def list_for_contact(self, contact_id: str) -> list[Interaction]:
        """Return one contact's interactions, newest first."""
        ...


class SettingsRepository(Protocol):
    """Holds the single Settings instance."""

    def get(self) -> Settings | None:
        """Return the stored settings, or None if never saved."""
        ...

    def save(self, settings: Settings) -> None:
        """Replace the stored settings as a whole."""
        ...
