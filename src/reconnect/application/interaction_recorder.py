"""Record outreach events and keep each contact's last_contacted_at derived from them."""

import logging
import threading
import weakref
from collections.abc import Callable
from datetime import datetime

from reconnect.application.dto import InteractionPayload, Invalid, NotFound
from reconnect.application.ports import ContactStore, InteractionLedger
from reconnect.domain import Interaction
from reconnect.domain.entities import (
    INTERACTION_TEXT,
    INTERACTION_TYPES,
    MESSAGE_PREVIEW_MAX_LENGTH,
    as_utc,
    utcnow,
)

logger = logging.getLogger(__name__)


class _ContactLocks:
    """One lock per contact id while some caller holds it; idle entries drop out."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = (
            weakref.WeakValueDictionary()
        )

    def __len__(self) -> int:
        return len(self._locks)

    def for_contact(self, contact_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(contact_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[contact_id] = lock
            return lock


class InteractionRecorder:
    """Validates outreach events and appends them to the ledger.
    Calls for the same contact are serialized; different contacts never share a lock.
    """

    def __init__(
        self,
        contacts: ContactStore,
        ledger: InteractionLedger,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._contacts = contacts
        self._ledger = ledger
        self._clock = clock
        self._locks = _ContactLocks()

    def record(
        self,
        contact_id: str,
        type: str,
        payload: InteractionPayload | str | None = None,
        now: datetime | None = None,
    ) -> Interaction | Invalid | NotFound:
        """Append one interaction for contact_id at time now (default: the clock).

        Texts keep at most MESSAGE_PREVIEW_MAX_LENGTH characters of the message;
        calls never keep a message. A bare string payload is the message.
        Either the interaction is appended and last_contacted_at advanced, or nothing changes.
        """
        if type not in INTERACTION_TYPES:
            return Invalid(
                reason=f"Interaction type must be one of {', '.join(INTERACTION_TYPES)}."
            )
        if isinstance(payload, str):
            payload = InteractionPayload(message=payload)
        payload = payload or InteractionPayload()

        preview = None
        if type == INTERACTION_TEXT and payload.message:
            preview = payload.message[:MESSAGE_PREVIEW_MAX_LENGTH]
        notes = (payload.notes or "").strip() or None

        created_at = as_utc(now or self._clock())
        if self._contacts.get_by_id(contact_id) is None:
            return NotFound(contact_id=contact_id)

        with self._locks.for_contact(contact_id):
            # Re-check: the contact may have been deleted meanwhile.
            if self._contacts.get_by_id(contact_id) is None:
                return NotFound(contact_id=contact_id)
            interaction = Interaction(
                contact_id=contact_id,
                type=type,
                message_preview=preview,
                notes=notes,
                created_at=created_at,
            )
            if not self._ledger.append(interaction):
                return NotFound(contact_id=contact_id)

        logger.info(
            "Recorded %s interaction %s for contact %s", type, interaction.id, contact_id
        )
        return interaction

    def list_interactions(self) -> list[Interaction]:
        """All interactions, newest first."""
        return self._ledger.list_all()

    def list_for_contact(self, contact_id: str) -> list[Interaction] | NotFound:
        if self._contacts.get_by_id(contact_id) is None:
            return NotFound(contact_id=contact_id)
        return self._ledger.list_for_contact(contact_id)
