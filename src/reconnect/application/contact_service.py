"""Contact create, update, delete, list, and demo seeding."""

import logging
from collections.abc import Callable

from reconnect.application.dto import ContactData, Invalid, NotFound
from reconnect.application.ports import ContactStore
from reconnect.domain import Contact

logger = logging.getLogger(__name__)

DEMO_CONTACTS = (
    ContactData(full_name="Maya Patel", relationship="friend", phone_number="+12025551211", frequency_days=14, priority=4),
    ContactData(full_name="Grandma Rose", relationship="family", phone_number="+12025551222", frequency_days=7, priority=5),
    ContactData(full_name="Jordan Lee", relationship="business", email="jordan@example.com", frequency_days=30, priority=3),
    ContactData(full_name="Sam Okafor", relationship="friend", phone_number="+12025551244", frequency_days=21, priority=2),
    ContactData(full_name="Priya Shah", relationship="other", frequency_days=60, priority=1),
)


class ContactService:
    """CRUD over the contact store. Never writes last_contacted_at."""

    def __init__(
        self,
        store: ContactStore,
        *,
        normalize_phone: Callable[[str], str | None] | None = None,
    ) -> None:
        self._store = store
        self._normalize_phone = normalize_phone

    def _build(self, data: ContactData, contact_id: str | None = None) -> Contact | Invalid:
        phone = (data.phone_number or "").strip() or None
        if phone and self._normalize_phone is not None:
            normalized = self._normalize_phone(phone)
            if normalized is None:
                return Invalid(reason=f"phoneNumber {phone!r} is not a valid phone number.")
            phone = normalized
        fields = dict(
            full_name=data.full_name,
            relationship=data.relationship,
            phone_number=phone,
            email=data.email,
            frequency_days=data.frequency_days,
            priority=data.priority,
        )
        if contact_id is not None:
            fields["id"] = contact_id
        try:
            return Contact(**fields)
        except ValueError as e:
            return Invalid(reason=str(e))

    def create_contact(self, data: ContactData) -> Contact | Invalid:
        """Validate and store a new contact. The id is generated here."""
        contact = self._build(data)
        if isinstance(contact, Invalid):
            return contact
        self._store.add(contact)
        return contact

    def update_contact(self, contact_id: str, data: ContactData) -> Contact | Invalid | NotFound:
        """Replace a contact's editable fields. id and last_contacted_at are kept."""
        if self._store.get_by_id(contact_id) is None:
            return NotFound(contact_id=contact_id)
        contact = self._build(data, contact_id=contact_id)
        if isinstance(contact, Invalid):
            return contact
        if not self._store.update(contact):
            return NotFound(contact_id=contact_id)
        return self._store.get_by_id(contact_id) or NotFound(contact_id=contact_id)

    def delete_contact(self, contact_id: str) -> bool:
        """Remove a contact. Returns False if it does not exist."""
        deleted = self._store.delete(contact_id)
        if deleted:
            logger.info("Deleted contact %s", contact_id)
        return deleted

    def get_contact(self, contact_id: str) -> Contact | None:
        return self._store.get_by_id(contact_id)

    def list_contacts(self) -> list[Contact]:
        return self._store.list_all()

    def seed_demo_contacts(self) -> int:
        """Insert the demo contacts when the store is empty. Returns how many were created."""
        if self._store.list_all():
            return 0
        created = 0
        for data in DEMO_CONTACTS:
            if isinstance(self.create_contact(data), Contact):
                created += 1
        logger.info("Seeded %d demo contacts", created)
        return created
