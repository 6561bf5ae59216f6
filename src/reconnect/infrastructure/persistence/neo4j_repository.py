"""Neo4j implementations of the storage ports.
Graph: (c:Contact)-[:HAS_INTERACTION]->(i:Interaction); one (s:Settings {id: "settings"}).
Interaction nodes also carry contact_id, so they survive DETACH DELETE of their contact.
Timestamps are UTC ISO strings with microseconds, so string order is time order.
"""

from datetime import datetime, timezone

from reconnect.domain import Contact, Interaction, Settings

SETTINGS_ID = "settings"

_CONSTRAINT_QUERIES = (
    """
    CREATE CONSTRAINT contact_id_unique IF NOT EXISTS
    FOR (c:Contact) REQUIRE c.id IS UNIQUE
    """,
    """
    CREATE CONSTRAINT interaction_id_unique IF NOT EXISTS
    FOR (i:Interaction) REQUIRE i.id IS UNIQUE
    """,
)


def _datetime_to_iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _iso_to_datetime(s: str) -> datetime:
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def ensure_constraints(driver) -> None:
    """Create unique constraints on Contact.id and Interaction.id if missing."""
    with driver.session() as session:
        for query in _CONSTRAINT_QUERIES:
            session.run(query)


class Neo4jContactStore:
    """Stores contacts as Contact nodes. last_contacted_at is written only by Neo4jInteractionLedger."""

    def __init__(self, driver: object) -> None:
        self._driver = driver

    def add(self, contact: Contact) -> None:
        with self._driver.session() as session:
            session.run(
                """
                CREATE (c:Contact {
                    id: $id,
                    full_name: $full_name,
                    relationship: $relationship,
                    phone_number: $phone_number,
                    email: $email,
                    frequency_days: $frequency_days,
                    priority: $priority,
                    created_at: $created_at
                })
                """,
                created_at=_datetime_to_iso(datetime.now(timezone.utc)),
                **_contact_params(contact),
            )

    def update(self, contact: Contact) -> bool:
        with self._driver.session() as session:
            result = session.run(
                """
                MATCH (c:Contact {id: $id})
                SET c.full_name = $full_name,
                    c.relationship = $relationship,
                    c.phone_number = $phone_number,
                    c.email = $email,
                    c.frequency_days = $frequency_days,
                    c.priority = $priority
                RETURN 1 AS ok
                """,
                **_contact_params(contact),
            )
            return result.single() is not None

    def get_by_id(self, contact_id: str) -> Contact | None:
        with self._driver.session() as session:
            result = session.run(
                "MATCH (c:Contact {id: $id}) RETURN c",
                id=contact_id,
            )
            record = result.single()
        if not record:
            return None
        return _record_to_contact(record)

    def list_all(self) -> list[Contact]:
        with self._driver.session() as session:
            result = session.run(
                """
                MATCH (c:Contact)
                RETURN c
                ORDER BY c.created_at, c.id
                """
            )
            return [_record_to_contact(rec) for rec in result]

    def delete(self, contact_id: str) -> bool:
        with self._driver.session() as session:
            result = session.run(
                """
                MATCH (c:Contact {id: $id})
                DETACH DELETE c
                RETURN count(*) AS deleted
                """,
                id=contact_id,
            )
            record = result.single()
            return bool(record and record["deleted"])


class Neo4jInteractionLedger:
    """Append-only Interaction nodes. Append and last_contacted_at projection run in one statement."""

    def __init__(self, driver: object) -> None:
        self._driver = driver

    def append(self, interaction: Interaction) -> bool:
        created_at = _datetime_to_iso(interaction.created_at)
        with self._driver.session() as session:
            # No row when the contact is missing, so nothing is created.
            result = session.run(
                """
                MATCH (c:Contact {id: $contact_id})
                CREATE (c)-[:HAS_INTERACTION]->(i:Interaction {
                    id: $id,
                    contact_id: $contact_id,
                    type: $type,
                    message_preview: $message_preview,
                    notes: $notes,
                    created_at: $created_at
                })
                SET c.last_contacted_at = CASE
                    WHEN c.last_contacted_at IS NULL OR c.last_contacted_at < $created_at
                    THEN $created_at
                    ELSE c.last_contacted_at
                END
                RETURN i.id AS id
                """,
                id=interaction.id,
                contact_id=interaction.contact_id,
                type=interaction.type,
                message_preview=interaction.message_preview,
                notes=interaction.notes,
                created_at=created_at,
            )
            return result.single() is not None

    def list_all(self) -> list[Interaction]:
        with self._driver.session() as session:
            result = session.run(
                """
                MATCH (i:Interaction)
                RETURN i
                ORDER BY i.created_at DESC
                """
            )
            return [_record_to_interaction(rec) for rec in result]

    def list_for_contact(self, contact_id: str) -> list[Interaction]:
        with self._driver.session() as session:
            result = session.run(
                """
                MATCH (i:Interaction {contact_id: $contact_id})
                RETURN i
                ORDER BY i.created_at DESC
                """,
                contact_id=contact_id,
            )
            return [_record_to_interaction(rec) for rec in result]


class Neo4jSettingsRepository:
    """Single Settings node; save overwrites all its properties in one statement."""

    def __init__(self, driver: object) -> None:
        self._driver = driver

    def get(self) -> Settings | None:
        with self._driver.session() as session:
            result = session.run(
                "MATCH (s:Settings {id: $id}) RETURN s",
                id=SETTINGS_ID,
            )
            record = result.single()
        if not record:
            return None
        s = record["s"]
        return Settings(
            mode=s["mode"],
            count_daily=s["count_daily"],
            count_weekly=s["count_weekly"],
            default_frequencies=tuple(s.get("default_frequencies") or ()),
        )

    def save(self, settings: Settings) -> None:
        with self._driver.session() as session:
            session.run(
                """
                MERGE (s:Settings {id: $id})
                SET s = {
                    id: $id,
                    mode: $mode,
                    count_daily: $count_daily,
                    count_weekly: $count_weekly,
                    default_frequencies: $default_frequencies
                }
                """,
                id=SETTINGS_ID,
                mode=settings.mode,
                count_daily=settings.count_daily,
                count_weekly=settings.count_weekly,
                default_frequencies=list(settings.default_frequencies),
            )


def _contact_params(contact: Contact) -> dict:
    return {
        "id": contact.id,
        "full_name": contact.full_name,
        "relationship": contact.relationship,
        "phone_number": contact.phone_number,
        "email": contact.email,
        "frequency_days": contact.frequency_days,
        "priority": contact.priority,
    }


def _record_to_contact(record) -> Contact:
    c = record["c"]
    last = c.get("last_contacted_at")
    return Contact(
        id=c["id"],
        full_name=c["full_name"],
        relationship=c["relationship"],
        phone_number=c.get("phone_number"),
        email=c.get("email"),
        frequency_days=c["frequency_days"],
        priority=c["priority"],
        last_contacted_at=_iso_to_datetime(last) if last else None,
    )


def _record_to_interaction(record) -> Interaction:
    i = record["i"]
    return Interaction(
        id=i["id"],
        contact_id=i["contact_id"],
        type=i["type"],
        message_preview=i.get("message_preview"),
        notes=i.get("notes"),
        created_at=_iso_to_datetime(i["created_at"]),
    )
