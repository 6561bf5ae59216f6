"""Unit tests for InteractionRecorder and the in-memory ledger."""

import threading
from datetime import datetime, timedelta, timezone

from reconnect.application import (
    ContactData,
    ContactService,
    InteractionPayload,
    InteractionRecorder,
    Invalid,
    NotFound,
)
from reconnect.domain import Contact, Interaction, recommend
from reconnect.infrastructure import InMemoryContactStore, InMemoryInteractionLedger

T0 = datetime(2026, 5, 1, 9, 0, tzinfo=timezone.utc)


def _setup():
    store = InMemoryContactStore()
    ledger = InMemoryInteractionLedger(store)
    recorder = InteractionRecorder(store, ledger, clock=lambda: T0)
    contacts = ContactService(store)
    return store, ledger, recorder, contacts


def _add(contacts: ContactService, name: str = "Alice", **kwargs) -> Contact:
    created = contacts.create_contact(ContactData(full_name=name, **kwargs))
    assert isinstance(created, Contact)
    return created


def test_record_sets_last_contacted_at() -> None:
    store, _, recorder, contacts = _setup()
    alice = _add(contacts)
    t = T0 + timedelta(hours=3)

    result = recorder.record(alice.id, "call", now=t)
    assert isinstance(result, Interaction)
    assert result.created_at == t
    assert store.get_by_id(alice.id).last_contacted_at == t


def test_record_defaults_to_clock() -> None:
    store, _, recorder, contacts = _setup()
    alice = _add(contacts)
    result = recorder.record(alice.id, "call")
    assert result.created_at == T0
    assert store.get_by_id(alice.id).last_contacted_at == T0


def test_text_keeps_message_as_preview() -> None:
    _, _, recorder, contacts = _setup()
    alice = _add(contacts)
    recorder.record(alice.id, "text", "hello")

    listed = recorder.list_interactions()
    assert len(listed) == 1
    assert listed[0].type == "text"
    assert listed[0].message_preview == "hello"


def test_long_text_truncated_to_140() -> None:
    _, _, recorder, contacts = _setup()
    alice = _add(contacts)
    result = recorder.record(alice.id, "text", InteractionPayload(message="x" * 300))
    assert len(result.message_preview) == 140


def test_call_never_carries_preview() -> None:
    _, _, recorder, contacts = _setup()
    alice = _add(contacts)
    result = recorder.record(
        alice.id, "call", InteractionPayload(message="ignored", notes="Talked about the trip")
    )
    assert result.message_preview is None
    assert result.notes == "Talked about the trip"


def test_empty_text_has_no_preview() -> None:
    _, _, recorder, contacts = _setup()
    alice = _add(contacts)
    assert recorder.record(alice.id, "text", "").message_preview is None


def test_unknown_type_is_invalid_and_changes_nothing() -> None:
    store, _, recorder, contacts = _setup()
    alice = _add(contacts)
    result = recorder.record(alice.id, "email", "hi")
    assert isinstance(result, Invalid)
    assert result.kind == "ValidationError"
    assert recorder.list_interactions() == []
    assert store.get_by_id(alice.id).last_contacted_at is None


def test_unknown_contact_is_not_found() -> None:
    _, _, recorder, _ = _setup()
    result = recorder.record("nonexistent-uuid", "call")
    assert isinstance(result, NotFound)
    assert result.contact_id == "nonexistent-uuid"
    assert result.kind == "NotFound"
    assert recorder.list_interactions() == []


def test_interactions_listed_newest_first() -> None:
    _, _, recorder, contacts = _setup()
    alice = _add(contacts, "Alice")
    bob = _add(contacts, "Bob")
    recorder.record(alice.id, "call", now=T0)
    recorder.record(bob.id, "text", "yo", now=T0 + timedelta(days=2))
    recorder.record(alice.id, "text", "hi", now=T0 + timedelta(days=1))

    listed = recorder.list_interactions()
    assert [i.created_at for i in listed] == [
        T0 + timedelta(days=2),
        T0 + timedelta(days=1),
        T0,
    ]
    assert [i.contact_id for i in recorder.list_for_contact(alice.id)] == [alice.id, alice.id]


def test_list_for_unknown_contact_is_not_found() -> None:
    _, _, recorder, _ = _setup()
    assert isinstance(recorder.list_for_contact("missing"), NotFound)


def test_last_contacted_is_most_recent_even_if_recorded_out_of_order() -> None:
    store, _, recorder, contacts = _setup()
    alice = _add(contacts)
    later = T0 + timedelta(days=5)
    recorder.record(alice.id, "call", now=later)
    recorder.record(alice.id, "call", now=T0)
    assert store.get_by_id(alice.id).last_contacted_at == later


def test_recorded_contact_drops_to_bottom_of_suggestions() -> None:
    store, _, recorder, contacts = _setup()
    alice = _add(contacts, "Alice", priority=5)
    bob = _add(contacts, "Bob", priority=1)
    assert recommend(store.list_all(), T0, count=2)[0].id == alice.id

    recorder.record(alice.id, "call", now=T0)
    ranked = recommend(store.list_all(), T0, count=2)
    assert [c.id for c in ranked] == [bob.id, alice.id]


def test_update_contact_keeps_ledger_projection() -> None:
    store, _, recorder, contacts = _setup()
    alice = _add(contacts)
    recorder.record(alice.id, "call", now=T0)

    updated = contacts.update_contact(alice.id, ContactData(full_name="Alice Smith", priority=4))
    assert isinstance(updated, Contact)
    assert updated.last_contacted_at == T0
    assert store.get_by_id(alice.id).full_name == "Alice Smith"


def test_deleted_contact_interactions_remain() -> None:
    _, _, recorder, contacts = _setup()
    alice = _add(contacts)
    recorder.record(alice.id, "text", "bye")
    assert contacts.delete_contact(alice.id) is True

    listed = recorder.list_interactions()
    assert len(listed) == 1
    assert listed[0].contact_id == alice.id
    assert isinstance(recorder.record(alice.id, "call"), NotFound)


def test_concurrent_records_for_one_contact_keep_latest() -> None:
    store, ledger, recorder, contacts = _setup()
    alice = _add(contacts)
    times = [T0 + timedelta(minutes=i) for i in range(50)]

    threads = [
        threading.Thread(target=recorder.record, args=(alice.id, "call", None, t))
        for t in times
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(ledger.list_all()) == 50
    assert store.get_by_id(alice.id).last_contacted_at == max(times)


def test_naive_now_mixes_with_aware_timestamps() -> None:
    store, _, recorder, contacts = _setup()
    alice = _add(contacts)
    assert isinstance(recorder.record(alice.id, "call"), Interaction)

    result = recorder.record(alice.id, "text", "later", now=datetime(2030, 1, 1, 12, 0))
    assert isinstance(result, Interaction)
    expected = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert result.created_at == expected
    assert store.get_by_id(alice.id).last_contacted_at == expected
    assert [i.created_at for i in recorder.list_interactions()] == [expected, T0]


def test_unknown_contacts_leave_no_locks_behind() -> None:
    _, _, recorder, _ = _setup()
    for i in range(1000):
        assert isinstance(recorder.record(f"missing-{i}", "call"), NotFound)
    assert len(recorder._locks) == 0


def test_lock_released_after_record_and_delete() -> None:
    _, _, recorder, contacts = _setup()
    alice = _add(contacts)
    recorder.record(alice.id, "call")
    contacts.delete_contact(alice.id)
    assert isinstance(recorder.record(alice.id, "call"), NotFound)
    assert len(recorder._locks) == 0
