"""Unit tests for SuggestionService: default count from Settings, validation, fresh snapshots."""

from datetime import datetime, timedelta, timezone

from reconnect.application import (
    ContactData,
    ContactService,
    InteractionRecorder,
    Invalid,
    SettingsManager,
    SettingsUpdate,
    SuggestionService,
)
from reconnect.infrastructure import (
    InMemoryContactStore,
    InMemoryInteractionLedger,
    InMemorySettingsRepository,
)

NOW = datetime(2026, 6, 1, 8, 0, tzinfo=timezone.utc)


def _setup(n_contacts: int = 12):
    store = InMemoryContactStore()
    settings = SettingsManager(InMemorySettingsRepository())
    contacts = ContactService(store)
    for i in range(n_contacts):
        contacts.create_contact(ContactData(full_name=f"Person {i:02d}"))
    recorder = InteractionRecorder(store, InMemoryInteractionLedger(store), clock=lambda: NOW)
    suggestions = SuggestionService(store, settings, clock=lambda: NOW)
    return store, settings, recorder, suggestions


def test_default_mode_and_count_from_settings() -> None:
    _, _, _, suggestions = _setup()
    assert len(suggestions.suggest()) == 3


def test_weekly_mode_uses_weekly_count() -> None:
    _, _, _, suggestions = _setup()
    assert len(suggestions.suggest(mode="weekly")) == 10


def test_explicit_count_overrides_settings() -> None:
    _, _, _, suggestions = _setup()
    assert len(suggestions.suggest(mode="daily", count=5)) == 5


def test_settings_change_affects_next_default_only() -> None:
    _, settings, _, suggestions = _setup()
    settings.update(SettingsUpdate(mode="weekly", count_weekly=4))
    assert len(suggestions.suggest()) == 4
    assert len(suggestions.suggest(mode="daily")) == 3


def test_invalid_mode_and_count() -> None:
    _, _, _, suggestions = _setup()
    assert isinstance(suggestions.suggest(mode="hourly"), Invalid)
    assert isinstance(suggestions.suggest(count=0), Invalid)
    assert isinstance(suggestions.suggest(count=-3), Invalid)


def test_empty_store_returns_empty_list() -> None:
    _, _, _, suggestions = _setup(n_contacts=0)
    assert suggestions.suggest() == []


def test_recorded_interaction_visible_in_next_suggestion() -> None:
    store, _, recorder, suggestions = _setup(n_contacts=2)
    first = suggestions.suggest(count=1)[0]
    recorder.record(first.id, "call", now=NOW - timedelta(hours=1))

    again = suggestions.suggest(count=2)
    assert again[-1].id == first.id
    assert again[-1].last_contacted_at == NOW - timedelta(hours=1)
