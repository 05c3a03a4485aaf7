"""Tests for the collection and settings repositories."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from expensivibe.models import ExpenseDraft, NoteDraft, Priority, TaskDraft, Theme, UserSettings
from expensivibe.repositories import (
    ExpenseRepository,
    NoteRepository,
    SettingsRepository,
    TaskRepository,
)
from expensivibe.services.storage import DocumentStore, InMemoryBackend, NotFoundError


@pytest.fixture
def tasks(store):
    return TaskRepository(store)


@pytest.fixture
def notes(store):
    return NoteRepository(store)


@pytest.fixture
def expenses(store):
    return ExpenseRepository(store)


class TestCollectionOperations:
    """Tests for get_all/add/update/remove shared by every collection."""

    def test_add_assigns_identity(self, tasks):
        """Test add() fills id and created_at and stores the entity."""
        task = tasks.add(TaskDraft(title="Buy milk", category="shopping"))

        assert task.id
        assert task.created_at.tzinfo is not None
        assert tasks.get_all() == [task]

    def test_add_from_dict(self, expenses):
        """Test drafts can be given as camelCase dicts."""
        expense = expenses.add({"amount": 12.5, "description": "Bus", "category": "transport"})
        assert expense.amount == Decimal("12.5")
        assert expenses.get(expense.id) == expense

    def test_add_ignores_caller_identity(self, tasks):
        """Test an id smuggled into a draft is replaced."""
        task = tasks.add({"title": "A", "id": "mine", "createdAt": "2020-01-01T00:00:00Z"})
        assert task.id != "mine"
        assert task.created_at.year != 2020

    def test_ids_are_unique_across_adds(self, notes):
        """Test a burst of adds never reuses an id."""
        ids = {notes.add(NoteDraft(title=str(i), content="c")).id for i in range(50)}
        assert len(ids) == 50

    def test_get_all_keeps_insertion_order(self, expenses):
        """Test entities come back in the order they were added."""
        for description in ("a", "b", "c"):
            expenses.add(ExpenseDraft(amount=Decimal("1"), description=description))
        assert [e.description for e in expenses.get_all()] == ["a", "b", "c"]

    def test_get_unknown_id(self, tasks):
        """Test get() of an unknown id returns None."""
        assert tasks.get("missing") is None

    def test_update_replaces_entity(self, tasks):
        """Test update() persists the new field values."""
        task = tasks.add(TaskDraft(title="Draft report"))

        tasks.update(task.model_copy(update={"priority": Priority.HIGH}))

        assert tasks.get(task.id).priority == Priority.HIGH

    def test_update_unknown_id_is_silent(self, tasks, backend):
        """Test update() of an unknown id changes nothing and returns the input."""
        task = tasks.add(TaskDraft(title="A"))
        writes = backend.writes
        ghost = task.model_copy(update={"id": "ghost", "title": "B"})

        assert tasks.update(ghost) is ghost

        assert backend.writes == writes
        assert tasks.get_all() == [task]

    def test_update_unknown_id_strict(self, store):
        """Test strict lookups turn a missing update target into an error."""
        tasks = TaskRepository(store, strict_lookups=True)
        task = tasks.add(TaskDraft(title="A"))

        with pytest.raises(NotFoundError):
            tasks.update(task.model_copy(update={"id": "ghost"}))

        assert tasks.get_all() == [task]

    def test_remove(self, notes):
        """Test remove() deletes only the matching entity."""
        keep = notes.add(NoteDraft(title="Keep", content="x"))
        drop = notes.add(NoteDraft(title="Drop", content="y"))

        notes.remove(drop.id)

        assert notes.get_all() == [keep]

    def test_remove_is_idempotent(self, notes):
        """Test removing the same id twice leaves the same collection as once."""
        keep = notes.add(NoteDraft(title="Keep", content="x"))
        drop = notes.add(NoteDraft(title="Drop", content="y"))

        notes.remove(drop.id)
        once = notes.get_all()
        notes.remove(drop.id)

        assert notes.get_all() == once == [keep]

    def test_remove_unknown_id_does_not_write(self, notes, backend):
        """Test removing an unknown id is a no-op without a write."""
        notes.add(NoteDraft(title="Keep", content="x"))
        writes = backend.writes

        notes.remove("ghost")

        assert backend.writes == writes
        assert len(notes.get_all()) == 1

    def test_add_returns_entity_when_save_fails(self, notifier):
        """Test a failed save still hands back the entity and notifies."""
        store = DocumentStore(InMemoryBackend(quota_bytes=10), notifier=notifier)
        tasks = TaskRepository(store)

        task = tasks.add(TaskDraft(title="Too big to store"))

        assert task.title == "Too big to store"
        assert tasks.get_all() == []
        assert notifier.history[-1].message == "Failed to save data"

    def test_repositories_share_one_document(self, store):
        """Test collections written through different repositories coexist."""
        tasks = TaskRepository(store)
        expenses = ExpenseRepository(store)

        tasks.add(TaskDraft(title="A"))
        expenses.add(ExpenseDraft(amount=Decimal("3"), description="Tea"))

        document = store.load()
        assert len(document.tasks) == 1
        assert len(document.expenses) == 1


class TestTaskRepository:
    """Tests for task-specific operations."""

    def test_toggle_twice_restores_state(self, tasks):
        """Test the add/toggle/toggle round trip."""
        task = tasks.add(TaskDraft(title="Buy milk", priority=Priority.LOW, category="shopping"))
        assert task.completed is False

        assert tasks.toggle_completion(task.id).completed is True
        assert tasks.get(task.id).completed is True

        tasks.toggle_completion(task.id)
        assert tasks.get(task.id) == task

    def test_toggle_unknown_id(self, tasks):
        """Test toggling an unknown id returns None."""
        assert tasks.toggle_completion("ghost") is None

    def test_search_matches_title_and_description(self, tasks):
        """Test search is case-insensitive over title and description."""
        tasks.add(TaskDraft(title="Buy MILK"))
        tasks.add(TaskDraft(title="Call", description="about the milk order"))
        tasks.add(TaskDraft(title="Gym"))

        assert [t.title for t in tasks.search("milk")] == ["Buy MILK", "Call"]

    def test_split_by_completion(self, tasks):
        """Test pending and completed tasks are separated."""
        first = tasks.add(TaskDraft(title="One"))
        tasks.add(TaskDraft(title="Two"))
        tasks.toggle_completion(first.id)

        pending, completed = tasks.split_by_completion()

        assert [t.title for t in pending] == ["Two"]
        assert [t.title for t in completed] == ["One"]

    def test_split_with_search_term(self, tasks):
        """Test split_by_completion narrows by search term first."""
        tasks.add(TaskDraft(title="Write report"))
        tasks.add(TaskDraft(title="Read book"))

        pending, completed = tasks.split_by_completion("report")

        assert [t.title for t in pending] == ["Write report"]
        assert completed == []


class TestNoteRepository:
    """Tests for note-specific operations."""

    def test_update_refreshes_updated_at(self, notes):
        """Test update() moves updated_at forward and keeps created_at."""
        note = notes.add(NoteDraft(title="Idea", content="first"))
        stale = note.model_copy(update={
            "content": "second",
            "updated_at": datetime(2000, 1, 1, tzinfo=timezone.utc),
        })

        stored = notes.update(stale)

        assert stored.content == "second"
        assert stored.created_at == note.created_at
        assert stored.updated_at >= note.updated_at
        assert notes.get(note.id) == stored

    def test_new_note_timestamps_match(self, notes):
        """Test created_at and updated_at start equal."""
        note = notes.add(NoteDraft(title="Idea", content="text"))
        assert note.created_at == note.updated_at

    def test_search_by_term_and_category(self, notes):
        """Test note search filters on text and category together."""
        notes.add(NoteDraft(title="Groceries", content="milk", category="personal"))
        notes.add(NoteDraft(title="Standup", content="milk budget", category="work"))
        notes.add(NoteDraft(title="Plan", content="trip", category="work"))

        assert len(notes.search("milk")) == 2
        assert [n.title for n in notes.search("milk", category="work")] == ["Standup"]
        assert len(notes.search(category="all")) == 3

    def test_categories_in_first_seen_order(self, notes):
        """Test categories() lists each category once."""
        for category in ("work", "personal", "work", "ideas"):
            notes.add(NoteDraft(title="t", content="c", category=category))
        assert notes.categories() == ["work", "personal", "ideas"]


class TestSettingsRepository:
    """Tests for the settings record."""

    def test_default_settings(self, store):
        """Test settings default to the system theme."""
        assert SettingsRepository(store).get() == UserSettings(theme=Theme.SYSTEM)

    def test_set_replaces_settings(self, store):
        """Test set() persists the new record."""
        settings = SettingsRepository(store)
        settings.set(UserSettings(theme=Theme.DARK))
        assert SettingsRepository(store).get().theme == Theme.DARK

    def test_set_theme_keeps_collections(self, store):
        """Test changing the theme leaves entity collections alone."""
        TaskRepository(store).add(TaskDraft(title="A"))

        SettingsRepository(store).set_theme(Theme.LIGHT)

        document = store.load()
        assert document.settings.theme == Theme.LIGHT
        assert len(document.tasks) == 1
