"""
Task, note and expense repositories.

Besides the shared CRUD operations these carry the small list operations
the dashboard pages need: toggling a task, searching, listing note
categories.
"""

from typing import Optional

import structlog

from expensivibe.models.entities import (
    Expense,
    ExpenseDraft,
    Note,
    NoteDraft,
    Task,
    TaskDraft,
    utc_now,
)
from expensivibe.models.identifiers import generate_id
from expensivibe.repositories.base import CollectionRepository


logger = structlog.get_logger(__name__)


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


class TaskRepository(CollectionRepository[Task, TaskDraft]):
    """Tasks collection."""

    collection = "tasks"
    draft_model = TaskDraft

    def _create(self, draft: TaskDraft) -> Task:
        return Task(id=generate_id(), created_at=utc_now(), **self._draft_fields(draft))

    def toggle_completion(self, task_id: str) -> Optional[Task]:
        """
        Flip the completed flag of a task.

        Returns the updated task, or None if no task has that id.
        """
        toggled: Optional[Task] = None
        with self._store.transaction() as document:
            for index, task in enumerate(document.tasks):
                if task.id == task_id:
                    toggled = task.model_copy(update={"completed": not task.completed})
                    document.tasks[index] = toggled
                    break

        if toggled is None:
            logger.warning("toggle_target_missing", id=task_id)
        return toggled

    def search(self, term: str) -> list[Task]:
        """Tasks whose title or description contains term (case-insensitive)."""
        needle = term.lower()
        return [
            task
            for task in self.get_all()
            if _contains(task.title, needle) or _contains(task.description, needle)
        ]

    def split_by_completion(self, term: str = "") -> tuple[list[Task], list[Task]]:
        """(pending, completed) tasks matching term, each in stored order."""
        tasks = self.search(term) if term else self.get_all()
        pending = [task for task in tasks if not task.completed]
        completed = [task for task in tasks if task.completed]
        return pending, completed


class NoteRepository(CollectionRepository[Note, NoteDraft]):
    """Notes collection. updated_at is refreshed on every update."""

    collection = "notes"
    draft_model = NoteDraft

    def _create(self, draft: NoteDraft) -> Note:
        now = utc_now()
        return Note(id=generate_id(), created_at=now, updated_at=now, **self._draft_fields(draft))

    def _prepare_update(self, entity: Note) -> Note:
        return entity.model_copy(update={"updated_at": utc_now()})

    def search(self, term: str = "", category: Optional[str] = None) -> list[Note]:
        """
        Notes matching term in title or content, optionally in one category.

        category None or "all" matches every category.
        """
        needle = term.lower()
        results = []
        for note in self.get_all():
            if needle and not (_contains(note.title, needle) or _contains(note.content, needle)):
                continue
            if category not in (None, "all") and note.category != category:
                continue
            results.append(note)
        return results

    def categories(self) -> list[str]:
        """Distinct note categories in first-seen order."""
        return list(dict.fromkeys(note.category for note in self.get_all()))


class ExpenseRepository(CollectionRepository[Expense, ExpenseDraft]):
    """Expenses collection."""

    collection = "expenses"
    draft_model = ExpenseDraft

    def _create(self, draft: ExpenseDraft) -> Expense:
        return Expense(id=generate_id(), **self._draft_fields(draft))
