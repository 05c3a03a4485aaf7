"""Entity repositories over the document store."""

from expensivibe.repositories.base import CollectionRepository
from expensivibe.repositories.entities import (
    ExpenseRepository,
    NoteRepository,
    TaskRepository,
)
from expensivibe.repositories.settings import SettingsRepository

__all__ = [
    "CollectionRepository",
    "ExpenseRepository",
    "NoteRepository",
    "SettingsRepository",
    "TaskRepository",
]
