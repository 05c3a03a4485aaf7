"""
Data Models Package

This package contains all Pydantic models used in Expensivibe.
Everything persisted in the document must conform to these schemas.
"""

from expensivibe.models.entities import (
    Document,
    Expense,
    ExpenseDraft,
    Note,
    NoteDraft,
    Priority,
    Task,
    TaskDraft,
    Theme,
    UserSettings,
    utc_now,
)
from expensivibe.models.identifiers import generate_id
from expensivibe.models.notification import Notification, NotificationLevel
from expensivibe.models.validation import ValidationIssue, ValidationResult

__all__ = [
    # Entities
    "Document",
    "Expense",
    "ExpenseDraft",
    "Note",
    "NoteDraft",
    "Priority",
    "Task",
    "TaskDraft",
    "Theme",
    "UserSettings",
    "utc_now",
    # Identifiers
    "generate_id",
    # Notifications
    "Notification",
    "NotificationLevel",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
