"""
Core Data Models for Expensivibe

These models define the schemas for everything kept in the persisted
document. They are designed to:
1. Round-trip the stored JSON layout (camelCase keys) unchanged
2. Give Python callers snake_case attributes
3. Keep unknown keys from imported documents instead of dropping them

DESIGN DECISION: The models do NOT enforce caller-side rules such as
"title is non-empty" or "amount is positive". The store persists what it
is given; those checks live in expensivibe.validation.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    SerializerFunctionWrapHandler,
    model_serializer,
)
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


# Amounts are Decimal in Python but plain JSON numbers on disk.
Amount = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Priority(str, Enum):
    """Task priority."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Theme(str, Enum):
    """
    Theme preference.

    SYSTEM defers to the host's light/dark preference.
    """
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class StoredModel(BaseModel):
    """Base for everything that lives inside the persisted document."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    @model_serializer(mode="wrap")
    def omit_empty_fields(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        """Leave out declared fields that are None; extras are kept as stored."""
        data = handler(self)
        for name, field in type(self).model_fields.items():
            if getattr(self, name) is None:
                data.pop(field.alias or name, None)
                data.pop(name, None)
        return data


# =============================================================================
# DRAFTS - what callers supply to add()
# =============================================================================

class TaskDraft(StoredModel):
    """Fields of a task before it has an identifier."""

    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(default=None, description="Free-text details")
    completed: bool = False
    due_date: Optional[datetime] = None
    priority: Priority = Priority.MEDIUM
    category: str = Field(default="work", description="Free-text category")


class NoteDraft(StoredModel):
    """Fields of a note before it has an identifier."""

    title: str
    content: str
    category: str = "personal"


class ExpenseDraft(StoredModel):
    """Fields of an expense before it has an identifier."""

    amount: Amount = Field(..., description="Amount spent")
    description: str
    category: str = "food"
    date: datetime = Field(
        default_factory=utc_now,
        description="When the money was spent",
    )


# =============================================================================
# ENTITIES
# =============================================================================

class Task(TaskDraft):
    """A to-do item."""

    id: str = Field(..., description="Unique within the tasks collection")
    created_at: datetime = Field(default_factory=utc_now)


class Note(NoteDraft):
    """
    A free-text note.

    updated_at is refreshed by the repository on every update, so it is
    never older than created_at for notes written through it.
    """

    id: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Expense(ExpenseDraft):
    """A single spending record."""

    id: str


class UserSettings(StoredModel):
    """User preferences kept alongside the data."""

    theme: Theme = Theme.SYSTEM


# =============================================================================
# DOCUMENT - the aggregate root and unit of persistence
# =============================================================================

class Document(StoredModel):
    """
    The whole persisted state.

    It is always loaded and written as one unit; there are no partial
    writes of a single collection.
    """

    tasks: list[Task] = Field(default_factory=list)
    notes: list[Note] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    settings: UserSettings = Field(default_factory=UserSettings)

    @classmethod
    def default(cls) -> "Document":
        """Empty collections and the system theme."""
        return cls()

    def to_json_dict(self) -> dict:
        """Plain JSON-compatible dict in the stored (camelCase) layout."""
        return self.model_dump(mode="json", by_alias=True)
