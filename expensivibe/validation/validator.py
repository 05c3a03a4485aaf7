"""
Entity Validation

DESIGN DECISION: The store persists whatever it is given. The rules a
user-facing form enforces (a title is required, an amount must be a
positive number) are checked here, BEFORE add() or update() is called.

Input may be a draft, a full entity, or the raw dict a form produced
(amount still a string, say), so values are read loosely and never
coerced in place.

IMPORTANT: Validation NEVER silently fixes issues.
It reports them for the caller to show.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from pydantic import BaseModel

from expensivibe.models.validation import ValidationIssue, ValidationResult


FormData = Union[BaseModel, dict[str, Any]]


class EntityValidationError(ValueError):
    """Raised by ensure_valid() when a result carries errors."""

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.first_error or "Validation failed")


def _value(data: FormData, name: str) -> Any:
    if isinstance(data, BaseModel):
        return getattr(data, name, None)
    return data.get(name)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_amount(value: Any) -> Optional[Decimal]:
    """Amount as a finite Decimal, or None if it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


class EntityValidator:
    """Checks task, note and expense input the way the entry forms do."""

    def _require(
        self,
        data: FormData,
        field: str,
        message: str,
        issues: list[ValidationIssue],
    ) -> None:
        if _is_blank(_value(data, field)):
            issues.append(
                ValidationIssue(field=field, issue_type="missing", message=message)
            )

    def validate_task(self, data: FormData) -> ValidationResult:
        issues: list[ValidationIssue] = []
        self._require(data, "title", "Title is required", issues)
        return ValidationResult(entity_type="task", issues=issues)

    def validate_note(self, data: FormData) -> ValidationResult:
        issues: list[ValidationIssue] = []
        self._require(data, "title", "Title is required", issues)
        self._require(data, "content", "Content is required", issues)
        return ValidationResult(entity_type="note", issues=issues)

    def validate_expense(self, data: FormData) -> ValidationResult:
        issues: list[ValidationIssue] = []

        amount = parse_amount(_value(data, "amount"))
        if amount is None or amount <= 0:
            issues.append(
                ValidationIssue(
                    field="amount",
                    issue_type="not_positive" if amount is not None else "invalid_format",
                    message="Please enter a valid amount",
                    suggested_fix="Enter a number greater than zero",
                )
            )

        self._require(data, "description", "Description is required", issues)
        return ValidationResult(entity_type="expense", issues=issues)


def ensure_valid(result: ValidationResult) -> ValidationResult:
    """Return result unchanged, or raise EntityValidationError if it has errors."""
    if result.has_errors:
        raise EntityValidationError(result)
    return result
