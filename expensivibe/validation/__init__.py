"""Validation package."""

from expensivibe.validation.validator import (
    EntityValidationError,
    EntityValidator,
    ensure_valid,
    parse_amount,
)

__all__ = [
    "EntityValidationError",
    "EntityValidator",
    "ensure_valid",
    "parse_amount",
]
