"""Services package."""

from expensivibe.services.storage import (
    DocumentBackend,
    DocumentShapeError,
    DocumentStore,
    InMemoryBackend,
    JsonFileBackend,
    NotFoundError,
    QuotaExceededError,
    StorageError,
)

__all__ = [
    "DocumentBackend",
    "DocumentShapeError",
    "DocumentStore",
    "InMemoryBackend",
    "JsonFileBackend",
    "NotFoundError",
    "QuotaExceededError",
    "StorageError",
]
