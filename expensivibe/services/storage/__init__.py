"""
Storage Services Package

Provides the abstract backend interface, its JSON-file and in-memory
implementations, and the DocumentStore built on top of them.
"""

from expensivibe.services.storage.interface import (
    DocumentBackend,
    DocumentShapeError,
    NotFoundError,
    QuotaExceededError,
    StorageError,
)
from expensivibe.services.storage.file_backend import JsonFileBackend
from expensivibe.services.storage.memory_backend import InMemoryBackend
from expensivibe.services.storage.document_store import (
    DEFAULT_EXPORT_FILENAME,
    DEFAULT_STORAGE_KEY,
    DocumentStore,
    DocumentSubscriber,
)

__all__ = [
    # Interface
    "DocumentBackend",
    # Exceptions
    "DocumentShapeError",
    "NotFoundError",
    "QuotaExceededError",
    "StorageError",
    # Backends
    "InMemoryBackend",
    "JsonFileBackend",
    # Store
    "DEFAULT_EXPORT_FILENAME",
    "DEFAULT_STORAGE_KEY",
    "DocumentStore",
    "DocumentSubscriber",
]
