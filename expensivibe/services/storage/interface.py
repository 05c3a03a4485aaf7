"""
Abstract Storage Interface

DESIGN DECISION: The document store talks to a tiny key/value interface
instead of a concrete medium. This allows us to:
1. Keep the document in a JSON file on disk (the normal case)
2. Use in-memory storage for testing
3. Add other media later without touching the store or repositories

The interface is intentionally simple: text in, text out, one key.
Serialization is the store's job, not the backend's.
"""

from abc import ABC, abstractmethod
from typing import Optional


class DocumentBackend(ABC):
    """
    Abstract interface for raw document storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """
        Read the stored text for a key.

        Args:
            key: The storage key

        Returns:
            The stored text, or None if nothing is stored

        Raises:
            StorageError: If the medium cannot be read
        """
        pass

    @abstractmethod
    def write(self, key: str, text: str) -> None:
        """
        Replace the stored text for a key.

        Args:
            key: The storage key
            text: Full serialized document

        Raises:
            QuotaExceededError: If the text does not fit
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class QuotaExceededError(StorageError):
    """Serialized document is larger than the backend allows."""
    pass


class DocumentShapeError(StorageError):
    """Stored JSON parsed but does not have the document layout."""
    pass


def check_quota(text: str, quota_bytes: int) -> None:
    """Raise QuotaExceededError if text is larger than quota_bytes (0 = unlimited)."""
    if quota_bytes <= 0:
        return
    size = len(text.encode("utf-8"))
    if size > quota_bytes:
        raise QuotaExceededError(
            f"Document is {size} bytes, quota is {quota_bytes} bytes"
        )
