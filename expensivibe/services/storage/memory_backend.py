"""
In-memory storage backend.

Holds documents in a dict for the lifetime of the object. Used by tests
and by hosts that do not want anything written to disk.
"""

import threading
from typing import Optional

from expensivibe.services.storage.interface import DocumentBackend, check_quota


class InMemoryBackend(DocumentBackend):
    """Dict-backed implementation of DocumentBackend."""

    def __init__(self, quota_bytes: int = 0, initial: Optional[dict[str, str]] = None):
        self._quota_bytes = quota_bytes
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def read(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def write(self, key: str, text: str) -> None:
        check_quota(text, self._quota_bytes)
        with self._lock:
            self._data[key] = text
