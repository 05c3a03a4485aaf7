"""
JSON File Storage Implementation

DESIGN DECISION: One file per storage key, <data_dir>/<key>.json.
This is the on-disk counterpart of a browser's local storage entry:
1. Human-readable, easy to back up or inspect
2. No database setup required
3. Written atomically (temp file + rename), so a crash never leaves a
   half-written document behind

TRADEOFFS:
- The whole document is rewritten on every change (fine for personal data)
- Nothing coordinates two processes writing the same file
"""

import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

import structlog

from expensivibe.services.storage.interface import (
    DocumentBackend,
    StorageError,
    check_quota,
)


logger = structlog.get_logger(__name__)


class JsonFileBackend(DocumentBackend):
    """
    File-system implementation of DocumentBackend.

    The data directory is created on first write, not on construction.
    """

    def __init__(self, data_dir: Path | str, quota_bytes: int = 0):
        self._data_dir = Path(data_dir).expanduser()
        self._quota_bytes = quota_bytes
        self._lock = threading.Lock()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        """File that holds the document for a key."""
        return self._data_dir / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def write(self, key: str, text: str) -> None:
        check_quota(text, self._quota_bytes)
        path = self.path_for(key)

        with self._lock:
            try:
                self._data_dir.mkdir(parents=True, exist_ok=True)
                fd, tmp_path = tempfile.mkstemp(
                    prefix=f".{key}_", suffix=".json", dir=self._data_dir
                )
            except OSError as e:
                raise StorageError(f"Failed to prepare {path}: {e}") from e

            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                os.replace(tmp_path, path)
            except OSError as e:
                raise StorageError(f"Failed to write {path}: {e}") from e
            finally:
                if os.path.exists(tmp_path):
                    try:
                        os.remove(tmp_path)
                    except OSError:
                        logger.warning("temp_file_cleanup_failed", path=tmp_path)

        logger.debug("document_written", path=str(path), size=len(text))
