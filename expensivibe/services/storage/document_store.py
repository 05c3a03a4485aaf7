"""
Document Store

The single persisted document: load it, save it, export and import it.

DESIGN DECISION: The store is an explicit object handed to whoever needs
it. There is no module-level instance; the host decides when one is built
and when it goes away.

Failure handling follows one rule: never leave the caller without a
usable document.
- Unreadable or unparseable stored text -> logged, default document
- Failed serialization or write -> logged, user notified, False returned,
  no retry
- Unparseable import -> logged, False returned, store untouched

Every read-modify-write goes through transaction(), which holds the
store's lock for the whole load/mutate/save sequence. Without it two
writers sharing a store could each save a document that drops the
other's change.
"""

import json
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

import structlog
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from expensivibe.models.entities import Document
from expensivibe.notifications import Notifier
from expensivibe.services.storage.interface import (
    DocumentBackend,
    DocumentShapeError,
    StorageError,
)


logger = structlog.get_logger(__name__)

DEFAULT_STORAGE_KEY = "fgexpensivibe_data"
DEFAULT_EXPORT_FILENAME = "expensivibe_data.json"

DocumentSubscriber = Callable[[Document], None]


class DocumentStore:
    """
    Load/save of the whole document over a DocumentBackend.

    Subscribers registered with subscribe() receive a copy of the document
    after every successful save.
    """

    def __init__(
        self,
        backend: DocumentBackend,
        key: str = DEFAULT_STORAGE_KEY,
        notifier: Optional[Notifier] = None,
        export_filename: str = DEFAULT_EXPORT_FILENAME,
        strict_import: bool = False,
    ):
        self._backend = backend
        self._key = key
        self._notifier = notifier or Notifier()
        self._export_filename = export_filename
        self._strict_import = strict_import
        self._lock = threading.RLock()
        self._subscribers: list[DocumentSubscriber] = []

    @property
    def key(self) -> str:
        return self._key

    @property
    def notifier(self) -> Notifier:
        return self._notifier

    # -------------------------------------------------------------------------
    # Raw access
    # -------------------------------------------------------------------------

    def _read_raw(self) -> Optional[Any]:
        """Parsed JSON of the stored text, or None if missing or unusable."""
        try:
            text = self._backend.read(self._key)
        except StorageError as e:
            logger.error("document_read_failed", key=self._key, error=str(e))
            return None

        if text is None:
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logger.error("document_parse_failed", key=self._key, error=str(e))
            return None

    def _write_text(self, text: str) -> bool:
        try:
            self._backend.write(self._key, text)
        except StorageError as e:
            logger.error("document_save_failed", key=self._key, error=str(e))
            self._notifier.error("Failed to save data", error=str(e))
            return False
        return True

    def _serialize(self, document: Document) -> Optional[str]:
        try:
            return json.dumps(document.to_json_dict(), ensure_ascii=False)
        except (PydanticSerializationError, TypeError, ValueError) as e:
            logger.error("document_save_failed", key=self._key, error=str(e))
            self._notifier.error("Failed to save data", error=str(e))
            return None

    @staticmethod
    def _parse(raw: Any) -> Document:
        try:
            return Document.model_validate(raw)
        except ValidationError as e:
            raise DocumentShapeError(
                f"Stored data does not match the document layout: "
                f"{e.error_count()} problem(s)"
            ) from e

    # -------------------------------------------------------------------------
    # Document operations
    # -------------------------------------------------------------------------

    def load(self) -> Document:
        """
        Return the current document.

        Falls back to the default document when nothing is stored or the
        stored text does not parse.

        Raises:
            DocumentShapeError: If the stored JSON parses but has the wrong
                layout (possible after an unchecked import)
        """
        with self._lock:
            raw = self._read_raw()
        if raw is None:
            return Document.default()
        return self._parse(raw)

    def save(self, document: Document) -> bool:
        """
        Serialize and write the whole document.

        Returns True if written. On failure the user is notified and the
        caller's in-memory document is left as it is.
        """
        text = self._serialize(document)
        if text is None:
            return False
        with self._lock:
            saved = self._write_text(text)
        if saved:
            self._publish(document)
        return saved

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """
        Load the document, hand it to the block, save it afterwards.

        The document is saved only if the block finishes without raising
        and actually changed it.
        """
        with self._lock:
            document = self.load()
            original = document.model_copy(deep=True)
            yield document
            if document != original:
                self.save(document)

    def clear(self) -> bool:
        """Overwrite the stored document with the default document."""
        cleared = self.save(Document.default())
        if cleared:
            self._notifier.success("All data has been cleared")
        return cleared

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def export_snapshot(self) -> str:
        """
        Pretty-printed JSON of the current document, for backups.

        The stored JSON is exported as stored, so keys the models do not
        know about survive an export/import round trip.
        """
        with self._lock:
            raw = self._read_raw()
        if raw is None:
            raw = Document.default().to_json_dict()
        return json.dumps(raw, indent=2, ensure_ascii=False)

    def export_to_file(self, directory: Path | str = ".") -> Path:
        """
        Write the snapshot to <directory>/<export filename>.

        Raises:
            StorageError: If the file cannot be written
        """
        path = Path(directory).expanduser() / self._export_filename
        snapshot = self.export_snapshot()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(snapshot, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to export to {path}: {e}") from e
        logger.info("snapshot_exported", path=str(path))
        self._notifier.success("Data exported successfully", path=str(path))
        return path

    def import_snapshot(self, text: str) -> bool:
        """
        Replace the stored document with the JSON in text.

        Any syntactically valid JSON is stored as-is; the layout is only
        checked when the store was built with strict_import=True.

        Returns False (store untouched) if text is empty or not JSON.
        """
        if not text or not text.strip():
            logger.warning("snapshot_import_empty", key=self._key)
            self._notifier.error("No data to import")
            return False

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("snapshot_import_parse_failed", key=self._key, error=str(e))
            self._notifier.error("Failed to import data", error=str(e))
            return False

        document: Optional[Document] = None
        try:
            document = self._parse(raw)
        except DocumentShapeError as e:
            if self._strict_import:
                logger.warning("snapshot_import_rejected", key=self._key, error=str(e))
                self._notifier.error("Failed to import data", error=str(e))
                return False
            logger.warning("snapshot_import_unchecked_shape", key=self._key, error=str(e))

        with self._lock:
            imported = self._write_text(json.dumps(raw, ensure_ascii=False))

        if imported:
            logger.info("snapshot_imported", key=self._key)
            self._notifier.success("Data imported successfully")
            if document is not None:
                self._publish(document)
        return imported

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def subscribe(self, callback: DocumentSubscriber) -> Callable[[], None]:
        """
        Call callback with a copy of the document after every successful save.

        Returns a callable that unsubscribes.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, document: Document) -> None:
        for callback in list(self._subscribers):
            try:
                callback(document.model_copy(deep=True))
            except Exception:
                logger.exception("document_subscriber_failed", key=self._key)

    def close(self) -> None:
        """Drop all subscribers. The backend is left as it is."""
        self._subscribers.clear()
