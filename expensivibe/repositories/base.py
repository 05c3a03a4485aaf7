"""
Collection repository base.

Every entity collection in the document (tasks, notes, expenses) gets the
same four operations: get_all, add, update, remove. Each one is a single
store transaction over the whole document.

DESIGN DECISION: update() of an unknown identifier is a silent no-op that
returns the input unchanged. It is logged as a warning, and hosts that
want a hard failure construct the repository with strict_lookups=True.
remove() of an unknown identifier is always a no-op.
"""

from typing import Any, ClassVar, Generic, Optional, TypeVar, Union

import structlog
from pydantic import BaseModel

from expensivibe.models.entities import Document
from expensivibe.services.storage import DocumentStore, NotFoundError


logger = structlog.get_logger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)
DraftT = TypeVar("DraftT", bound=BaseModel)

# Both spellings, since drafts keep unknown keys as given.
_RESERVED_FIELDS = ("id", "created_at", "createdAt", "updated_at", "updatedAt")


class CollectionRepository(Generic[EntityT, DraftT]):
    """
    CRUD over one list inside the document.

    Subclasses name the collection and say how a draft becomes an entity.
    """

    collection: ClassVar[str]
    draft_model: ClassVar[type[BaseModel]]

    def __init__(self, store: DocumentStore, strict_lookups: bool = False):
        self._store = store
        self._strict_lookups = strict_lookups

    def _items(self, document: Document) -> list[EntityT]:
        return getattr(document, self.collection)

    def _create(self, draft: DraftT) -> EntityT:
        raise NotImplementedError

    def _prepare_update(self, entity: EntityT) -> EntityT:
        """Hook for fields the repository owns on update (e.g. timestamps)."""
        return entity

    @staticmethod
    def _draft_fields(draft: DraftT) -> dict[str, Any]:
        """Draft fields minus anything the repository assigns itself."""
        fields = draft.model_dump()
        for reserved in _RESERVED_FIELDS:
            fields.pop(reserved, None)
        return fields

    def _coerce_draft(self, fields: Union[DraftT, dict[str, Any]]) -> DraftT:
        if isinstance(fields, dict):
            return self.draft_model.model_validate(fields)
        return fields

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def get_all(self) -> list[EntityT]:
        """All entities in stored order. Each call returns fresh copies."""
        return list(self._items(self._store.load()))

    def get(self, entity_id: str) -> Optional[EntityT]:
        for entity in self._items(self._store.load()):
            if entity.id == entity_id:
                return entity
        return None

    def add(self, fields: Union[DraftT, dict[str, Any]]) -> EntityT:
        """Create an entity from a draft (or a dict of draft fields) and store it."""
        entity = self._create(self._coerce_draft(fields))
        with self._store.transaction() as document:
            self._items(document).append(entity)
        logger.info("entity_added", collection=self.collection, id=entity.id)
        return entity

    def update(self, entity: EntityT) -> EntityT:
        """
        Replace the stored entity that has the same id.

        Returns the stored version, or the input unchanged if no entity
        has that id.

        Raises:
            NotFoundError: If the id is unknown and strict_lookups is on
        """
        stored: Optional[EntityT] = None
        with self._store.transaction() as document:
            items = self._items(document)
            for index, existing in enumerate(items):
                if existing.id == entity.id:
                    stored = self._prepare_update(entity)
                    items[index] = stored
                    break
            else:
                if self._strict_lookups:
                    raise NotFoundError(
                        f"No entry with id {entity.id!r} in {self.collection}"
                    )

        if stored is None:
            logger.warning(
                "update_target_missing",
                collection=self.collection,
                id=entity.id,
            )
            return entity

        logger.info("entity_updated", collection=self.collection, id=entity.id)
        return stored

    def remove(self, entity_id: str) -> None:
        """Remove the entity with this id. Unknown ids are ignored."""
        with self._store.transaction() as document:
            items = self._items(document)
            remaining = [entity for entity in items if entity.id != entity_id]
            removed = len(items) - len(remaining)
            setattr(document, self.collection, remaining)

        logger.info(
            "entity_removed",
            collection=self.collection,
            id=entity_id,
            removed=removed,
        )
