"""Settings repository: one record instead of a collection."""

from typing import Union

import structlog

from expensivibe.models.entities import Theme, UserSettings
from expensivibe.services.storage import DocumentStore


logger = structlog.get_logger(__name__)


class SettingsRepository:
    """Read and replace the settings record of the document."""

    def __init__(self, store: DocumentStore):
        self._store = store

    def get(self) -> UserSettings:
        return self._store.load().settings

    def set(self, settings: UserSettings) -> UserSettings:
        with self._store.transaction() as document:
            document.settings = settings
        logger.info("settings_updated", theme=settings.theme.value)
        return settings

    def set_theme(self, theme: Union[Theme, str]) -> UserSettings:
        """Replace only the theme preference."""
        current = self.get()
        return self.set(current.model_copy(update={"theme": Theme(theme)}))
