"""
Composition Root for Expensivibe

This module ties the components together. The host application calls
create_app_components() once, keeps the returned AppComponents for as
long as it runs, and calls close() on shutdown.

DESIGN DECISION: Nothing here is a global. Two AppComponents built over
two backends are fully independent, which is also how tests isolate
themselves.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from expensivibe.aggregations import DashboardQueries
from expensivibe.config import Settings, get_settings
from expensivibe.notifications import Notifier, configure_logging
from expensivibe.repositories import (
    ExpenseRepository,
    NoteRepository,
    SettingsRepository,
    TaskRepository,
)
from expensivibe.services.storage import (
    DocumentBackend,
    DocumentStore,
    InMemoryBackend,
    JsonFileBackend,
)
from expensivibe.validation import EntityValidator


logger = structlog.get_logger(__name__)


@dataclass
class AppComponents:
    """Everything a host needs, built over one store."""

    notifier: Notifier
    store: DocumentStore
    tasks: TaskRepository
    notes: NoteRepository
    expenses: ExpenseRepository
    settings: SettingsRepository
    dashboard: DashboardQueries
    validator: EntityValidator

    def close(self) -> None:
        """Drop subscribers and notification sinks."""
        self.store.close()
        self.notifier.clear_sinks()
        logger.info("app_components_closed", key=self.store.key)


def create_backend(settings: Settings) -> DocumentBackend:
    """Backend selected by storage settings."""
    storage = settings.storage
    if storage.backend == "memory":
        return InMemoryBackend(quota_bytes=storage.quota_bytes)
    return JsonFileBackend(storage.data_dir, quota_bytes=storage.quota_bytes)


def create_app_components(
    settings: Optional[Settings] = None,
    backend: Optional[DocumentBackend] = None,
    configure_logs: bool = True,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use (defaults to get_settings())
        backend: Storage backend to use instead of the configured one
        configure_logs: Apply the logging settings to structlog

    Returns:
        AppComponents wired over a single DocumentStore
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    app_settings = settings.app

    if configure_logs:
        configure_logging(settings.logging)

    notifier = Notifier(history_size=app_settings.notification_history)
    store = DocumentStore(
        backend or create_backend(settings),
        key=storage_settings.storage_key,
        notifier=notifier,
        export_filename=storage_settings.export_filename,
        strict_import=app_settings.strict_import,
    )

    tasks = TaskRepository(store, strict_lookups=app_settings.strict_lookups)
    notes = NoteRepository(store, strict_lookups=app_settings.strict_lookups)
    expenses = ExpenseRepository(store, strict_lookups=app_settings.strict_lookups)

    components = AppComponents(
        notifier=notifier,
        store=store,
        tasks=tasks,
        notes=notes,
        expenses=expenses,
        settings=SettingsRepository(store),
        dashboard=DashboardQueries(
            tasks,
            notes,
            expenses,
            currency_symbol=app_settings.currency_symbol,
        ),
        validator=EntityValidator(),
    )

    logger.info(
        "app_components_created",
        key=storage_settings.storage_key,
        backend=type(backend).__name__ if backend else storage_settings.backend,
    )
    return components
