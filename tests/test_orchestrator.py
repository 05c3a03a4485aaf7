"""Tests for wiring the components together."""

from decimal import Decimal

from expensivibe.config import Settings, get_settings
from expensivibe.models import ExpenseDraft, TaskDraft, Theme
from expensivibe.orchestrator import create_app_components, create_backend
from expensivibe.services.storage import InMemoryBackend, JsonFileBackend, StorageError


class TestCreateBackend:
    """Tests for backend selection."""

    def test_file_backend_by_default(self, monkeypatch, tmp_path):
        """Test the configured data directory is used."""
        monkeypatch.setenv("EXPENSIVIBE_STORAGE_DATA_DIR", str(tmp_path))
        backend = create_backend(Settings())
        assert isinstance(backend, JsonFileBackend)
        assert backend.data_dir == tmp_path

    def test_memory_backend(self, monkeypatch):
        """Test the memory backend can be selected from the environment."""
        monkeypatch.setenv("EXPENSIVIBE_STORAGE_BACKEND", "memory")
        assert isinstance(create_backend(Settings()), InMemoryBackend)


class TestCreateAppComponents:
    """Tests for the composition root."""

    def test_components_share_one_store(self, components):
        """Test every repository reads and writes the same document."""
        components.tasks.add(TaskDraft(title="A"))
        components.expenses.add(ExpenseDraft(amount=Decimal("4"), description="Tea"))
        components.settings.set_theme(Theme.DARK)

        document = components.store.load()
        assert len(document.tasks) == 1
        assert len(document.expenses) == 1
        assert document.settings.theme == Theme.DARK

    def test_save_failure_reaches_sinks(self, components, monkeypatch):
        """Test a failed write is shown through the notifier sinks."""
        seen = []
        components.notifier.add_sink(seen.append)

        def refuse(key, text):
            raise StorageError("disk full")

        monkeypatch.setattr(components.store._backend, "write", refuse)
        components.tasks.add(TaskDraft(title="A"))

        assert [n.message for n in seen] == ["Failed to save data"]

    def test_close_drops_subscribers_and_sinks(self, components):
        """Test close() detaches host callbacks."""
        documents, notifications = [], []
        components.store.subscribe(documents.append)
        components.notifier.add_sink(notifications.append)

        components.close()
        components.tasks.add(TaskDraft(title="A"))
        components.notifier.info("after close")

        assert documents == []
        assert notifications == []

    def test_memory_backend_from_environment(self, monkeypatch, tmp_path):
        """Test the environment can keep everything off disk."""
        monkeypatch.setenv("EXPENSIVIBE_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("EXPENSIVIBE_STORAGE_DATA_DIR", str(tmp_path / "data"))
        get_settings.cache_clear()
        try:
            app = create_app_components(configure_logs=False)
            app.tasks.add(TaskDraft(title="A"))
            assert len(app.tasks.get_all()) == 1
            app.close()
        finally:
            get_settings.cache_clear()

        assert not (tmp_path / "data").exists()

    def test_strict_lookups_from_settings(self, monkeypatch):
        """Test repository strictness follows the settings."""
        monkeypatch.setenv("EXPENSIVIBE_STRICT_LOOKUPS", "true")
        app = create_app_components(
            settings=Settings(),
            backend=InMemoryBackend(),
            configure_logs=False,
        )
        assert app.tasks._strict_lookups is True
        app.close()
