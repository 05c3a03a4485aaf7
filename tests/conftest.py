"""Shared fixtures: every test gets its own in-memory store."""

import pytest

from expensivibe.config import Settings
from expensivibe.notifications import Notifier
from expensivibe.orchestrator import create_app_components
from expensivibe.services.storage import DocumentStore, InMemoryBackend


class CountingBackend(InMemoryBackend):
    """In-memory backend that counts writes."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.writes = 0

    def write(self, key, text):
        super().write(key, text)
        self.writes += 1


@pytest.fixture
def backend():
    return CountingBackend()


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def store(backend, notifier):
    return DocumentStore(backend, notifier=notifier)


@pytest.fixture
def components(backend):
    app = create_app_components(
        settings=Settings(),
        backend=backend,
        configure_logs=False,
    )
    yield app
    app.close()
