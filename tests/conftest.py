"""Shared fixtures for the snippetbox test suite."""

import pytest
from fastapi.testclient import TestClient

from snippetbox.core.config import Settings
from snippetbox.main import create_app


@pytest.fixture
def settings(tmp_path):
    """Settings for an in-memory store and clipboard."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        clipboard_backend="memory",
        log_dir=tmp_path / "logs",
        log_level="INFO",
    )


@pytest.fixture
def client(settings):
    """A TestClient whose lifespan has opened the store."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client
