"""
NoteStore — Test Configuration (conftest.py)
=============================================

Shared pytest fixtures for the test suite.

Fixture Hierarchy (all function-scoped):
    ├── clean_env: removes NOTESTORE_* variables (autouse)
    ├── store_dir: fresh store root inside pytest's tmp_path
    ├── note_store: NoteStore bound to store_dir
    ├── settings: Settings pointing at store_dir
    ├── app: FastAPI app built by create_app(settings)
    └── test_client: HTTPX AsyncClient talking to app over ASGI
"""

from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notestore.config import Settings
from notestore.main import create_app
from notestore.services.note_store import NoteStore

ENV_VARS = (
    "NOTESTORE_HOST",
    "NOTESTORE_PORT",
    "NOTESTORE_CACHE_DIR",
    "NOTESTORE_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep the developer's environment and any .env file out of the tests."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def store_dir(tmp_path) -> Path:
    storage_dir = tmp_path / "cache"
    storage_dir.mkdir()
    return storage_dir


@pytest.fixture
def note_store(store_dir) -> NoteStore:
    return NoteStore(store_dir)


@pytest.fixture
def settings(store_dir) -> Settings:
    return Settings(host="127.0.0.1", port=8000, cache_dir=store_dir)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the app.

    ASGITransport does not run the lifespan; store_dir already exists.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/notes")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
