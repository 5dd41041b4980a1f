from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from auth.permissions import LEVEL_DELETE
from core import db
from helpers import ALL_RESOURCES, bearer
from main import app
from memory_store import MemoryStore


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "test-secret-0123456789abcdef0123456789")
    monkeypatch.setenv("FILES_API_URL", "http://files.test/api/v1")


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[db.get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return bearer({resource: LEVEL_DELETE for resource in ALL_RESOURCES})
