"""Shared fixtures for URL Shortener Service tests."""

from contextlib import asynccontextmanager
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from url_shortener.core.cache import get_cache
from url_shortener.core.database import Database, get_db
from url_shortener.core.exceptions import CacheMissError
from url_shortener.main import app


class FakeCache:
    """In-memory cache with TTL expiry driven by a manual clock."""

    def __init__(self):
        self.now = 0.0
        self.entries: dict[str, tuple[str, float]] = {}
        self.get_error = None
        self.put_error = None
        self.get_calls = 0
        self.put_calls = 0

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def get(self, key: str) -> str:
        self.get_calls += 1
        if self.get_error is not None:
            raise self.get_error
        entry = self.entries.get(key)
        if entry is None or entry[1] <= self.now:
            self.entries.pop(key, None)
            raise CacheMissError(key)
        return entry[0]

    async def put(self, key: str, value: str, ttl: int) -> None:
        self.put_calls += 1
        if self.put_error is not None:
            raise self.put_error
        self.entries[key] = (value, self.now + ttl)


@pytest.fixture
def test_db():
    """Create a test database instance."""
    db = Database(":memory:")
    db.init_db()
    yield db
    db.close()


@pytest.fixture
def store(test_db):
    """Wrap the test database so calls can be counted."""
    return MagicMock(wraps=test_db)


@pytest.fixture
def fake_cache():
    """Create an in-memory cache."""
    return FakeCache()


@pytest.fixture
def client(store, fake_cache):
    """Create a test client backed by the test database and fake cache."""
    app.dependency_overrides[get_db] = lambda: store
    app.dependency_overrides[get_cache] = lambda: fake_cache

    # Skip the default lifespan, which opens the configured database and Redis
    original_lifespan = app.router.lifespan_context

    @asynccontextmanager
    async def test_lifespan(app):
        yield

    app.router.lifespan_context = test_lifespan

    with TestClient(app, raise_server_exceptions=False) as client:
        yield client

    app.router.lifespan_context = original_lifespan
    app.dependency_overrides.clear()
