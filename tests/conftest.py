"""
tests/conftest.py -- Shared test fixtures for ProjectHub.

This module provides:
  - make_settings(): Settings with a fixed test secret and cheap bcrypt cost
  - engine: a private in-memory SQLite engine for store unit tests
  - client: TestClient over a fresh app with its own shared-memory DB
  - make_user: factory that registers + logs in a user through the API

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
for the client fixture because TestClient runs route handlers in a thread
pool. Plain :memory: DBs are per-connection and would present a blank schema
to each worker thread. Each client gets a uuid-suffixed name so tests never
share rows.

JWT_SECRET is set before any project import so code paths that fall back to
get_settings() find a valid secret.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Callable, Generator

os.environ.setdefault("JWT_SECRET", "projecthub-env-test-secret-0123456789abcdef")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from api.main import create_app
from core.config import Settings
from core.db import make_engine

TEST_SECRET = "projecthub-test-secret-0123456789abcdef"


def make_settings(**overrides) -> Settings:
    """Return Settings suitable for tests; bcrypt_rounds=4 keeps hashing fast."""
    values = {
        "secret_key": TEST_SECRET,
        "database_url": f"sqlite:///file:test_projecthub_{uuid.uuid4().hex}?mode=memory&cache=shared&uri=true",
        "bcrypt_rounds": 4,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Private in-memory engine; both stores can share it within one thread."""
    eng = make_engine("sqlite:///:memory:")
    yield eng
    eng.dispose()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """TestClient over a freshly built app. Entering the context runs the lifespan."""
    app = create_app(make_settings())
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def make_user(client: TestClient) -> Callable[..., tuple[str, int]]:
    """Return a factory that registers and logs in a user, yielding (token, user_id)."""

    def _make(email: str, password: str = "pw1", name: str = "Test User") -> tuple[str, int]:
        resp = client.post("/api/register", json={"name": name, "email": email, "password": password})
        assert resp.status_code == 200, resp.text
        resp = client.post("/api/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        token = resp.json()["token"]
        return token, client.app.state.tokens.verify(token)

    return _make
