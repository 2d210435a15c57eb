"""Root conftest: shared fixtures for app and client construction.

Invariants:
    - Fault-injection and logging env vars are cleared for every test
    - get_settings() cache is reset around every test
    - Settings built here never read a .env file
"""

import pytest
from httpx import ASGITransport, AsyncClient

from corsprobe.config import Settings, get_settings
from corsprobe.main import create_app


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("PREBREAK", "POSTBREAK", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def build_client(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture
def make_app():
    """Build an app with the given settings overrides, e.g. make_app(prebreak="1")."""
    def _make(**overrides):
        return create_app(Settings(_env_file=None, **overrides))
    return _make


@pytest.fixture
def make_client(make_app):
    """Async client factory: `async with make_client(postbreak="") as c: ...`."""
    def _make(**overrides):
        return build_client(make_app(**overrides))
    return _make


@pytest.fixture
async def client(make_client):
    """Client for an app with no fault switches set."""
    async with make_client() as c:
        yield c
