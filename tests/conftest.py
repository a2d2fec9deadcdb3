from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from request_sessions.api.app import create_app
from request_sessions.config.settings import Settings, get_settings
from request_sessions.infra.cookie_store import CookieSessionStore
from request_sessions.infra.session_store_memory import InMemorySessionStore
from tests.helpers.session_fakes import TEST_ENCRYPTION_KEY, FakeClock, FakeCookies


@pytest.fixture()
def cookies() -> FakeCookies:
    return FakeCookies()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def memory_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture()
def cookie_store() -> CookieSessionStore:
    return CookieSessionStore(TEST_ENCRYPTION_KEY)


@pytest.fixture()
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    return Settings(_env_file=None)


@pytest.fixture()
def client(settings: Settings, memory_store: InMemorySessionStore):
    app = create_app(settings, store=memory_store)
    with TestClient(app) as test_client:
        yield test_client
