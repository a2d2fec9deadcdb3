"""Testes para create_session_store."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from request_sessions.config.settings import Settings
from request_sessions.infra.cookie_store import CookieSessionStore
from request_sessions.infra.session_store import create_session_store
from request_sessions.infra.session_store_firestore import FirestoreSessionStore
from request_sessions.infra.session_store_memory import InMemorySessionStore
from request_sessions.infra.session_store_redis import RedisSessionStore
from tests.helpers.session_fakes import TEST_ENCRYPTION_KEY


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_memory_backend():
    store = create_session_store(_settings(session_store_backend="memory"))

    assert isinstance(store, InMemorySessionStore)
    assert store.kind == "keyed"


def test_redis_backend_with_client():
    client = AsyncMock()

    store = create_session_store(
        _settings(session_store_backend="redis", session_redis_prefix="x:"),
        redis_client=client,
    )

    assert isinstance(store, RedisSessionStore)
    assert store._redis is client
    assert store._prefix == "x:"


def test_redis_backend_requires_url():
    with pytest.raises(ValueError, match="REDIS_URL"):
        create_session_store(_settings(session_store_backend="redis"))


def test_redis_backend_from_url():
    store = create_session_store(
        _settings(session_store_backend="redis", redis_url="redis://localhost:6379/0")
    )

    assert isinstance(store, RedisSessionStore)


def test_firestore_backend_with_client():
    client = MagicMock()

    store = create_session_store(
        _settings(session_store_backend="firestore", session_firestore_collection="web"),
        firestore_client=client,
    )

    assert isinstance(store, FirestoreSessionStore)
    assert store._collection == "web"


def test_firestore_backend_requires_project():
    with pytest.raises(ValueError, match="FIRESTORE_PROJECT_ID"):
        create_session_store(_settings(session_store_backend="firestore"))


def test_cookie_backend():
    store = create_session_store(
        _settings(
            session_store_backend="cookie",
            session_encryption_key=TEST_ENCRYPTION_KEY,
            session_data_cookie_name="payload",
            session_cookie_secure=True,
        )
    )

    assert isinstance(store, CookieSessionStore)
    assert store.kind == "cookie"
    assert store.session_data_cookie_name == "payload"
    assert store.cookie_set_delete_options["secure"] is True


def test_cookie_backend_requires_key():
    with pytest.raises(ValueError, match="SESSION_ENCRYPTION_KEY"):
        create_session_store(_settings(session_store_backend="cookie"))


def test_unknown_backend():
    with pytest.raises(ValueError, match="não reconhecido"):
        create_session_store(_settings(session_store_backend="sqlite"))
