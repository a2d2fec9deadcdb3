"""Testes para FirestoreSessionStore (client mockado)."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest

from request_sessions.domain.session_data import new_session_data
from request_sessions.infra.session_contract import SessionStoreError
from request_sessions.infra.session_store_firestore import FirestoreSessionStore

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


@pytest.fixture()
def firestore_client() -> MagicMock:
    return MagicMock()


def _doc_ref(client: MagicMock) -> MagicMock:
    return client.collection.return_value.document.return_value


@pytest.mark.asyncio
async def test_create_uses_document_create(firestore_client):
    store = FirestoreSessionStore(firestore_client, collection="web_sessions")
    data = new_session_data(NOW, None)

    await store.create_session("sid-1", data)

    firestore_client.collection.assert_called_with("web_sessions")
    firestore_client.collection.return_value.document.assert_called_with("sid-1")
    _doc_ref(firestore_client).create.assert_called_once_with({"data": data})


@pytest.mark.asyncio
async def test_create_conflict_raises(firestore_client):
    _doc_ref(firestore_client).create.side_effect = RuntimeError("already exists")
    store = FirestoreSessionStore(firestore_client)

    with pytest.raises(SessionStoreError):
        await store.create_session("sid-1", new_session_data(NOW, None))


@pytest.mark.asyncio
async def test_get_existing_document(firestore_client):
    data = new_session_data(NOW, None)
    data["email"] = "a@b.com"
    doc = MagicMock(exists=True)
    doc.to_dict.return_value = {"data": data}
    _doc_ref(firestore_client).get.return_value = doc
    store = FirestoreSessionStore(firestore_client)

    assert await store.get_session_by_id("sid-1") == data


@pytest.mark.asyncio
async def test_get_missing_document_returns_none(firestore_client):
    _doc_ref(firestore_client).get.return_value = MagicMock(exists=False)
    store = FirestoreSessionStore(firestore_client)

    assert await store.get_session_by_id("sid-1") is None


@pytest.mark.asyncio
async def test_get_malformed_document_returns_none(firestore_client):
    doc = MagicMock(exists=True)
    doc.to_dict.return_value = {"unexpected": True}
    _doc_ref(firestore_client).get.return_value = doc
    store = FirestoreSessionStore(firestore_client)

    assert await store.get_session_by_id("sid-1") is None


@pytest.mark.asyncio
async def test_get_backend_error_propagates(firestore_client):
    _doc_ref(firestore_client).get.side_effect = RuntimeError("unavailable")
    store = FirestoreSessionStore(firestore_client)

    with pytest.raises(SessionStoreError):
        await store.get_session_by_id("sid-1")


@pytest.mark.asyncio
async def test_persist_sets_document(firestore_client):
    store = FirestoreSessionStore(firestore_client)
    data = new_session_data(NOW, 60)

    await store.persist_session_data("sid-1", data)

    _doc_ref(firestore_client).set.assert_called_once_with({"data": data})


@pytest.mark.asyncio
async def test_delete_document(firestore_client):
    store = FirestoreSessionStore(firestore_client)

    await store.delete_session("sid-1")

    _doc_ref(firestore_client).delete.assert_called_once_with()
