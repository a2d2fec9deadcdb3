"""Implementação de KeyedSessionStore usando Firestore."""

from __future__ import annotations

import logging

from request_sessions.domain.session_data import (
    SessionData,
    SessionDataError,
    validate_session_data,
)
from request_sessions.infra.session_contract import KeyedSessionStore, SessionStoreError
from request_sessions.observability.logging import get_logger
from request_sessions.utils.ids import mask_session_id

logger: logging.Logger = get_logger(__name__)


class FirestoreSessionStore(KeyedSessionStore):
    """Armazenamento de sessão em Firestore.

    Coleção: {collection}/{session_id}, dados sob o campo "data".
    Usa o client síncrono do Firestore; as chamadas são curtas e feitas
    dentro do request.
    """

    def __init__(self, firestore_client: object, collection: str = "sessions") -> None:
        self._client = firestore_client
        self._collection = collection

    def _doc(self, session_id: str):
        return self._client.collection(self._collection).document(session_id)

    async def create_session(self, session_id: str, data: SessionData) -> None:
        try:
            # create() falha se o documento já existir
            self._doc(session_id).create({"data": data})
        except Exception as e:
            logger.error(
                "failed_create_firestore",
                extra={"session_id": mask_session_id(session_id), "error": str(e)},
            )
            raise SessionStoreError(f"Failed to create session in Firestore: {e}") from e
        logger.debug("session_created_firestore", extra={"session_id": mask_session_id(session_id)})

    async def get_session_by_id(self, session_id: str) -> SessionData | None:
        try:
            doc = self._doc(session_id).get()
        except Exception as e:
            logger.error(
                "failed_load_firestore",
                extra={"session_id": mask_session_id(session_id), "error": str(e)},
            )
            raise SessionStoreError(f"Failed to load session from Firestore: {e}") from e

        if not doc.exists:
            logger.debug("session_not_found_firestore", extra={"session_id": mask_session_id(session_id)})
            return None

        try:
            return validate_session_data((doc.to_dict() or {}).get("data"))
        except SessionDataError as e:
            logger.warning(
                "session_malformed_firestore",
                extra={"session_id": mask_session_id(session_id), "error": str(e)},
            )
            return None

    async def persist_session_data(self, session_id: str, data: SessionData) -> None:
        try:
            self._doc(session_id).set({"data": data})
        except Exception as e:
            logger.error(
                "failed_save_firestore",
                extra={"session_id": mask_session_id(session_id), "error": str(e)},
            )
            raise SessionStoreError(f"Failed to save session to Firestore: {e}") from e
        logger.debug("session_saved_firestore", extra={"session_id": mask_session_id(session_id)})

    async def delete_session(self, session_id: str) -> None:
        try:
            self._doc(session_id).delete()
        except Exception as e:
            logger.error(
                "failed_delete_firestore",
                extra={"session_id": mask_session_id(session_id), "error": str(e)},
            )
            raise SessionStoreError(f"Failed to delete session from Firestore: {e}") from e
        logger.debug("session_deleted_firestore", extra={"session_id": mask_session_id(session_id)})
