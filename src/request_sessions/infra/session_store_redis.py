"""Implementação de KeyedSessionStore usando Redis (redis.asyncio)."""

from __future__ import annotations

import json
import logging
from typing import Any

from request_sessions.domain.session_data import (
    SessionData,
    validate_session_data,
)
from request_sessions.infra.session_contract import KeyedSessionStore, SessionStoreError
from request_sessions.observability.logging import get_logger
from request_sessions.utils.ids import mask_session_id

logger: logging.Logger = get_logger(__name__)


class RedisSessionStore(KeyedSessionStore):
    """Armazenamento em Redis para múltiplas instâncias.

    Características:
    - Payload JSON por chave "{prefix}{session_id}"
    - create usa SET NX (colisão de id vira SessionStoreError)
    - Sem TTL nativo: expiração é decidida pelo SessionManager via _expire
    """

    def __init__(self, redis_client: Any, key_prefix: str = "session:") -> None:
        self._redis = redis_client
        self._prefix = key_prefix

    def _key(self, session_id: str) -> str:
        return f"{self._prefix}{session_id}"

    async def create_session(self, session_id: str, data: SessionData) -> None:
        payload = json.dumps(data)
        try:
            created = await self._redis.set(self._key(session_id), payload, nx=True)
        except Exception as e:
            logger.error(
                "Failed to create session in Redis",
                extra={"session_id": mask_session_id(session_id), "error": str(e)},
            )
            raise SessionStoreError(f"Redis create failed: {e}") from e

        if not created:
            raise SessionStoreError(f"Session id collision (Redis): {mask_session_id(session_id)}")
        logger.debug("Session created (Redis)", extra={"session_id": mask_session_id(session_id)})

    async def get_session_by_id(self, session_id: str) -> SessionData | None:
        try:
            payload = await self._redis.get(self._key(session_id))
        except Exception as e:
            logger.error(
                "Failed to load session from Redis",
                extra={"session_id": mask_session_id(session_id), "error": str(e)},
            )
            raise SessionStoreError(f"Redis load failed: {e}") from e

        if not payload:
            logger.debug("Session not found (Redis)", extra={"session_id": mask_session_id(session_id)})
            return None

        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")

        try:
            return validate_session_data(json.loads(payload))
        except ValueError as e:  # JSONDecodeError, SessionDataError
            logger.warning(
                "Malformed session payload (Redis)",
                extra={"session_id": mask_session_id(session_id), "error": type(e).__name__},
            )
            return None

    async def persist_session_data(self, session_id: str, data: SessionData) -> None:
        payload = json.dumps(data)
        try:
            await self._redis.set(self._key(session_id), payload)
        except Exception as e:
            logger.error(
                "Failed to save session to Redis",
                extra={"session_id": mask_session_id(session_id), "error": str(e)},
            )
            raise SessionStoreError(f"Redis save failed: {e}") from e
        logger.debug("Session saved (Redis)", extra={"session_id": mask_session_id(session_id)})

    async def delete_session(self, session_id: str) -> None:
        try:
            deleted = await self._redis.delete(self._key(session_id))
        except Exception as e:
            logger.error(
                "Failed to delete session from Redis",
                extra={"session_id": mask_session_id(session_id), "error": str(e)},
            )
            raise SessionStoreError(f"Redis delete failed: {e}") from e
        if deleted:
            logger.debug("Session deleted (Redis)", extra={"session_id": mask_session_id(session_id)})
