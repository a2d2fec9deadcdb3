"""Implementação de KeyedSessionStore em memória (apenas dev/testes).

O mapa vive enquanto o processo viver; não há teardown. Cada operação é
atômica sob um asyncio.Lock. Persistências concorrentes do mesmo id são
last-writer-wins.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from datetime import datetime

from request_sessions.domain.session_data import SessionData, is_session_valid, utcnow
from request_sessions.infra.session_contract import KeyedSessionStore, SessionStoreError
from request_sessions.observability.logging import get_logger
from request_sessions.utils.ids import mask_session_id

logger: logging.Logger = get_logger(__name__)


class InMemorySessionStore(KeyedSessionStore):
    """Armazenamento em memória (não usar com múltiplos processos).

    Dados são copiados (deepcopy) na escrita e na leitura para que cada
    request seja dono exclusivo da sua cópia.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, SessionData] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    async def create_session(self, session_id: str, data: SessionData) -> None:
        async with self._lock:
            if session_id in self._sessions:
                raise SessionStoreError(
                    f"Session id collision (in-memory): {mask_session_id(session_id)}"
                )
            self._sessions[session_id] = copy.deepcopy(data)
        logger.debug("Session created (in-memory)", extra={"session_id": mask_session_id(session_id)})

    async def get_session_by_id(self, session_id: str) -> SessionData | None:
        async with self._lock:
            data = self._sessions.get(session_id)
            if data is None:
                logger.debug(
                    "Session not found (in-memory)",
                    extra={"session_id": mask_session_id(session_id)},
                )
                return None
            return copy.deepcopy(data)

    async def persist_session_data(self, session_id: str, data: SessionData) -> None:
        async with self._lock:
            self._sessions[session_id] = copy.deepcopy(data)
        logger.debug("Session saved (in-memory)", extra={"session_id": mask_session_id(session_id)})

    async def delete_session(self, session_id: str) -> None:
        async with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is not None:
            logger.debug(
                "Session deleted (in-memory)",
                extra={"session_id": mask_session_id(session_id)},
            )

    async def sweep_expired(self, now: datetime | None = None) -> int:
        """Remove entradas cujo _expire já passou.

        Chamado explicitamente pelo host (não há timers internos).

        Returns:
            Quantidade de sessões removidas
        """
        now = now or utcnow()
        async with self._lock:
            expired = [sid for sid, data in self._sessions.items() if not is_session_valid(data, now)]
            for sid in expired:
                del self._sessions[sid]

        if expired:
            logger.info("Expired sessions swept (in-memory)", extra={"removed": len(expired)})
        return len(expired)
