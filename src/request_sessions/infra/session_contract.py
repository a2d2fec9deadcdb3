"""Contrato de persistência de sessão indexada (KeyedSessionStore).

Separado para manter SRP e permitir reuso entre implementações.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from request_sessions.domain.protocols.session_store import KeyedSessionStoreProtocol

if TYPE_CHECKING:
    from request_sessions.domain.session_data import SessionData


class SessionStoreError(Exception):
    """Erro ao persistir ou recuperar sessão (falha do backend)."""

    pass


class KeyedSessionStore(KeyedSessionStoreProtocol):
    """Contrato abstrato para stores indexados por session_id.

    Implementações devem:
    - Nunca lançar exceção para id inexistente (retornar None)
    - Tornar delete_session idempotente
    - Propagar falhas de I/O como SessionStoreError (sem retry)
    """

    @abstractmethod
    async def create_session(self, session_id: str, data: SessionData) -> None:
        """Armazena dados sob um id recém-gerado.

        Raises:
            SessionStoreError: Se o id já existir ou o backend falhar
        """
        ...

    @abstractmethod
    async def get_session_by_id(self, session_id: str) -> SessionData | None:
        """Carrega dados por id.

        Returns:
            SessionData ou None se não encontrado
        """
        ...

    @abstractmethod
    async def persist_session_data(self, session_id: str, data: SessionData) -> None:
        """Substitui integralmente os dados armazenados para o id."""
        ...

    @abstractmethod
    async def delete_session(self, session_id: str) -> None:
        """Remove a entrada (sem erro se já ausente)."""
        ...
