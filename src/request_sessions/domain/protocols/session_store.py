"""Protocolos de domínio para persistência de sessão.

Duas variantes de uma mesma capacidade, diferenciadas pela tag `kind`:
- "keyed": dados no servidor, indexados por um identificador transportado em cookie
- "cookie": payload inteiro criptografado dentro do próprio cookie
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Literal

if TYPE_CHECKING:
    from request_sessions.domain.protocols.cookies import CookieAccessor
    from request_sessions.domain.session import SessionData

StoreKind = Literal["keyed", "cookie"]


class KeyedSessionStoreProtocol(ABC):
    """Contrato mínimo assíncrono para stores indexados por session_id."""

    kind: ClassVar[StoreKind] = "keyed"

    @abstractmethod
    async def create_session(self, session_id: str, data: SessionData) -> None: ...

    @abstractmethod
    async def get_session_by_id(self, session_id: str) -> SessionData | None: ...

    @abstractmethod
    async def persist_session_data(self, session_id: str, data: SessionData) -> None: ...

    @abstractmethod
    async def delete_session(self, session_id: str) -> None: ...


class CookieSessionStoreProtocol(ABC):
    """Contrato mínimo assíncrono para stores embutidos no cookie."""

    kind: ClassVar[StoreKind] = "cookie"

    @abstractmethod
    async def get_session_from_cookie(self, cookies: CookieAccessor) -> SessionData | None: ...

    @abstractmethod
    async def create_session(self, cookies: CookieAccessor, data: SessionData) -> None: ...

    @abstractmethod
    async def persist_session_data(self, cookies: CookieAccessor, data: SessionData) -> None: ...

    @abstractmethod
    async def delete_session(self, cookies: CookieAccessor) -> None: ...


SessionBackend = KeyedSessionStoreProtocol | CookieSessionStoreProtocol
