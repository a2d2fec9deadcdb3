"""SessionManager — máquina de estados do ciclo de vida da sessão.

Por request:
    absent -> (fetch miss | fetch expirado substituído | create explícito)
           -> active -> (mutações) -> store_state -> {persistida | removida}

O manager é ligado a um único store (keyed ou cookie) e decide uma vez,
na construção, qual variante está em uso. Não há estado entre requests
além do que o store retém.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, cast

from request_sessions.config.settings import DEFAULT_SESSION_COOKIE_NAME
from request_sessions.domain.protocols.cookies import CookieAccessor, maybe_await
from request_sessions.domain.protocols.session_store import (
    CookieSessionStoreProtocol,
    KeyedSessionStoreProtocol,
    SessionBackend,
)
from request_sessions.domain.session import Session
from request_sessions.domain.session_data import (
    SessionData,
    is_session_valid,
    new_session_data,
    utcnow,
)
from request_sessions.observability.logging import get_logger
from request_sessions.utils.ids import mask_session_id, new_session_id

if TYPE_CHECKING:
    from request_sessions.config.settings import Settings

logger: logging.Logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionConfig:
    """Configuração do manager.

    Atributos:
        expire_after_seconds: Janela de expiração deslizante (None = nunca expira)
        cookie_get_options: Opções repassadas ao accessor na leitura do id
        cookie_set_options: Opções repassadas ao accessor em set/delete do id
        session_cookie_name: Nome do cookie que transporta o id (stores keyed)
    """

    expire_after_seconds: int | None = None
    cookie_get_options: Mapping[str, Any] = field(default_factory=dict)
    cookie_set_options: Mapping[str, Any] = field(default_factory=dict)
    session_cookie_name: str = DEFAULT_SESSION_COOKIE_NAME

    def __post_init__(self) -> None:
        if self.expire_after_seconds is not None and self.expire_after_seconds <= 0:
            raise ValueError("expire_after_seconds deve ser > 0 (ou None para nunca expirar)")
        if not self.session_cookie_name:
            raise ValueError("session_cookie_name não pode ser vazio")

    @classmethod
    def from_settings(cls, settings: Settings) -> SessionConfig:
        return cls(
            expire_after_seconds=settings.session_expire_after_seconds,
            cookie_get_options=settings.cookie_get_options(),
            cookie_set_options=settings.cookie_set_options(),
            session_cookie_name=settings.session_cookie_name,
        )


class SessionManager:
    """Orquestra fetch/create/store_state de sessões sobre um store.

    Uso típico (middleware):
        session = await manager.fetch_session(cookies)
        ... aplicação usa session.get/set/flash ...
        await manager.store_state(session, cookies)
    """

    def __init__(
        self,
        store: SessionBackend,
        config: SessionConfig | None = None,
        *,
        id_factory: Callable[[], str] = new_session_id,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._config = config or SessionConfig()
        self._id_factory = id_factory
        self._clock = clock or utcnow
        self._keyed = store.kind == "keyed"

    @property
    def store(self) -> SessionBackend:
        return self._store

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def is_keyed(self) -> bool:
        """True se o store é indexado por id (False para cookie embutido)."""
        return self._keyed

    def handlers(
        self,
    ) -> tuple[
        Callable[[CookieAccessor], Awaitable[Session | None]],
        Callable[..., Awaitable[None]],
        Callable[[CookieAccessor], Awaitable[Session]],
    ]:
        """Retorna (fetch_session, store_state, create_session) como funções soltas."""
        return self.fetch_session, self.store_state, self.create_session

    async def fetch_session(self, cookies: CookieAccessor) -> Session | None:
        """Carrega e valida a sessão do request.

        Returns:
            Session renovada, Session nova (se a anterior expirou) ou None
            se não houver sessão (cookie ausente, id desconhecido, payload
            inválido)
        """
        now = self._clock()

        if self._keyed:
            store = cast(KeyedSessionStoreProtocol, self._store)
            sid = await maybe_await(
                cookies.get(self._config.session_cookie_name, self._config.cookie_get_options)
            )
            if not sid:
                return None

            data = await store.get_session_by_id(sid)
            if data is None:
                logger.debug("session_fetch_miss", extra={"session_id": mask_session_id(sid)})
                return None

            if is_session_valid(data, now):
                session = Session(sid, data)
                session._renew(now, self._config.expire_after_seconds)
            else:
                await store.delete_session(sid)
                session = await self._new_session(now)
                logger.info(
                    "session_expired_replaced",
                    extra={
                        "session_id": mask_session_id(sid),
                        "new_session_id": mask_session_id(session.sid),
                    },
                )
        else:
            store = cast(CookieSessionStoreProtocol, self._store)
            data = await store.get_session_from_cookie(cookies)
            if data is None:
                return None

            if is_session_valid(data, now):
                session = Session("", data)
                session._renew(now, self._config.expire_after_seconds)
            else:
                await store.delete_session(cookies)
                session = await self._new_session(now)
                logger.info("session_expired_replaced", extra={"session_id": "<cookie>"})

        session._touch(now)
        if self._keyed:
            await self._write_id_cookie(cookies, session.sid)
        return session

    async def store_state(
        self,
        session: Session | None,
        cookies: CookieAccessor,
        rotate_key: bool = False,
    ) -> None:
        """Persiste (ou remove) a sessão ao final do request.

        Args:
            session: Sessão do request (None = nada a fazer)
            cookies: Accessor de cookies do request
            rotate_key: Troca o id preservando os dados (apenas stores keyed)
        """
        if session is None:
            return

        if session.marked_for_deletion:
            await self._delete(session, cookies)
            return

        if rotate_key and self._keyed:
            await self._rotate(session, cookies)

        if self._keyed:
            store = cast(KeyedSessionStoreProtocol, self._store)
            await store.persist_session_data(session.sid, session._data)
        else:
            store = cast(CookieSessionStoreProtocol, self._store)
            await store.persist_session_data(cookies, session._data)

    async def create_session(self, cookies: CookieAccessor) -> Session:
        """Cria sessão nova com dados padrão.

        Stores keyed gravam imediatamente e setam o cookie de id; o store
        de cookie só materializa o payload em store_state.
        """
        now = self._clock()
        session = await self._new_session(now)
        session._touch(now)
        if self._keyed:
            await self._write_id_cookie(cookies, session.sid)
        logger.debug("session_created", extra={"session_id": mask_session_id(session.sid)})
        return session

    async def _new_session(self, now: datetime, data: SessionData | None = None) -> Session:
        data = data if data is not None else new_session_data(now, self._config.expire_after_seconds)
        if not self._keyed:
            return Session("", data)

        store = cast(KeyedSessionStoreProtocol, self._store)
        sid = self._id_factory()
        await store.create_session(sid, data)
        return Session(sid, data)

    async def _rotate(self, session: Session, cookies: CookieAccessor) -> None:
        store = cast(KeyedSessionStoreProtocol, self._store)
        old_sid = session.sid
        await store.delete_session(old_sid)

        new_sid = self._id_factory()
        await store.create_session(new_sid, session._data)
        session.sid = new_sid
        await self._write_id_cookie(cookies, new_sid)
        logger.info(
            "session_rotated",
            extra={
                "session_id": mask_session_id(old_sid),
                "new_session_id": mask_session_id(new_sid),
            },
        )

    async def _delete(self, session: Session, cookies: CookieAccessor) -> None:
        if self._keyed:
            store = cast(KeyedSessionStoreProtocol, self._store)
            await store.delete_session(session.sid)
            await maybe_await(
                cookies.delete(self._config.session_cookie_name, self._config.cookie_set_options)
            )
        else:
            store = cast(CookieSessionStoreProtocol, self._store)
            await store.delete_session(cookies)
        logger.info("session_deleted", extra={"session_id": mask_session_id(session.sid)})

    async def _write_id_cookie(self, cookies: CookieAccessor, sid: str) -> None:
        await maybe_await(
            cookies.set(self._config.session_cookie_name, sid, self._config.cookie_set_options)
        )
