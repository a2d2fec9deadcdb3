"""Store de sessão embutido no cookie (payload criptografado no cliente).

Não há estado no servidor nem identificador: a sessão existe se, e somente
se, o cookie estiver presente e for descriptografado com sucesso.
"""

from __future__ import annotations

import logging

from request_sessions.config.settings import DEFAULT_SESSION_DATA_COOKIE_NAME
from request_sessions.domain.protocols.cookies import CookieAccessor, CookieOptions, maybe_await
from request_sessions.domain.protocols.session_store import CookieSessionStoreProtocol
from request_sessions.domain.session_data import (
    SessionData,
    SessionDataError,
    validate_session_data,
)
from request_sessions.infra.session_crypto import (
    SessionCryptoError,
    decrypt_payload,
    derive_key,
    encrypt_payload,
)
from request_sessions.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

# Limite prático de navegadores por cookie (nome + valor + atributos)
MAX_COOKIE_BYTES = 4096


class CookieSessionStore(CookieSessionStoreProtocol):
    """Serializa e criptografa toda a SessionData dentro de um cookie.

    Falhas de descriptografia ou parse são tratadas como "sem sessão";
    o SessionManager cria uma sessão nova quando necessário.
    """

    def __init__(
        self,
        encryption_key: str | bytes,
        *,
        cookie_get_options: CookieOptions | None = None,
        cookie_set_delete_options: CookieOptions | None = None,
        session_data_cookie_name: str = DEFAULT_SESSION_DATA_COOKIE_NAME,
    ) -> None:
        self._key = derive_key(encryption_key)
        self.cookie_get_options: CookieOptions = dict(cookie_get_options or {})
        self.cookie_set_delete_options: CookieOptions = dict(cookie_set_delete_options or {})
        self.session_data_cookie_name = session_data_cookie_name

    async def get_session_from_cookie(self, cookies: CookieAccessor) -> SessionData | None:
        token = await maybe_await(
            cookies.get(self.session_data_cookie_name, self.cookie_get_options)
        )
        if not token:
            return None

        try:
            return validate_session_data(decrypt_payload(token, self._key))
        except (SessionCryptoError, SessionDataError) as e:
            logger.debug(
                "Session cookie rejected",
                extra={"cookie": self.session_data_cookie_name, "reason": str(e)},
            )
            return None

    async def create_session(self, cookies: CookieAccessor, data: SessionData) -> None:
        await self._write(cookies, data)

    async def persist_session_data(self, cookies: CookieAccessor, data: SessionData) -> None:
        await self._write(cookies, data)

    async def delete_session(self, cookies: CookieAccessor) -> None:
        await maybe_await(
            cookies.delete(self.session_data_cookie_name, self.cookie_set_delete_options)
        )
        logger.debug("Session cookie cleared", extra={"cookie": self.session_data_cookie_name})

    async def _write(self, cookies: CookieAccessor, data: SessionData) -> None:
        token = encrypt_payload(data, self._key)
        if len(token) > MAX_COOKIE_BYTES:
            logger.warning(
                "Session cookie exceeds browser size limit",
                extra={"cookie": self.session_data_cookie_name, "size": len(token)},
            )
        await maybe_await(
            cookies.set(self.session_data_cookie_name, token, self.cookie_set_delete_options)
        )
        logger.debug(
            "Session cookie written",
            extra={"cookie": self.session_data_cookie_name, "size": len(token)},
        )
