"""Session — entidade de sessão durante um request.

Uma Session é criada pelo SessionManager a cada request (nova ou
reidratada do store) e descartada ao final. O código da aplicação só
interage com os dados via get/set/flash/has/delete_session.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from request_sessions.domain.session_data import (
    ACCESSED_KEY,
    DELETE_KEY,
    EXPIRE_KEY,
    FLASH_KEY,
    RESERVED_KEYS,
    SessionData,
    expiry_from,
    format_timestamp,
    parse_timestamp,
)


class ReservedKeyError(ValueError):
    """Tentativa de escrever em um campo reservado da sessão."""

    pass


class Session:
    """Sessão de um request.

    Atributos:
        sid: Identificador no store (vazio para o store embutido em cookie)

    Os dados pertencem exclusivamente a esta instância; não há como
    enumerar chaves, apenas acesso chave a chave.
    """

    __slots__ = ("sid", "_data")

    def __init__(self, sid: str, data: SessionData) -> None:
        self.sid = sid
        self._data = data

    def __repr__(self) -> str:
        return f"Session(sid={self.sid[:8]!r}...)"

    def get(self, key: str) -> Any:
        """Retorna o valor da chave; se ausente, consome o flash de mesmo nome.

        Chave ausente e valor None são indistinguíveis.
        """
        if key in self._data:
            return self._data[key]
        return self._data[FLASH_KEY].pop(key, None)

    def set(self, key: str, value: Any) -> None:
        """Atribui valor; None remove a chave do mapa principal (não do flash)."""
        self._ensure_writable(key)
        if value is None:
            self._data.pop(key, None)
        else:
            self._data[key] = value

    def flash(self, key: str, value: Any) -> None:
        """Grava valor de leitura única (sobrescreve flash anterior)."""
        self._ensure_writable(key)
        self._data[FLASH_KEY][key] = value

    def has(self, key: str) -> bool:
        """Verifica presença no mapa principal ou no flash, sem consumir."""
        return key in self._data or key in self._data[FLASH_KEY]

    def delete_session(self) -> None:
        """Marca a sessão para remoção; efetivada em store_state."""
        self._data[DELETE_KEY] = True

    @property
    def marked_for_deletion(self) -> bool:
        return bool(self._data.get(DELETE_KEY))

    @property
    def expires_at(self) -> datetime | None:
        return parse_timestamp(self._data.get(EXPIRE_KEY))

    @property
    def accessed_at(self) -> datetime | None:
        return parse_timestamp(self._data.get(ACCESSED_KEY))

    # Métodos abaixo são usados apenas pelo SessionManager.

    def _renew(self, now: datetime, expire_after_seconds: int | None) -> None:
        self._data[EXPIRE_KEY] = expiry_from(now, expire_after_seconds)

    def _touch(self, now: datetime) -> None:
        self._data[ACCESSED_KEY] = format_timestamp(now)

    @staticmethod
    def _ensure_writable(key: str) -> None:
        if key in RESERVED_KEYS:
            raise ReservedKeyError(f"'{key}' is a reserved session field")
