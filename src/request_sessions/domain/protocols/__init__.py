"""Protocolos de domínio (portas) para transporte e persistência de sessão."""

from request_sessions.domain.protocols.cookies import CookieAccessor, CookieOptions, maybe_await
from request_sessions.domain.protocols.session_store import (
    CookieSessionStoreProtocol,
    KeyedSessionStoreProtocol,
    SessionBackend,
    StoreKind,
)

__all__ = [
    "CookieAccessor",
    "CookieOptions",
    "CookieSessionStoreProtocol",
    "KeyedSessionStoreProtocol",
    "SessionBackend",
    "StoreKind",
    "maybe_await",
]
