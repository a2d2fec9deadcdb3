"""Camada de infraestrutura — implementações de session store.

- Keyed: InMemorySessionStore, RedisSessionStore, FirestoreSessionStore
- Cookie: CookieSessionStore (payload AES-256-GCM no cookie)
- Factory: create_session_store

Uso típico:
    from request_sessions.infra import create_session_store
"""

from request_sessions.infra.cookie_store import CookieSessionStore
from request_sessions.infra.session_contract import KeyedSessionStore, SessionStoreError
from request_sessions.infra.session_crypto import SessionCryptoError
from request_sessions.infra.session_store import create_session_store
from request_sessions.infra.session_store_firestore import FirestoreSessionStore
from request_sessions.infra.session_store_memory import InMemorySessionStore
from request_sessions.infra.session_store_redis import RedisSessionStore

__all__ = [
    "CookieSessionStore",
    "FirestoreSessionStore",
    "InMemorySessionStore",
    "KeyedSessionStore",
    "RedisSessionStore",
    "SessionCryptoError",
    "SessionStoreError",
    "create_session_store",
]
