"""Factory de session stores a partir de Settings.

Backends:
- "memory": InMemorySessionStore (dev/testes)
- "redis": RedisSessionStore (múltiplas instâncias)
- "firestore": FirestoreSessionStore (alternativa gerenciada)
- "cookie": CookieSessionStore (sem estado no servidor)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from request_sessions.infra.cookie_store import CookieSessionStore
from request_sessions.infra.session_store_firestore import FirestoreSessionStore
from request_sessions.infra.session_store_memory import InMemorySessionStore
from request_sessions.infra.session_store_redis import RedisSessionStore
from request_sessions.observability.logging import get_logger

if TYPE_CHECKING:
    from request_sessions.config.settings import Settings
    from request_sessions.domain.protocols.session_store import SessionBackend

logger: logging.Logger = get_logger(__name__)


def create_session_store(
    settings: Settings | None = None,
    *,
    redis_client: Any | None = None,
    firestore_client: Any | None = None,
) -> SessionBackend:
    """Cria o store de sessão conforme settings.session_store_backend.

    Args:
        settings: Configurações da aplicação. Se None, usa get_settings()
        redis_client: Client redis.asyncio já construído (opcional)
        firestore_client: Client Firestore já construído (opcional)

    Raises:
        ValueError: Se backend não reconhecido ou configuração incompleta
    """
    if settings is None:
        from request_sessions.config.settings import get_settings

        settings = get_settings()

    backend = settings.session_store_backend.lower()
    if backend == "memory":
        logger.info("Usando InMemorySessionStore (apenas dev/testes)")
        return InMemorySessionStore()

    if backend == "redis":
        return _create_redis_store(settings, redis_client)

    if backend == "firestore":
        return _create_firestore_store(settings, firestore_client)

    if backend == "cookie":
        return _create_cookie_store(settings)

    raise ValueError(f"Backend de sessão não reconhecido: {backend}")


def _create_redis_store(settings: Settings, redis_client: Any | None) -> RedisSessionStore:
    if redis_client is None:
        if not settings.redis_url:
            raise ValueError("REDIS_URL é obrigatório quando session_store_backend=redis")

        import redis.asyncio as redis_asyncio

        redis_client = redis_asyncio.from_url(settings.redis_url, decode_responses=True)

    logger.info("Usando RedisSessionStore", extra={"key_prefix": settings.session_redis_prefix})
    return RedisSessionStore(redis_client, key_prefix=settings.session_redis_prefix)


def _create_firestore_store(
    settings: Settings, firestore_client: Any | None
) -> FirestoreSessionStore:
    if firestore_client is None:
        if not settings.firestore_project_id:
            raise ValueError("FIRESTORE_PROJECT_ID é obrigatório para session_store_backend=firestore")

        from google.cloud import firestore

        firestore_client = firestore.Client(project=settings.firestore_project_id)

    logger.info(
        "Usando FirestoreSessionStore",
        extra={"collection": settings.session_firestore_collection},
    )
    return FirestoreSessionStore(
        firestore_client, collection=settings.session_firestore_collection
    )


def _create_cookie_store(settings: Settings) -> CookieSessionStore:
    if not settings.session_encryption_key:
        raise ValueError("SESSION_ENCRYPTION_KEY é obrigatório para session_store_backend=cookie")

    logger.info(
        "Usando CookieSessionStore",
        extra={"cookie": settings.session_data_cookie_name},
    )
    return CookieSessionStore(
        settings.session_encryption_key,
        cookie_get_options=settings.cookie_get_options(),
        cookie_set_delete_options=settings.cookie_set_options(),
        session_data_cookie_name=settings.session_data_cookie_name,
    )
