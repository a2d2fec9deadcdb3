"""Fábrica da aplicação FastAPI de demonstração."""

from __future__ import annotations

from fastapi import FastAPI

from request_sessions.api.middleware import SessionMiddleware
from request_sessions.api.routes import router
from request_sessions.application.session_manager import SessionConfig, SessionManager
from request_sessions.config.settings import Settings, get_settings
from request_sessions.domain.protocols.session_store import SessionBackend
from request_sessions.infra.session_store import create_session_store
from request_sessions.observability.logging import configure_logging, get_logger
from request_sessions.observability.middleware import CorrelationIdMiddleware

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    store: SessionBackend | None = None,
) -> FastAPI:
    """Cria a aplicação FastAPI.

    Args:
        settings: Configurações (padrão: get_settings())
        store: Store já construído; se None, criado a partir de settings

    Raises:
        ValueError: Se a configuração for inválida
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.service_name, settings.log_format)

    validation_errors: list[str] = []
    validation_errors.extend(settings.validate_cookie_config())
    if store is None:
        validation_errors.extend(settings.validate_session_store_config())

    if validation_errors:
        error_msg = "; ".join(validation_errors)
        raise ValueError(f"Configuração inválida: {error_msg}")

    if store is None:
        store = create_session_store(settings)
    manager = SessionManager(store, SessionConfig.from_settings(settings))

    app = FastAPI(title=settings.service_name, version=settings.version)
    app.add_middleware(SessionMiddleware, manager=manager)
    app.add_middleware(CorrelationIdMiddleware, header_name=settings.correlation_id_header)
    app.include_router(router)

    app.state.settings = settings
    app.state.session_store = store
    app.state.session_manager = manager

    logger.info(
        "app_created",
        extra={
            "environment": settings.environment,
            "session_store_kind": store.kind,
        },
    )
    return app
