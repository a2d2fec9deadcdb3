"""Integração com Starlette/FastAPI e app de demonstração."""

from request_sessions.api.cookies import StarletteCookies
from request_sessions.api.middleware import (
    SessionMiddleware,
    get_session,
    rotate_session,
    start_session,
)

__all__ = [
    "SessionMiddleware",
    "StarletteCookies",
    "get_session",
    "rotate_session",
    "start_session",
]
