"""Middleware de sessão para Starlette/FastAPI.

Executa fetch_session antes do endpoint e store_state depois, expondo a
sessão em request.state.session.
"""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from request_sessions.api.cookies import StarletteCookies
from request_sessions.application.session_manager import SessionManager
from request_sessions.domain.session import Session


class SessionMiddleware(BaseHTTPMiddleware):
    """Liga um SessionManager ao ciclo de request/response."""

    def __init__(self, app, manager: SessionManager) -> None:
        super().__init__(app)
        self._manager = manager

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        cookies = StarletteCookies(request)
        request.state.session_manager = self._manager
        request.state.session_cookies = cookies
        request.state.rotate_session_key = False
        request.state.session = await self._manager.fetch_session(cookies)

        response = await call_next(request)

        await self._manager.store_state(
            request.state.session,
            cookies,
            rotate_key=bool(request.state.rotate_session_key),
        )
        cookies.apply(response)
        return response


def get_session(request: Request) -> Session | None:
    """Sessão ativa do request (None se não houver)."""
    return getattr(request.state, "session", None)


async def start_session(request: Request) -> Session:
    """Cria uma sessão nova para o request, descartando a anterior.

    A sessão anterior (se existir) é removida do store antes da criação,
    mantendo no máximo uma sessão ativa por request.
    """
    manager: SessionManager = request.state.session_manager
    cookies: StarletteCookies = request.state.session_cookies

    previous = get_session(request)
    if previous is not None:
        previous.delete_session()
        await manager.store_state(previous, cookies)

    session = await manager.create_session(cookies)
    request.state.session = session
    return session


def rotate_session(request: Request) -> None:
    """Solicita troca do id da sessão ao final do request (ex: após login)."""
    request.state.rotate_session_key = True
