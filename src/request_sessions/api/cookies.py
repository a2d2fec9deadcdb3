"""CookieAccessor sobre Request/Response do Starlette.

Leituras vêm dos cookies do request; escritas ficam pendentes e são
aplicadas na response com apply(). Uma escrita pendente é visível para
leituras posteriores no mesmo request.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from starlette.requests import Request
from starlette.responses import Response

_SET_COOKIE_OPTIONS = frozenset(
    {"max_age", "expires", "path", "domain", "secure", "httponly", "samesite"}
)
_DELETE_COOKIE_OPTIONS = frozenset({"path", "domain", "secure", "httponly", "samesite"})


def _filter_options(options: Mapping[str, Any] | None, allowed: frozenset[str]) -> dict[str, Any]:
    return {k: v for k, v in (options or {}).items() if k in allowed}


class StarletteCookies:
    """Accessor de cookies de um único request."""

    def __init__(self, request: Request) -> None:
        self._request = request
        # name -> (valor ou None para remoção, opções)
        self._pending: dict[str, tuple[str | None, dict[str, Any]]] = {}

    def get(self, name: str, options: Mapping[str, Any] | None = None) -> str | None:
        if name in self._pending:
            return self._pending[name][0]
        return self._request.cookies.get(name)

    def set(self, name: str, value: str, options: Mapping[str, Any] | None = None) -> None:
        self._pending[name] = (value, _filter_options(options, _SET_COOKIE_OPTIONS))

    def delete(self, name: str, options: Mapping[str, Any] | None = None) -> None:
        self._pending[name] = (None, _filter_options(options, _DELETE_COOKIE_OPTIONS))

    @property
    def pending(self) -> Mapping[str, tuple[str | None, dict[str, Any]]]:
        return dict(self._pending)

    def apply(self, response: Response) -> None:
        """Emite os Set-Cookie pendentes na response."""
        for name, (value, options) in self._pending.items():
            if value is None:
                response.delete_cookie(name, **options)
            else:
                response.set_cookie(name, value, **options)
