"""Porta para o transporte de cookies fornecido pelo framework hospedeiro.

O core nunca fala HTTP diretamente: lê, grava e remove valores nomeados
através de um CookieAccessor. Qualquer método pode ser síncrono ou
retornar um awaitable; o core sempre resolve via maybe_await.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Mapping
from typing import Any, Protocol, TypeVar

CookieOptions = Mapping[str, Any]

T = TypeVar("T")


class CookieAccessor(Protocol):
    """Capacidade de leitura/escrita de cookies nomeados."""

    def get(
        self, name: str, options: CookieOptions | None = None
    ) -> str | None | Awaitable[str | None]:
        """Lê o valor do cookie (None se ausente)."""
        ...

    def set(
        self, name: str, value: str, options: CookieOptions | None = None
    ) -> None | Awaitable[None]:
        """Grava o cookie com as opções de transporte."""
        ...

    def delete(self, name: str, options: CookieOptions | None = None) -> None | Awaitable[None]:
        """Remove o cookie."""
        ...


async def maybe_await(value: T | Awaitable[T]) -> T:
    """Resolve o retorno de um accessor que pode ou não ser assíncrono."""

    if inspect.isawaitable(value):
        return await value
    return value
