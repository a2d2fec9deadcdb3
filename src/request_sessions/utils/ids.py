"""Geradores de identificadores."""

from __future__ import annotations

import uuid


def new_session_id() -> str:
    """Gera um session_id único (UUID4, aleatório)."""

    return str(uuid.uuid4())


def mask_session_id(session_id: str) -> str:
    """Trunca o session_id para logs (nunca logar o id completo)."""

    if not session_id:
        return "<cookie>"
    return session_id[:8] + "..."
