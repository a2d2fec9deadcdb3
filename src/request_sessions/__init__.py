"""request_sessions — ciclo de vida de sessões HTTP com stores plugáveis.

Uso típico:
    from request_sessions import SessionConfig, SessionManager
    from request_sessions.infra import InMemorySessionStore

    manager = SessionManager(InMemorySessionStore(), SessionConfig(expire_after_seconds=3600))
"""

from request_sessions.application.session_manager import SessionConfig, SessionManager
from request_sessions.domain.session import ReservedKeyError, Session

__all__ = [
    "ReservedKeyError",
    "Session",
    "SessionConfig",
    "SessionManager",
]
