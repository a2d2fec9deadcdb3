"""Configurações centralizadas do request_sessions.

Uso típico:
    from request_sessions.config import get_settings
"""

from request_sessions.config.settings import (
    DEFAULT_SESSION_COOKIE_NAME,
    DEFAULT_SESSION_DATA_COOKIE_NAME,
    Settings,
    get_settings,
)

__all__ = [
    "DEFAULT_SESSION_COOKIE_NAME",
    "DEFAULT_SESSION_DATA_COOKIE_NAME",
    "Settings",
    "get_settings",
]
