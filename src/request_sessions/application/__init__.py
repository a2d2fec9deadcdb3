"""Camada de aplicação — orquestração do ciclo de vida da sessão."""

from request_sessions.application.session_manager import SessionConfig, SessionManager

__all__ = ["SessionConfig", "SessionManager"]
