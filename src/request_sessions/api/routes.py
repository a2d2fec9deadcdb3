"""Rotas de demonstração do fluxo de sessão (login/logout com flash)."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel

from request_sessions.api.middleware import get_session, rotate_session, start_session

router = APIRouter()

DEMO_PASSWORD = "correct"


class LoginRequest(BaseModel):
    email: str
    password: str


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/")
async def index(request: Request) -> dict[str, Any]:
    """Mostra mensagens flash e o e-mail da sessão (se logado)."""
    session = get_session(request)
    if session is None:
        return {"message": "", "error": "", "email": None}

    return {
        "message": session.get("message") or "",
        "error": session.get("error") or "",
        "email": session.get("email"),
    }


@router.post("/login")
async def login(request: Request, body: LoginRequest) -> dict[str, bool]:
    if body.password != DEMO_PASSWORD:
        session = get_session(request) or await start_session(request)
        session.flash("error", "Incorrect password")
        return {"authenticated": False}

    session = await start_session(request)
    session.set("email", body.email)
    session.flash("message", "Login successful")
    return {"authenticated": True}


@router.post("/logout")
async def logout(request: Request) -> dict[str, bool]:
    session = get_session(request)
    if session is not None:
        session.delete_session()
    return {"logged_out": session is not None}


@router.post("/rotate")
async def rotate(request: Request) -> dict[str, bool]:
    """Troca o id da sessão preservando os dados."""
    if get_session(request) is None:
        return {"rotated": False}
    rotate_session(request)
    return {"rotated": True}
