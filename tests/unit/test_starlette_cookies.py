"""Testes para o CookieAccessor sobre Request/Response do Starlette."""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import Response

from request_sessions.api.cookies import StarletteCookies


def _request(cookie_header: str | None = None) -> Request:
    headers = []
    if cookie_header:
        headers.append((b"cookie", cookie_header.encode()))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


def _set_cookie_headers(response: Response) -> list[str]:
    return [v.decode() for k, v in response.raw_headers if k == b"set-cookie"]


class TestStarletteCookies:
    def test_reads_request_cookies(self):
        cookies = StarletteCookies(_request("session=abc; other=1"))

        assert cookies.get("session") == "abc"
        assert cookies.get("missing") is None

    def test_pending_write_is_visible_to_reads(self):
        cookies = StarletteCookies(_request("session=old"))

        cookies.set("session", "new")
        assert cookies.get("session") == "new"

        cookies.delete("session")
        assert cookies.get("session") is None

    def test_unknown_options_are_dropped(self):
        cookies = StarletteCookies(_request())

        cookies.set("session", "v", {"httponly": True, "sameSite": "lax", "signed": True})
        cookies.delete("session_data", {"path": "/", "max_age": 10})

        assert cookies.pending == {
            "session": ("v", {"httponly": True}),
            "session_data": (None, {"path": "/"}),
        }

    def test_apply_emits_set_cookie_headers(self):
        cookies = StarletteCookies(_request())
        cookies.set("session", "sid-1", {"path": "/", "httponly": True, "samesite": "lax"})
        cookies.delete("session_data", {"path": "/"})
        response = Response()

        cookies.apply(response)

        headers = _set_cookie_headers(response)
        assert len(headers) == 2
        set_header = next(h for h in headers if h.startswith("session="))
        assert "sid-1" in set_header
        assert "HttpOnly" in set_header
        delete_header = next(h for h in headers if h.startswith("session_data="))
        assert "Max-Age=0" in delete_header

    def test_last_write_wins(self):
        cookies = StarletteCookies(_request())
        cookies.set("session", "a")
        cookies.set("session", "b")
        response = Response()

        cookies.apply(response)

        headers = _set_cookie_headers(response)
        assert len(headers) == 1
        assert headers[0].startswith("session=b")
