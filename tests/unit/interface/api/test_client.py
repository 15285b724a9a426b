"""Unit tests for anonymous client identification."""

from fastapi import Request, Response

from hubcorner.config import Settings
from hubcorner.interface.api.client import ensure_client_id, read_client_id


def _request(cookie: str | None = None) -> Request:
    headers = [(b"cookie", cookie.encode())] if cookie is not None else []
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


class TestReadClientId:
    """Tests for read_client_id."""

    def test_returns_cookie_value(self):
        assert read_client_id(_request("client_id=abc123"), Settings()) == "abc123"

    def test_missing_cookie_returns_none(self):
        assert read_client_id(_request(), Settings()) is None

    def test_overlong_cookie_returns_none(self):
        cookie = "client_id=" + "x" * 256

        assert read_client_id(_request(cookie), Settings()) is None


class TestEnsureClientId:
    """Tests for ensure_client_id."""

    def test_existing_cookie_is_reused(self):
        response = Response()

        client_id = ensure_client_id(
            _request("client_id=abc123"), response, Settings()
        )

        assert client_id == "abc123"
        assert "set-cookie" not in response.headers

    def test_new_cookie_is_issued(self):
        response = Response()

        client_id = ensure_client_id(_request(), response, Settings())

        cookie = response.headers["set-cookie"]
        assert client_id
        assert cookie.startswith(f"client_id={client_id}")
        assert "httponly" in cookie.lower()
        assert "samesite=lax" in cookie.lower()

    def test_issued_ids_differ(self):
        first = ensure_client_id(_request(), Response(), Settings())
        second = ensure_client_id(_request(), Response(), Settings())

        assert first != second
