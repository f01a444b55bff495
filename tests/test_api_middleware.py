# tests/test_api_middleware.py
"""Tests for API middleware helpers."""

import pytest
from starlette.requests import Request

from api.middleware.logging import _get_client_ip


def _request(headers: dict[str, str]) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/health",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        "client": ("10.0.0.5", 51234),
    }
    return Request(scope)


class TestClientIP:
    """Tests for client address extraction."""

    def test_direct_client(self) -> None:
        """Without proxy trust the socket address is used."""
        request = _request({"X-Forwarded-For": "203.0.113.9"})
        assert _get_client_ip(request) == "10.0.0.5"

    def test_forwarded_for_when_trusted(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Behind a trusted proxy the first forwarded hop is the client."""
        monkeypatch.setattr("api.config.TRUST_PROXY_HEADERS", True)
        request = _request({"X-Forwarded-For": "203.0.113.9, 10.0.0.1"})
        assert _get_client_ip(request) == "203.0.113.9"

    def test_trusted_without_header(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A trusted proxy that sends no header falls back to the socket."""
        monkeypatch.setattr("api.config.TRUST_PROXY_HEADERS", True)
        assert _get_client_ip(_request({})) == "10.0.0.5"
