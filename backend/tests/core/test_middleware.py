"""
Tests for RequestContextMiddleware.
"""

from unittest.mock import MagicMock

import pytest
from django.http import HttpRequest, HttpResponse
from django.test import RequestFactory
from structlog.contextvars import get_contextvars

from apps.core.middleware import REQUEST_ID_HEADER, RequestContextMiddleware


def capture_context(request: HttpRequest) -> HttpResponse:
    """get_response stand-in that records the bound context."""
    response = HttpResponse()
    response.context = dict(get_contextvars())  # type: ignore[attr-defined]
    return response


class TestRequestContextMiddleware:
    """Tests for request-scoped logging context."""

    def test_binds_request_fields(self, request_factory: RequestFactory) -> None:
        """Should bind trace id, method, path and client IP while the view runs."""
        middleware = RequestContextMiddleware(capture_context)
        request = request_factory.post(
            "/api/v1/auth/token",
            HTTP_X_REQUEST_ID="req-123",
            HTTP_X_FORWARDED_FOR="203.0.113.9, 10.0.0.1",
        )

        response = middleware(request)

        assert response.context == {
            "trace_id": "req-123",
            "http.method": "POST",
            "http.path": "/api/v1/auth/token",
            "network.client.ip": "203.0.113.9",
        }

    def test_echoes_request_id(self, request_factory: RequestFactory) -> None:
        middleware = RequestContextMiddleware(MagicMock(return_value=HttpResponse()))

        response = middleware(request_factory.get("/", HTTP_X_REQUEST_ID="req-abc"))

        assert response[REQUEST_ID_HEADER] == "req-abc"

    def test_generates_request_id(self, request_factory: RequestFactory) -> None:
        """A missing header should produce a new hex id."""
        middleware = RequestContextMiddleware(MagicMock(return_value=HttpResponse()))

        response = middleware(request_factory.get("/"))

        assert len(response[REQUEST_ID_HEADER]) == 32
        int(response[REQUEST_ID_HEADER], 16)

    def test_context_cleared_after_request(self, request_factory: RequestFactory) -> None:
        middleware = RequestContextMiddleware(MagicMock(return_value=HttpResponse()))

        middleware(request_factory.get("/", HTTP_X_REQUEST_ID="req-1"))

        assert "trace_id" not in get_contextvars()

    def test_context_cleared_when_view_raises(self, request_factory: RequestFactory) -> None:
        middleware = RequestContextMiddleware(MagicMock(side_effect=RuntimeError("boom")))

        with pytest.raises(RuntimeError):
            middleware(request_factory.get("/", HTTP_X_REQUEST_ID="req-2"))

        assert "trace_id" not in get_contextvars()
