"""
Unit Tests for Request Context Middleware.

Tests the RequestContextMiddleware functionality including:
- Request ID generation and propagation
- Frontend detection from X-Frontend-ID and WebApp init data
- Response timing headers
"""

from unittest.mock import MagicMock, patch

import pytest
from starlette.requests import Request
from starlette.responses import Response

from endorseme.backend.core.middleware import RequestContextMiddleware


class TestRequestContextMiddleware:
    """Tests for RequestContextMiddleware."""

    @pytest.fixture
    def middleware(self):
        return RequestContextMiddleware(MagicMock())

    @pytest.fixture
    def mock_request(self):
        request = MagicMock(spec=Request)
        request.headers = {}
        request.method = "POST"
        request.url = MagicMock()
        request.url.path = "/api/v1/endorsements"
        request.client = MagicMock()
        request.client.host = "127.0.0.1"
        request.state = MagicMock()
        return request

    async def _dispatch(self, middleware, request) -> Response:
        async def call_next(_request):
            return Response(content="OK", status_code=200)

        with patch("endorseme.backend.core.middleware.structlog.contextvars"):
            return await middleware.dispatch(request, call_next)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("headers", "expected"),
        [
            ({"X-Frontend-ID": "web"}, "web"),
            ({"X-Frontend-ID": "CLI"}, "cli"),
            ({"X-Telegram-Init-Data": "user=..."}, "webapp"),
            ({"X-Frontend-ID": "api", "X-Telegram-Init-Data": "user=..."}, "api"),
            ({"X-Frontend-ID": "mystery"}, "unknown"),
            ({}, "unknown"),
        ],
    )
    async def test_frontend_detection(self, middleware, mock_request, headers, expected):
        mock_request.headers = headers

        await self._dispatch(middleware, mock_request)

        assert mock_request.state.frontend == expected

    @pytest.mark.asyncio
    async def test_uses_provided_request_id(self, middleware, mock_request):
        mock_request.headers = {"X-Request-ID": "req-1"}

        response = await self._dispatch(middleware, mock_request)

        assert mock_request.state.request_id == "req-1"
        assert response.headers["X-Request-ID"] == "req-1"

    @pytest.mark.asyncio
    async def test_generates_request_id(self, middleware, mock_request):
        response = await self._dispatch(middleware, mock_request)

        assert len(response.headers["X-Request-ID"]) == 36
        assert response.headers["X-Response-Time"].endswith("ms")

    @pytest.mark.asyncio
    async def test_exception_propagates_and_context_is_cleared(self, middleware, mock_request):
        async def call_next(_request):
            raise RuntimeError("handler failed")

        with patch("endorseme.backend.core.middleware.structlog.contextvars") as contextvars:
            with pytest.raises(RuntimeError):
                await middleware.dispatch(mock_request, call_next)

        assert contextvars.clear_contextvars.call_count == 2
