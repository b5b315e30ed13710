"""
Request Context Middleware.

Request tracking, timing, frontend identification and structlog context.
"""

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from endorseme.backend.core.logging import get_logger
from endorseme.backend.core.utils import utc_now

logger = get_logger(__name__)

# Subset of VALID_SOURCES in logging.py
KNOWN_FRONTENDS = {"web", "webapp", "cli", "api"}

WEBAPP_INIT_DATA_HEADER = "X-Telegram-Init-Data"


def _detect_frontend(request: Request) -> str:
    """Explicit X-Frontend-ID wins; a WebApp init payload implies 'webapp'."""
    frontend = request.headers.get("X-Frontend-ID", "").lower()
    if frontend in KNOWN_FRONTENDS:
        return frontend
    if request.headers.get(WEBAPP_INIT_DATA_HEADER):
        return "webapp"
    return "unknown"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Adds request context to every request.

    Headers:
    - X-Request-ID: Unique request identifier (generated if not provided)
    - X-Frontend-ID: Frontend source identifier (web, webapp, cli, api)
    - X-Response-Time: Response duration in milliseconds

    All logs within a request include request_id, frontend, method and path.
    Handlers can read request.state.request_id and request.state.frontend.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        frontend = _detect_frontend(request)
        start_time = utc_now()

        request.state.request_id = request_id
        request.state.frontend = frontend
        request.state.start_time = start_time

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            frontend=frontend,
            method=request.method,
            path=request.url.path,
        )

        logger.debug(
            "Request started",
            extra={
                "client_host": request.client.host if request.client else None,
                "user_agent": request.headers.get("User-Agent"),
            },
        )

        try:
            response = await call_next(request)

            duration_ms = int((utc_now() - start_time).total_seconds() * 1000)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"

            logger.debug(
                "Request completed",
                extra={"status_code": response.status_code, "duration_ms": duration_ms},
            )
            return response

        except Exception as exc:
            duration_ms = int((utc_now() - start_time).total_seconds() * 1000)
            logger.error(
                "Request failed with exception",
                extra={"duration_ms": duration_ms, "error_type": type(exc).__name__},
            )
            raise

        finally:
            structlog.contextvars.clear_contextvars()
