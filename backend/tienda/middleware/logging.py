"""
Tienda API: Request Logging Middleware
======================================

What:  One access log line per HTTP request.
Why:   Access logging with request-ID correlation, which uvicorn's own access
       log does not provide.
When:  Runs inside RequestIDMiddleware so the ID is already set.

Line format:
    POST /api/ordenes → 400 in 3.2ms [a1b2c3d4] (route=/api/ordenes, bytes=131)

Request bodies are never logged: client rows carry personal data (email,
address, phone).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from tienda.middleware.request_id import request_id_var

logger = logging.getLogger("tienda.access")

# Probed every few seconds by the hosting platform
QUIET_PATHS = frozenset({"/", "/health"})


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, anything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _route_template(request: Request) -> str:
    # /api/check-columns/{table} groups better than the raw path
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status, duration and response size per request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        rid = request_id_var.get("")
        route = _route_template(request)
        size = response.headers.get("content-length", "-")

        logger.log(
            level_for_status(response.status_code),
            "%s %s → %d in %.1fms [%s] (route=%s, bytes=%s)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            rid,
            route,
            size,
            extra={
                "request_id": rid,
                "route": route,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
