"""
Homebase Backend: Access Log Middleware
=======================================

What:  Writes one `homebase.access` line per API call:
           GET /api/movies/3 → 404 in 2.4ms [a1b2c3d4] from 10.0.0.7
How:   Severity follows the status class (5xx ERROR, 4xx WARNING, else INFO).
       Health probes and CORS preflights are skipped; they would drown out
       real traffic.

Bodies and the Authorization header are never logged: addresses, notes and
financial figures are personal data.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from homebase.middleware.request_id import request_id_var

logger = logging.getLogger("homebase.access")

UNLOGGED_PATHS = {"/health"}
UNLOGGED_METHODS = {"OPTIONS"}


def severity_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access logging for everything except health checks and preflights."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS or request.method in UNLOGGED_METHODS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        client = request.client.host if request.client else "-"
        rid = request_id_var.get("")
        logger.log(
            severity_for(response.status_code),
            "%s %s → %d in %.1fms [%s] from %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            rid,
            client,
            extra={
                "request_id": rid,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
