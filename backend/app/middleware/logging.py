"""
PasteBin Backend - Request Logging Middleware
==============================================

What:  One access-log line per HTTP request.
How:   Times call_next and logs "<METHOD> <path> <status> <ms> [<request id>]".
       The level follows the status class so 5xx can be alerted on.
When:  Runs just inside RequestIDMiddleware so the request ID is available.

What we log vs what we DON'T log:
    ✅ Log: method, path, status, duration, request ID
    ❌ Don't log: request bodies (passwords, paste content), query strings,
                  the Authorization header (bearer tokens), client IPs
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("pastebin.access")

# Polled by load balancers every few seconds
UNLOGGED_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Writes the access log. Unhandled exceptions are logged by the 500 handler instead."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms [%s]",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id_var.get(""),
        )
        return response
