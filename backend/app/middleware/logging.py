"""
StudyMate Backend — Request Logging Middleware
================================================

What:  One access-log line per HTTP request with status and duration.
How:   Measures time around call_next and logs on the `studymate.access`
       logger; level follows the status code.
When:  After RequestIDMiddleware (uses request ID for correlation).

Logged fields (also passed as `extra` for structured handlers):
    request_id, method, path, status, duration_ms, client_ip

Not logged: request bodies and query strings. Partner profiles and
query parameters carry email addresses.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("studymate.access")

# Probed every few seconds by monitors; logging them drowns real traffic
QUIET_PATHS = {"/", "/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    Level by status:
        5xx → ERROR, 4xx → WARNING, everything else → INFO

    Typical durations:
        - GET /topPartners: 2-10ms (indexed sort + limit)
        - GET /partners?subject=...: 5-50ms (regex scan, no index use)
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        # request.client is None under the test transport
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        if path in QUIET_PATHS:
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
