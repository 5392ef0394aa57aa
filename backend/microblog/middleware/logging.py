"""
Microblog Backend — Request Logging Middleware
================================================

What:  Tags each request with a short correlation ID and logs it on arrival
       and again on completion.
How:   The ID is the client's X-Request-ID when present, otherwise the first
       8 characters of a UUID4. It is kept in a ContextVar so the exception
       handlers in main.py can prefix their lines with it, and echoed back
       in the X-Request-ID response header. The entry line carries verb,
       path and ID only; the completion line adds status and duration, with
       the level chosen from the status.

What we log vs what we DON'T log (privacy):
    ✅ Log: method, path, status, duration, client IP, request ID
    ❌ Don't log: request body, response body, headers
"""

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("microblog.access")

# Coroutine-local: interleaved keep-alive requests each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Assigns the request ID and logs each HTTP request and response.

    Level by status:
        5xx → ERROR, 4xx → WARNING, everything else → INFO
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        request_id_var.set(rid)

        # request.client may be None in testing
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path

        logger.info(
            "%s %s [%s]",
            method,
            path,
            rid,
            extra={"request_id": rid, "method": method, "path": path},
        )

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

        response.headers["X-Request-ID"] = rid
        return response
