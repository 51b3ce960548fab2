"""Access log middleware: one line per request with method, path, status and duration.

Uses raw ASGI (no BaseHTTPMiddleware). The request ID set by
RequestIDMiddleware is included when present.
"""

import logging
import time
from typing import Callable

logger = logging.getLogger("selecta.access")


def AccessLogMiddleware(app: Callable) -> Callable:
    """Log each HTTP request once the response has been sent. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        start = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: dict) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await app(scope, receive, send_wrapper)
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "%s %s %d %.1fms request_id=%s",
                scope.get("method", "-"),
                scope.get("path", "-"),
                status_code,
                duration_ms,
                scope.get("state", {}).get("request_id", "-"),
            )

    return asgi_app
