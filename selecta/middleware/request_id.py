"""Request ID middleware.

Forwards a well-formed client X-Request-ID or mints a UUID4, echoes it on
the response and exposes it to log calls through current_request_id().
Malformed client values are replaced so they never reach the logs.
Uses raw ASGI (no BaseHTTPMiddleware).
"""

import re
import uuid
from contextvars import ContextVar
from typing import Callable

from selecta.middleware._headers import get_header

_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9_-]{1,64}")

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def current_request_id() -> str | None:
    """Request ID of the request being served on this task, if any."""
    return _request_id.get()


def resolve_request_id(raw: str | None) -> str:
    """Keep a client-supplied ID only if it is 1-64 chars of [A-Za-z0-9_-]."""
    candidate = (raw or "").strip()
    if _VALID_REQUEST_ID.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Attach a request ID to each HTTP request and its response. Raw ASGI."""
    header_key = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(get_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id
        token = _request_id.set(request_id)

        async def send_with_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (header_key, request_id.encode()),
                ]
            await send(message)

        try:
            await app(scope, receive, send_with_id)
        finally:
            _request_id.reset(token)

    return asgi_app
