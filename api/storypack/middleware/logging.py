"""Access logging for the story-pack API.

One ``request_completed`` event per HTTP request, carrying method, path,
status and duration as structured fields. Requests that raise before a
response starts are logged as ``request_failed`` and re-raised.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Awaitable, Callable

Scope = dict[str, Any]
Message = dict[str, Any]
Receive = Callable[[], Awaitable[Message]]
Send = Callable[[Message], Awaitable[None]]
ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]

logger = logging.getLogger("storypack.access")


def _request_fields(scope: Scope) -> dict[str, Any]:
    client = scope.get("client")
    return {
        "method": scope.get("method"),
        "path": scope.get("path"),
        "client_ip": client[0] if client else None,
    }


class StructuredLoggingMiddleware:
    """Raw ASGI middleware that logs every HTTP request once."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status_code: int | None = None

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                logger.info(
                    "request_completed",
                    extra={
                        **_request_fields(scope),
                        "status_code": status_code,
                        "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                    },
                )
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            if status_code is None:
                logger.exception(
                    "request_failed",
                    extra={
                        **_request_fields(scope),
                        "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                    },
                )
            raise
