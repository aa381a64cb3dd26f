from __future__ import annotations

import logging
import time
import uuid
from typing import Optional

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("itemsvc.http")


class RequestContextMiddleware:
    """Logs every HTTP request and stamps the response with ``x-request-id``.

    Plain ASGI rather than ``BaseHTTPMiddleware``: the endpoint must get the
    server's own ``receive`` so ``Request.is_disconnected`` sees a client that
    has hung up.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = Headers(scope=scope).get("x-request-id") or uuid.uuid4().hex
        started = time.perf_counter()
        status: Optional[int] = None

        def elapsed_ms() -> int:
            return int((time.perf_counter() - started) * 1000)

        async def send_tagged(message: Message) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
                MutableHeaders(scope=message).append("x-request-id", request_id)
            await send(message)

        logger.info(
            "request.start",
            extra={"request_id": request_id, "method": scope["method"], "path": scope["path"]},
        )
        try:
            await self.app(scope, receive, send_tagged)
        except Exception:
            logger.exception(
                "request.exception",
                extra={"request_id": request_id, "duration_ms": elapsed_ms()},
            )
            raise
        logger.info(
            "request.end",
            extra={"request_id": request_id, "status": status, "duration_ms": elapsed_ms()},
        )
