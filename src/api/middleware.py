"""ASGI middleware applied to every request before routing."""

from __future__ import annotations

import logging

from starlette.datastructures import MutableHeaders
from starlette.middleware import Middleware
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from src.config import settings
from src.correlation import correlation_id_var, generate_correlation_id

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware:
    """Assign or propagate a correlation id for each HTTP request.

    The id is read from the inbound header, generated when missing or empty,
    written back on the inbound headers so handlers can read it, bound to
    the correlation context var for logging, and echoed on the response.
    An error raised before the response starts is answered with a JSON 500
    carrying the id and then re-raised to the server.
    """

    def __init__(
        self,
        app: ASGIApp,
        header_name: str = "X-Correlation-ID",
        id_length: int = 12,
    ) -> None:
        self.app = app
        self.header_name = header_name
        self.id_length = id_length

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_headers = MutableHeaders(scope=scope)
        correlation_id = request_headers.get(self.header_name)
        if not correlation_id:
            correlation_id = generate_correlation_id(self.id_length)
            logger.debug(
                "Generated correlation id %s for %s", correlation_id, scope["path"]
            )
        request_headers[self.header_name] = correlation_id

        response_started = False

        async def send_with_correlation_id(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
                message.setdefault("headers", [])
                MutableHeaders(scope=message)[self.header_name] = correlation_id
            await send(message)

        token = correlation_id_var.set(correlation_id)
        try:
            await self.app(scope, receive, send_with_correlation_id)
        except Exception:
            if response_started:
                raise
            logger.exception(
                "Unhandled error on %s %s", scope.get("method"), scope["path"]
            )
            response = JSONResponse(
                status_code=500, content={"detail": "internal server error"}
            )
            await response(scope, receive, send_with_correlation_id)
            raise
        finally:
            correlation_id_var.reset(token)


class RemoveTrailingSlashMiddleware:
    """Route ``/products/`` the same way as ``/products``."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            path: str = scope["path"]
            if len(path) > 1 and path.endswith("/"):
                scope = dict(scope)
                scope["path"] = path.rstrip("/") or "/"
                raw_path = scope.get("raw_path")
                if raw_path:
                    scope["raw_path"] = raw_path.rstrip(b"/") or b"/"
        await self.app(scope, receive, send)


def build_middleware() -> list[Middleware]:
    """Middleware chain in execution order, outermost first."""

    return [
        Middleware(RemoveTrailingSlashMiddleware),
        Middleware(
            CorrelationIdMiddleware,
            header_name=settings.CORRELATION_ID_HEADER,
            id_length=settings.CORRELATION_ID_LENGTH,
        ),
    ]
