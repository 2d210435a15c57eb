"""Middleware Stack: fault injection, CORS, and request logging.

Invariants:
    - Order, outermost first: RequestLogging → CORS → FaultInjection → router
    - Every response, including injected failures and framework 404/405,
      passes back through CORSMiddleware
    - pre_break short-circuits before routing: the route handler never runs
    - post_break runs the route handler, then discards its response
    - pre_break wins when both switches are set (post-check never reached)

Design Decisions:
    - Starlette applies add_middleware() in reverse: the last one added is outermost
    - Injected failures are converted to responses here, not raised: an exception
      raised in middleware skips the app's exception handlers
"""

import logging
import time

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import Headers, MutableHeaders
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import Message, Receive, Scope, Send

from corsprobe.api.error_handlers import error_response, unexpected_error_response
from corsprobe.config import FaultSwitches
from corsprobe.core.errors import InternalServerError

logger = logging.getLogger(__name__)

PRE_BREAK_MESSAGE = "Pre-Injection Break"
POST_BREAK_MESSAGE = "Post-Injection Break"

CORS_ALLOWED_METHODS = ["GET"]


class OriginlessCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that also stamps requests sent without an Origin header.

    Starlette's CORSMiddleware passes such requests through untouched; with a
    wildcard origin the allow-origin header is still added here.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or Headers(scope=scope).get("origin") is not None:
            await super().__call__(scope, receive, send)
            return

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers.update(self.simple_headers)
            await send(message)

        await self.app(scope, receive, send_with_cors)


class FaultInjectionMiddleware(BaseHTTPMiddleware):
    """Force a 500 before or after the downstream app, per FaultSwitches."""

    def __init__(self, app, switches: FaultSwitches):
        super().__init__(app)
        self.switches = switches

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        if self.switches.pre_break:
            return error_response(request, InternalServerError(PRE_BREAK_MESSAGE))
        try:
            response = await call_next(request)
        except Exception as exc:
            return unexpected_error_response(request, exc)
        if self.switches.post_break:
            # Drain so the downstream task can finish sending.
            async for _ in response.body_iterator:
                pass
            return error_response(request, InternalServerError(POST_BREAK_MESSAGE))
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency of every request at DEBUG."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.debug(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response


def install_middleware(app: FastAPI, switches: FaultSwitches) -> None:
    """Install the middleware stack; call once per app."""
    app.add_middleware(FaultInjectionMiddleware, switches=switches)
    app.add_middleware(
        OriginlessCORSMiddleware,
        allow_origins=["*"],
        allow_methods=CORS_ALLOWED_METHODS,
    )
    app.add_middleware(RequestLoggingMiddleware)
