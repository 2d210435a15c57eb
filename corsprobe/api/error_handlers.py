"""Error Handlers: convert typed failures into plain-text HTTP responses.

Invariants:
    - NotFoundError → 404, InternalServerError → 500, body is the message plus CRLF
    - Conversion happens inside the CORS layer, so converted failures carry
      Access-Control-Allow-Origin like any other response
    - Unexpected exceptions become a bare 500, never leaking internal details

Design Decisions:
    - error_response() shared by the exception handler and the fault injector:
      one conversion path for raised and injected failures
    - No Exception handler registered on the app: Starlette runs that handler in
      ServerErrorMiddleware, outside CORSMiddleware, so its responses would lose
      the CORS header. FaultInjectionMiddleware converts unexpected exceptions instead.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse

from corsprobe.core.classify import Reply
from corsprobe.core.errors import ErrorSeverity, ProbeError

logger = logging.getLogger(__name__)

LINE_END = "\r\n"


def reply_response(reply: Reply) -> PlainTextResponse:
    """Render a successful classification."""
    return PlainTextResponse(reply.body + LINE_END, status_code=reply.status_code)


def error_response(request: Request, exc: ProbeError) -> PlainTextResponse:
    """Log a typed failure and render it as its HTTP status and message."""
    level = (
        logging.WARNING if exc.severity == ErrorSeverity.WARNING else logging.ERROR
    )
    logger.log(
        level,
        f"{type(exc).__name__}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return PlainTextResponse(exc.message + LINE_END, status_code=exc.http_status)


def unexpected_error_response(
    request: Request, exc: Exception,
) -> PlainTextResponse:
    """Catch-all: never leaks internal details."""
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=exc,
    )
    return PlainTextResponse(
        "Internal Server Error" + LINE_END,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register the typed failure handler on the FastAPI app."""

    @app.exception_handler(ProbeError)
    async def probe_error_handler(request: Request, exc: ProbeError):
        return error_response(request, exc)
