"""Status Code Routes: GET / and GET /{code}, both backed by the classifier.

Invariants:
    - Exactly two patterns: root and a single path segment
    - No catch-all: deeper paths fall through to the framework's default 404
    - Failures propagate as ProbeError and are rendered by the error handlers

Design Decisions:
    - Two endpoints instead of one with an optional parameter: on "/" FastAPI
      would bind `code` from the query string, so /?code=200 would answer 200
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from corsprobe.api.error_handlers import reply_response
from corsprobe.core.classify import classify

router = APIRouter(tags=["status"])


def _respond(code: str | None) -> PlainTextResponse:
    return reply_response(classify(code))


@router.get("/", response_class=PlainTextResponse)
async def usage():
    """No code requested: 400 with usage text."""
    return _respond(None)


@router.get("/{code}", response_class=PlainTextResponse)
async def status_code(code: str):
    """Reply with the requested status code, or 404 for unknown ones."""
    return _respond(code)
