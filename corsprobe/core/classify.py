"""Response Classifier: maps the requested path segment to a reply or a typed failure.

Invariants:
    - Pure and deterministic: same input, same outcome, no side effects
    - Exactly one outcome per call (a Reply is returned or a ProbeError is raised)
    - Missing code is a usage reply (400), never a NotFoundError

Design Decisions:
    - Literal string matching on "200" / "500": the segment is not parsed as an
      integer, so "0200" or "200.0" are unknown codes (404)
"""

from dataclasses import dataclass

from corsprobe.core.errors import InternalServerError, NotFoundError

USAGE_MESSAGE = "usage: /200 or /500.\r\nCheck for CORS header."


@dataclass(frozen=True)
class Reply:
    """Successful classification: HTTP status plus plain-text body."""
    status_code: int
    body: str


def classify(code: str | None) -> Reply:
    """Classify a status-code path segment.

    Raises:
        InternalServerError: when code is "500".
        NotFoundError: for any code other than "200" or "500".
    """
    if code is None:
        return Reply(400, USAGE_MESSAGE)
    if code == "200":
        return Reply(200, "200 OK")
    if code == "500":
        raise InternalServerError("500 Internal Server Error")
    raise NotFoundError("404 Not Found")
