"""Error Hierarchy: typed failures produced by the classifier and the fault injector.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - NotFoundError maps to 404, InternalServerError maps to 500
    - message is exactly the text the client receives as the response body
    - StartupError is never raised while serving; it only ends the process

Design Decisions:
    - Failures are exceptions, not return values: the FastAPI handler layer
      converts them at the outermost boundary (ADR: uniform error shape)
    - Two variants only: the pipeline never needs more than NotFound / InternalError
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories."""
    RESOURCE_NOT_FOUND = "resource_not_found"
    INTERNAL = "internal"
    STARTUP = "startup"


class ProbeError(Exception):
    """Base exception for failures converted into HTTP responses."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


# ─── Request Failures ───────────────────────────────────────────

class NotFoundError(ProbeError):
    """Client requested an unrecognized status code."""
    def __init__(self, message: str = "404 Not Found"):
        super().__init__(
            message, "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404,
        )


class InternalServerError(ProbeError):
    """Server-side fault, requested through /500 or injected by middleware."""
    def __init__(self, message: str = "500 Internal Server Error"):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, 500,
        )


# ─── Startup Failures ───────────────────────────────────────────

class StartupError(Exception):
    """Unrecoverable startup failure. `tag` becomes the process exit reason."""

    BAD_ENV = "Bad Env"
    BAD_BIND = "Bad Bind"
    BAD_LAUNCH = "Bad Launch"

    def __init__(self, tag: str, detail: str):
        super().__init__(f"{tag}: {detail}")
        self.tag = tag
        self.detail = detail
        self.category = ErrorCategory.STARTUP
        self.severity = ErrorSeverity.CRITICAL
