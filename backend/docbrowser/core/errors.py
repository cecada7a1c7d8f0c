"""Error Hierarchy: typed, categorized exceptions for every browse failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - message is the short user-facing phrase; raw driver detail is logged, never stored here
    - VALIDATION errors are 400; TIMEOUT is 500; STORE status is chosen per call site

Design Decisions:
    - Single hierarchy with BrowserError base: one FastAPI handler renders all of them
    - http_status is per instance: the listing path maps store failures to 400,
      the fetch path to 500
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    STORE = "store"
    TIMEOUT = "timeout"
    FATAL = "fatal"


class BrowserError(Exception):
    """Base exception for all document browser errors."""

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


# ─── Caller Errors (400-level) ──────────────────────────────────

class BrowseValidationError(BrowserError):
    """Missing or malformed query parameter."""
    def __init__(self, message: str, field: str):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.field = field


# ─── Store Errors ───────────────────────────────────────────────

class StoreQueryError(BrowserError):
    """Store rejected a query, returned unusable data, or a decode step failed."""
    def __init__(self, message: str, operation: str, http_status: int = 500):
        super().__init__(
            message, "STORE_ERROR", ErrorCategory.STORE,
            ErrorSeverity.ERROR, http_status,
        )
        self.operation = operation


class QueryTimeoutError(BrowserError):
    """Per-request deadline elapsed before the store answered."""
    def __init__(self, operation: str):
        super().__init__(
            f"{operation} timed out", "TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.ERROR, 500,
        )
        self.operation = operation


class StoreUnavailableError(BrowserError):
    """Startup could not reach the store. The process must not serve requests."""
    def __init__(self, phase: str, cause: str):
        super().__init__(
            f"store {phase} failed: {cause}", "STORE_UNAVAILABLE",
            ErrorCategory.FATAL, ErrorSeverity.CRITICAL, 503,
        )
        self.phase = phase
