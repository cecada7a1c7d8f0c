"""Error Handlers: global exception handlers for the browse API.

Invariants:
    - BrowserError -> plain-text short message with the error's own status
    - BrowserError is logged at the level matching its severity
    - RequestValidationError -> 400 plain text
    - Exception (catch-all) -> 500 plain text, never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from docbrowser.core.errors import BrowserError, ErrorSeverity

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_browser_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_browser_error_handler(app: FastAPI) -> None:

    @app.exception_handler(BrowserError)
    async def browser_error_handler(request: Request, exc: BrowserError):
        """Handle all browse domain/store errors."""
        logger.log(
            _LOG_LEVELS[exc.severity],
            f"BrowserError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return PlainTextResponse(exc.message, status_code=exc.http_status)


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return PlainTextResponse(
            "invalid request", status_code=status.HTTP_400_BAD_REQUEST,
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return PlainTextResponse(
            "internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
