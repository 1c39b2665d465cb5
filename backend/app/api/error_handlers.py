"""Error Handlers — map exceptions raised under /payment-instructions to JSON envelopes.

Invariants:
    - Rejected instructions (4xx PaymentServiceError) are rendered, not re-logged: the
      orchestrator already logged them once at WARNING with their status_code
    - Only 5xx errors are logged at ERROR
    - Malformed envelopes → 400 VALIDATION_ERROR with one entry per offending field
    - Unhandled exceptions → 500 INTERNAL_ERROR, no internal details in the body

Design Decisions:
    - Handlers are module-level coroutines registered via add_exception_handler: each
      is importable and testable on its own
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import ErrorCategory, ErrorSeverity, PaymentServiceError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(PaymentServiceError, handle_payment_error)
    app.add_exception_handler(RequestValidationError, handle_envelope_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_payment_error(request: Request, exc: PaymentServiceError) -> JSONResponse:
    """Render a domain error; log it only when it is a server-side failure."""
    if exc.http_status >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            f"{exc.code} on {request.url.path}: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_envelope_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Request body failed the envelope schema before reaching the orchestrator."""
    fields = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Malformed request on {request.url.path}: "
        f"{', '.join(f['field'] for f in fields)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return _envelope(
        status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", "Invalid request data",
        ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details=fields,
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all — logged with traceback, body stays generic."""
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR",
        "An unexpected error occurred", ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
    )


def _envelope(
    http_status: int, code: str, message: str,
    category: ErrorCategory, severity: ErrorSeverity, details: list | None = None,
) -> JSONResponse:
    error = {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
    }
    if details is not None:
        error["details"] = details
    return JSONResponse(status_code=http_status, content={"error": error})
