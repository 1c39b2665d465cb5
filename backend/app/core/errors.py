"""Error Hierarchy — typed, categorized exceptions for payment service failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable by the caller; internal errors are 500-level
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PaymentServiceError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - InvalidInstructionError carries the full "failed" transfer payload in details:
      callers get the same shape whether parsing or validation rejected the instruction
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from app.core.domain_types import StatusCode, TransferResult


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    instruction_type: str | None = None
    status_code: str | None = None


class PaymentServiceError(Exception):
    """Base exception for all payment service errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidInstructionError(PaymentServiceError):
    """Instruction rejected by the grammar or the transaction rules."""
    def __init__(
        self, status_code: StatusCode, status_reason: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.status_code = status_code.value
        super().__init__(
            status_reason, "INVLDDATA", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.status_code = status_code
        self.status_reason = status_reason
        self.details = TransferResult.failed(status_code, status_reason).to_dict()

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.details
        return response
