"""Error Hierarchy — typed, categorized exceptions for all facade failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Lookup misses are 404; registry failures are 502/503 and never masked as empty results
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with EmployeeApiError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    CONTRACT = "contract"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    employee_id: str | None = None
    operation: str | None = None
    upstream_status: int | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class EmployeeApiError(Exception):
    """Base exception for all facade errors."""

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
                "context": {
                    "employee_id": self.context.employee_id,
                    "operation": self.context.operation,
                    "upstream_status": self.context.upstream_status,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Lookup Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(EmployeeApiError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.employee_id = ctx.employee_id or resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


# ─── Registry Errors (500-level) ────────────────────────────────

_API_ERROR_STATUS = {
    "connection_error": 503,
    "timeout": 503,
    "rate_limit": 503,
    "bad_status": 502,
    "malformed_response": 502,
}


class RegistryAPIError(EmployeeApiError):
    """Registry could not be reached or answered with something unreadable."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        retry_after_ms: int | None = None,
        upstream_status: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        if upstream_status is not None:
            ctx.upstream_status = upstream_status
        super().__init__(
            f"Registry error ({api_error_type}): {message}",
            "REGISTRY_API_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx,
            _API_ERROR_STATUS.get(api_error_type, 502),
        )
        self.api_error_type = api_error_type


class RegistryWriteRejectedError(EmployeeApiError):
    """Registry refused a create or delete (error field or non-success status)."""
    def __init__(
        self,
        operation: str,
        reason: str,
        upstream_status: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        ctx.upstream_status = upstream_status
        super().__init__(
            f"Registry rejected {operation}: {reason}",
            "REGISTRY_WRITE_REJECTED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, ctx, 502,
        )
        self.operation = operation
        self.reason = reason


class RegistryContractError(EmployeeApiError):
    """Registry response is missing a field the facade requires."""
    def __init__(
        self, operation: str, missing_field: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Registry {operation} response missing required field '{missing_field}'",
            "REGISTRY_CONTRACT_VIOLATION", ErrorCategory.CONTRACT,
            ErrorSeverity.CRITICAL, ctx, 502,
        )
        self.operation = operation
        self.missing_field = missing_field
