"""Error Hierarchy — typed, categorized exceptions for the API's failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; storage errors (500-level) are critical
    - to_response() produces the wire envelope {"error": message}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ApiError base: one global handler catches all
    - code/category/severity travel in log extras, not in the response body
"""

from enum import Enum

from app.core.outcomes import (
    Conflict, InvalidIdentifier, NotFound, Outcome, ValidationFailed,
)
from app.core.validation import EntitySchema


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


class ApiError(Exception):
    """Base exception for all API errors."""

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

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {"error": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class DocumentValidationError(ApiError):
    """Field rules or a unique constraint rejected the document."""
    def __init__(self, message: str):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )


class InvalidIdentifierError(ApiError):
    """Path identifier is not a well-formed document id."""
    def __init__(self, resource_label: str, raw_id: str):
        super().__init__(
            f"Invalid {resource_label} ID", "INVALID_ID",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, 400,
        )
        self.raw_id = raw_id


class ResourceNotFoundError(ApiError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str):
        super().__init__(
            f"{resource_type} not found", "RESOURCE_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO, 404,
        )


class MalformedBodyError(ApiError):
    """Request body is not a JSON object."""
    def __init__(self, message: str = "Request body must be a JSON object"):
        super().__init__(
            message, "MALFORMED_BODY", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ApiError):
    """Storage operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 503,
        )
        self.operation = operation


# ─── Outcome mapping ────────────────────────────────────────────

def error_for_outcome(schema: EntitySchema, outcome: Outcome) -> ApiError | None:
    """Translate a failed outcome into its ApiError; None for Success."""
    if isinstance(outcome, ValidationFailed):
        return DocumentValidationError(outcome.message)
    if isinstance(outcome, Conflict):
        return DocumentValidationError(outcome.message)
    if isinstance(outcome, InvalidIdentifier):
        return InvalidIdentifierError(schema.label, outcome.raw_id)
    if isinstance(outcome, NotFound):
        return ResourceNotFoundError(schema.name)
    return None
