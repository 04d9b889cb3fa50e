"""
Application error taxonomy.

Every error raised on purpose by spacebio derives from ApplicationError and
carries a category that the API layer maps to an HTTP status code.
"""

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Coarse error classes understood by the API boundary."""

    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    EXTERNAL = "external"
    INTERNAL = "internal"


_HTTP_STATUS: dict[ErrorCategory, int] = {
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.EXTERNAL: 502,
    ErrorCategory.INTERNAL: 500,
}


class ApplicationError(Exception):
    """Base exception for spacebio failures."""

    code: str = "INTERNAL_ERROR"
    category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    @property
    def http_status_code(self) -> int:
        return _HTTP_STATUS.get(self.category, 500)


class NotFoundError(ApplicationError):
    """Unknown identifier on a lookup."""

    code = "NOT_FOUND"
    category = ErrorCategory.NOT_FOUND

    def __init__(self, resource_type: str, resource_id: str):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(
            f"{resource_type} not found",
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class ValidationError(ApplicationError):
    """Malformed filter or insert payload."""

    code = "VALIDATION_ERROR"
    category = ErrorCategory.VALIDATION


class ExternalServiceError(ApplicationError):
    """LLM or third-party API unavailable or returned a malformed response."""

    code = "EXTERNAL_SERVICE_ERROR"
    category = ErrorCategory.EXTERNAL

    def __init__(self, service: str, message: str):
        self.service = service
        super().__init__(f"[{service}] {message}", details={"service": service})


class InternalError(ApplicationError):
    """Anything unexpected."""

    code = "INTERNAL_ERROR"
    category = ErrorCategory.INTERNAL
