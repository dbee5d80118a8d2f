"""Registry error hierarchy.

Every failure carries a category and a human-readable message. The HTTP layer
maps categories to status codes through a single exception handler.
"""

from enum import Enum


class ErrorCategory(str, Enum):
    INVALID_FORMAT = "invalid_format"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"


class RegistryError(Exception):
    """Base exception for all link registry failures."""

    category: ErrorCategory
    http_status: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"detail": self.message, "category": self.category.value}


class InvalidFormatError(RegistryError):
    """Short link does not match the configured pattern."""
    category = ErrorCategory.INVALID_FORMAT
    http_status = 400


class ConflictError(RegistryError):
    """Short link already exists."""
    category = ErrorCategory.CONFLICT
    http_status = 409


class NotFoundError(RegistryError):
    category = ErrorCategory.NOT_FOUND
    http_status = 404


class UnavailableError(RegistryError):
    """Backend resource exhausted or the underlying store failed."""
    category = ErrorCategory.UNAVAILABLE
    http_status = 503
