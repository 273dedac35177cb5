# ============================================================================
# ERROR TAXONOMY
# ============================================================================
# STATUS: Core - Exceptions raised below the HTTP boundary
# PURPOSE: One exception per error class, each carrying its HTTP status
# CREATED: 19 OCT 2026
# ============================================================================
"""
Error Taxonomy

Exceptions raised by the service and repository layers. Routes translate
them into `{"error": message}` JSON bodies using `status_code`.

Not-found is deliberately absent: an update that matches no row returns
None and the route answers 404.
"""

from typing import Any, Optional


class ReturnsError(Exception):
    """Base exception for the returns API."""

    status_code: int = 500

    def __init__(self, message: str, operation: Optional[str] = None):
        self.message = message
        self.operation = operation
        super().__init__(message)


class ConfigurationError(ReturnsError):
    """Data store is not configured (DATABASE_URL unset)."""

    status_code = 503


class InvalidRequestError(ReturnsError):
    """Client input rejected before any database access."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(message)


class DataStoreError(ReturnsError):
    """Query failure, lost connection, or pool timeout."""

    status_code = 500

    DEFAULT_MESSAGE = "Database error"

    @classmethod
    def from_exception(cls, exc: BaseException, operation: Optional[str] = None) -> "DataStoreError":
        """Keep the driver message when there is one."""
        message = str(exc).strip() or cls.DEFAULT_MESSAGE
        return cls(message, operation=operation)


__all__ = [
    "ReturnsError",
    "ConfigurationError",
    "InvalidRequestError",
    "DataStoreError",
]
