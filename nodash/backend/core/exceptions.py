"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Each class carries the ``error`` name and HTTP status used in the
``{error, message, statusCode}`` response body.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    error = "InternalServerError"
    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    error = "NotFound"
    status_code = 404

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    error = "ValidationError"
    status_code = 400

    def __init__(self, message: str = "Validation failed", details: list | None = None) -> None:
        self.details = details or []
        super().__init__(message)


class DatabaseError(ApplicationError):
    """Raised when a storage backend reports a failure."""

    error = "DatabaseError"
    status_code = 500

    def __init__(self, message: str = "Database error") -> None:
        super().__init__(message)
