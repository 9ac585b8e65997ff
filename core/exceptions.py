"""Custom exception classes for the application.

Domain errors raised by routers and services. Each carries the HTTP status
it maps to so `core.error_handlers` can render it without a lookup table.
"""

from typing import Optional, Any, Dict


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested resource does not exist."""

    def __init__(self, resource: str, identifier: Any):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'User', 'DietPlan').
            identifier: ID that was not found.
        """
        message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class ValidationError(AppException):
    """Raised when input fails a check the request schema cannot express."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, status_code=400, details=details)


class ForbiddenError(AppException):
    """Raised when a user acts on a resource owned by someone else."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            "Access denied",
            status_code=403,
            details={"resource": resource, "id": identifier},
        )


class DatabaseError(AppException):
    """Raised when database operations fail."""

    def __init__(self, message: str, operation: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        if operation:
            details["operation"] = operation
        super().__init__(message, status_code=500, details=details)


class InsufficientDataError(AppException):
    """Raised when stored data is not enough to complete an operation.

    Used when a user has no height/weight/birth date on file and targets
    cannot be derived.
    """

    def __init__(self, message: str, missing: Optional[list] = None):
        details = {"missing": missing} if missing else {}
        super().__init__(message, status_code=400, details=details)
