"""
Base exception classes for the CV builder backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from enum import Enum
from typing import Optional, Any


class CVBuilderError(Exception):
    """
    Base exception for all CV builder errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(CVBuilderError):
    """Resource not found."""

    pass


class ValidationError(CVBuilderError):
    """Input validation failed."""

    pass


class AuthenticationError(CVBuilderError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(CVBuilderError):
    """Authorization failed (insufficient permissions, CSRF, ownership)."""

    pass


class ExternalServiceError(CVBuilderError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class BackendErrorKind(str, Enum):
    """Closed set of data store failure classes the application reacts to."""

    NOT_FOUND = "not_found"
    UNIQUE_VIOLATION = "unique_violation"
    PERMISSION_DENIED = "permission_denied"
    OTHER = "other"


# PostgREST / PostgreSQL codes with a meaning the application depends on.
# Anything else is OTHER and carries the raw backend message.
BACKEND_ERROR_CODES: dict[str, BackendErrorKind] = {
    "PGRST116": BackendErrorKind.NOT_FOUND,
    "23505": BackendErrorKind.UNIQUE_VIOLATION,
    "42501": BackendErrorKind.PERMISSION_DENIED,
}


class BackendError(ExternalServiceError):
    """A data store call failed; ``kind`` says how."""

    def __init__(
        self,
        operation: str,
        kind: BackendErrorKind,
        backend_code: Optional[str] = None,
        raw_message: str = "",
    ):
        super().__init__(
            f"Database operation failed: {operation}",
            service="supabase",
            code="BACKEND_ERROR",
            details={
                "operation": operation,
                "kind": kind.value,
                "backend_code": backend_code,
            },
        )
        self.operation = operation
        self.kind = kind
        self.backend_code = backend_code
        self.raw_message = raw_message


def classify_backend_error(exc: Exception, operation: str) -> BackendError:
    """
    Map a raw backend exception to a BackendError.

    PostgREST errors expose ``code`` and ``message``; other exceptions
    (network failures, client bugs) fall through to OTHER.
    """
    if isinstance(exc, BackendError):
        return exc

    code = getattr(exc, "code", None)
    code = str(code) if code is not None else None
    message = getattr(exc, "message", None) or str(exc)
    kind = BACKEND_ERROR_CODES.get(code or "", BackendErrorKind.OTHER)
    return BackendError(operation, kind, backend_code=code, raw_message=message)
