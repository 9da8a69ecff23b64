"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import AuthenticationError, AuthorizationError


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class NotAuthenticatedError(AuthenticationError):
    """Raised by API dependencies when the session guard asks for re-authentication."""

    def __init__(self, reason: Optional[str] = None):
        super().__init__(
            "Not authenticated",
            code="NOT_AUTHENTICATED",
            details={"reason": reason} if reason else {},
        )


class CsrfValidationError(AuthorizationError):
    """Raised when a state-changing request carries no valid CSRF token."""

    def __init__(self, path: str, method: str):
        super().__init__(
            "CSRF validation failed",
            code="CSRF_FAILED",
            details={"path": path, "method": method},
        )


class OwnershipError(AuthorizationError):
    """Raised when a user tries to act on another user's record."""

    def __init__(self, message: str = "You can only update your own profile"):
        super().__init__(message, code="OWNERSHIP_VIOLATION")
