"""
Authentication module.

Handles session resolution, the session guard and its profile self-repair.

Public API:
- IAuthService: Interface for the external auth backend
- SessionGuard: populate_session / require_auth
- AuthResult: Verified | Redirect
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService
from .guard import SessionGuard, extract_access_token
from .models import (
    AuthResult,
    AuthenticatedUser,
    JWTPayload,
    Redirect,
    RedirectReason,
    Session,
    Verified,
)
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    NotAuthenticatedError,
    CsrfValidationError,
    OwnershipError,
)

__all__ = [
    # Interface
    "IAuthService",
    "SessionGuard",
    "extract_access_token",
    # Models
    "AuthResult",
    "AuthenticatedUser",
    "JWTPayload",
    "Redirect",
    "RedirectReason",
    "Session",
    "Verified",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "NotAuthenticatedError",
    "CsrfValidationError",
    "OwnershipError",
]
