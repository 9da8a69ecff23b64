"""
Shared infrastructure for the CV builder backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factories
- exceptions: Base exception classes and backend error classification
- logging_config: Root logger setup and secret redaction

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import create_service_client, create_user_client
from .exceptions import (
    CVBuilderError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    BackendError,
    BackendErrorKind,
    classify_backend_error,
)
from .models import AuthenticatedUser, Session

__all__ = [
    "Settings",
    "get_settings",
    "create_service_client",
    "create_user_client",
    "CVBuilderError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "BackendError",
    "BackendErrorKind",
    "classify_backend_error",
    "AuthenticatedUser",
    "Session",
]
