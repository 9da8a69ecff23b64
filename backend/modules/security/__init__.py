"""
Security module.

CSRF token issuance/verification and the browser-facing security endpoints.
"""

from .csrf import CookieJar, CsrfTokenService, PendingCookie, requires_csrf_check

__all__ = ["CookieJar", "CsrfTokenService", "PendingCookie", "requires_csrf_check"]
