"""
CSRF enforcement dependency.

Mounted on every router that changes application data. The webhook and
CSP report routers are mounted without it.
"""

import logging

from fastapi import Depends, Request

from modules.auth.exceptions import CsrfValidationError
from modules.security.csrf import CookieJar, CsrfTokenService, requires_csrf_check
from shared.config import Settings
from shared.context import RequestContext

from ..dependencies import get_app_settings, get_csrf_service
from .auth import get_request_context

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def submitted_csrf_token(request: Request, csrf: CsrfTokenService) -> str | None:
    """Header first, then the form field for form-encoded bodies."""
    token = request.headers.get(csrf.header_name)
    if token:
        return token

    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        # Starlette caches the parsed form; handlers reading Form(...) see it too
        form = await request.form()
        value = form.get(csrf.form_field)
        return value if isinstance(value, str) else None
    return None


async def enforce_csrf(
    request: Request,
    context: RequestContext = Depends(get_request_context),
    csrf: CsrfTokenService = Depends(get_csrf_service),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """
    Reject state-changing requests that do not echo the CSRF cookie.

    Requests that authenticate with a bearer token and carry no session
    cookie are not cookie-ambient and are let through.
    """
    if not requires_csrf_check(request.method):
        return
    if context.access_token and settings.session_cookie_name not in request.cookies:
        return

    submitted = await submitted_csrf_token(request, csrf)
    jar: CookieJar = getattr(request.state, "cookie_jar", None) or CookieJar(request.cookies)
    if not csrf.verify(submitted, jar):
        logger.warning(
            "[%s] CSRF validation failed for %s %s",
            context.request_id,
            request.method,
            request.url.path,
        )
        raise CsrfValidationError(request.url.path, request.method)
