"""
Request context middleware.

Runs before every route: resolves the session, makes sure the browser has
a CSRF token, and freezes both into a RequestContext on ``request.state``.
On the way out it writes pending cookies and the security headers.
"""

import logging
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from modules.auth.guard import extract_access_token
from modules.security.csrf import CookieJar
from shared.config import Settings
from shared.context import RequestContext

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

CONTENT_SECURITY_POLICY = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline'; "
    "style-src 'self' 'unsafe-inline'; "
    "img-src 'self' data: blob:; "
    "font-src 'self'; "
    "connect-src 'self' https://*.supabase.co;"
)


def apply_security_headers(response: Response, settings: Settings) -> None:
    if not settings.strict_headers:
        return
    for name, value in SECURITY_HEADERS.items():
        response.headers[name] = value
    # Development servers need inline scripts for hot reload
    if not settings.debug:
        response.headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Builds the per-request context from the application's container."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        container = request.app.state.container
        settings = container.settings
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]

        guard = container.guard
        session = await guard.populate_session(request, request_id)

        jar = CookieJar(request.cookies)
        csrf_token = container.csrf.get_or_create_token(jar)

        request.state.cookie_jar = jar
        request.state.context = RequestContext(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
            access_token=extract_access_token(request, guard.session_cookie_name),
            session=session,
            csrf_token=csrf_token,
        )

        response = await call_next(request)

        jar.apply(response)
        apply_security_headers(response, settings)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
