"""
Authentication dependencies.

Adapts the session guard to FastAPI. Page routes take the AuthResult and
turn a Redirect into a 303; API routes use get_current_user, which turns
it into a 401 JSON body instead.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.responses import RedirectResponse

from modules.auth.exceptions import NotAuthenticatedError
from modules.auth.guard import SessionGuard
from modules.auth.models import AuthResult, Redirect, RedirectReason
from shared.context import RequestContext
from shared.models import AuthenticatedUser, Session

from ..dependencies import get_guard


def get_request_context(request: Request) -> RequestContext:
    """The context built by RequestContextMiddleware for this request."""
    context = getattr(request.state, "context", None)
    if context is None:
        raise RuntimeError("RequestContextMiddleware is not installed")
    return context


async def get_auth_result(
    context: RequestContext = Depends(get_request_context),
    guard: SessionGuard = Depends(get_guard),
) -> AuthResult:
    """
    Dependency for page routes.

    Usage:
        @router.get("/profile")
        async def page(result: AuthResult = Depends(get_auth_result)):
            if isinstance(result, Redirect):
                return redirect_response(result)
    """
    return await guard.require_auth(context)


def redirect_response(redirect: Redirect) -> RedirectResponse:
    return RedirectResponse(redirect.location, status_code=303)


async def get_current_user(
    result: AuthResult = Depends(get_auth_result),
) -> AuthenticatedUser:
    """
    Dependency that requires a verified user with a profile.

    Use this for API endpoints; a Redirect becomes a 401.

    Usage:
        @router.post("/feedback")
        async def route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if isinstance(result, Redirect):
        reason = result.error_flag if result.reason is RedirectReason.UNRECOVERABLE else None
        raise NotAuthenticatedError(reason)
    return result.to_user()


def get_session(context: RequestContext = Depends(get_request_context)) -> Session:
    """Dependency that requires a resolved session, without the profile check."""
    if context.session is None:
        raise NotAuthenticatedError()
    return context.session


def get_optional_user(
    context: RequestContext = Depends(get_request_context),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without authentication.
    """
    if context.session is None:
        return None
    return AuthenticatedUser(id=context.session.user_id, email=context.session.email)


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
OptionalAuth = Depends(get_optional_user)
