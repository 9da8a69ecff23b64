"""
Session guard.

Two steps stand between a request and profile-dependent work:

1. ``populate_session`` runs for every request and turns the transport
   credential into a Session, or None. It fails closed and never raises.
2. ``require_auth`` runs in handlers that need a real user. It upgrades
   "has a session" to "has a session and a profile row", creating the
   profile once if it is missing.

A missing profile is repaired only when the store says "not found"
(PostgREST PGRST116, or an empty result). Every other store failure is
treated as fatal. If the backend renames that error code the repair path
silently becomes fatal for new users; see BACKEND_ERROR_CODES.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from starlette.requests import Request

from shared.context import RequestContext
from shared.exceptions import BackendError, BackendErrorKind, CVBuilderError
from shared.logging_config import safe_context
from shared.models import Session
from modules.profiles.interfaces import IProfileRepository

from .interfaces import IAuthService
from .models import AuthResult, Redirect, RedirectReason, Verified

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def extract_access_token(request: Request, cookie_name: str) -> Optional[str]:
    """Session cookie first, then ``Authorization: Bearer <token>``."""
    token = request.cookies.get(cookie_name)
    if token:
        return token

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.lower().startswith(BEARER_PREFIX):
        return auth_header[len(BEARER_PREFIX):].strip() or None
    return None


class SessionGuard:
    """Attaches sessions to requests and verifies users before profile work."""

    def __init__(
        self,
        auth: IAuthService,
        profiles: IProfileRepository,
        session_cookie_name: str = "sb-access-token",
        login_path: str = "/",
    ) -> None:
        self._auth = auth
        self._profiles = profiles
        self._session_cookie_name = session_cookie_name
        self._login_path = login_path

    @property
    def session_cookie_name(self) -> str:
        return self._session_cookie_name

    async def populate_session(
        self,
        request: Request,
        request_id: str = "",
    ) -> Optional[Session]:
        """
        Resolve the request's credential into a Session.

        Returns None when there is no credential or the auth backend
        rejects or fails to resolve it. Errors are logged, never raised.
        """
        token = extract_access_token(request, self._session_cookie_name)
        if not token:
            logger.debug("[%s] No session credential on %s", request_id, request.url.path)
            return None

        try:
            session = await self._auth.resolve_session(token)
        except CVBuilderError as e:
            logger.error(
                "[%s] Error getting session: %s",
                request_id,
                safe_context(path=request.url.path, error_code=e.code),
            )
            return None
        except Exception:
            logger.exception("[%s] Unexpected error getting session", request_id)
            return None

        if session is not None:
            logger.debug("[%s] Session found for user %s", request_id, session.user_id)
        return session

    async def require_auth(self, context: RequestContext) -> AuthResult:
        """
        Verify the caller and make sure their profile exists.

        Returns Verified, or a Redirect to the login entry point. Steps run
        strictly in order: session, profile lookup, optional repair.
        """
        session = context.session
        if session is None:
            try:
                session = await self._auth.resolve_session(context.access_token)
            except CVBuilderError as e:
                logger.error(
                    "[%s] Error re-resolving session: %s",
                    context.request_id,
                    safe_context(error_code=e.code),
                )
                return Redirect.to_login(
                    self._login_path, RedirectReason.SESSION_ERROR, error_flag="session"
                )

            if session is None:
                logger.info("[%s] No valid session, redirecting to login", context.request_id)
                return Redirect.to_login(
                    self._login_path,
                    RedirectReason.UNAUTHENTICATED,
                    return_to=context.path,
                )

        try:
            profile = self._profiles.get_by_id(session.user_id)
        except BackendError as e:
            if e.kind is not BackendErrorKind.NOT_FOUND:
                logger.error(
                    "[%s] Error verifying profile: %s",
                    context.request_id,
                    safe_context(user_id=session.user_id, backend_code=e.backend_code),
                )
                return await self._reject(context, "profile")
            profile = None

        if profile is None and not self._repair_profile(context, session):
            return await self._reject(context, "create-profile")

        return Verified(user_id=session.user_id, email=session.email)

    def _repair_profile(self, context: RequestContext, session: Session) -> bool:
        logger.warning(
            "[%s] Profile missing for user %s, creating it", context.request_id, session.user_id
        )
        try:
            self._profiles.insert(
                {
                    "id": session.user_id,
                    "email": session.email,
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                }
            )
            logger.info("[%s] Profile created for user %s", context.request_id, session.user_id)
            return True
        except BackendError as e:
            if e.kind is BackendErrorKind.UNIQUE_VIOLATION:
                # A concurrent request created it first
                return self._refetch(context, session)
            logger.error(
                "[%s] Error creating profile: %s",
                context.request_id,
                safe_context(user_id=session.user_id, backend_code=e.backend_code),
            )
            return False

    def _refetch(self, context: RequestContext, session: Session) -> bool:
        try:
            return self._profiles.get_by_id(session.user_id) is not None
        except BackendError as e:
            logger.error(
                "[%s] Error re-fetching profile after conflict: %s",
                context.request_id,
                safe_context(user_id=session.user_id, backend_code=e.backend_code),
            )
            return False

    async def _reject(self, context: RequestContext, error_flag: str) -> Redirect:
        if context.access_token:
            try:
                await self._auth.sign_out(context.access_token)
            except CVBuilderError as e:
                logger.error(
                    "[%s] Sign-out failed: %s",
                    context.request_id,
                    safe_context(error_code=e.code),
                )
        return Redirect.to_login(
            self._login_path, RedirectReason.UNRECOVERABLE, error_flag=error_flag
        )
