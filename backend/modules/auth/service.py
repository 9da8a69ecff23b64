"""
Authentication service implementation.

Resolves Supabase access tokens into sessions. When the project's JWT
secret is configured tokens are verified locally; otherwise Supabase Auth
is asked to resolve them.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

import jwt
from pydantic import ValidationError as PayloadValidationError
from supabase import Client

from shared.config import Settings
from shared.exceptions import ExternalServiceError
from shared.models import Session

from .interfaces import IAuthService
from .models import JWTPayload
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)

logger = logging.getLogger(__name__)

AUTH_SERVICE_NAME = "supabase-auth"


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uses Supabase JWT tokens for authentication. The Supabase client is
    obtained lazily from ``client_provider`` so the service can be built
    before the database is configured.
    """

    def __init__(self, settings: Settings, client_provider: Callable[[], Client]):
        self._settings = settings
        self._client_provider = client_provider

    def validate_token(self, token: Optional[str]) -> Session:
        """
        Validate a JWT locally and return the session it describes.

        This implementation validates Supabase JWTs using the JWT secret.
        """
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

        try:
            jwt_payload = JWTPayload(**payload)
        except PayloadValidationError as e:
            raise InvalidTokenError("Token claims are incomplete") from e
        return Session(
            user_id=jwt_payload.sub,
            email=jwt_payload.email or "",
            issued_at=datetime.fromtimestamp(jwt_payload.iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(jwt_payload.exp, tz=timezone.utc),
        )

    async def resolve_session(self, access_token: Optional[str]) -> Optional[Session]:
        if not access_token:
            return None

        if self._settings.supabase_jwt_secret:
            return self.validate_token(access_token)

        try:
            response = self._client_provider().auth.get_user(access_token)
        except Exception as e:
            raise ExternalServiceError(
                "Could not resolve session",
                service=AUTH_SERVICE_NAME,
                code="SESSION_LOOKUP_FAILED",
                details={"reason": type(e).__name__},
            ) from e

        user = getattr(response, "user", None)
        if user is None:
            return None
        return Session(user_id=user.id, email=user.email or "")

    async def sign_out(self, access_token: str) -> None:
        try:
            self._client_provider().auth.admin.sign_out(access_token)
        except Exception as e:
            raise ExternalServiceError(
                "Could not sign out session",
                service=AUTH_SERVICE_NAME,
                code="SIGN_OUT_FAILED",
                details={"reason": type(e).__name__},
            ) from e
