"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from enum import Enum
from typing import Literal, Optional, Union
from urllib.parse import urlencode

from pydantic import BaseModel, Field

from shared.models import AuthenticatedUser, Session


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="User role")

    # Supabase-specific claims
    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)


class RedirectReason(str, Enum):
    """Why the guard sent the caller back to the login entry point."""

    UNAUTHENTICATED = "unauthenticated"  # no session at all
    SESSION_ERROR = "session"            # auth backend failed while resolving
    UNRECOVERABLE = "unrecoverable"      # session valid, profile could not be repaired


class Verified(BaseModel):
    """The caller has a valid session and an existing profile."""

    kind: Literal["verified"] = "verified"
    user_id: str
    email: str = ""

    model_config = {"frozen": True}

    def to_user(self) -> AuthenticatedUser:
        return AuthenticatedUser(id=self.user_id, email=self.email)


class Redirect(BaseModel):
    """
    The caller must re-authenticate.

    This is a normal outcome, not an error: page routes turn it into a
    303 response and API routes into a 401.
    """

    kind: Literal["redirect"] = "redirect"
    location: str
    reason: RedirectReason
    error_flag: Optional[str] = Field(None, description="Value of the ?error= query flag")

    model_config = {"frozen": True}

    @classmethod
    def to_login(
        cls,
        login_path: str,
        reason: RedirectReason,
        error_flag: Optional[str] = None,
        return_to: Optional[str] = None,
    ) -> "Redirect":
        params = {}
        if error_flag:
            params["error"] = error_flag
        if return_to:
            params["returnTo"] = return_to
        location = f"{login_path}?{urlencode(params)}" if params else login_path
        return cls(location=location, reason=reason, error_flag=error_flag)


AuthResult = Union[Verified, Redirect]

__all__ = [
    "AuthResult",
    "AuthenticatedUser",
    "JWTPayload",
    "Redirect",
    "RedirectReason",
    "Session",
    "Verified",
]
