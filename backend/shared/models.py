"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Session(BaseModel):
    """
    Read-only copy of a session issued by the external auth backend.

    The backend owns creation, refresh and expiry; the application only
    holds this snapshot for the duration of one request.
    """

    user_id: str = Field(..., description="User ID (UUID from Supabase)")
    email: str = Field(default="", description="Email address on the auth account")
    issued_at: Optional[datetime] = Field(None, description="When the token was issued")
    expires_at: Optional[datetime] = Field(None, description="When the token expires")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }


class AuthenticatedUser(BaseModel):
    """
    A verified identity: a session whose profile row is known to exist.

    Produced by the session guard and handed to route handlers via
    dependency injection.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: str = Field(default="", description="User's email address")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }
