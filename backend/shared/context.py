"""
Per-request context.

Built once by the request context middleware and passed explicitly to
everything that needs to know who is calling.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .models import Session


class RequestContext(BaseModel):
    """Immutable snapshot of one request's identity and CSRF state."""

    request_id: str = Field(..., description="Correlation ID for logs")
    path: str = Field(..., description="Request path")
    method: str = Field(..., description="HTTP method")
    access_token: Optional[str] = Field(None, description="Credential the session came from")
    session: Optional[Session] = Field(None, description="Validated session, None if absent")
    csrf_token: str = Field(default="", description="CSRF token bound to this browser")

    model_config = {"frozen": True}

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None
