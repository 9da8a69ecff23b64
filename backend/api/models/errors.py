"""
Error response models.

Every handled failure leaves the API as ``{success: false, error}``.
"""

from pydantic import BaseModel
from typing import Optional


class ErrorResponse(BaseModel):
    """Standard error response format."""

    success: bool = False
    error: str
    # Only set on 401s caused by an unrecoverable profile failure
    reason: Optional[str] = None
