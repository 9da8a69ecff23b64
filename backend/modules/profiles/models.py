"""
Profile module data models.

A profile is the application's primary per-user record, keyed by the
auth user ID. The row may carry more columns than modelled here; the
models ignore what they do not use.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class Profile(BaseModel):
    """A row of the ``profiles`` table."""

    id: str = Field(..., description="User ID (same as the auth user ID)")
    email: Optional[str] = Field(None, description="Contact email")
    full_name: Optional[str] = Field(None, description="Display name on the CV")
    phone: Optional[str] = None
    location: Optional[str] = None
    photo_url: Optional[str] = Field(None, description="Profile photo storage URL")
    username: Optional[str] = Field(None, description="Public CV handle")

    # Visibility flags
    show_photo: Optional[bool] = None
    show_photo_pdf: Optional[bool] = None
    show_qr_code: Optional[bool] = None

    # Subscription state (written by the billing webhook)
    subscription_plan_id: Optional[str] = None
    subscription_expires_at: Optional[datetime] = None
    early_access_granted_at: Optional[datetime] = None

    updated_at: Optional[datetime] = None

    model_config = {"extra": "ignore"}


class ProfileForm(BaseModel):
    """Fields a user edits on the profile page."""

    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None


class PageProfile(BaseModel):
    """Data handed to the profile page."""

    profile: dict[str, Any]
    user_id: str
    email: str


class PhotoUpdateResponse(BaseModel):
    """Response of the photo update endpoint."""

    success: bool = True
    profile: list[dict[str, Any]] = Field(default_factory=list)
