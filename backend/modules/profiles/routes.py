"""
Profile endpoints.

``page_router`` serves the profile and fix-profile pages (303 to login
when the guard says so); ``router`` serves the JSON API under /api.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import JSONResponse, RedirectResponse

from api.dependencies import get_profile_service
from api.middleware.auth import get_auth_result, get_session, redirect_response
from modules.auth.models import AuthResult, Redirect
from shared.exceptions import BackendError
from shared.models import Session

from .exceptions import InvalidPhotoUpdateError
from .models import PageProfile, PhotoUpdateResponse, ProfileForm
from .service import ProfileService

logger = logging.getLogger(__name__)

page_router = APIRouter()
router = APIRouter()


def _profile_form(
    full_name: Optional[str] = Form(None, alias="fullName"),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
) -> ProfileForm:
    return ProfileForm(full_name=full_name, email=email, phone=phone, location=location)


@page_router.get("/profile", response_model=None)
async def profile_page(
    result: AuthResult = Depends(get_auth_result),
    service: ProfileService = Depends(get_profile_service),
) -> PageProfile | RedirectResponse:
    """Profile page data; falls back to a default profile when the row is gone."""
    if isinstance(result, Redirect):
        return redirect_response(result)
    return service.load_page_profile(result.to_user())


@page_router.post("/profile", response_model=None)
async def save_profile(
    result: AuthResult = Depends(get_auth_result),
    form: ProfileForm = Depends(_profile_form),
    service: ProfileService = Depends(get_profile_service),
) -> RedirectResponse:
    if isinstance(result, Redirect):
        return redirect_response(result)
    service.save_profile(result.to_user(), form)
    return RedirectResponse("/profile", status_code=303)


@page_router.get("/admin/fix-profile", response_model=None)
async def fix_profile_page(
    result: AuthResult = Depends(get_auth_result),
    service: ProfileService = Depends(get_profile_service),
):
    if isinstance(result, Redirect):
        return redirect_response(result)
    return {
        "profile": service.get_profile_row(result.user_id),
        "user": {"id": result.user_id, "email": result.email},
        "fixed": False,
    }


@page_router.post("/admin/fix-profile", response_model=None)
async def fix_profile(
    result: AuthResult = Depends(get_auth_result),
    form: ProfileForm = Depends(_profile_form),
    service: ProfileService = Depends(get_profile_service),
):
    """Rewrite the profile with the authenticated email."""
    if isinstance(result, Redirect):
        return redirect_response(result)
    return {"profile": service.fix_profile(result.to_user(), form), "fixed": True}


@router.post("/update-profile-photo", response_model=PhotoUpdateResponse)
async def update_profile_photo(
    request: Request,
    session: Session = Depends(get_session),
    service: ProfileService = Depends(get_profile_service),
) -> PhotoUpdateResponse:
    """
    Update ``photo_url`` on the caller's own profile.

    Accepts the session cookie or a bearer token. Only ``id`` and
    ``photo_url`` are read from the body.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise InvalidPhotoUpdateError("Invalid request format")

    context = request.state.context
    rows = service.update_photo(session, context.access_token, payload)
    return PhotoUpdateResponse(profile=rows)


@router.get("/verify-session")
async def verify_session(session: Session = Depends(get_session)) -> dict:
    return {
        "success": True,
        "user": {"id": session.user_id, "email": session.email},
    }


@router.get("/profile-diagnostics")
async def profile_diagnostics(
    session: Session = Depends(get_session),
    service: ProfileService = Depends(get_profile_service),
):
    try:
        return service.diagnostics(session)
    except BackendError:
        logger.exception("Profile diagnostics failed for %s", session.user_id)
        return JSONResponse(
            {
                "success": False,
                "error": "Profile error",
                "session": {"userId": session.user_id, "email": session.email},
            },
            status_code=500,
        )
