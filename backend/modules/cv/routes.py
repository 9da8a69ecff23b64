"""
Content editor data endpoint and the public CV endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_cv_service
from api.middleware.auth import get_auth_result
from modules.auth.models import AuthResult, Redirect
from modules.profiles.exceptions import ProfileNotFoundError

from .responses import HexEscapedJSONResponse
from .service import CvService

router = APIRouter()


@router.get("/get-cv-data", response_class=HexEscapedJSONResponse)
async def get_cv_data(
    variant_id: Optional[str] = Query(default=None, description="CV variant to load"),
    result: AuthResult = Depends(get_auth_result),
    service: CvService = Depends(get_cv_service),
) -> HexEscapedJSONResponse:
    """
    Fresh CV data for the content editor's live preview.

    The guard has repaired a missing profile row by the time the sections
    load. Strings are entity-decoded and the body is safe to embed in a page.
    """
    if isinstance(result, Redirect):
        return HexEscapedJSONResponse({"error": "Authentication required"}, status_code=401)

    variant = variant_id.strip() if variant_id else None
    try:
        payload = service.get_cv_data(result.user_id, variant or None)
    except ProfileNotFoundError:
        return HexEscapedJSONResponse({"error": "Profile not found"}, status_code=404)
    return HexEscapedJSONResponse(payload)


public_router = APIRouter()


@public_router.get("/{username}", response_class=HexEscapedJSONResponse)
async def get_public_cv(
    username: str,
    service: CvService = Depends(get_cv_service),
) -> HexEscapedJSONResponse:
    """Public CV by username; ``@ada`` and ``ada`` name the same CV."""
    name = username.removeprefix("@").strip()
    if not name:
        return HexEscapedJSONResponse({"error": "CV not found"}, status_code=404)
    try:
        payload = service.get_public_cv(name)
    except ProfileNotFoundError:
        return HexEscapedJSONResponse({"error": "CV not found"}, status_code=404)
    return HexEscapedJSONResponse(payload)
