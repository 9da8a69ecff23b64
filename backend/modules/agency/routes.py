"""
Agency endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Form

from api.dependencies import get_invitation_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .models import CancelInvitationResponse
from .service import InvitationService

router = APIRouter()


@router.post("/cancel-invitation", response_model=CancelInvitationResponse)
async def cancel_invitation(
    invitation_id: Optional[str] = Form(None),
    type: Optional[str] = Form(None),
    user: AuthenticatedUser = Depends(get_current_user),
    service: InvitationService = Depends(get_invitation_service),
) -> CancelInvitationResponse:
    """Cancel a candidate or team invitation of the caller's organisation."""
    membership = service.require_organisation_admin(user)
    request = service.validate(invitation_id, type)
    service.cancel(request, membership, user.id)
    return CancelInvitationResponse()
