"""
Invitation service for agency organisations.
"""

import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from shared.exceptions import ValidationError
from shared.models import AuthenticatedUser

from .exceptions import InvitationNotFoundError, OrganisationAccessDeniedError
from .interfaces import IAgencyRepository
from .models import CancelInvitationRequest, Membership

logger = logging.getLogger(__name__)

INVITATION_CANCELLED = "team.invitation_cancelled"


class InvitationService:
    def __init__(self, repository: IAgencyRepository):
        self._repository = repository

    def require_organisation_admin(self, user: AuthenticatedUser) -> Membership:
        """
        The organisation the caller administers.

        Raises:
            OrganisationAccessDeniedError: caller is not an owner or admin
        """
        membership = self._repository.get_admin_membership(user.id)
        if membership is None:
            logger.warning("User %s denied organisation admin access", user.id)
            raise OrganisationAccessDeniedError(user.id)
        return membership

    @staticmethod
    def validate(invitation_id: Optional[str], invitation_type: Optional[str]) -> CancelInvitationRequest:
        invitation_id = (invitation_id or "").strip()
        if not invitation_id:
            raise ValidationError("Invitation ID is required", code="INVITATION_ID_REQUIRED")
        try:
            return CancelInvitationRequest(
                invitation_id=invitation_id,
                type=(invitation_type or "").strip(),
            )
        except PydanticValidationError:
            raise ValidationError(
                'Invalid invitation type. Must be "candidate" or "team"',
                code="INVALID_INVITATION_TYPE",
            )

    def cancel(
        self,
        request: CancelInvitationRequest,
        membership: Membership,
        user_id: str,
    ) -> None:
        """
        Cancel a pending invitation of the caller's organisation and log it.

        Raises:
            InvitationNotFoundError: nothing pending matched
        """
        cancelled = self._repository.cancel_invitation(
            request.type, request.invitation_id, membership.organisation_id
        )
        if not cancelled:
            raise InvitationNotFoundError(request.invitation_id, request.type.value)

        self._repository.log_activity(
            INVITATION_CANCELLED,
            organisation_id=membership.organisation_id,
            user_id=user_id,
            details={"invitation_id": request.invitation_id, "type": request.type.value},
        )
        logger.info(
            "Invitation %s (%s) cancelled in organisation %s",
            request.invitation_id,
            request.type.value,
            membership.organisation_id,
        )
