"""
Agency module exceptions.
"""

from shared.exceptions import AuthorizationError, ValidationError


class OrganisationAccessDeniedError(AuthorizationError):
    """Raised when the caller is not an owner or admin of an organisation."""

    def __init__(self, user_id: str):
        super().__init__(
            "Organisation admin access required",
            code="ORGANISATION_ACCESS_DENIED",
            details={"user_id": user_id},
        )


class InvitationNotFoundError(ValidationError):
    """Raised when no pending invitation matches within the organisation."""

    def __init__(self, invitation_id: str, invitation_type: str):
        super().__init__(
            "Invitation not found or already accepted",
            code="INVITATION_NOT_FOUND",
            details={"invitation_id": invitation_id, "type": invitation_type},
        )
