"""
Agency module data models.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class OrganisationRole(str, Enum):
    """Roles of an organisation member, highest first."""

    OWNER = "owner"
    ADMIN = "admin"
    RECRUITER = "recruiter"
    VIEWER = "viewer"


ADMIN_ROLES = frozenset({OrganisationRole.OWNER, OrganisationRole.ADMIN})


class InvitationType(str, Enum):
    CANDIDATE = "candidate"
    TEAM = "team"


INVITATION_TABLES = {
    InvitationType.CANDIDATE: "candidate_invitations",
    InvitationType.TEAM: "team_invitations",
}


class Membership(BaseModel):
    """A user's membership of an organisation."""

    organisation_id: str
    user_id: str
    role: OrganisationRole

    model_config = {"frozen": True, "extra": "ignore"}

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES


class CancelInvitationRequest(BaseModel):
    """Validated form of the cancel-invitation call."""

    invitation_id: str = Field(..., min_length=1)
    type: InvitationType


class CancelInvitationResponse(BaseModel):
    success: bool = True
    message: Optional[str] = "Invitation cancelled successfully"
