"""
Agency module interface.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import InvitationType, Membership


@runtime_checkable
class IAgencyRepository(Protocol):
    """Storage for organisation memberships, invitations and the activity log."""

    def get_admin_membership(self, user_id: str) -> Optional[Membership]:
        """The user's owner/admin membership, or None."""
        ...

    def cancel_invitation(
        self,
        invitation_type: InvitationType,
        invitation_id: str,
        organisation_id: str,
    ) -> bool:
        """
        Delete a pending invitation of the organisation.

        Returns:
            False if no pending invitation matched
        """
        ...

    def log_activity(
        self,
        action: str,
        organisation_id: Optional[str],
        user_id: Optional[str],
        details: dict[str, Any],
    ) -> None:
        ...
