"""
Agency module.

Organisation admin checks and invitation management for recruitment agencies.
"""

from .interfaces import IAgencyRepository
from .models import InvitationType, Membership, OrganisationRole
from .exceptions import InvitationNotFoundError, OrganisationAccessDeniedError

__all__ = [
    "IAgencyRepository",
    "InvitationType",
    "Membership",
    "OrganisationRole",
    "InvitationNotFoundError",
    "OrganisationAccessDeniedError",
]
