"""
Profiles module.

The per-user profile record: page data, edits, photo updates and the
repository the session guard uses for self-repair.
"""

from .interfaces import IProfileRepository
from .models import PageProfile, PhotoUpdateResponse, Profile, ProfileForm
from .exceptions import InvalidPhotoUpdateError, ProfileNotFoundError

__all__ = [
    "IProfileRepository",
    "PageProfile",
    "PhotoUpdateResponse",
    "Profile",
    "ProfileForm",
    "InvalidPhotoUpdateError",
    "ProfileNotFoundError",
]
