"""
Profile service.

Reads and writes the caller's own profile row. Page-level operations use
the privileged repository (the session guard has already verified the
caller); the photo update endpoint goes through a user-scoped repository
first so row-level security applies.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from shared.exceptions import BackendError
from shared.models import AuthenticatedUser, Session
from modules.auth.exceptions import OwnershipError

from .exceptions import InvalidPhotoUpdateError, ProfileNotFoundError
from .interfaces import IProfileRepository
from .models import PageProfile, ProfileForm

logger = logging.getLogger(__name__)

UserRepositoryFactory = Callable[[str], IProfileRepository]


def default_username(user_id: str) -> str:
    return f"user{user_id[:8]}"


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class ProfileService:
    """Operations on the caller's own profile."""

    def __init__(
        self,
        profiles: IProfileRepository,
        user_profiles: Optional[UserRepositoryFactory] = None,
    ):
        self._profiles = profiles
        self._user_profiles = user_profiles

    def load_page_profile(self, user: AuthenticatedUser) -> PageProfile:
        """
        Load the profile page data.

        A verified user whose row vanished between the guard and this read
        still gets a page: a default profile built from the session.
        """
        row = self._profiles.get_row(user.id)
        if row is None:
            logger.info("No profile row for %s, serving default profile", user.id)
            row = {
                "id": user.id,
                "email": user.email,
                "full_name": "",
                "phone": "",
                "location": "",
            }
        return PageProfile(profile=row, user_id=user.id, email=user.email)

    def save_profile(self, user: AuthenticatedUser, form: ProfileForm) -> list[dict[str, Any]]:
        """Upsert the editable fields, keeping the existing username."""
        existing = self._profiles.get_row(user.id)
        username = (existing or {}).get("username") or default_username(user.id)

        data = {
            "id": user.id,
            "full_name": form.full_name or None,
            # The auth email wins over whatever the form posted
            "email": user.email or form.email or None,
            "phone": form.phone or None,
            "location": form.location or None,
            "updated_at": _utcnow(),
            "username": username,
        }
        rows = self._profiles.upsert(data)
        logger.info("Profile saved for %s", user.id)
        return rows

    def fix_profile(self, user: AuthenticatedUser, form: ProfileForm) -> dict[str, Any]:
        """Rewrite the profile with the auth email and return the stored row."""
        self._profiles.update(
            user.id,
            {
                "full_name": form.full_name or None,
                "email": user.email,
                "phone": form.phone or None,
                "location": form.location or None,
                "updated_at": _utcnow(),
            },
        )
        row = self._profiles.get_row(user.id)
        if row is None:
            raise ProfileNotFoundError(
                user.id, "Profile was updated but could not verify the result"
            )
        logger.info("Profile fixed for %s", user.id)
        return row

    def get_profile_row(self, user_id: str) -> dict[str, Any]:
        row = self._profiles.get_row(user_id)
        if row is None:
            raise ProfileNotFoundError(user_id)
        return row

    def update_photo(
        self,
        session: Session,
        access_token: Optional[str],
        payload: Any,
    ) -> list[dict[str, Any]]:
        """
        Set ``photo_url`` on the caller's own profile.

        The user-scoped repository is tried first. The privileged one is
        used only after that write fails.

        Raises:
            InvalidPhotoUpdateError: payload is not a photo update
            OwnershipError: payload targets another user's profile
            ProfileNotFoundError: the caller has no profile yet
            BackendError: both writes failed
        """
        if not isinstance(payload, dict):
            raise InvalidPhotoUpdateError("Invalid request format")
        if payload.get("id") != session.user_id:
            raise OwnershipError()
        if "photo_url" not in payload:
            raise InvalidPhotoUpdateError("This endpoint is only for photo updates")

        photo_url = payload["photo_url"]
        if photo_url is not None and not isinstance(photo_url, str):
            raise InvalidPhotoUpdateError("Invalid photo URL format")

        repository = self._scoped(access_token)
        existing = repository.get_row(session.user_id)
        if existing is None:
            raise ProfileNotFoundError(
                session.user_id, "Profile not found, please complete your profile first"
            )

        data = {
            "id": session.user_id,
            "photo_url": photo_url,
            # username is NOT NULL; an upsert must carry it
            "username": existing.get("username") or default_username(session.user_id),
            "updated_at": _utcnow(),
        }

        try:
            return repository.upsert(data)
        except BackendError as e:
            if repository is self._profiles:
                raise
            logger.warning(
                "User-scoped photo update failed for %s (kind=%s), retrying with service client",
                session.user_id,
                e.kind.value,
            )
            return self._profiles.upsert(data)

    def diagnostics(self, session: Session) -> dict[str, Any]:
        """Compare the auth identity with the stored profile."""
        row = self._profiles.get_row(session.user_id)
        return {
            "success": True,
            "auth": {"userId": session.user_id, "email": session.email},
            "profile": row,
            "emailMatch": row is not None and row.get("email") == session.email,
        }

    def _scoped(self, access_token: Optional[str]) -> IProfileRepository:
        if self._user_profiles is None or not access_token:
            return self._profiles
        return self._user_profiles(access_token)
