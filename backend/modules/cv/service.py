"""
CV data service.

Assembles the payload the content editor refreshes its live preview from,
and the read-only CV published under a username.
"""

import html
import logging
from typing import Any, Optional

from modules.billing.subscription import build_subscription_context
from modules.formatting import blocks_to_html, format_description
from modules.profiles.exceptions import ProfileNotFoundError

from .interfaces import ICvRepository

logger = logging.getLogger(__name__)

# Profile columns shown on the public CV page
PUBLIC_PROFILE_FIELDS = ("full_name", "email", "phone", "location", "photo_url", "username")

# Sections whose free-text description is rendered as paragraphs and lists
FORMATTED_SECTIONS = ("work_experience", "projects")


def decode_entities(value: Any) -> Any:
    """Recursively HTML-entity-decode every string in ``value``."""
    if isinstance(value, dict):
        return {key: decode_entities(item) for key, item in value.items()}
    if isinstance(value, list):
        return [decode_entities(item) for item in value]
    if isinstance(value, str):
        return html.unescape(value)
    return value


def apply_visibility_defaults(profile: dict[str, Any]) -> dict[str, Any]:
    """Photo shown unless switched off; QR code shown only when the photo is not."""
    profile = dict(profile)
    if profile.get("show_photo") is None:
        profile["show_photo"] = 1
    if profile.get("show_photo_pdf") is None:
        profile["show_photo_pdf"] = 1
    if profile.get("show_qr_code") is None:
        profile["show_qr_code"] = 0 if profile["show_photo"] else 1
    return profile


def with_formatted_description(item: dict[str, Any]) -> dict[str, Any]:
    """Copy of ``item`` with its description rendered as display blocks."""
    item = dict(item)
    blocks = format_description(item.get("description") or "")
    item["description_blocks"] = [block.model_dump(mode="json") for block in blocks]
    item["description_html"] = blocks_to_html(blocks)
    return item


def public_profile(profile: dict[str, Any]) -> dict[str, Any]:
    profile = apply_visibility_defaults(profile)
    public = {field: profile.get(field) for field in PUBLIC_PROFILE_FIELDS}
    if not profile["show_photo"]:
        public["photo_url"] = None
    return public

class CvService:
    def __init__(self, repository: ICvRepository):
        self._repository = repository

    def get_cv_data(self, user_id: str, variant_id: Optional[str] = None) -> dict[str, Any]:
        """
        Load the variant when one is requested and owned by the user,
        otherwise the master CV.

        Raises:
            ProfileNotFoundError: the CV owner has no profile row
        """
        cv_data = None
        if variant_id:
            variant = self._repository.get_variant(variant_id, user_id)
            if variant is not None:
                cv_data = self._repository.load_variant_data(variant)
            else:
                logger.info("Variant %s not found for %s, using master CV", variant_id, user_id)

        if cv_data is None:
            cv_data = self._repository.load_cv_data(user_id)

        profile = cv_data.get("profile")
        if not profile:
            raise ProfileNotFoundError(user_id)

        profile = apply_visibility_defaults(profile)
        return {
            "cvData": decode_entities(cv_data),
            "profile": decode_entities(profile),
            "subscriptionContext": build_subscription_context(profile).to_frontend(),
        }

    def get_public_cv(self, username: str) -> dict[str, Any]:
        """
        Load the master CV published under ``username`` for anonymous viewers.

        Only public profile columns are returned, and work experience and
        project descriptions come with their formatted blocks.

        Raises:
            ProfileNotFoundError: no profile carries that username
        """
        user_id = self._repository.get_profile_id_by_username(username)
        if user_id is None:
            raise ProfileNotFoundError(username)

        cv_data = decode_entities(self._repository.load_cv_data(user_id))
        profile = cv_data.pop("profile", None)
        if not profile:
            raise ProfileNotFoundError(user_id)

        for key in FORMATTED_SECTIONS:
            cv_data[key] = [with_formatted_description(item) for item in cv_data.get(key) or []]

        logger.debug("Serving public CV for %s", username)
        return {"cvData": cv_data, "profile": public_profile(profile)}
