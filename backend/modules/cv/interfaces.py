"""
CV data module interface.
"""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class ICvRepository(Protocol):
    """Read access to a user's CV sections and their saved variants."""

    def load_cv_data(self, user_id: str) -> dict[str, Any]:
        """
        Load the master CV: profile plus every section, each ordered the
        way the editor shows it.
        """
        ...

    def get_variant(self, variant_id: str, user_id: str) -> Optional[dict[str, Any]]:
        """Get a variant row owned by ``user_id``, or None."""
        ...

    def load_variant_data(self, variant: dict[str, Any]) -> dict[str, Any]:
        """Load the sections saved for a variant, with the owner's profile."""
        ...

    def get_profile_id_by_username(self, username: str) -> Optional[str]:
        """Resolve a public username to the owning profile id, or None."""
        ...
