"""
Profile module interface.

The session guard and the billing webhook depend on IProfileRepository,
not the Supabase-backed implementation. Tests substitute an in-memory store.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import Profile


@runtime_checkable
class IProfileRepository(Protocol):
    """
    Interface for profile storage.

    Implementations raise BackendError for store failures; a missing row
    is ``None`` (or BackendError of kind NOT_FOUND, depending on the query).
    """

    def get_by_id(self, user_id: str) -> Optional[Profile]:
        """
        Get a profile by user ID.

        Args:
            user_id: Supabase user ID (UUID)

        Returns:
            Profile if found, None otherwise
        """
        ...

    def get_row(self, user_id: str) -> Optional[dict[str, Any]]:
        """Get the raw profile row with every column, or None."""
        ...

    def insert(self, data: dict[str, Any]) -> Profile:
        """
        Insert a new profile row.

        Raises:
            BackendError: UNIQUE_VIOLATION if the ID already exists
        """
        ...

    def upsert(self, data: dict[str, Any]) -> list[dict[str, Any]]:
        """Insert or update a profile keyed on ``id``; returns the written rows."""
        ...

    def update(self, user_id: str, data: dict[str, Any]) -> list[dict[str, Any]]:
        """Update columns of an existing profile; returns the updated rows."""
        ...
