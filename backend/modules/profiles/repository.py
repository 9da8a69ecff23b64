"""
Profile repository for database access.

Encapsulates all Supabase queries against the ``profiles`` table.
"""

from typing import Any, Optional

from shared.repository import BaseRepository

from .models import Profile

TABLE = "profiles"


class ProfileRepository(BaseRepository[Profile]):
    """
    Repository for profile data access.

    Note: This repository does NOT perform authorization checks.
    Whether it respects RLS depends on the client it was built with.
    """

    def get_by_id(self, user_id: str) -> Optional[Profile]:
        row = self.get_row(user_id)
        if row is None:
            return None
        return Profile(**row)

    def get_row(self, user_id: str) -> Optional[dict[str, Any]]:
        """Get the raw profile row, every column included."""
        result = self._execute(
            "profiles.get",
            self._db.table(TABLE).select("*").eq("id", user_id).limit(1),
        )
        if not result.data:
            return None
        return result.data[0]

    def insert(self, data: dict[str, Any]) -> Profile:
        result = self._execute("profiles.insert", self._db.table(TABLE).insert(data))
        return Profile(**result.data[0])

    def upsert(self, data: dict[str, Any]) -> list[dict[str, Any]]:
        result = self._execute(
            "profiles.upsert",
            self._db.table(TABLE).upsert(data, on_conflict="id"),
        )
        return result.data or []

    def update(self, user_id: str, data: dict[str, Any]) -> list[dict[str, Any]]:
        result = self._execute(
            "profiles.update",
            self._db.table(TABLE).update(data).eq("id", user_id),
        )
        return result.data or []
