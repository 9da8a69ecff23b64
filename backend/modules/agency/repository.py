"""
Agency repository for database access.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from shared.repository import BaseRepository

from .models import ADMIN_ROLES, INVITATION_TABLES, InvitationType, Membership


class AgencyRepository(BaseRepository[Membership]):
    def get_admin_membership(self, user_id: str) -> Optional[Membership]:
        result = self._execute(
            "organisation_members.get_admin",
            self._db.table("organisation_members")
            .select("organisation_id, user_id, role")
            .eq("user_id", user_id)
            .in_("role", sorted(role.value for role in ADMIN_ROLES))
            .limit(1),
        )
        if not result.data:
            return None
        return Membership(**result.data[0])

    def cancel_invitation(
        self,
        invitation_type: InvitationType,
        invitation_id: str,
        organisation_id: str,
    ) -> bool:
        table = INVITATION_TABLES[invitation_type]
        result = self._execute(
            f"{table}.cancel",
            self._db.table(table)
            .delete()
            .eq("id", invitation_id)
            .eq("organisation_id", organisation_id)
            .is_("accepted_at", "null"),
        )
        return bool(result.data)

    def log_activity(
        self,
        action: str,
        organisation_id: Optional[str],
        user_id: Optional[str],
        details: dict[str, Any],
    ) -> None:
        self._execute(
            "activity_log.insert",
            self._db.table("activity_log").insert(
                {
                    "action": action,
                    "organisation_id": organisation_id,
                    "user_id": user_id,
                    "details": details,
                    "created_at": datetime.now(timezone.utc).isoformat(),
                }
            ),
        )
