"""
Subscription state derived from a profile row.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from .models import FREE_PLAN, EARLY_ACCESS_PLAN, SubscriptionContext


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def build_subscription_context(
    profile: dict[str, Any],
    now: Optional[datetime] = None,
) -> SubscriptionContext:
    """
    Plan, paid status and expiry for the front end.

    A plan with no expiry (early access) never lapses; an expired plan
    counts as free.
    """
    now = now or datetime.now(timezone.utc)
    plan = profile.get("subscription_plan_id") or FREE_PLAN
    expires_at = _parse_timestamp(profile.get("subscription_expires_at"))

    if expires_at is not None and expires_at <= now:
        plan = FREE_PLAN

    return SubscriptionContext(
        plan=plan,
        is_paid=plan != FREE_PLAN,
        is_early_access=plan == EARLY_ACCESS_PLAN,
        expires_at=expires_at if plan != FREE_PLAN else None,
    )
