"""
Feedback repository.
"""

from datetime import datetime, timezone

from shared.repository import BaseRepository

from .models import FeedbackRequest


class FeedbackRepository(BaseRepository[FeedbackRequest]):
    def insert(self, user_id: str, feedback: FeedbackRequest) -> None:
        self._execute(
            "user_feedback.insert",
            self._db.table("user_feedback").insert(
                {
                    "user_id": user_id,
                    **feedback.model_dump(),
                    "created_at": datetime.now(timezone.utc).isoformat(),
                }
            ),
        )
