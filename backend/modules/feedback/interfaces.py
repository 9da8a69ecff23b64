"""
Feedback module interface.
"""

from typing import Protocol, runtime_checkable

from .models import FeedbackRequest


@runtime_checkable
class IFeedbackRepository(Protocol):
    def insert(self, user_id: str, feedback: FeedbackRequest) -> None:
        """
        Store one submission.

        Raises:
            BackendError: If the row could not be written
        """
        ...
