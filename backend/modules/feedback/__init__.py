"""
Feedback module.

Stores user feedback submitted from the app.
"""

from .interfaces import IFeedbackRepository
from .models import FeedbackRequest, FeedbackResponse

__all__ = ["IFeedbackRepository", "FeedbackRequest", "FeedbackResponse"]
