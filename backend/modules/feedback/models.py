"""
Feedback module data models.
"""

from pydantic import BaseModel, Field


class FeedbackRequest(BaseModel):
    """Body of a feedback submission; every field is required and non-empty."""

    feedback: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    priority: str = Field(..., min_length=1)


class FeedbackResponse(BaseModel):
    success: bool = True
    message: str = "Feedback submitted successfully"
