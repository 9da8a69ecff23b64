"""
Feedback endpoint.
"""

import logging

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as PydanticValidationError

from api.dependencies import get_feedback_repository
from api.middleware.auth import get_current_user
from shared.exceptions import ValidationError
from shared.models import AuthenticatedUser

from .interfaces import IFeedbackRepository
from .models import FeedbackRequest, FeedbackResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/feedback", response_model=FeedbackResponse)
async def submit_feedback(
    request: Request,
    user: AuthenticatedUser = Depends(get_current_user),
    repository: IFeedbackRepository = Depends(get_feedback_repository),
) -> FeedbackResponse:
    try:
        feedback = FeedbackRequest.model_validate(await request.json())
    except (ValueError, PydanticValidationError):
        raise ValidationError("Missing required fields", code="MISSING_FIELDS")

    repository.insert(user.id, feedback)
    logger.info("Feedback (%s/%s) stored for %s", feedback.category, feedback.priority, user.id)
    return FeedbackResponse()
