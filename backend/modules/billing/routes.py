"""
Stripe endpoints.

``webhook_router`` is called by Stripe and verified by signature, so it
is mounted without CSRF. ``router`` serves the browser.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.dependencies import get_billing_service
from api.middleware.auth import get_current_user
from shared.exceptions import BackendError
from shared.models import AuthenticatedUser

from .exceptions import MissingSignatureError, WebhookVerificationError
from .interfaces import IBillingService

logger = logging.getLogger(__name__)

webhook_router = APIRouter()
router = APIRouter()


@webhook_router.post("/webhook")
async def stripe_webhook(
    request: Request,
    service: IBillingService = Depends(get_billing_service),
):
    payload = await request.body()
    try:
        event = service.construct_event(payload, request.headers.get("stripe-signature"))
    except (MissingSignatureError, WebhookVerificationError) as e:
        return JSONResponse({"error": e.message}, status_code=400)

    try:
        service.handle_event(event)
    except BackendError:
        logger.exception("Error updating subscription for event %s", event.get("id"))
        return JSONResponse({"error": "Failed to update subscription"}, status_code=500)

    return {"received": True}


@router.post("/create-payment-intent")
async def create_payment_intent(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBillingService = Depends(get_billing_service),
):
    """Start the early access payment; the browser confirms it with Stripe.js."""
    result = service.create_payment_intent(user)
    return result.model_dump(by_alias=True)
