"""
Billing service.

Stripe payment intents for early access and the webhook that records a
successful payment on the buyer's profile.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import stripe

from shared.config import Settings
from shared.models import AuthenticatedUser
from modules.profiles.interfaces import IProfileRepository

from .interfaces import IBillingService
from .models import (
    EARLY_ACCESS_PLAN,
    EARLY_ACCESS_PRODUCT,
    PaymentIntentResult,
    WebhookEventType,
    WebhookOutcome,
)
from .exceptions import (
    BillingNotConfiguredError,
    MissingSignatureError,
    PaymentFailedError,
    WebhookVerificationError,
)

logger = logging.getLogger(__name__)


class BillingService(IBillingService):
    """
    Stripe-backed implementation of the billing service.

    The secret key is passed per call rather than set on the ``stripe``
    module, so two containers never share credentials.
    """

    def __init__(self, settings: Settings, profiles: IProfileRepository):
        self._settings = settings
        self._profiles = profiles

    def construct_event(self, payload: bytes, signature: Optional[str]) -> dict[str, Any]:
        if not signature:
            raise MissingSignatureError()
        if not self._settings.stripe_webhook_secret:
            raise BillingNotConfiguredError("stripe_webhook_secret")

        try:
            body = payload.decode("utf-8")
            stripe.WebhookSignature.verify_header(
                body, signature, self._settings.stripe_webhook_secret
            )
            event = json.loads(body)
        except stripe.SignatureVerificationError as e:
            logger.warning("Webhook signature verification failed: %s", e)
            raise WebhookVerificationError("signature")
        except ValueError as e:
            logger.warning("Webhook payload could not be parsed: %s", e)
            raise WebhookVerificationError("payload")

        if not isinstance(event, dict) or "type" not in event:
            raise WebhookVerificationError("payload")
        return event

    def handle_event(self, event: dict[str, Any]) -> WebhookOutcome:
        event_type = event.get("type")
        obj = (event.get("data") or {}).get("object") or {}

        if event_type == WebhookEventType.PAYMENT_SUCCEEDED.value:
            metadata = obj.get("metadata") or {}
            if metadata.get("type") != EARLY_ACCESS_PLAN:
                logger.info("Payment %s is not an early access payment", obj.get("id"))
                return WebhookOutcome.IGNORED

            user_id = metadata.get("userId")
            if not user_id:
                logger.warning("Early access payment %s has no userId", obj.get("id"))
                return WebhookOutcome.IGNORED

            self._profiles.update(
                user_id,
                {
                    "subscription_plan_id": EARLY_ACCESS_PLAN,
                    # Early access does not expire
                    "subscription_expires_at": None,
                    "early_access_granted_at": datetime.now(timezone.utc).isoformat(),
                },
            )
            logger.info("Early access granted to user: %s", user_id)
            return WebhookOutcome.EARLY_ACCESS_GRANTED

        if event_type == WebhookEventType.PAYMENT_FAILED.value:
            logger.info("Payment failed: %s", obj.get("id"))
            return WebhookOutcome.PAYMENT_FAILED

        logger.info("Unhandled event type: %s", event_type)
        return WebhookOutcome.UNHANDLED

    def create_payment_intent(self, user: AuthenticatedUser) -> PaymentIntentResult:
        if not self._settings.stripe_secret_key:
            raise BillingNotConfiguredError("stripe_secret_key")

        try:
            intent = stripe.PaymentIntent.create(
                api_key=self._settings.stripe_secret_key,
                amount=self._settings.early_access_amount,
                currency=self._settings.early_access_currency,
                metadata={
                    "userId": user.id,
                    "type": EARLY_ACCESS_PLAN,
                    "product": EARLY_ACCESS_PRODUCT,
                },
                automatic_payment_methods={"enabled": True},
            )
        except stripe.StripeError as e:
            logger.error("Error creating payment intent for %s: %s", user.id, e)
            raise PaymentFailedError(
                "Failed to create payment intent",
                stripe_error=getattr(e, "code", None),
            ) from e

        return PaymentIntentResult(
            client_secret=intent.client_secret,
            payment_intent_id=intent.id,
        )
