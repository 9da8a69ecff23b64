"""
Billing module data models.

These models define the data structures used by the billing module
and exposed to other modules through the interface.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

FREE_PLAN = "free"
EARLY_ACCESS_PLAN = "early_access"
EARLY_ACCESS_PRODUCT = "cv_builder_early_access"


class WebhookEventType(str, Enum):
    """Stripe events the webhook acts on."""

    PAYMENT_SUCCEEDED = "payment_intent.succeeded"
    PAYMENT_FAILED = "payment_intent.payment_failed"


class WebhookOutcome(str, Enum):
    """What handling an event did."""

    EARLY_ACCESS_GRANTED = "early_access_granted"
    PAYMENT_FAILED = "payment_failed"
    IGNORED = "ignored"        # handled type, not ours (e.g. other product)
    UNHANDLED = "unhandled"    # event type we do not process


class PaymentIntentResult(BaseModel):
    """Returned to the browser to confirm a payment with Stripe.js."""

    client_secret: str = Field(..., serialization_alias="clientSecret")
    payment_intent_id: str = Field(..., serialization_alias="paymentIntentId")

    model_config = {"frozen": True}


class SubscriptionContext(BaseModel):
    """A user's plan as the front end sees it."""

    plan: str = Field(default=FREE_PLAN, description="Plan ID, 'free' when none")
    is_paid: bool = False
    is_early_access: bool = False
    expires_at: Optional[datetime] = Field(None, description="None for plans that never lapse")

    model_config = {"frozen": True}

    def to_frontend(self) -> dict[str, Any]:
        return {
            "plan": self.plan,
            "isPaid": self.is_paid,
            "isEarlyAccess": self.is_early_access,
            "expiresAt": self.expires_at.isoformat() if self.expires_at else None,
        }
