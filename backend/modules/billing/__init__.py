"""
Billing module.

Handles Stripe integration: the early access payment and its webhook.

Public API:
- IBillingService: Interface for billing operations
- build_subscription_context: Plan state for the front end
- Billing exceptions: WebhookVerificationError, etc.
"""

from .interfaces import IBillingService
from .models import (
    EARLY_ACCESS_PLAN,
    FREE_PLAN,
    PaymentIntentResult,
    SubscriptionContext,
    WebhookEventType,
    WebhookOutcome,
)
from .subscription import build_subscription_context
from .exceptions import (
    BillingError,
    BillingNotConfiguredError,
    MissingSignatureError,
    PaymentFailedError,
    WebhookVerificationError,
)

__all__ = [
    # Interface
    "IBillingService",
    # Models
    "EARLY_ACCESS_PLAN",
    "FREE_PLAN",
    "PaymentIntentResult",
    "SubscriptionContext",
    "WebhookEventType",
    "WebhookOutcome",
    "build_subscription_context",
    # Exceptions
    "BillingError",
    "BillingNotConfiguredError",
    "MissingSignatureError",
    "PaymentFailedError",
    "WebhookVerificationError",
]
