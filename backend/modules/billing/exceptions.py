"""
Billing module exceptions.

These exceptions are raised by the billing module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import CVBuilderError, ValidationError


class BillingError(CVBuilderError):
    """Base exception for billing-related errors."""

    pass


class MissingSignatureError(ValidationError):
    """Raised when a webhook call carries no Stripe-Signature header."""

    def __init__(self):
        super().__init__("No signature", code="MISSING_SIGNATURE")


class WebhookVerificationError(ValidationError):
    """Raised when Stripe webhook signature verification fails."""

    def __init__(self, reason: Optional[str] = None):
        super().__init__(
            "Invalid signature",
            code="WEBHOOK_VERIFICATION_FAILED",
            details={"reason": reason} if reason else {},
        )


class PaymentFailedError(BillingError):
    """Raised when Stripe refuses to create a payment."""

    def __init__(self, message: str, stripe_error: Optional[str] = None):
        super().__init__(
            message,
            code="PAYMENT_FAILED",
            details={"stripe_error": stripe_error} if stripe_error else {},
        )


class BillingNotConfiguredError(BillingError):
    """Raised when Stripe keys are missing from the settings."""

    def __init__(self, setting: str):
        super().__init__(
            "Payments are not configured",
            code="BILLING_NOT_CONFIGURED",
            details={"setting": setting},
        )
