"""
Billing module interface.

Routes depend on IBillingService, not the concrete implementation.
This keeps Stripe out of the tests.
"""

from typing import Any, Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import PaymentIntentResult, WebhookOutcome


@runtime_checkable
class IBillingService(Protocol):
    """
    Interface for payment operations.

    This protocol defines the contract that the billing module exposes
    to the API layer.
    """

    def construct_event(self, payload: bytes, signature: str | None) -> Any:
        """
        Verify a webhook call and return the Stripe event.

        Args:
            payload: Raw request body, exactly as received
            signature: Value of the Stripe-Signature header

        Raises:
            MissingSignatureError: If no signature was sent
            WebhookVerificationError: If the signature or payload is invalid
        """
        ...

    def handle_event(self, event: Any) -> WebhookOutcome:
        """
        Apply a verified event.

        Raises:
            BackendError: If the subscription update could not be stored
        """
        ...

    def create_payment_intent(self, user: AuthenticatedUser) -> PaymentIntentResult:
        """
        Create the early access payment for ``user``.

        Raises:
            PaymentFailedError: If Stripe rejected the request
        """
        ...
