"""Tests for billing service."""

import json
from unittest.mock import MagicMock, patch

import pytest
import stripe

from modules.billing.exceptions import (
    BillingNotConfiguredError,
    MissingSignatureError,
    PaymentFailedError,
    WebhookVerificationError,
)
from modules.billing.models import EARLY_ACCESS_PLAN, WebhookOutcome
from modules.billing.service import BillingService
from shared.config import Settings
from shared.exceptions import BackendError, BackendErrorKind
from shared.models import AuthenticatedUser

from tests.conftest import TEST_WEBHOOK_SECRET, stripe_signature
from tests.fakes import InMemoryProfileRepository, backend_error

USER_ID = "0d1e2f3a-aaaa-4bbb-8ccc-dddddddddddd"


def _event(event_type: str = "payment_intent.succeeded", **metadata) -> dict:
    return {
        "id": "evt_1",
        "type": event_type,
        "data": {"object": {"id": "pi_1", "metadata": metadata}},
    }


@pytest.fixture
def profiles() -> InMemoryProfileRepository:
    return InMemoryProfileRepository([{"id": USER_ID, "email": "buyer@example.com"}])


@pytest.fixture
def service(profiles) -> BillingService:
    settings = Settings(
        _env_file=None,
        stripe_secret_key="sk_test_123",
        stripe_webhook_secret=TEST_WEBHOOK_SECRET,
    )
    return BillingService(settings, profiles)


class TestConstructEvent:
    def test_valid_signature(self, service):
        payload = json.dumps(_event(type=EARLY_ACCESS_PLAN, userId=USER_ID)).encode()
        event = service.construct_event(payload, stripe_signature(payload))
        assert event["type"] == "payment_intent.succeeded"

    def test_missing_signature(self, service):
        with pytest.raises(MissingSignatureError):
            service.construct_event(b"{}", None)

    def test_wrong_secret(self, service):
        payload = json.dumps(_event()).encode()
        with pytest.raises(WebhookVerificationError) as exc_info:
            service.construct_event(payload, stripe_signature(payload, "whsec_other"))
        assert exc_info.value.message == "Invalid signature"

    def test_tampered_payload(self, service):
        payload = json.dumps(_event()).encode()
        signature = stripe_signature(payload)
        with pytest.raises(WebhookVerificationError):
            service.construct_event(payload + b" ", signature)

    def test_signed_garbage(self, service):
        payload = b"not json"
        with pytest.raises(WebhookVerificationError):
            service.construct_event(payload, stripe_signature(payload))

    def test_not_configured(self, profiles):
        service = BillingService(Settings(_env_file=None, stripe_webhook_secret=""), profiles)
        with pytest.raises(BillingNotConfiguredError):
            service.construct_event(b"{}", "t=1,v1=abc")


class TestHandleEvent:
    def test_grants_early_access(self, service, profiles):
        outcome = service.handle_event(_event(type=EARLY_ACCESS_PLAN, userId=USER_ID))
        assert outcome is WebhookOutcome.EARLY_ACCESS_GRANTED
        row = profiles.rows[USER_ID]
        assert row["subscription_plan_id"] == EARLY_ACCESS_PLAN
        assert row["subscription_expires_at"] is None
        assert row["early_access_granted_at"]

    def test_ignores_other_payments(self, service, profiles):
        outcome = service.handle_event(_event(type="donation", userId=USER_ID))
        assert outcome is WebhookOutcome.IGNORED
        assert "subscription_plan_id" not in profiles.rows[USER_ID]

    def test_ignores_missing_user(self, service):
        assert service.handle_event(_event(type=EARLY_ACCESS_PLAN)) is WebhookOutcome.IGNORED

    def test_payment_failed(self, service):
        outcome = service.handle_event(_event("payment_intent.payment_failed"))
        assert outcome is WebhookOutcome.PAYMENT_FAILED

    def test_unhandled_type(self, service):
        assert service.handle_event(_event("customer.created")) is WebhookOutcome.UNHANDLED

    def test_update_failure_propagates(self, service, profiles):
        profiles.update_error = backend_error(BackendErrorKind.OTHER)
        with pytest.raises(BackendError):
            service.handle_event(_event(type=EARLY_ACCESS_PLAN, userId=USER_ID))


class TestCreatePaymentIntent:
    @pytest.fixture
    def user(self) -> AuthenticatedUser:
        return AuthenticatedUser(id=USER_ID, email="buyer@example.com")

    @patch("modules.billing.service.stripe.PaymentIntent.create")
    def test_creates_intent(self, mock_create, service, user):
        mock_create.return_value = MagicMock(client_secret="pi_1_secret", id="pi_1")

        result = service.create_payment_intent(user)

        assert result.model_dump(by_alias=True) == {
            "clientSecret": "pi_1_secret",
            "paymentIntentId": "pi_1",
        }
        kwargs = mock_create.call_args.kwargs
        assert kwargs["api_key"] == "sk_test_123"
        assert kwargs["amount"] == 200
        assert kwargs["currency"] == "gbp"
        assert kwargs["metadata"]["userId"] == USER_ID
        assert kwargs["metadata"]["type"] == EARLY_ACCESS_PLAN

    @patch("modules.billing.service.stripe.PaymentIntent.create")
    def test_stripe_failure(self, mock_create, service, user):
        mock_create.side_effect = stripe.StripeError("card declined")
        with pytest.raises(PaymentFailedError):
            service.create_payment_intent(user)

    def test_not_configured(self, profiles, user):
        service = BillingService(Settings(_env_file=None, stripe_secret_key=""), profiles)
        with pytest.raises(BillingNotConfiguredError):
            service.create_payment_intent(user)
