"""Tests for the Stripe endpoints."""

import json
from unittest.mock import MagicMock, patch

import stripe

from shared.exceptions import BackendErrorKind

from tests.conftest import TEST_USER_ID, stripe_signature
from tests.fakes import backend_error

WEBHOOK = "/api/stripe/webhook"


def _payload(**metadata) -> bytes:
    event = {
        "id": "evt_1",
        "type": "payment_intent.succeeded",
        "data": {"object": {"id": "pi_1", "metadata": metadata}},
    }
    return json.dumps(event).encode()


class TestWebhook:
    def test_grants_early_access(self, client, profiles):
        payload = _payload(userId=TEST_USER_ID, type="early_access")
        response = client.post(
            WEBHOOK, content=payload, headers={"Stripe-Signature": stripe_signature(payload)}
        )
        assert response.status_code == 200
        assert response.json() == {"received": True}
        assert profiles.rows[TEST_USER_ID]["subscription_plan_id"] == "early_access"

    def test_missing_signature(self, client):
        response = client.post(WEBHOOK, content=_payload())
        assert response.status_code == 400
        assert response.json() == {"error": "No signature"}

    def test_bad_signature(self, client, profiles):
        payload = _payload(userId=TEST_USER_ID, type="early_access")
        response = client.post(
            WEBHOOK,
            content=payload,
            headers={"Stripe-Signature": stripe_signature(payload, "whsec_forged")},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid signature"}
        assert "subscription_plan_id" not in profiles.rows[TEST_USER_ID]

    def test_store_failure(self, client, profiles):
        profiles.update_error = backend_error(BackendErrorKind.OTHER)
        payload = _payload(userId=TEST_USER_ID, type="early_access")
        response = client.post(
            WEBHOOK, content=payload, headers={"Stripe-Signature": stripe_signature(payload)}
        )
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to update subscription"}

    def test_other_events_acknowledged(self, client):
        payload = json.dumps({"id": "evt_2", "type": "customer.created", "data": {}}).encode()
        response = client.post(
            WEBHOOK, content=payload, headers={"Stripe-Signature": stripe_signature(payload)}
        )
        assert response.status_code == 200


class TestCreatePaymentIntent:
    URL = "/api/stripe/create-payment-intent"

    @patch("modules.billing.service.stripe.PaymentIntent.create")
    def test_creates_intent(self, mock_create, authed_client):
        mock_create.return_value = MagicMock(client_secret="pi_1_secret_x", id="pi_1")
        response = authed_client.post(self.URL)
        assert response.status_code == 200
        assert response.json() == {"clientSecret": "pi_1_secret_x", "paymentIntentId": "pi_1"}
        assert mock_create.call_args.kwargs["metadata"]["userId"] == TEST_USER_ID

    @patch("modules.billing.service.stripe.PaymentIntent.create")
    def test_stripe_failure(self, mock_create, authed_client):
        mock_create.side_effect = stripe.StripeError("boom")
        response = authed_client.post(self.URL)
        assert response.status_code == 500
        assert response.json()["success"] is False

    def test_requires_authentication(self, client):
        token = client.get("/api/csrf-token").json()["csrfToken"]
        response = client.post(self.URL, headers={"X-CSRF-Token": token})
        assert response.status_code == 401
