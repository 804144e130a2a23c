"""
Unit tests for the Stripe payment gateway.
"""

import pytest
import stripe
from unittest.mock import Mock, patch
from app.config import Settings
from app.domain.models.base import ExternalServiceError, ValidationError
from app.infrastructure.payments.stripe_gateway import StripePaymentGateway


def intent(**overrides):
    data = {
        "id": "pi_1",
        "amount": 2999,
        "currency": "usd",
        "status": "requires_payment_method",
        "client_secret": "pi_1_secret",
        "metadata": {"matchId": "100"},
        "last_payment_error": None,
    }
    data.update(overrides)
    return data


class TestStripePaymentGateway:

    def setup_method(self):
        self.gateway = StripePaymentGateway(
            Settings(stripe_secret_key="sk_test_123", stripe_webhook_secret="whsec_123")
        )

    @patch("app.infrastructure.payments.stripe_gateway.stripe.PaymentIntent.create")
    def test_create_payment_intent(self, create):
        create.return_value = intent()

        result = self.gateway.create_payment_intent(2999, "usd", metadata={"matchId": 100})

        assert result.id == "pi_1"
        assert result.client_secret == "pi_1_secret"
        kwargs = create.call_args[1]
        assert kwargs["api_key"] == "sk_test_123"
        assert kwargs["metadata"] == {"matchId": "100"}
        assert kwargs["automatic_payment_methods"] == {"enabled": True}

    @patch("app.infrastructure.payments.stripe_gateway.stripe.PaymentIntent.create")
    def test_create_failure(self, create):
        create.side_effect = stripe.APIConnectionError("network down")

        with pytest.raises(ExternalServiceError):
            self.gateway.create_payment_intent(2999, "usd")

    @patch("app.infrastructure.payments.stripe_gateway.stripe.PaymentIntent.retrieve")
    def test_declined_card_reads_as_failed(self, retrieve):
        retrieve.return_value = intent(last_payment_error={"code": "card_declined"})

        assert self.gateway.retrieve_payment_intent("pi_1").status == "failed"

    @patch("app.infrastructure.payments.stripe_gateway.stripe.PaymentIntent.retrieve")
    def test_succeeded_intent(self, retrieve):
        retrieve.return_value = intent(status="succeeded")

        assert self.gateway.retrieve_payment_intent("pi_1").status == "succeeded"

    @patch("app.infrastructure.payments.stripe_gateway.stripe.PaymentIntent.retrieve")
    def test_unknown_intent(self, retrieve):
        retrieve.side_effect = stripe.InvalidRequestError("No such payment_intent", "id")

        with pytest.raises(ValidationError):
            self.gateway.retrieve_payment_intent("pi_missing")

    @patch("app.infrastructure.payments.stripe_gateway.stripe.Refund.create")
    def test_partial_refund(self, create):
        create.return_value = {"id": "re_1", "amount": 1000, "status": "succeeded"}

        result = self.gateway.refund("pi_1", 1000)

        assert result == {"id": "re_1", "amount": 1000, "status": "succeeded"}
        create.assert_called_once_with(api_key="sk_test_123", payment_intent="pi_1", amount=1000)

    @patch("app.infrastructure.payments.stripe_gateway.stripe.Webhook.construct_event")
    def test_construct_event(self, construct_event):
        event = Mock()
        event.to_dict.return_value = {"type": "payment_intent.succeeded"}
        construct_event.return_value = event

        assert self.gateway.construct_event(b"{}", "t=1,v1=abc") == {"type": "payment_intent.succeeded"}
        construct_event.assert_called_once_with(b"{}", "t=1,v1=abc", "whsec_123")

    @patch("app.infrastructure.payments.stripe_gateway.stripe.Webhook.construct_event")
    def test_bad_signature(self, construct_event):
        construct_event.side_effect = stripe.SignatureVerificationError("bad", "sig")

        with pytest.raises(ValidationError):
            self.gateway.construct_event(b"{}", "bad")

    def test_webhook_secret_required(self):
        gateway = StripePaymentGateway(Settings(stripe_secret_key="sk_test_123", stripe_webhook_secret=None))
        with pytest.raises(ExternalServiceError):
            gateway.construct_event(b"{}", "sig")
