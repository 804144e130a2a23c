"""
Stripe payment gateway.
Creates and inspects payment intents, issues refunds and verifies webhooks.
"""

import logging
from typing import Any, Dict, Optional

import stripe

from app.config import Settings, get_settings
from app.domain.models.base import ExternalServiceError, ValidationError
from app.domain.services.gateways import PaymentGateway, PaymentIntent


logger = logging.getLogger(__name__)


class StripePaymentGateway(PaymentGateway):
    """Payment gateway backed by the Stripe API."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.api_key = self.settings.stripe_secret_key
        self.webhook_secret = self.settings.stripe_webhook_secret

    def _to_intent(self, intent: Any) -> PaymentIntent:
        status = intent["status"]
        # A declined card leaves the intent waiting for a new payment method
        if status == "requires_payment_method" and intent.get("last_payment_error"):
            status = "failed"
        return PaymentIntent(
            id=intent["id"],
            amount=intent["amount"],
            currency=intent["currency"],
            status=status,
            client_secret=intent.get("client_secret"),
            metadata=dict(intent.get("metadata") or {}),
        )

    def create_payment_intent(self, amount: int, currency: str,
                              metadata: Optional[Dict[str, Any]] = None) -> PaymentIntent:
        try:
            intent = stripe.PaymentIntent.create(
                api_key=self.api_key,
                amount=amount,
                currency=currency,
                metadata={k: str(v) for k, v in (metadata or {}).items()},
                automatic_payment_methods={"enabled": True},
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe payment intent creation failed: {e}")
            raise ExternalServiceError("stripe", "Failed to create payment intent")

        logger.info(f"Created Stripe payment intent {intent['id']} for {amount} {currency}")
        return self._to_intent(intent)

    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        try:
            intent = stripe.PaymentIntent.retrieve(intent_id, api_key=self.api_key)
        except stripe.InvalidRequestError as e:
            logger.info(f"Unknown payment intent {intent_id}: {e}")
            raise ValidationError("Invalid payment intent")
        except stripe.StripeError as e:
            logger.error(f"Stripe payment intent retrieval failed: {e}")
            raise ExternalServiceError("stripe", "Failed to retrieve payment intent")
        return self._to_intent(intent)

    def refund(self, intent_id: str, amount: Optional[int] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = {"payment_intent": intent_id}
        if amount is not None:
            params["amount"] = amount

        try:
            refund = stripe.Refund.create(api_key=self.api_key, **params)
        except stripe.StripeError as e:
            logger.error(f"Stripe refund failed for {intent_id}: {e}")
            raise ExternalServiceError("stripe", "Refund failed")

        logger.info(f"Refunded payment intent {intent_id}")
        return {"id": refund["id"], "amount": refund["amount"], "status": refund["status"]}

    def construct_event(self, payload: bytes, signature: str) -> Dict[str, Any]:
        if not self.webhook_secret:
            raise ExternalServiceError("stripe", "Webhook secret not configured")

        try:
            event = stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except (ValueError, stripe.SignatureVerificationError) as e:
            logger.warning(f"Webhook signature verification failed: {e}")
            raise ValidationError("Invalid webhook signature")

        return event.to_dict() if hasattr(event, "to_dict") else dict(event)
