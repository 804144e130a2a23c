"""
Payment mapper.
"""

from app.domain.models.payment import Payment
from app.infrastructure.db.models import PaymentModel
from .base_mapper import BaseMapper


class PaymentMapper(BaseMapper):
    """Maps between Payment and PaymentModel. The metadata column is payment_metadata on the model."""

    def domain_to_model(self, payment: Payment) -> PaymentModel:
        return PaymentModel(
            id=payment.id,
            payer_id=payment.payer_id,
            receiver_id=payment.receiver_id,
            match_id=payment.match_id,
            contract_id=payment.contract_id,
            milestone_id=payment.milestone_id,
            amount=payment.amount,
            currency=payment.currency,
            platform_fee=payment.platform_fee,
            stripe_fee=payment.stripe_fee,
            net_amount=payment.net_amount,
            status=payment.status,
            payment_type=payment.payment_type,
            payment_method=payment.payment_method,
            stripe_payment_intent_id=payment.stripe_payment_intent_id,
            description=payment.description,
            payment_metadata=dict(payment.metadata),
            refund_amount=payment.refund_amount,
            refunded_at=payment.refunded_at,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )

    def model_to_domain(self, model: PaymentModel) -> Payment:
        return Payment(
            id=model.id,
            payer_id=model.payer_id,
            receiver_id=model.receiver_id,
            match_id=model.match_id,
            contract_id=model.contract_id,
            milestone_id=model.milestone_id,
            amount=model.amount,
            currency=model.currency,
            platform_fee=model.platform_fee or 0,
            stripe_fee=model.stripe_fee or 0,
            net_amount=model.net_amount,
            status=model.status,
            payment_type=model.payment_type,
            payment_method=model.payment_method,
            stripe_payment_intent_id=model.stripe_payment_intent_id,
            description=model.description,
            metadata=dict(model.payment_metadata or {}),
            refund_amount=model.refund_amount,
            refunded_at=model.refunded_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
