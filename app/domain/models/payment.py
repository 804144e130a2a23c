"""
Payment domain model.
Amounts are integer cents, as Stripe reports them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from app.domain.events.marketplace_events import PaymentSucceeded, PaymentRefunded
from .base import AggregateRoot, ValidationError, BusinessRuleViolation, utcnow


class PaymentStatus(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentType(str, Enum):
    UNLOCK = "unlock"
    PAYMENT = "payment"
    REFUND = "refund"
    PAYOUT = "payout"


class PaymentMethod(str, Enum):
    CARD = "card"
    BANK = "bank"
    CRYPTO = "crypto"


@dataclass(kw_only=True, eq=False)
class Payment(AggregateRoot):
    """A single Stripe payment intent tracked on our side."""

    payer_id: str
    amount: int
    stripe_payment_intent_id: str
    receiver_id: Optional[str] = None
    match_id: Optional[int] = None
    contract_id: Optional[int] = None
    milestone_id: Optional[int] = None
    currency: str = "usd"
    platform_fee: int = 0
    stripe_fee: int = 0
    net_amount: Optional[int] = None
    status: PaymentStatus = PaymentStatus.PENDING
    payment_type: PaymentType = PaymentType.PAYMENT
    payment_method: PaymentMethod = PaymentMethod.CARD
    description: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    refund_amount: Optional[int] = None
    refunded_at: Optional[datetime] = None

    def __post_init__(self):
        super().__post_init__()
        self.status = PaymentStatus(self.status)
        self.payment_type = PaymentType(self.payment_type)
        self.payment_method = PaymentMethod(self.payment_method)
        if self.net_amount is None:
            self.net_amount = self.amount - self.platform_fee - self.stripe_fee
        self.validate()

    def validate(self) -> None:
        if not self.payer_id:
            raise ValidationError("Payer is required", "payer_id")
        if self.amount is None or self.amount <= 0:
            raise ValidationError("Amount must be positive", "amount")
        if not self.stripe_payment_intent_id:
            raise ValidationError("Payment intent is required", "stripe_payment_intent_id")

    @property
    def is_succeeded(self) -> bool:
        return self.status == PaymentStatus.SUCCEEDED

    def involves(self, user_id: str) -> bool:
        return user_id in (self.payer_id, self.receiver_id)

    def mark_succeeded(self) -> None:
        """Record a succeeded intent; repeated calls are no-ops."""
        if self.is_succeeded:
            return
        if self.status != PaymentStatus.PENDING and self.status != PaymentStatus.FAILED:
            raise BusinessRuleViolation(f"Cannot mark a {self.status.value} payment as succeeded")
        self.status = PaymentStatus.SUCCEEDED
        self.mark_as_updated()
        self.add_event(PaymentSucceeded(
            payment_id=self.id,
            payer_id=self.payer_id,
            receiver_id=self.receiver_id,
            amount=self.amount,
            currency=self.currency,
            match_id=self.match_id,
            contract_id=self.contract_id,
        ))

    def mark_failed(self) -> None:
        if self.status != PaymentStatus.PENDING:
            return
        self.status = PaymentStatus.FAILED
        self.mark_as_updated()

    def refund(self, amount: Optional[int] = None, reason: Optional[str] = None) -> int:
        """Refund all or part of a succeeded payment and return the refunded cents."""
        if not self.is_succeeded:
            raise BusinessRuleViolation("Can only refund successful payments")
        refund_amount = amount if amount is not None else self.amount
        if refund_amount <= 0 or refund_amount > self.amount:
            raise ValidationError("Refund amount must be between 1 and the payment amount", "amount")
        self.status = PaymentStatus.REFUNDED
        self.refund_amount = refund_amount
        self.refunded_at = utcnow()
        self.mark_as_updated()
        self.add_event(PaymentRefunded(
            payment_id=self.id,
            payer_id=self.payer_id,
            receiver_id=self.receiver_id,
            refund_amount=refund_amount,
            reason=reason,
        ))
        return refund_amount
