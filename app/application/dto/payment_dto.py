"""
Payment DTOs for the application layer.
Stored amounts are integer cents; request amounts for contract payments
and refunds are in currency units, as clients enter them.
"""

from datetime import datetime
from typing import Any, Dict, Literal, Optional
from pydantic import Field

from app.domain.models.payment import PaymentStatus, PaymentType, PaymentMethod
from .base_dto import BaseDTO, RequestDTO, CreateRequestDTO, ListRequestDTO, ResponseDTO


# Request DTOs
class CreateUnlockIntentRequestDTO(CreateRequestDTO):
    match_id: int = Field(description="Match whose contact details are being unlocked")


class ConfirmPaymentRequestDTO(RequestDTO):
    payment_intent_id: str = Field(min_length=1, description="Stripe payment intent id")


class ContractPaymentRequestDTO(CreateRequestDTO):
    """Pay a contract, optionally for one milestone."""

    contract_id: int
    milestone_id: Optional[int] = None
    amount: float = Field(gt=0, description="Amount in USD")
    description: Optional[str] = Field(default=None, max_length=500)


class ListPaymentsRequestDTO(ListRequestDTO):
    type: Literal["sent", "received", "all"] = "all"


class RefundPaymentRequestDTO(RequestDTO):
    amount: Optional[float] = Field(default=None, gt=0, description="Partial refund in USD")
    reason: Optional[str] = Field(default=None, max_length=500)


# Response DTOs
class PaymentResponseDTO(ResponseDTO):
    """DTO for payment responses. Amounts are in cents."""

    payer_id: str
    receiver_id: Optional[str] = None
    match_id: Optional[int] = None
    contract_id: Optional[int] = None
    milestone_id: Optional[int] = None
    amount: int
    currency: str
    platform_fee: int = 0
    stripe_fee: int = 0
    net_amount: Optional[int] = None
    status: PaymentStatus
    payment_type: PaymentType
    payment_method: PaymentMethod
    stripe_payment_intent_id: str
    description: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    refund_amount: Optional[int] = None
    refunded_at: Optional[datetime] = None


class PaymentIntentResponseDTO(BaseDTO):
    """What the client needs to finish the payment with Stripe.js."""

    client_secret: Optional[str] = None
    payment_intent_id: str
    amount: int
    currency: str
    payment: PaymentResponseDTO


class ConfirmPaymentResultDTO(BaseDTO):
    succeeded: bool
    payment: PaymentResponseDTO


class WebhookResultDTO(BaseDTO):
    received: bool = True
    event_type: Optional[str] = None
