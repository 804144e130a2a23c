"""
Domain events raised by the marketplace aggregates.
Every event names the users that should hear about it.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .base import DomainEvent


@dataclass(kw_only=True)
class MatchCreated(DomainEvent):
    """Both sides voted yes on the same job/VA pair."""

    match_id: int
    job_posting_id: int
    va_profile_id: int
    company_user_id: str
    va_user_id: str
    job_title: str = ""

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "match_id": self.match_id,
            "job_posting_id": self.job_posting_id,
            "va_profile_id": self.va_profile_id,
            "company_user_id": self.company_user_id,
            "va_user_id": self.va_user_id,
            "job_title": self.job_title,
        }


@dataclass(kw_only=True)
class ProposalSubmitted(DomainEvent):
    proposal_id: int
    job_posting_id: int
    company_user_id: str
    job_title: str = ""

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "proposal_id": self.proposal_id,
            "job_posting_id": self.job_posting_id,
            "company_user_id": self.company_user_id,
            "job_title": self.job_title,
        }


@dataclass(kw_only=True)
class ProposalAccepted(DomainEvent):
    proposal_id: int
    contract_id: int
    va_user_id: str
    job_title: str = ""

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "proposal_id": self.proposal_id,
            "contract_id": self.contract_id,
            "va_user_id": self.va_user_id,
            "job_title": self.job_title,
        }


@dataclass(kw_only=True)
class ContractCreated(DomainEvent):
    contract_id: int
    va_user_id: str
    company_name: str = ""

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "contract_id": self.contract_id,
            "va_user_id": self.va_user_id,
            "company_name": self.company_name,
        }


@dataclass(kw_only=True)
class ContractCompleted(DomainEvent):
    contract_id: int
    company_user_id: str
    va_user_id: str

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "contract_id": self.contract_id,
            "company_user_id": self.company_user_id,
            "va_user_id": self.va_user_id,
        }


@dataclass(kw_only=True)
class PaymentSucceeded(DomainEvent):
    payment_id: int
    payer_id: str
    receiver_id: Optional[str]
    amount: int
    currency: str = "usd"
    match_id: Optional[int] = None
    contract_id: Optional[int] = None

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "payment_id": self.payment_id,
            "payer_id": self.payer_id,
            "receiver_id": self.receiver_id,
            "amount": self.amount,
            "currency": self.currency,
            "match_id": self.match_id,
            "contract_id": self.contract_id,
        }


@dataclass(kw_only=True)
class PaymentRefunded(DomainEvent):
    payment_id: int
    payer_id: str
    receiver_id: Optional[str]
    refund_amount: int
    reason: Optional[str] = None

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "payment_id": self.payment_id,
            "payer_id": self.payer_id,
            "receiver_id": self.receiver_id,
            "refund_amount": self.refund_amount,
            "reason": self.reason,
        }
