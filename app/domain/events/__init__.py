"""
Domain events package.
"""

from .base import DomainEvent, EventHandler, EventDispatcher
from .marketplace_events import (
    MatchCreated,
    ProposalSubmitted,
    ProposalAccepted,
    ContractCreated,
    ContractCompleted,
    PaymentSucceeded,
    PaymentRefunded,
)

__all__ = [
    "DomainEvent",
    "EventHandler",
    "EventDispatcher",
    "MatchCreated",
    "ProposalSubmitted",
    "ProposalAccepted",
    "ContractCreated",
    "ContractCompleted",
    "PaymentSucceeded",
    "PaymentRefunded",
]
