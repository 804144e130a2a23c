"""
Domain services for the BlytzWork marketplace.
This module exports the domain services and the external-service ports.
"""

from .fee_service import FeeService, FeeBreakdown, MINIMUM_PAYMENT_CENTS
from .profile_completion import ProfileCompletionService
from .contract_metrics import ContractMetricsService
from .matching_service import MatchingService, MatchScope, DISCOVERY_LIMIT
from .upload_policy import UploadPolicy
from .gateways import (
    IdentityProvider,
    PaymentGateway,
    FileStorage,
    VerifiedIdentity,
    PaymentIntent,
    StoredObject,
)

__all__ = [
    "FeeService",
    "FeeBreakdown",
    "MINIMUM_PAYMENT_CENTS",
    "ProfileCompletionService",
    "ContractMetricsService",
    "MatchingService",
    "MatchScope",
    "DISCOVERY_LIMIT",
    "UploadPolicy",
    "IdentityProvider",
    "PaymentGateway",
    "FileStorage",
    "VerifiedIdentity",
    "PaymentIntent",
    "StoredObject",
]
