"""
Domain models for the BlytzWork marketplace.
This module exports all domain entities and their enums.
"""

# Base classes
from .base import (
    BaseEntity,
    AggregateRoot,
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    DuplicateEntityError,
    PermissionDeniedError,
    PaymentRequiredError,
    ExternalServiceError,
    utcnow,
)

from .user import User, Role, AuthenticatedUser
from .profile import VAProfile, Company, COMPANY_SIZES
from .job import (
    JobPosting,
    JobPostingStatus,
    Proposal,
    ProposalStatus,
    BidType,
    ExperienceLevel,
    EmploymentType,
    Urgency,
)
from .contract import (
    Contract,
    ContractStatus,
    Milestone,
    MilestoneStatus,
    Timesheet,
    TimesheetStatus,
)
from .matching import MatchVote, Match, VoteSide
from .payment import Payment, PaymentStatus, PaymentType, PaymentMethod
from .notification import Notification, NotificationType, NotificationPriority

__all__ = [
    # Base classes
    "BaseEntity",
    "AggregateRoot",
    "DomainException",
    "ValidationError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "PermissionDeniedError",
    "PaymentRequiredError",
    "ExternalServiceError",
    "utcnow",

    # Users and profiles
    "User",
    "Role",
    "AuthenticatedUser",
    "VAProfile",
    "Company",
    "COMPANY_SIZES",

    # Marketplace
    "JobPosting",
    "JobPostingStatus",
    "Proposal",
    "ProposalStatus",
    "BidType",
    "ExperienceLevel",
    "EmploymentType",
    "Urgency",

    # Contracts
    "Contract",
    "ContractStatus",
    "Milestone",
    "MilestoneStatus",
    "Timesheet",
    "TimesheetStatus",

    # Matching
    "MatchVote",
    "Match",
    "VoteSide",

    # Payments
    "Payment",
    "PaymentStatus",
    "PaymentType",
    "PaymentMethod",

    # Notifications
    "Notification",
    "NotificationType",
    "NotificationPriority",
]
