"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .user_repository import UserRepository
from .profile_repository import VAProfileRepository, CompanyRepository, VASearchCriteria
from .job_repository import JobPostingRepository, ProposalRepository, JobSearchCriteria
from .contract_repository import ContractRepository, MilestoneRepository, TimesheetRepository
from .matching_repository import MatchVoteRepository, MatchRepository
from .payment_repository import PaymentRepository
from .notification_repository import NotificationRepository

__all__ = [
    "UserRepository",
    "VAProfileRepository",
    "CompanyRepository",
    "VASearchCriteria",
    "JobPostingRepository",
    "ProposalRepository",
    "JobSearchCriteria",
    "ContractRepository",
    "MilestoneRepository",
    "TimesheetRepository",
    "MatchVoteRepository",
    "MatchRepository",
    "PaymentRepository",
    "NotificationRepository",
]
