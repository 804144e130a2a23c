"""
Infrastructure repositories module.
Contains SQLAlchemy implementations of domain repositories.
"""

from .user_repository import SQLAlchemyUserRepository
from .profile_repository import SQLAlchemyVAProfileRepository, SQLAlchemyCompanyRepository
from .job_repository import SQLAlchemyJobPostingRepository, SQLAlchemyProposalRepository
from .contract_repository import (
    SQLAlchemyContractRepository,
    SQLAlchemyMilestoneRepository,
    SQLAlchemyTimesheetRepository,
)
from .matching_repository import SQLAlchemyMatchVoteRepository, SQLAlchemyMatchRepository
from .payment_repository import SQLAlchemyPaymentRepository
from .notification_repository import SQLAlchemyNotificationRepository

__all__ = [
    "SQLAlchemyUserRepository",
    "SQLAlchemyVAProfileRepository",
    "SQLAlchemyCompanyRepository",
    "SQLAlchemyJobPostingRepository",
    "SQLAlchemyProposalRepository",
    "SQLAlchemyContractRepository",
    "SQLAlchemyMilestoneRepository",
    "SQLAlchemyTimesheetRepository",
    "SQLAlchemyMatchVoteRepository",
    "SQLAlchemyMatchRepository",
    "SQLAlchemyPaymentRepository",
    "SQLAlchemyNotificationRepository",
]
