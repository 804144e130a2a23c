"""
Infrastructure mappers module.
Contains mappers for converting between domain entities and database models.
"""

from .user_mapper import UserMapper
from .profile_mapper import VAProfileMapper, CompanyMapper
from .job_mapper import JobPostingMapper, ProposalMapper
from .contract_mapper import ContractMapper, MilestoneMapper, TimesheetMapper
from .matching_mapper import MatchVoteMapper, MatchMapper
from .payment_mapper import PaymentMapper
from .notification_mapper import NotificationMapper

__all__ = [
    "UserMapper",
    "VAProfileMapper",
    "CompanyMapper",
    "JobPostingMapper",
    "ProposalMapper",
    "ContractMapper",
    "MilestoneMapper",
    "TimesheetMapper",
    "MatchVoteMapper",
    "MatchMapper",
    "PaymentMapper",
    "NotificationMapper",
]
