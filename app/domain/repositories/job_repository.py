"""
Job marketplace repository interfaces.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from app.domain.models.job import JobPosting, Proposal


@dataclass
class JobSearchCriteria:
    """Filters for the open job posting listing."""

    search: Optional[str] = None
    category: Optional[str] = None
    skills: List[str] = field(default_factory=list)
    experience_level: Optional[str] = None
    employment_type: Optional[str] = None
    job_type: Optional[str] = None
    remote: Optional[bool] = None


class JobPostingRepository(ABC):
    """
    Repository interface for job postings.
    """

    @abstractmethod
    def save(self, job: JobPosting) -> JobPosting:
        pass

    @abstractmethod
    def find_by_id(self, job_id: int) -> Optional[JobPosting]:
        pass

    @abstractmethod
    def find_open(self, criteria: JobSearchCriteria,
                  offset: int = 0, limit: int = 20) -> Tuple[List[JobPosting], int]:
        """
        Open postings matching the criteria, featured and newest first.
        """
        pass

    @abstractmethod
    def find_by_company(self, company_id: int) -> List[JobPosting]:
        pass

    @abstractmethod
    def find_discoverable_for_va(self, va_profile_id: int, limit: int) -> List[JobPosting]:
        """
        Open postings the VA has not voted on yet, newest first.
        """
        pass


class ProposalRepository(ABC):
    """
    Repository interface for proposals.
    """

    @abstractmethod
    def save(self, proposal: Proposal) -> Proposal:
        pass

    @abstractmethod
    def find_by_id(self, proposal_id: int) -> Optional[Proposal]:
        pass

    @abstractmethod
    def find_by_job_and_va(self, job_posting_id: int, va_profile_id: int) -> Optional[Proposal]:
        pass

    @abstractmethod
    def find_by_job(self, job_posting_id: int) -> List[Proposal]:
        pass

    @abstractmethod
    def find_by_va(self, va_profile_id: int) -> List[Proposal]:
        pass
