"""
Profile repository interfaces.
Defines the contracts for VA profile and company persistence.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from app.domain.models.profile import VAProfile, Company


@dataclass
class VASearchCriteria:
    """Filters for the public VA search."""

    query: Optional[str] = None
    country: Optional[str] = None
    min_rate: Optional[float] = None
    max_rate: Optional[float] = None
    skills: List[str] = field(default_factory=list)
    availability: Optional[bool] = None


class VAProfileRepository(ABC):
    """
    Repository interface for VA profiles.
    """

    @abstractmethod
    def save(self, profile: VAProfile) -> VAProfile:
        pass

    @abstractmethod
    def find_by_id(self, profile_id: int) -> Optional[VAProfile]:
        pass

    @abstractmethod
    def find_by_user_id(self, user_id: str) -> Optional[VAProfile]:
        pass

    @abstractmethod
    def search(self, criteria: VASearchCriteria,
               offset: int = 0, limit: int = 20) -> Tuple[List[VAProfile], int]:
        """
        Search profiles. Returns one page and the total number of matches.
        """
        pass

    @abstractmethod
    def find_discoverable_for_job(self, job_posting_id: int, limit: int) -> List[VAProfile]:
        """
        Available VA profiles whose user has the va role and that have no
        vote row for the job posting, ordered by country then hourly rate.
        """
        pass


class CompanyRepository(ABC):
    """
    Repository interface for company profiles.
    """

    @abstractmethod
    def save(self, company: Company) -> Company:
        pass

    @abstractmethod
    def find_by_id(self, company_id: int) -> Optional[Company]:
        pass

    @abstractmethod
    def find_by_user_id(self, user_id: str) -> Optional[Company]:
        pass
