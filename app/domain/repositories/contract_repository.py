"""
Contract repository interfaces.
Covers contracts and the milestones and timesheets recorded against them.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple

from app.domain.models.contract import Contract, ContractStatus, Milestone, Timesheet


class ContractRepository(ABC):
    """
    Repository interface for Contract aggregate.
    """

    @abstractmethod
    def save(self, contract: Contract) -> Contract:
        pass

    @abstractmethod
    def find_by_id(self, contract_id: int) -> Optional[Contract]:
        pass

    @abstractmethod
    def find_for_party(
        self,
        company_id: Optional[int] = None,
        va_profile_id: Optional[int] = None,
        statuses: Optional[Iterable[ContractStatus]] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Contract], int]:
        """
        Contracts of one company or one VA, newest first, with the total count.
        """
        pass


class MilestoneRepository(ABC):

    @abstractmethod
    def save(self, milestone: Milestone) -> Milestone:
        pass

    @abstractmethod
    def find_by_id(self, milestone_id: int) -> Optional[Milestone]:
        pass

    @abstractmethod
    def find_by_contract(self, contract_id: int) -> List[Milestone]:
        """
        Milestones of a contract ordered by due date ascending.
        """
        pass

    @abstractmethod
    def delete(self, milestone_id: int) -> bool:
        pass


class TimesheetRepository(ABC):

    @abstractmethod
    def save(self, timesheet: Timesheet) -> Timesheet:
        pass

    @abstractmethod
    def find_by_id(self, timesheet_id: int) -> Optional[Timesheet]:
        pass

    @abstractmethod
    def find_by_contract(self, contract_id: int) -> List[Timesheet]:
        """
        Timesheets of a contract ordered by date descending.
        """
        pass

    @abstractmethod
    def delete(self, timesheet_id: int) -> bool:
        pass
