"""
Contract, milestone and timesheet repository implementations using SQLAlchemy.
"""

from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.domain.models.contract import Contract, ContractStatus, Milestone, Timesheet
from app.domain.repositories.contract_repository import (
    ContractRepository,
    MilestoneRepository,
    TimesheetRepository,
)
from app.infrastructure.db.models import ContractModel, MilestoneModel, TimesheetModel
from app.infrastructure.mappers.contract_mapper import (
    ContractMapper,
    MilestoneMapper,
    TimesheetMapper,
)
from .base_repository import SQLAlchemyRepository


class SQLAlchemyContractRepository(SQLAlchemyRepository, ContractRepository):
    """SQLAlchemy implementation of contract repository."""

    model = ContractModel
    entity_name = "Contract"

    def __init__(self, session: Session):
        super().__init__(session, ContractMapper())

    def find_for_party(
        self,
        company_id: Optional[int] = None,
        va_profile_id: Optional[int] = None,
        statuses: Optional[Iterable[ContractStatus]] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Contract], int]:
        query = self.session.query(ContractModel)
        if company_id is not None:
            query = query.filter(ContractModel.company_id == company_id)
        if va_profile_id is not None:
            query = query.filter(ContractModel.va_profile_id == va_profile_id)
        if statuses:
            query = query.filter(ContractModel.status.in_(list(statuses)))
        query = query.order_by(ContractModel.id.desc())
        return self._page(query, offset, limit)


class SQLAlchemyMilestoneRepository(SQLAlchemyRepository, MilestoneRepository):

    model = MilestoneModel
    entity_name = "Milestone"

    def __init__(self, session: Session):
        super().__init__(session, MilestoneMapper())

    def find_by_contract(self, contract_id: int) -> List[Milestone]:
        return self._all(
            self.session.query(MilestoneModel)
            .filter_by(contract_id=contract_id)
            .order_by(MilestoneModel.due_date.asc(), MilestoneModel.id.asc())
        )


class SQLAlchemyTimesheetRepository(SQLAlchemyRepository, TimesheetRepository):

    model = TimesheetModel
    entity_name = "Timesheet"

    def __init__(self, session: Session):
        super().__init__(session, TimesheetMapper())

    def find_by_contract(self, contract_id: int) -> List[Timesheet]:
        return self._all(
            self.session.query(TimesheetModel)
            .filter_by(contract_id=contract_id)
            .order_by(TimesheetModel.date.desc(), TimesheetModel.id.desc())
        )
