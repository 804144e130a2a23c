"""
Contract, milestone and timesheet mappers.
"""

from app.domain.models.contract import Contract, Milestone, Timesheet
from app.infrastructure.db.models import ContractModel, MilestoneModel, TimesheetModel
from .base_mapper import BaseMapper, to_float


class ContractMapper(BaseMapper):
    """Maps between Contract and ContractModel."""

    def domain_to_model(self, contract: Contract) -> ContractModel:
        return ContractModel(
            id=contract.id,
            company_id=contract.company_id,
            va_profile_id=contract.va_profile_id,
            job_posting_id=contract.job_posting_id,
            proposal_id=contract.proposal_id,
            contract_type=contract.contract_type,
            amount=contract.amount,
            hourly_rate=contract.hourly_rate,
            currency=contract.currency,
            start_date=contract.start_date,
            end_date=contract.end_date,
            status=contract.status,
            terms=contract.terms,
            created_at=contract.created_at,
            updated_at=contract.updated_at,
        )

    def model_to_domain(self, model: ContractModel) -> Contract:
        return Contract(
            id=model.id,
            company_id=model.company_id,
            va_profile_id=model.va_profile_id,
            job_posting_id=model.job_posting_id,
            proposal_id=model.proposal_id,
            contract_type=model.contract_type,
            amount=to_float(model.amount),
            hourly_rate=to_float(model.hourly_rate),
            currency=model.currency,
            start_date=model.start_date,
            end_date=model.end_date,
            status=model.status,
            terms=model.terms,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class MilestoneMapper(BaseMapper):

    def domain_to_model(self, milestone: Milestone) -> MilestoneModel:
        return MilestoneModel(
            id=milestone.id,
            contract_id=milestone.contract_id,
            title=milestone.title,
            description=milestone.description,
            amount=milestone.amount,
            due_date=milestone.due_date,
            status=milestone.status,
            completed_at=milestone.completed_at,
            approved_at=milestone.approved_at,
            created_at=milestone.created_at,
            updated_at=milestone.updated_at,
        )

    def model_to_domain(self, model: MilestoneModel) -> Milestone:
        return Milestone(
            id=model.id,
            contract_id=model.contract_id,
            title=model.title,
            description=model.description,
            amount=to_float(model.amount),
            due_date=model.due_date,
            status=model.status,
            completed_at=model.completed_at,
            approved_at=model.approved_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class TimesheetMapper(BaseMapper):

    def domain_to_model(self, timesheet: Timesheet) -> TimesheetModel:
        return TimesheetModel(
            id=timesheet.id,
            contract_id=timesheet.contract_id,
            va_profile_id=timesheet.va_profile_id,
            date=timesheet.date,
            start_time=timesheet.start_time,
            end_time=timesheet.end_time,
            total_hours=timesheet.total_hours,
            description=timesheet.description,
            status=timesheet.status,
            approved_by=timesheet.approved_by,
            approved_at=timesheet.approved_at,
            created_at=timesheet.created_at,
            updated_at=timesheet.updated_at,
        )

    def model_to_domain(self, model: TimesheetModel) -> Timesheet:
        return Timesheet(
            id=model.id,
            contract_id=model.contract_id,
            va_profile_id=model.va_profile_id,
            date=model.date,
            start_time=model.start_time,
            end_time=model.end_time,
            total_hours=to_float(model.total_hours),
            description=model.description,
            status=model.status,
            approved_by=model.approved_by,
            approved_at=model.approved_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
