"""
Contract use cases for the application layer.
Implements contracts, milestones and timesheets between a company and a VA.
"""

from enum import Enum
from typing import List, Optional, Tuple

from app.application.use_cases.base_use_case import (
    AuthorizedUseCase, CommandUseCase, QueryUseCase
)
from app.application.dto.base_dto import PageDTO
from app.application.dto.profile_dto import CompanySummaryDTO, VAProfileResponseDTO
from app.application.dto.contract_dto import (
    CreateContractRequestDTO, UpdateContractRequestDTO, ListContractsRequestDTO,
    ContractResponseDTO, ContractMetricsDTO,
    CreateMilestoneRequestDTO, UpdateMilestoneRequestDTO, MilestoneResponseDTO,
    SubmitTimesheetRequestDTO, TimesheetResponseDTO
)
from app.application.use_cases.job_use_cases import job_posting_response
from app.domain.events.marketplace_events import (
    ContractCreated, ContractCompleted, ProposalAccepted
)
from app.domain.models.base import EntityNotFoundError, PermissionDeniedError
from app.domain.models.contract import (
    Contract, ContractStatus, Milestone, MilestoneStatus, Timesheet
)
from app.domain.models.job import BidType
from app.domain.models.user import Role
from app.domain.repositories.contract_repository import (
    ContractRepository, MilestoneRepository, TimesheetRepository
)
from app.domain.repositories.job_repository import JobPostingRepository, ProposalRepository
from app.domain.repositories.payment_repository import PaymentRepository
from app.domain.repositories.profile_repository import CompanyRepository, VAProfileRepository
from app.domain.services.contract_metrics import ContractMetricsService


CONTRACT_FILTERS = {
    "active": (ContractStatus.ACTIVE, ContractStatus.PAUSED),
    "completed": (ContractStatus.COMPLETED,),
    "all": None,
}

VA_MILESTONE_STATUSES = (MilestoneStatus.IN_PROGRESS, MilestoneStatus.COMPLETED)


class ContractParty(str, Enum):
    COMPANY = "company"
    VA = "va"


class ContractAccessMixin:
    """Resolves the caller's side of a contract."""

    contract_repository: ContractRepository
    company_repository: CompanyRepository
    va_profile_repository: VAProfileRepository

    def _load_contract(self, contract_id: int) -> Tuple[Contract, ContractParty]:
        contract = self.contract_repository.find_by_id(contract_id)
        if not contract:
            raise EntityNotFoundError("Contract")

        if self.current_user.role == Role.COMPANY:
            company = self.company_repository.find_by_user_id(self.current_user_id)
            if company and company.id == contract.company_id:
                return contract, ContractParty.COMPANY
        elif self.current_user.role == Role.VA:
            profile = self.va_profile_repository.find_by_user_id(self.current_user_id)
            if profile and profile.id == contract.va_profile_id:
                return contract, ContractParty.VA

        raise PermissionDeniedError("Access denied")

    def _require_party(self, party: ContractParty, expected: ContractParty, message: str) -> None:
        if party != expected:
            raise PermissionDeniedError(message)


# Contracts

class CreateContractUseCase(AuthorizedUseCase, CommandUseCase[CreateContractRequestDTO, ContractResponseDTO]):
    """
    Accept a pending proposal: the proposal becomes accepted, the posting
    filled, and a contract is opened on the proposal's terms.
    """

    def __init__(self, contract_repository: ContractRepository, proposal_repository: ProposalRepository,
                 job_repository: JobPostingRepository, company_repository: CompanyRepository,
                 va_profile_repository: VAProfileRepository, event_dispatcher=None):
        super().__init__(event_dispatcher=event_dispatcher)
        self.contract_repository = contract_repository
        self.proposal_repository = proposal_repository
        self.job_repository = job_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository

    async def _check_authorization(self, request: CreateContractRequestDTO) -> None:
        self._require_role(Role.COMPANY, message="Only companies can create contracts")

    async def _execute_command_logic(self, request: CreateContractRequestDTO) -> ContractResponseDTO:
        proposal = self.proposal_repository.find_by_id(request.proposal_id)
        if not proposal:
            raise EntityNotFoundError("Proposal")
        job = self.job_repository.find_by_id(proposal.job_posting_id)
        if not job:
            raise EntityNotFoundError("Job posting")
        company = self.company_repository.find_by_user_id(self.current_user_id)
        if not company or job.company_id != company.id:
            raise PermissionDeniedError("Access denied to this proposal")

        proposal.accept()

        hourly_rate = None
        if proposal.bid_type == BidType.HOURLY:
            hourly_rate = proposal.hourly_rate or proposal.bid_amount
        contract = Contract(
            company_id=company.id,
            va_profile_id=proposal.va_profile_id,
            job_posting_id=job.id,
            proposal_id=proposal.id,
            contract_type=proposal.bid_type,
            amount=proposal.bid_amount,
            hourly_rate=hourly_rate,
            currency="USD",
            status=ContractStatus.ACTIVE,
            terms=request.terms,
            start_date=request.start_date,
            end_date=request.end_date,
        )
        contract = self.contract_repository.save(contract)
        self.proposal_repository.save(proposal)
        job.mark_filled()
        self.job_repository.save(job)

        profile = self.va_profile_repository.find_by_id(proposal.va_profile_id)
        if profile:
            self.events.append(ContractCreated(
                contract_id=contract.id,
                va_user_id=profile.user_id,
                company_name=company.name,
            ))
            self.events.append(ProposalAccepted(
                proposal_id=proposal.id,
                contract_id=contract.id,
                va_user_id=profile.user_id,
                job_title=job.title,
            ))

        return ContractResponseDTO.from_domain(
            contract,
            company=CompanySummaryDTO.model_validate(company),
            va_profile=VAProfileResponseDTO.from_domain(profile) if profile else None,
        )


class ListContractsUseCase(AuthorizedUseCase, QueryUseCase[ListContractsRequestDTO, PageDTO]):
    """The caller's contracts, filtered by active/completed/all."""

    def __init__(self, contract_repository: ContractRepository, company_repository: CompanyRepository,
                 va_profile_repository: VAProfileRepository):
        super().__init__()
        self.contract_repository = contract_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository

    async def _execute_query_logic(self, request: ListContractsRequestDTO) -> PageDTO:
        company_id: Optional[int] = None
        va_profile_id: Optional[int] = None
        if self.current_user.role == Role.COMPANY:
            company = self.company_repository.find_by_user_id(self.current_user_id)
            if not company:
                return PageDTO.create([], 0, request.page, request.limit)
            company_id = company.id
        elif self.current_user.role == Role.VA:
            profile = self.va_profile_repository.find_by_user_id(self.current_user_id)
            if not profile:
                return PageDTO.create([], 0, request.page, request.limit)
            va_profile_id = profile.id

        contracts, total = self.contract_repository.find_for_party(
            company_id=company_id,
            va_profile_id=va_profile_id,
            statuses=CONTRACT_FILTERS[request.type],
            offset=request.offset,
            limit=request.limit,
        )
        return PageDTO.create(
            [ContractResponseDTO.from_domain(contract) for contract in contracts],
            total, request.page, request.limit,
        )


class GetContractUseCase(AuthorizedUseCase, ContractAccessMixin, QueryUseCase[int, ContractResponseDTO]):
    """One contract with its parties and progress metrics."""

    def __init__(self, contract_repository: ContractRepository, company_repository: CompanyRepository,
                 va_profile_repository: VAProfileRepository, job_repository: JobPostingRepository,
                 milestone_repository: MilestoneRepository, timesheet_repository: TimesheetRepository,
                 payment_repository: PaymentRepository):
        super().__init__()
        self.contract_repository = contract_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository
        self.job_repository = job_repository
        self.milestone_repository = milestone_repository
        self.timesheet_repository = timesheet_repository
        self.payment_repository = payment_repository
        self.metrics_service = ContractMetricsService()

    async def _execute_query_logic(self, contract_id: int) -> ContractResponseDTO:
        contract, _ = self._load_contract(contract_id)

        metrics = self.metrics_service.calculate(
            contract,
            self.milestone_repository.find_by_contract(contract.id),
            self.timesheet_repository.find_by_contract(contract.id),
            self.payment_repository.find_by_contract(contract.id),
        )
        company = self.company_repository.find_by_id(contract.company_id)
        profile = self.va_profile_repository.find_by_id(contract.va_profile_id)
        job = self.job_repository.find_by_id(contract.job_posting_id)

        return ContractResponseDTO.from_domain(
            contract,
            company=CompanySummaryDTO.model_validate(company) if company else None,
            va_profile=VAProfileResponseDTO.from_domain(profile) if profile else None,
            job_posting=job_posting_response(job) if job else None,
            metrics=ContractMetricsDTO(**metrics),
        )


class UpdateContractUseCase(AuthorizedUseCase, ContractAccessMixin,
                            CommandUseCase[UpdateContractRequestDTO, ContractResponseDTO]):

    def __init__(self, contract_repository: ContractRepository, company_repository: CompanyRepository,
                 va_profile_repository: VAProfileRepository, event_dispatcher=None):
        super().__init__(event_dispatcher=event_dispatcher)
        self.contract_repository = contract_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository
        self.contract_id: Optional[int] = None

    def for_contract(self, contract_id: int) -> "UpdateContractUseCase":
        self.contract_id = contract_id
        return self

    async def _execute_command_logic(self, request: UpdateContractRequestDTO) -> ContractResponseDTO:
        contract, party = self._load_contract(self.contract_id)
        changes = request.changes()

        if "terms" in changes or "end_date" in changes:
            self._require_party(party, ContractParty.COMPANY, "Only the company can change contract terms")
            contract.apply_changes({"terms": changes.get("terms"), "end_date": changes.get("end_date")})
            contract.validate()
            contract.mark_as_updated()

        completed = False
        if changes.get("status") is not None:
            previous = contract.change_status(changes["status"])
            completed = previous != contract.status and contract.status == ContractStatus.COMPLETED

        contract = self.contract_repository.save(contract)

        if completed:
            company = self.company_repository.find_by_id(contract.company_id)
            profile = self.va_profile_repository.find_by_id(contract.va_profile_id)
            if company and profile:
                self.events.append(ContractCompleted(
                    contract_id=contract.id,
                    company_user_id=company.user_id,
                    va_user_id=profile.user_id,
                ))

        return ContractResponseDTO.from_domain(contract)


# Milestones

class CreateMilestoneUseCase(AuthorizedUseCase, ContractAccessMixin,
                             CommandUseCase[CreateMilestoneRequestDTO, MilestoneResponseDTO]):

    def __init__(self, milestone_repository: MilestoneRepository, contract_repository: ContractRepository,
                 company_repository: CompanyRepository, va_profile_repository: VAProfileRepository):
        super().__init__()
        self.milestone_repository = milestone_repository
        self.contract_repository = contract_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository
        self.contract_id: Optional[int] = None

    def for_contract(self, contract_id: int) -> "CreateMilestoneUseCase":
        self.contract_id = contract_id
        return self

    async def _execute_command_logic(self, request: CreateMilestoneRequestDTO) -> MilestoneResponseDTO:
        contract, party = self._load_contract(self.contract_id)
        self._require_party(party, ContractParty.COMPANY, "Only the company can create milestones")
        milestone = Milestone(contract_id=contract.id, **request.model_dump(by_alias=False))
        return MilestoneResponseDTO.from_domain(self.milestone_repository.save(milestone))


class ListMilestonesUseCase(AuthorizedUseCase, ContractAccessMixin,
                            QueryUseCase[int, List[MilestoneResponseDTO]]):

    def __init__(self, milestone_repository: MilestoneRepository, contract_repository: ContractRepository,
                 company_repository: CompanyRepository, va_profile_repository: VAProfileRepository):
        super().__init__()
        self.milestone_repository = milestone_repository
        self.contract_repository = contract_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository

    async def _execute_query_logic(self, contract_id: int) -> List[MilestoneResponseDTO]:
        contract, _ = self._load_contract(contract_id)
        return [
            MilestoneResponseDTO.from_domain(milestone)
            for milestone in self.milestone_repository.find_by_contract(contract.id)
        ]


class MilestoneAccessMixin(ContractAccessMixin):
    milestone_repository: MilestoneRepository

    def _load_milestone(self, milestone_id: int) -> Tuple[Milestone, ContractParty]:
        milestone = self.milestone_repository.find_by_id(milestone_id)
        if not milestone:
            raise EntityNotFoundError("Milestone")
        _, party = self._load_contract(milestone.contract_id)
        return milestone, party


class UpdateMilestoneUseCase(AuthorizedUseCase, MilestoneAccessMixin,
                             CommandUseCase[UpdateMilestoneRequestDTO, MilestoneResponseDTO]):
    """
    The company may edit any field; the VA may only report progress by
    moving the status to in_progress or completed.
    """

    def __init__(self, milestone_repository: MilestoneRepository, contract_repository: ContractRepository,
                 company_repository: CompanyRepository, va_profile_repository: VAProfileRepository):
        super().__init__()
        self.milestone_repository = milestone_repository
        self.contract_repository = contract_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository
        self.milestone_id: Optional[int] = None

    def for_milestone(self, milestone_id: int) -> "UpdateMilestoneUseCase":
        self.milestone_id = milestone_id
        return self

    async def _execute_command_logic(self, request: UpdateMilestoneRequestDTO) -> MilestoneResponseDTO:
        milestone, party = self._load_milestone(self.milestone_id)
        changes = request.changes()

        if party == ContractParty.VA:
            status = changes.get("status")
            if set(changes) != {"status"} or status not in VA_MILESTONE_STATUSES:
                raise PermissionDeniedError(
                    "VAs can only update milestone status to in_progress or completed"
                )

        milestone.update(**changes)
        return MilestoneResponseDTO.from_domain(self.milestone_repository.save(milestone))


class DeleteMilestoneUseCase(AuthorizedUseCase, MilestoneAccessMixin, CommandUseCase[int, bool]):

    def __init__(self, milestone_repository: MilestoneRepository, contract_repository: ContractRepository,
                 company_repository: CompanyRepository, va_profile_repository: VAProfileRepository):
        super().__init__()
        self.milestone_repository = milestone_repository
        self.contract_repository = contract_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository

    async def _execute_command_logic(self, milestone_id: int) -> bool:
        milestone, party = self._load_milestone(milestone_id)
        self._require_party(party, ContractParty.COMPANY, "Only the company can delete milestones")
        milestone.ensure_deletable()
        return self.milestone_repository.delete(milestone.id)


class ApproveMilestoneUseCase(AuthorizedUseCase, MilestoneAccessMixin,
                              CommandUseCase[int, MilestoneResponseDTO]):

    def __init__(self, milestone_repository: MilestoneRepository, contract_repository: ContractRepository,
                 company_repository: CompanyRepository, va_profile_repository: VAProfileRepository):
        super().__init__()
        self.milestone_repository = milestone_repository
        self.contract_repository = contract_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository

    async def _execute_command_logic(self, milestone_id: int) -> MilestoneResponseDTO:
        milestone, party = self._load_milestone(milestone_id)
        self._require_party(party, ContractParty.COMPANY, "Only the company can approve milestones")
        milestone.approve()
        return MilestoneResponseDTO.from_domain(self.milestone_repository.save(milestone))


# Timesheets

class SubmitTimesheetUseCase(AuthorizedUseCase, ContractAccessMixin,
                             CommandUseCase[SubmitTimesheetRequestDTO, TimesheetResponseDTO]):

    def __init__(self, timesheet_repository: TimesheetRepository, contract_repository: ContractRepository,
                 company_repository: CompanyRepository, va_profile_repository: VAProfileRepository):
        super().__init__()
        self.timesheet_repository = timesheet_repository
        self.contract_repository = contract_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository
        self.contract_id: Optional[int] = None

    def for_contract(self, contract_id: int) -> "SubmitTimesheetUseCase":
        self.contract_id = contract_id
        return self

    async def _execute_command_logic(self, request: SubmitTimesheetRequestDTO) -> TimesheetResponseDTO:
        contract, party = self._load_contract(self.contract_id)
        self._require_party(party, ContractParty.VA, "Only the VA can submit timesheets")
        timesheet = Timesheet(
            contract_id=contract.id,
            va_profile_id=contract.va_profile_id,
            **request.model_dump(by_alias=False),
        )
        return TimesheetResponseDTO.from_domain(self.timesheet_repository.save(timesheet))


class ListTimesheetsUseCase(AuthorizedUseCase, ContractAccessMixin,
                            QueryUseCase[int, List[TimesheetResponseDTO]]):

    def __init__(self, timesheet_repository: TimesheetRepository, contract_repository: ContractRepository,
                 company_repository: CompanyRepository, va_profile_repository: VAProfileRepository):
        super().__init__()
        self.timesheet_repository = timesheet_repository
        self.contract_repository = contract_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository

    async def _execute_query_logic(self, contract_id: int) -> List[TimesheetResponseDTO]:
        contract, _ = self._load_contract(contract_id)
        return [
            TimesheetResponseDTO.from_domain(timesheet)
            for timesheet in self.timesheet_repository.find_by_contract(contract.id)
        ]


class ReviewTimesheetUseCase(AuthorizedUseCase, ContractAccessMixin,
                             CommandUseCase[int, TimesheetResponseDTO]):
    """Company decision on a pending timesheet: approve=True approves, False rejects."""

    def __init__(self, timesheet_repository: TimesheetRepository, contract_repository: ContractRepository,
                 company_repository: CompanyRepository, va_profile_repository: VAProfileRepository,
                 approve: bool = True):
        super().__init__()
        self.timesheet_repository = timesheet_repository
        self.contract_repository = contract_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository
        self.approve = approve

    async def _execute_command_logic(self, timesheet_id: int) -> TimesheetResponseDTO:
        timesheet = self.timesheet_repository.find_by_id(timesheet_id)
        if not timesheet:
            raise EntityNotFoundError("Timesheet")
        _, party = self._load_contract(timesheet.contract_id)
        self._require_party(party, ContractParty.COMPANY, "Only the company can review timesheets")

        if self.approve:
            timesheet.approve(self.current_user_id)
        else:
            timesheet.reject(self.current_user_id)
        return TimesheetResponseDTO.from_domain(self.timesheet_repository.save(timesheet))


class DeleteTimesheetUseCase(AuthorizedUseCase, ContractAccessMixin, CommandUseCase[int, bool]):

    def __init__(self, timesheet_repository: TimesheetRepository, contract_repository: ContractRepository,
                 company_repository: CompanyRepository, va_profile_repository: VAProfileRepository):
        super().__init__()
        self.timesheet_repository = timesheet_repository
        self.contract_repository = contract_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository

    async def _execute_command_logic(self, timesheet_id: int) -> bool:
        timesheet = self.timesheet_repository.find_by_id(timesheet_id)
        if not timesheet:
            raise EntityNotFoundError("Timesheet")
        _, party = self._load_contract(timesheet.contract_id)
        self._require_party(party, ContractParty.VA, "Only the VA can delete timesheets")
        timesheet.ensure_deletable()
        return self.timesheet_repository.delete(timesheet.id)
