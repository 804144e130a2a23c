"""
Contract router.
Contracts, their milestones and timesheets, visible to the two parties only.
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, status

from app.application.dto.contract_dto import (
    CreateContractRequestDTO,
    UpdateContractRequestDTO,
    ListContractsRequestDTO,
    CreateMilestoneRequestDTO,
    SubmitTimesheetRequestDTO,
)
from app.application.use_cases.contract_use_cases import (
    CreateContractUseCase,
    ListContractsUseCase,
    GetContractUseCase,
    UpdateContractUseCase,
    CreateMilestoneUseCase,
    ListMilestonesUseCase,
    SubmitTimesheetUseCase,
    ListTimesheetsUseCase,
)
from app.domain.events.base import EventDispatcher
from app.infrastructure.auth import CurrentUser
from app.infrastructure.pagination import PaginationParams, pagination_params
from app.infrastructure.rate_limiting import create_rate_limit
from app.infrastructure.repositories import (
    SQLAlchemyCompanyRepository,
    SQLAlchemyContractRepository,
    SQLAlchemyJobPostingRepository,
    SQLAlchemyMilestoneRepository,
    SQLAlchemyPaymentRepository,
    SQLAlchemyProposalRepository,
    SQLAlchemyTimesheetRepository,
    SQLAlchemyVAProfileRepository,
)
from app.infrastructure.web.dependencies import (
    get_company_repository,
    get_contract_repository,
    get_event_dispatcher,
    get_job_repository,
    get_milestone_repository,
    get_payment_repository,
    get_proposal_repository,
    get_timesheet_repository,
    get_va_profile_repository,
)
from app.infrastructure.web.responses import page_response, success_response, unwrap_result


router = APIRouter()

ContractRepository = Annotated[SQLAlchemyContractRepository, Depends(get_contract_repository)]
CompanyRepository = Annotated[SQLAlchemyCompanyRepository, Depends(get_company_repository)]
VAProfileRepository = Annotated[SQLAlchemyVAProfileRepository, Depends(get_va_profile_repository)]
JobRepository = Annotated[SQLAlchemyJobPostingRepository, Depends(get_job_repository)]
MilestoneRepository = Annotated[SQLAlchemyMilestoneRepository, Depends(get_milestone_repository)]
TimesheetRepository = Annotated[SQLAlchemyTimesheetRepository, Depends(get_timesheet_repository)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_contract(
    request: CreateContractRequestDTO,
    user: CurrentUser,
    contract_repository: ContractRepository,
    proposal_repository: Annotated[SQLAlchemyProposalRepository, Depends(get_proposal_repository)],
    job_repository: JobRepository,
    company_repository: CompanyRepository,
    va_profile_repository: VAProfileRepository,
    event_dispatcher: Annotated[EventDispatcher, Depends(get_event_dispatcher)],
    _: None = Depends(create_rate_limit)
):
    """
    Hire a VA by accepting their pending proposal.
    The proposal becomes accepted and the posting filled.
    """
    use_case = CreateContractUseCase(
        contract_repository, proposal_repository, job_repository, company_repository,
        va_profile_repository, event_dispatcher=event_dispatcher
    ).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(request)), "Contract created successfully")


@router.get("")
async def list_contracts(
    user: CurrentUser,
    contract_repository: ContractRepository,
    company_repository: CompanyRepository,
    va_profile_repository: VAProfileRepository,
    pagination: Annotated[PaginationParams, Depends(pagination_params)],
    type: Literal["active", "completed", "all"] = Query("active", description="active, completed or all")
):
    request = ListContractsRequestDTO(page=pagination.page, limit=pagination.limit, type=type)
    use_case = ListContractsUseCase(contract_repository, company_repository, va_profile_repository)
    return page_response(unwrap_result(await use_case.set_current_user(user).execute(request)))


@router.get("/{contract_id}")
async def get_contract(
    contract_id: int,
    user: CurrentUser,
    contract_repository: ContractRepository,
    company_repository: CompanyRepository,
    va_profile_repository: VAProfileRepository,
    job_repository: JobRepository,
    milestone_repository: MilestoneRepository,
    timesheet_repository: TimesheetRepository,
    payment_repository: Annotated[SQLAlchemyPaymentRepository, Depends(get_payment_repository)]
):
    """Contract details with milestone, hours and payment metrics."""
    use_case = GetContractUseCase(
        contract_repository, company_repository, va_profile_repository, job_repository,
        milestone_repository, timesheet_repository, payment_repository
    ).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(contract_id)))


@router.put("/{contract_id}")
async def update_contract(
    contract_id: int,
    request: UpdateContractRequestDTO,
    user: CurrentUser,
    contract_repository: ContractRepository,
    company_repository: CompanyRepository,
    va_profile_repository: VAProfileRepository,
    event_dispatcher: Annotated[EventDispatcher, Depends(get_event_dispatcher)]
):
    """
    Update a contract.

    - **status**: pending -> active/cancelled, active -> paused/completed/cancelled, paused -> active/cancelled
    - **terms**, **endDate**: company only
    """
    use_case = UpdateContractUseCase(
        contract_repository, company_repository, va_profile_repository, event_dispatcher=event_dispatcher
    )
    use_case.set_current_user(user).for_contract(contract_id)
    return success_response(unwrap_result(await use_case.execute(request)), "Contract updated successfully")


@router.post("/{contract_id}/milestones", status_code=status.HTTP_201_CREATED)
async def create_milestone(
    contract_id: int,
    request: CreateMilestoneRequestDTO,
    user: CurrentUser,
    milestone_repository: MilestoneRepository,
    contract_repository: ContractRepository,
    company_repository: CompanyRepository,
    va_profile_repository: VAProfileRepository
):
    use_case = CreateMilestoneUseCase(
        milestone_repository, contract_repository, company_repository, va_profile_repository
    )
    use_case.set_current_user(user).for_contract(contract_id)
    return success_response(unwrap_result(await use_case.execute(request)), "Milestone created successfully")


@router.get("/{contract_id}/milestones")
async def list_milestones(
    contract_id: int,
    user: CurrentUser,
    milestone_repository: MilestoneRepository,
    contract_repository: ContractRepository,
    company_repository: CompanyRepository,
    va_profile_repository: VAProfileRepository
):
    use_case = ListMilestonesUseCase(
        milestone_repository, contract_repository, company_repository, va_profile_repository
    ).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(contract_id)))


@router.post("/{contract_id}/timesheets", status_code=status.HTTP_201_CREATED)
async def submit_timesheet(
    contract_id: int,
    request: SubmitTimesheetRequestDTO,
    user: CurrentUser,
    timesheet_repository: TimesheetRepository,
    contract_repository: ContractRepository,
    company_repository: CompanyRepository,
    va_profile_repository: VAProfileRepository
):
    """Log worked hours on a contract. Hours are computed from start and end time."""
    use_case = SubmitTimesheetUseCase(
        timesheet_repository, contract_repository, company_repository, va_profile_repository
    )
    use_case.set_current_user(user).for_contract(contract_id)
    return success_response(unwrap_result(await use_case.execute(request)), "Timesheet submitted successfully")


@router.get("/{contract_id}/timesheets")
async def list_timesheets(
    contract_id: int,
    user: CurrentUser,
    timesheet_repository: TimesheetRepository,
    contract_repository: ContractRepository,
    company_repository: CompanyRepository,
    va_profile_repository: VAProfileRepository
):
    use_case = ListTimesheetsUseCase(
        timesheet_repository, contract_repository, company_repository, va_profile_repository
    ).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(contract_id)))
