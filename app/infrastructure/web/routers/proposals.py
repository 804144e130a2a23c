"""
Proposal router.
VAs bid on open postings and manage their own proposals.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.application.dto.job_dto import SubmitProposalRequestDTO, UpdateProposalRequestDTO
from app.application.use_cases.job_use_cases import (
    SubmitProposalUseCase,
    ListOwnProposalsUseCase,
    UpdateProposalUseCase,
)
from app.domain.events.base import EventDispatcher
from app.infrastructure.auth import CurrentUser
from app.infrastructure.rate_limiting import create_rate_limit
from app.infrastructure.repositories import (
    SQLAlchemyCompanyRepository,
    SQLAlchemyJobPostingRepository,
    SQLAlchemyProposalRepository,
    SQLAlchemyVAProfileRepository,
)
from app.infrastructure.web.dependencies import (
    get_company_repository,
    get_event_dispatcher,
    get_job_repository,
    get_proposal_repository,
    get_va_profile_repository,
)
from app.infrastructure.web.responses import success_response, unwrap_result


router = APIRouter()

ProposalRepository = Annotated[SQLAlchemyProposalRepository, Depends(get_proposal_repository)]
JobRepository = Annotated[SQLAlchemyJobPostingRepository, Depends(get_job_repository)]
VAProfileRepository = Annotated[SQLAlchemyVAProfileRepository, Depends(get_va_profile_repository)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_proposal(
    request: SubmitProposalRequestDTO,
    user: CurrentUser,
    proposal_repository: ProposalRepository,
    job_repository: JobRepository,
    va_profile_repository: VAProfileRepository,
    company_repository: Annotated[SQLAlchemyCompanyRepository, Depends(get_company_repository)],
    event_dispatcher: Annotated[EventDispatcher, Depends(get_event_dispatcher)],
    _: None = Depends(create_rate_limit)
):
    """
    Submit a proposal for an open posting. One proposal per VA per posting.
    """
    use_case = SubmitProposalUseCase(
        proposal_repository, job_repository, va_profile_repository, company_repository,
        event_dispatcher=event_dispatcher
    ).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(request)), "Proposal submitted successfully")


@router.get("")
async def list_own_proposals(
    user: CurrentUser,
    proposal_repository: ProposalRepository,
    job_repository: JobRepository,
    va_profile_repository: VAProfileRepository
):
    use_case = ListOwnProposalsUseCase(proposal_repository, job_repository, va_profile_repository)
    return success_response(unwrap_result(await use_case.set_current_user(user).execute()))


@router.put("/{proposal_id}")
async def update_proposal(
    proposal_id: int,
    request: UpdateProposalRequestDTO,
    user: CurrentUser,
    proposal_repository: ProposalRepository,
    va_profile_repository: VAProfileRepository
):
    use_case = UpdateProposalUseCase(proposal_repository, va_profile_repository)
    use_case.set_current_user(user).for_proposal(proposal_id)
    return success_response(unwrap_result(await use_case.execute(request)), "Proposal updated successfully")
