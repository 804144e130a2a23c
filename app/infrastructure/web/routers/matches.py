"""
Matching router.
Two-sided voting, mutual matches, discovery and the paid contact unlock.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.application.dto.matching_dto import VoteRequestDTO, DiscoverVAsRequestDTO
from app.application.use_cases.matching_use_cases import (
    RecordVoteUseCase,
    ListMatchesUseCase,
    GetMatchUseCase,
    UnlockContactUseCase,
    DiscoverVAsUseCase,
    DiscoverJobsUseCase,
)
from app.domain.events.base import EventDispatcher
from app.infrastructure.auth import CurrentUser
from app.infrastructure.rate_limiting import search_rate_limit
from app.infrastructure.repositories import (
    SQLAlchemyCompanyRepository,
    SQLAlchemyJobPostingRepository,
    SQLAlchemyMatchRepository,
    SQLAlchemyMatchVoteRepository,
    SQLAlchemyPaymentRepository,
    SQLAlchemyUserRepository,
    SQLAlchemyVAProfileRepository,
)
from app.infrastructure.web.dependencies import (
    get_company_repository,
    get_event_dispatcher,
    get_job_repository,
    get_match_repository,
    get_payment_repository,
    get_user_repository,
    get_va_profile_repository,
    get_vote_repository,
)
from app.infrastructure.web.responses import serialize, success_response, unwrap_result


router = APIRouter()

MatchRepository = Annotated[SQLAlchemyMatchRepository, Depends(get_match_repository)]
JobRepository = Annotated[SQLAlchemyJobPostingRepository, Depends(get_job_repository)]
CompanyRepository = Annotated[SQLAlchemyCompanyRepository, Depends(get_company_repository)]
VAProfileRepository = Annotated[SQLAlchemyVAProfileRepository, Depends(get_va_profile_repository)]
UserRepository = Annotated[SQLAlchemyUserRepository, Depends(get_user_repository)]


@router.get("/discover")
async def discover_vas(
    user: CurrentUser,
    va_profile_repository: VAProfileRepository,
    job_repository: JobRepository,
    company_repository: CompanyRepository,
    job_posting_id: int = Query(..., alias="jobPostingId", description="Posting to find candidates for"),
    _: None = Depends(search_rate_limit)
):
    """
    Available VA profiles the company has not voted on yet for this posting.
    """
    use_case = DiscoverVAsUseCase(va_profile_repository, job_repository, company_repository)
    request = DiscoverVAsRequestDTO(job_posting_id=job_posting_id)
    return success_response(unwrap_result(await use_case.set_current_user(user).execute(request)))


@router.get("/discover/jobs")
async def discover_jobs(
    user: CurrentUser,
    job_repository: JobRepository,
    va_profile_repository: VAProfileRepository,
    company_repository: CompanyRepository,
    _: None = Depends(search_rate_limit)
):
    """Open postings the VA has not voted on yet."""
    use_case = DiscoverJobsUseCase(job_repository, va_profile_repository, company_repository)
    return success_response(unwrap_result(await use_case.set_current_user(user).execute()))


@router.post("/vote")
async def vote(
    request: VoteRequestDTO,
    user: CurrentUser,
    vote_repository: Annotated[SQLAlchemyMatchVoteRepository, Depends(get_vote_repository)],
    match_repository: MatchRepository,
    job_repository: JobRepository,
    company_repository: CompanyRepository,
    va_profile_repository: VAProfileRepository,
    user_repository: UserRepository,
    event_dispatcher: Annotated[EventDispatcher, Depends(get_event_dispatcher)]
):
    """
    Vote on a job posting / VA profile pair.

    - **jobPostingId**: posting voted on
    - **vaProfileId**: required for companies; VAs may omit it
    - **vote**: true for interest

    When both sides have voted true the response carries the match.
    """
    use_case = RecordVoteUseCase(
        vote_repository, match_repository, job_repository, company_repository,
        va_profile_repository, user_repository, event_dispatcher=event_dispatcher
    ).set_current_user(user)
    result = unwrap_result(await use_case.execute(request))

    body = {"success": True, "match": result.match, "data": serialize(result.data)}
    if result.message:
        body["message"] = result.message
    return body


@router.get("")
async def list_matches(
    user: CurrentUser,
    match_repository: MatchRepository,
    job_repository: JobRepository,
    company_repository: CompanyRepository,
    va_profile_repository: VAProfileRepository,
    user_repository: UserRepository
):
    """Mutual matches the caller is a party to, newest first."""
    use_case = ListMatchesUseCase(
        match_repository, job_repository, company_repository, va_profile_repository, user_repository
    ).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute()))


@router.get("/{match_id}")
async def get_match(
    match_id: int,
    user: CurrentUser,
    match_repository: MatchRepository,
    job_repository: JobRepository,
    company_repository: CompanyRepository,
    va_profile_repository: VAProfileRepository,
    user_repository: UserRepository
):
    use_case = GetMatchUseCase(
        match_repository, job_repository, company_repository, va_profile_repository, user_repository
    ).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(match_id)))


@router.post("/{match_id}/unlock")
async def unlock_contact(
    match_id: int,
    user: CurrentUser,
    match_repository: MatchRepository,
    payment_repository: Annotated[SQLAlchemyPaymentRepository, Depends(get_payment_repository)],
    job_repository: JobRepository,
    company_repository: CompanyRepository,
    va_profile_repository: VAProfileRepository,
    user_repository: UserRepository
):
    """
    Reveal both parties' contact details. Requires a succeeded unlock payment (402 otherwise).
    """
    use_case = UnlockContactUseCase(
        match_repository, payment_repository, job_repository, company_repository,
        va_profile_repository, user_repository
    ).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(match_id)), "Contact information unlocked")
