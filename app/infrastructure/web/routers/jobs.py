"""
Job marketplace router.
Companies publish postings; everyone can browse open ones.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from app.application.dto.job_dto import (
    CreateJobPostingRequestDTO,
    UpdateJobPostingRequestDTO,
    ListJobPostingsRequestDTO,
)
from app.application.use_cases.job_use_cases import (
    CreateJobPostingUseCase,
    ListJobPostingsUseCase,
    GetJobPostingUseCase,
    UpdateJobPostingUseCase,
    ListJobProposalsUseCase,
)
from app.domain.models.job import BidType, EmploymentType, ExperienceLevel
from app.infrastructure.auth import CurrentUser
from app.infrastructure.pagination import PaginationParams, pagination_params, split_csv
from app.infrastructure.rate_limiting import create_rate_limit, search_rate_limit
from app.infrastructure.repositories import (
    SQLAlchemyCompanyRepository,
    SQLAlchemyJobPostingRepository,
    SQLAlchemyProposalRepository,
    SQLAlchemyVAProfileRepository,
)
from app.infrastructure.web.dependencies import (
    get_company_repository,
    get_job_repository,
    get_proposal_repository,
    get_va_profile_repository,
)
from app.infrastructure.web.responses import page_response, success_response, unwrap_result


router = APIRouter()

JobRepository = Annotated[SQLAlchemyJobPostingRepository, Depends(get_job_repository)]
CompanyRepository = Annotated[SQLAlchemyCompanyRepository, Depends(get_company_repository)]


@router.post("/marketplace", status_code=status.HTTP_201_CREATED)
async def create_job_posting(
    request: CreateJobPostingRequestDTO,
    user: CurrentUser,
    job_repository: JobRepository,
    company_repository: CompanyRepository,
    _: None = Depends(create_rate_limit)
):
    """
    Publish a job posting for the caller's company.

    - **title** 5-200 characters, **description** 20-2000 characters
    - **skillsRequired**: at least one skill
    """
    use_case = CreateJobPostingUseCase(job_repository, company_repository).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(request)), "Job posting created successfully")


@router.get("/marketplace")
async def list_job_postings(
    job_repository: JobRepository,
    company_repository: CompanyRepository,
    pagination: Annotated[PaginationParams, Depends(pagination_params)],
    search: Optional[str] = Query(None, max_length=255, description="Search title and description"),
    category: Optional[str] = Query(None),
    skills: Optional[str] = Query(None, description="Comma-separated skills"),
    experience_level: Optional[ExperienceLevel] = Query(None, alias="experienceLevel"),
    employment_type: Optional[EmploymentType] = Query(None, alias="employmentType"),
    job_type: Optional[BidType] = Query(None, alias="jobType"),
    remote: Optional[bool] = Query(None),
    _: None = Depends(search_rate_limit)
):
    """List open job postings, newest first."""
    request = ListJobPostingsRequestDTO(
        page=pagination.page,
        limit=pagination.limit,
        search=search,
        category=category,
        skills=split_csv(skills),
        experience_level=experience_level,
        employment_type=employment_type,
        job_type=job_type,
        remote=remote,
    )
    result = await ListJobPostingsUseCase(job_repository, company_repository).execute(request)
    return page_response(unwrap_result(result))


@router.get("/marketplace/{job_id}")
async def get_job_posting(job_id: int, job_repository: JobRepository, company_repository: CompanyRepository):
    """Get a posting. Counts as a view."""
    result = await GetJobPostingUseCase(job_repository, company_repository).execute(job_id)
    return success_response(unwrap_result(result))


@router.put("/marketplace/{job_id}")
async def update_job_posting(
    job_id: int,
    request: UpdateJobPostingRequestDTO,
    user: CurrentUser,
    job_repository: JobRepository,
    company_repository: CompanyRepository
):
    use_case = UpdateJobPostingUseCase(job_repository, company_repository).set_current_user(user).for_job(job_id)
    return success_response(unwrap_result(await use_case.execute(request)), "Job posting updated successfully")


@router.get("/marketplace/{job_id}/proposals")
async def list_job_proposals(
    job_id: int,
    user: CurrentUser,
    job_repository: JobRepository,
    company_repository: CompanyRepository,
    proposal_repository: Annotated[SQLAlchemyProposalRepository, Depends(get_proposal_repository)],
    va_profile_repository: Annotated[SQLAlchemyVAProfileRepository, Depends(get_va_profile_repository)]
):
    """Proposals received for one of the caller's postings."""
    use_case = ListJobProposalsUseCase(
        job_repository, company_repository, proposal_repository, va_profile_repository
    ).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(job_id)))
