"""
Job marketplace use cases for the application layer.
Implements job posting management and proposal submission.
"""

from typing import Dict, Iterable, List, Optional

from app.application.use_cases.base_use_case import (
    AuthorizedUseCase, CommandUseCase, QueryUseCase
)
from app.application.dto.base_dto import PageDTO
from app.application.dto.profile_dto import CompanySummaryDTO, VAProfileResponseDTO
from app.application.dto.job_dto import (
    CreateJobPostingRequestDTO, UpdateJobPostingRequestDTO, ListJobPostingsRequestDTO,
    JobPostingResponseDTO, SubmitProposalRequestDTO, UpdateProposalRequestDTO,
    ProposalResponseDTO
)
from app.domain.events.marketplace_events import ProposalSubmitted
from app.domain.models.base import (
    EntityNotFoundError, DuplicateEntityError, PermissionDeniedError
)
from app.domain.models.job import JobPosting, Proposal
from app.domain.models.profile import Company, VAProfile
from app.domain.models.user import Role
from app.domain.repositories.job_repository import (
    JobPostingRepository, ProposalRepository, JobSearchCriteria
)
from app.domain.repositories.profile_repository import CompanyRepository, VAProfileRepository


def job_posting_response(job: JobPosting, company: Optional[Company] = None) -> JobPostingResponseDTO:
    """Job posting with its company summary attached when known."""
    summary = CompanySummaryDTO.model_validate(company) if company else None
    return JobPostingResponseDTO.from_domain(job, company=summary)


def job_posting_responses(jobs: Iterable[JobPosting],
                          company_repository: CompanyRepository) -> List[JobPostingResponseDTO]:
    companies: Dict[int, Optional[Company]] = {}
    responses = []
    for job in jobs:
        if job.company_id not in companies:
            companies[job.company_id] = company_repository.find_by_id(job.company_id)
        responses.append(job_posting_response(job, companies[job.company_id]))
    return responses


class CompanyOwnedJobMixin:
    """Helpers for use cases acting on a posting of the caller's company."""

    company_repository: CompanyRepository
    job_repository: JobPostingRepository

    def _own_company(self) -> Company:
        company = self.company_repository.find_by_user_id(self.current_user_id)
        if not company:
            raise EntityNotFoundError("Company profile")
        return company

    def _owned_job(self, job_id: int) -> tuple[JobPosting, Company]:
        job = self.job_repository.find_by_id(job_id)
        if not job:
            raise EntityNotFoundError("Job posting")
        company = self.company_repository.find_by_user_id(self.current_user_id)
        if not company or job.company_id != company.id:
            raise PermissionDeniedError("Access denied to this job posting")
        return job, company


class VAOwnedMixin:
    va_profile_repository: VAProfileRepository

    def _own_va_profile(self) -> VAProfile:
        profile = self.va_profile_repository.find_by_user_id(self.current_user_id)
        if not profile:
            raise EntityNotFoundError("VA profile")
        return profile


# Job postings

class CreateJobPostingUseCase(AuthorizedUseCase, CompanyOwnedJobMixin,
                              CommandUseCase[CreateJobPostingRequestDTO, JobPostingResponseDTO]):
    """Use case for publishing a job posting."""

    def __init__(self, job_repository: JobPostingRepository, company_repository: CompanyRepository):
        super().__init__()
        self.job_repository = job_repository
        self.company_repository = company_repository

    async def _check_authorization(self, request: CreateJobPostingRequestDTO) -> None:
        self._require_role(Role.COMPANY, message="Only companies can create job postings")

    async def _execute_command_logic(self, request: CreateJobPostingRequestDTO) -> JobPostingResponseDTO:
        company = self._own_company()
        job = JobPosting(company_id=company.id, **request.model_dump(by_alias=False))
        return job_posting_response(self.job_repository.save(job), company)


class ListJobPostingsUseCase(QueryUseCase[ListJobPostingsRequestDTO, PageDTO]):
    """Use case for browsing open postings."""

    def __init__(self, job_repository: JobPostingRepository, company_repository: CompanyRepository):
        super().__init__()
        self.job_repository = job_repository
        self.company_repository = company_repository

    async def _execute_query_logic(self, request: ListJobPostingsRequestDTO) -> PageDTO:
        criteria = JobSearchCriteria(
            search=request.search,
            category=request.category,
            skills=request.skills,
            experience_level=request.experience_level.value if request.experience_level else None,
            employment_type=request.employment_type.value if request.employment_type else None,
            job_type=request.job_type.value if request.job_type else None,
            remote=request.remote,
        )
        jobs, total = self.job_repository.find_open(criteria, offset=request.offset, limit=request.limit)
        return PageDTO.create(
            job_posting_responses(jobs, self.company_repository),
            total, request.page, request.limit,
        )


class GetJobPostingUseCase(CommandUseCase[int, JobPostingResponseDTO]):
    """Read one posting; every read counts as a view."""

    def __init__(self, job_repository: JobPostingRepository, company_repository: CompanyRepository):
        super().__init__()
        self.job_repository = job_repository
        self.company_repository = company_repository

    async def _execute_command_logic(self, job_id: int) -> JobPostingResponseDTO:
        job = self.job_repository.find_by_id(job_id)
        if not job:
            raise EntityNotFoundError("Job posting")
        job.record_view()
        job = self.job_repository.save(job)
        return job_posting_response(job, self.company_repository.find_by_id(job.company_id))


class UpdateJobPostingUseCase(AuthorizedUseCase, CompanyOwnedJobMixin,
                              CommandUseCase[UpdateJobPostingRequestDTO, JobPostingResponseDTO]):

    def __init__(self, job_repository: JobPostingRepository, company_repository: CompanyRepository):
        super().__init__()
        self.job_repository = job_repository
        self.company_repository = company_repository
        self.job_id: Optional[int] = None

    def for_job(self, job_id: int) -> "UpdateJobPostingUseCase":
        self.job_id = job_id
        return self

    async def _execute_command_logic(self, request: UpdateJobPostingRequestDTO) -> JobPostingResponseDTO:
        job, company = self._owned_job(self.job_id)
        job.update(**request.changes())
        return job_posting_response(self.job_repository.save(job), company)


class ListJobProposalsUseCase(AuthorizedUseCase, CompanyOwnedJobMixin,
                              QueryUseCase[int, List[ProposalResponseDTO]]):
    """Proposals received for one of the caller's postings."""

    def __init__(self, job_repository: JobPostingRepository, company_repository: CompanyRepository,
                 proposal_repository: ProposalRepository, va_profile_repository: VAProfileRepository):
        super().__init__()
        self.job_repository = job_repository
        self.company_repository = company_repository
        self.proposal_repository = proposal_repository
        self.va_profile_repository = va_profile_repository

    async def _execute_query_logic(self, job_id: int) -> List[ProposalResponseDTO]:
        self._owned_job(job_id)
        responses = []
        for proposal in self.proposal_repository.find_by_job(job_id):
            profile = self.va_profile_repository.find_by_id(proposal.va_profile_id)
            responses.append(ProposalResponseDTO.from_domain(
                proposal,
                va_profile=VAProfileResponseDTO.from_domain(profile) if profile else None,
            ))
        return responses


# Proposals

class SubmitProposalUseCase(AuthorizedUseCase, VAOwnedMixin,
                            CommandUseCase[SubmitProposalRequestDTO, ProposalResponseDTO]):
    """Use case for a VA bidding on an open posting, once per posting."""

    def __init__(self, proposal_repository: ProposalRepository, job_repository: JobPostingRepository,
                 va_profile_repository: VAProfileRepository, company_repository: CompanyRepository,
                 event_dispatcher=None):
        super().__init__(event_dispatcher=event_dispatcher)
        self.proposal_repository = proposal_repository
        self.job_repository = job_repository
        self.va_profile_repository = va_profile_repository
        self.company_repository = company_repository

    async def _check_authorization(self, request: SubmitProposalRequestDTO) -> None:
        self._require_role(Role.VA, message="Only VAs can submit proposals")

    async def _execute_command_logic(self, request: SubmitProposalRequestDTO) -> ProposalResponseDTO:
        profile = self._own_va_profile()

        job = self.job_repository.find_by_id(request.job_posting_id)
        if not job:
            raise EntityNotFoundError("Job posting")
        job.register_proposal()

        if self.proposal_repository.find_by_job_and_va(job.id, profile.id):
            raise DuplicateEntityError("Proposal", "job_posting_id", job.id,
                                       "You have already submitted a proposal for this job")

        proposal = Proposal(va_profile_id=profile.id, **request.model_dump(by_alias=False))
        proposal = self.proposal_repository.save(proposal)
        self.job_repository.save(job)

        company = self.company_repository.find_by_id(job.company_id)
        if company:
            self.events.append(ProposalSubmitted(
                proposal_id=proposal.id,
                job_posting_id=job.id,
                company_user_id=company.user_id,
                job_title=job.title,
            ))

        return ProposalResponseDTO.from_domain(proposal)


class ListOwnProposalsUseCase(AuthorizedUseCase, VAOwnedMixin,
                              QueryUseCase[None, List[ProposalResponseDTO]]):

    def __init__(self, proposal_repository: ProposalRepository, job_repository: JobPostingRepository,
                 va_profile_repository: VAProfileRepository):
        super().__init__()
        self.proposal_repository = proposal_repository
        self.job_repository = job_repository
        self.va_profile_repository = va_profile_repository

    async def _execute_query_logic(self, request: None) -> List[ProposalResponseDTO]:
        profile = self._own_va_profile()
        responses = []
        for proposal in self.proposal_repository.find_by_va(profile.id):
            job = self.job_repository.find_by_id(proposal.job_posting_id)
            responses.append(ProposalResponseDTO.from_domain(
                proposal,
                job_posting=job_posting_response(job) if job else None,
            ))
        return responses


class UpdateProposalUseCase(AuthorizedUseCase, VAOwnedMixin,
                            CommandUseCase[UpdateProposalRequestDTO, ProposalResponseDTO]):
    """Edit the caller's own proposal while it is still pending."""

    def __init__(self, proposal_repository: ProposalRepository,
                 va_profile_repository: VAProfileRepository):
        super().__init__()
        self.proposal_repository = proposal_repository
        self.va_profile_repository = va_profile_repository
        self.proposal_id: Optional[int] = None

    def for_proposal(self, proposal_id: int) -> "UpdateProposalUseCase":
        self.proposal_id = proposal_id
        return self

    async def _execute_command_logic(self, request: UpdateProposalRequestDTO) -> ProposalResponseDTO:
        proposal = self.proposal_repository.find_by_id(self.proposal_id)
        if not proposal:
            raise EntityNotFoundError("Proposal")
        profile = self.va_profile_repository.find_by_user_id(self.current_user_id)
        if not profile or proposal.va_profile_id != profile.id:
            raise PermissionDeniedError("Access denied to this proposal")
        proposal.update(**request.changes())
        return ProposalResponseDTO.from_domain(self.proposal_repository.save(proposal))
