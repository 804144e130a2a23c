"""
Matching use cases for the application layer.

Companies vote on VA profiles for their postings and VAs vote on postings.
A yes from both sides on the same pair creates a permanent Match; the
company then pays to unlock the contact details of the match.
"""

import logging
from typing import List, Optional

from app.application.use_cases.base_use_case import (
    AuthorizedUseCase, CommandUseCase, QueryUseCase
)
from app.application.dto.profile_dto import CompanySummaryDTO, VAProfileResponseDTO
from app.application.dto.job_dto import JobPostingResponseDTO
from app.application.dto.matching_dto import (
    VoteRequestDTO, DiscoverVAsRequestDTO, VoteResultDTO,
    MatchVoteResponseDTO, MatchResponseDTO, ContactInfoDTO
)
from app.application.use_cases.job_use_cases import job_posting_response, job_posting_responses
from app.domain.models.base import (
    EntityNotFoundError, DuplicateEntityError, PermissionDeniedError,
    PaymentRequiredError, ValidationError
)
from app.domain.models.job import JobPosting
from app.domain.models.matching import Match, MatchVote, VoteSide
from app.domain.models.profile import Company, VAProfile
from app.domain.models.user import Role
from app.domain.repositories.job_repository import JobPostingRepository
from app.domain.repositories.matching_repository import MatchRepository, MatchVoteRepository
from app.domain.repositories.payment_repository import PaymentRepository
from app.domain.repositories.profile_repository import CompanyRepository, VAProfileRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.services.matching_service import MatchingService, DISCOVERY_LIMIT


logger = logging.getLogger(__name__)

MATCH_MESSAGE = "It's a match! Payment required to unlock contact information."


class MatchPresenter:
    """Builds match responses with their posting, company and VA attached."""

    def __init__(self, job_repository: JobPostingRepository, company_repository: CompanyRepository,
                 va_profile_repository: VAProfileRepository, user_repository: UserRepository):
        self.job_repository = job_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository
        self.user_repository = user_repository

    def contact_info(self, company: Optional[Company], profile: Optional[VAProfile]) -> ContactInfoDTO:
        """Profile contact email when set, otherwise the account email."""
        va_email = profile.email if profile else None
        if profile and not va_email:
            user = self.user_repository.find_by_id(profile.user_id)
            va_email = user.email if user else None

        company_email = company.email if company else None
        if company and not company_email:
            user = self.user_repository.find_by_id(company.user_id)
            company_email = user.email if user else None

        return ContactInfoDTO(va_email=va_email, company_email=company_email)

    def present(self, match: Match) -> MatchResponseDTO:
        job = self.job_repository.find_by_id(match.job_posting_id)
        company = self.company_repository.find_by_id(match.company_id)
        profile = self.va_profile_repository.find_by_id(match.va_profile_id)

        return MatchResponseDTO.from_domain(
            match,
            job_posting=job_posting_response(job, company) if job else None,
            company=CompanySummaryDTO.model_validate(company) if company else None,
            va_profile=VAProfileResponseDTO.from_domain(profile) if profile else None,
            # Contact details stay hidden until the unlock fee is paid
            contact_info=self.contact_info(company, profile) if match.contact_unlocked else None,
        )


class MatchVisibilityMixin:
    """Resolves which matches the caller may see."""

    company_repository: CompanyRepository
    va_profile_repository: VAProfileRepository
    matching_service: MatchingService

    def _scope(self):
        company_id = va_profile_id = None
        if self.current_user.role == Role.COMPANY:
            company = self.company_repository.find_by_user_id(self.current_user_id)
            company_id = company.id if company else None
        elif self.current_user.role == Role.VA:
            profile = self.va_profile_repository.find_by_user_id(self.current_user_id)
            va_profile_id = profile.id if profile else None
        return self.matching_service.match_scope_for(self.current_user, company_id, va_profile_id)

    def _visible_match(self, match_repository: MatchRepository, match_id: int) -> Match:
        match = match_repository.find_by_id(match_id)
        if not match:
            raise EntityNotFoundError("Match")
        scope = self._scope()
        if scope.everything:
            return match
        if scope.company_id is not None and match.company_id == scope.company_id:
            return match
        if scope.va_profile_id is not None and match.va_profile_id == scope.va_profile_id:
            return match
        raise EntityNotFoundError("Match")


class RecordVoteUseCase(AuthorizedUseCase, CommandUseCase[VoteRequestDTO, VoteResultDTO]):
    """
    Record one side's vote on a (job posting, VA profile) pair and create
    the match when both sides have said yes.
    """

    def __init__(self, vote_repository: MatchVoteRepository, match_repository: MatchRepository,
                 job_repository: JobPostingRepository, company_repository: CompanyRepository,
                 va_profile_repository: VAProfileRepository, user_repository: UserRepository,
                 event_dispatcher=None):
        super().__init__(event_dispatcher=event_dispatcher)
        self.vote_repository = vote_repository
        self.match_repository = match_repository
        self.job_repository = job_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository
        self.matching_service = MatchingService()
        self.presenter = MatchPresenter(job_repository, company_repository,
                                        va_profile_repository, user_repository)

    def _company_side(self, request: VoteRequestDTO) -> tuple[JobPosting, Company, VAProfile]:
        job = self.job_repository.find_by_id(request.job_posting_id)
        company = self.company_repository.find_by_user_id(self.current_user_id)
        # Someone else's posting looks exactly like a missing one
        if not job or not company or job.company_id != company.id:
            raise EntityNotFoundError("Job posting")
        if request.va_profile_id is None:
            raise ValidationError("VA profile ID is required", "va_profile_id")
        profile = self.va_profile_repository.find_by_id(request.va_profile_id)
        if not profile:
            raise EntityNotFoundError("VA profile")
        return job, company, profile

    def _va_side(self, request: VoteRequestDTO) -> tuple[JobPosting, Company, VAProfile]:
        profile = self.va_profile_repository.find_by_user_id(self.current_user_id)
        if not profile:
            raise EntityNotFoundError("VA profile")
        if request.va_profile_id is not None and request.va_profile_id != profile.id:
            raise PermissionDeniedError("You can only vote with your own VA profile")
        job = self.job_repository.find_by_id(request.job_posting_id)
        if not job:
            raise EntityNotFoundError("Job posting")
        company = self.company_repository.find_by_id(job.company_id)
        if not company:
            raise EntityNotFoundError("Company profile")
        return job, company, profile

    async def _execute_command_logic(self, request: VoteRequestDTO) -> VoteResultDTO:
        side = VoteSide.for_role(self.current_user.role)
        if side == VoteSide.COMPANY:
            job, company, profile = self._company_side(request)
        else:
            job, company, profile = self._va_side(request)

        votes = self.vote_repository.find_by_pair(job.id, profile.id)
        if votes is None:
            votes = MatchVote(job_posting_id=job.id, va_profile_id=profile.id)
        mutual = self.matching_service.apply_vote(votes, side, request.vote)
        votes = self.vote_repository.save(votes)
        # save() may have merged a row written concurrently by the other side
        mutual = mutual or (request.vote and votes.is_mutual)

        match = self.match_repository.find_by_pair(job.id, profile.id)
        if match is None and mutual:
            match = self._create_match(votes, job, company, profile)

        if match is None:
            return VoteResultDTO(match=False, data=MatchVoteResponseDTO.from_domain(votes))

        return VoteResultDTO(
            match=True,
            data=self.presenter.present(match),
            message=MATCH_MESSAGE if request.vote else None,
        )

    def _create_match(self, votes: MatchVote, job: JobPosting, company: Company,
                      profile: VAProfile) -> Match:
        try:
            match = self.match_repository.save(Match.from_votes(votes, company_id=company.id))
        except DuplicateEntityError:
            # Lost the race: the other request created it
            existing = self.match_repository.find_by_pair(job.id, profile.id)
            if existing is None:
                raise
            return existing

        logger.info(f"Match {match.id} created for job {job.id} and VA profile {profile.id}")
        match.announce(company.user_id, profile.user_id, job.title)
        self._collect_events(match)
        return match


class ListMatchesUseCase(AuthorizedUseCase, MatchVisibilityMixin, QueryUseCase[None, List[MatchResponseDTO]]):
    """Matches visible to the caller, newest first."""

    def __init__(self, match_repository: MatchRepository, job_repository: JobPostingRepository,
                 company_repository: CompanyRepository, va_profile_repository: VAProfileRepository,
                 user_repository: UserRepository):
        super().__init__()
        self.match_repository = match_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository
        self.matching_service = MatchingService()
        self.presenter = MatchPresenter(job_repository, company_repository,
                                        va_profile_repository, user_repository)

    async def _execute_query_logic(self, request: None) -> List[MatchResponseDTO]:
        matches = self.match_repository.find_by_scope(self._scope())
        return [self.presenter.present(match) for match in matches]


class GetMatchUseCase(AuthorizedUseCase, MatchVisibilityMixin, QueryUseCase[int, MatchResponseDTO]):

    def __init__(self, match_repository: MatchRepository, job_repository: JobPostingRepository,
                 company_repository: CompanyRepository, va_profile_repository: VAProfileRepository,
                 user_repository: UserRepository):
        super().__init__()
        self.match_repository = match_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository
        self.matching_service = MatchingService()
        self.presenter = MatchPresenter(job_repository, company_repository,
                                        va_profile_repository, user_repository)

    async def _execute_query_logic(self, match_id: int) -> MatchResponseDTO:
        return self.presenter.present(self._visible_match(self.match_repository, match_id))


class UnlockContactUseCase(AuthorizedUseCase, MatchVisibilityMixin, CommandUseCase[int, MatchResponseDTO]):
    """
    Reveal both parties' contact details once the company has a succeeded
    payment for the match. Unlocking again is harmless.
    """

    def __init__(self, match_repository: MatchRepository, payment_repository: PaymentRepository,
                 job_repository: JobPostingRepository, company_repository: CompanyRepository,
                 va_profile_repository: VAProfileRepository, user_repository: UserRepository):
        super().__init__()
        self.match_repository = match_repository
        self.payment_repository = payment_repository
        self.company_repository = company_repository
        self.va_profile_repository = va_profile_repository
        self.matching_service = MatchingService()
        self.presenter = MatchPresenter(job_repository, company_repository,
                                        va_profile_repository, user_repository)

    async def _check_authorization(self, match_id: int) -> None:
        self._require_role(Role.COMPANY, message="Only companies can unlock contact information")

    async def _execute_command_logic(self, match_id: int) -> MatchResponseDTO:
        match = self._visible_match(self.match_repository, match_id)

        if not self.payment_repository.find_succeeded_for_match(match.id):
            raise PaymentRequiredError("Payment required to unlock contact information")

        match.unlock_contact()
        match = self.match_repository.save(match)
        return self.presenter.present(match)


class DiscoverVAsUseCase(AuthorizedUseCase, QueryUseCase[DiscoverVAsRequestDTO, List[VAProfileResponseDTO]]):
    """Available VAs the company has not yet voted on for one of its postings."""

    def __init__(self, va_profile_repository: VAProfileRepository, job_repository: JobPostingRepository,
                 company_repository: CompanyRepository):
        super().__init__()
        self.va_profile_repository = va_profile_repository
        self.job_repository = job_repository
        self.company_repository = company_repository

    async def _check_authorization(self, request: DiscoverVAsRequestDTO) -> None:
        self._require_role(Role.COMPANY, message="Only companies can discover VAs")

    async def _execute_query_logic(self, request: DiscoverVAsRequestDTO) -> List[VAProfileResponseDTO]:
        job = self.job_repository.find_by_id(request.job_posting_id)
        company = self.company_repository.find_by_user_id(self.current_user_id)
        if not job or not company or job.company_id != company.id:
            raise EntityNotFoundError("Job posting")

        profiles = self.va_profile_repository.find_discoverable_for_job(job.id, DISCOVERY_LIMIT)
        return [VAProfileResponseDTO.from_domain(profile) for profile in profiles]


class DiscoverJobsUseCase(AuthorizedUseCase, QueryUseCase[None, List[JobPostingResponseDTO]]):
    """Open postings the VA has not yet voted on."""

    def __init__(self, job_repository: JobPostingRepository, va_profile_repository: VAProfileRepository,
                 company_repository: CompanyRepository):
        super().__init__()
        self.job_repository = job_repository
        self.va_profile_repository = va_profile_repository
        self.company_repository = company_repository

    async def _check_authorization(self, request: None) -> None:
        self._require_role(Role.VA, message="Only VAs can discover jobs")

    async def _execute_query_logic(self, request: None) -> List[JobPostingResponseDTO]:
        profile = self.va_profile_repository.find_by_user_id(self.current_user_id)
        if not profile:
            raise EntityNotFoundError("VA profile")
        jobs = self.job_repository.find_discoverable_for_va(profile.id, DISCOVERY_LIMIT)
        return job_posting_responses(jobs, self.company_repository)
