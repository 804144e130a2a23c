"""
Profile use cases for the application layer.
Implements VA and company profile management and the public VA search.
"""

from app.application.use_cases.base_use_case import (
    AuthorizedUseCase, CommandUseCase, QueryUseCase
)
from app.application.dto.base_dto import PageDTO
from app.application.dto.profile_dto import (
    CreateVAProfileRequestDTO, UpdateVAProfileRequestDTO, SearchVAProfilesRequestDTO,
    VAProfileResponseDTO, OwnVAProfileResponseDTO,
    CreateCompanyRequestDTO, UpdateCompanyRequestDTO,
    CompanyResponseDTO, OwnCompanyResponseDTO
)
from app.domain.models.base import EntityNotFoundError, DuplicateEntityError
from app.domain.models.profile import VAProfile, Company
from app.domain.models.user import Role
from app.domain.repositories.user_repository import UserRepository
from app.domain.repositories.profile_repository import (
    VAProfileRepository, CompanyRepository, VASearchCriteria
)
from app.domain.services.profile_completion import ProfileCompletionService


def _own_va_response(profile: VAProfile, completion: ProfileCompletionService) -> OwnVAProfileResponseDTO:
    return OwnVAProfileResponseDTO.from_domain(
        profile, completion_percentage=completion.va_completion(profile)
    )


def _own_company_response(company: Company, completion: ProfileCompletionService) -> OwnCompanyResponseDTO:
    return OwnCompanyResponseDTO.from_domain(
        company, completion_percentage=completion.company_completion(company)
    )


# VA profiles

class CreateVAProfileUseCase(AuthorizedUseCase, CommandUseCase[CreateVAProfileRequestDTO, OwnVAProfileResponseDTO]):
    """Create the caller's VA profile and switch their account to the VA role."""

    def __init__(self, va_profile_repository: VAProfileRepository, user_repository: UserRepository):
        super().__init__()
        self.va_profile_repository = va_profile_repository
        self.user_repository = user_repository
        self.completion = ProfileCompletionService()

    async def _execute_command_logic(self, request: CreateVAProfileRequestDTO) -> OwnVAProfileResponseDTO:
        if self.va_profile_repository.find_by_user_id(self.current_user_id):
            raise DuplicateEntityError("VAProfile", "user_id", self.current_user_id,
                                       "VA profile already exists")

        profile = VAProfile(user_id=self.current_user_id, **request.model_dump(by_alias=False))
        profile = self.va_profile_repository.save(profile)

        user = self.user_repository.find_by_id(self.current_user_id)
        if not user:
            raise EntityNotFoundError("User")
        user.complete_profile(Role.VA)
        self.user_repository.save(user)

        return _own_va_response(profile, self.completion)


class GetOwnVAProfileUseCase(AuthorizedUseCase, QueryUseCase[None, OwnVAProfileResponseDTO]):

    def __init__(self, va_profile_repository: VAProfileRepository):
        super().__init__()
        self.va_profile_repository = va_profile_repository
        self.completion = ProfileCompletionService()

    async def _execute_query_logic(self, request: None) -> OwnVAProfileResponseDTO:
        profile = self.va_profile_repository.find_by_user_id(self.current_user_id)
        if not profile:
            raise EntityNotFoundError("VA profile")
        return _own_va_response(profile, self.completion)


class UpdateVAProfileUseCase(AuthorizedUseCase, CommandUseCase[UpdateVAProfileRequestDTO, OwnVAProfileResponseDTO]):

    def __init__(self, va_profile_repository: VAProfileRepository):
        super().__init__()
        self.va_profile_repository = va_profile_repository
        self.completion = ProfileCompletionService()

    async def _execute_command_logic(self, request: UpdateVAProfileRequestDTO) -> OwnVAProfileResponseDTO:
        profile = self.va_profile_repository.find_by_user_id(self.current_user_id)
        if not profile:
            raise EntityNotFoundError("VA profile")
        profile.update(**request.changes())
        return _own_va_response(self.va_profile_repository.save(profile), self.completion)


class ViewVAProfileUseCase(CommandUseCase[int, VAProfileResponseDTO]):
    """Public profile view; every view is counted."""

    def __init__(self, va_profile_repository: VAProfileRepository):
        super().__init__()
        self.va_profile_repository = va_profile_repository

    async def _execute_command_logic(self, profile_id: int) -> VAProfileResponseDTO:
        profile = self.va_profile_repository.find_by_id(profile_id)
        if not profile:
            raise EntityNotFoundError("VA profile")
        profile.record_view()
        return VAProfileResponseDTO.from_domain(self.va_profile_repository.save(profile))


class SearchVAProfilesUseCase(QueryUseCase[SearchVAProfilesRequestDTO, PageDTO]):

    def __init__(self, va_profile_repository: VAProfileRepository):
        super().__init__()
        self.va_profile_repository = va_profile_repository

    async def _execute_query_logic(self, request: SearchVAProfilesRequestDTO) -> PageDTO:
        criteria = VASearchCriteria(
            query=request.query,
            country=request.country,
            min_rate=request.min_rate,
            max_rate=request.max_rate,
            skills=request.skills,
            availability=request.availability,
        )
        profiles, total = self.va_profile_repository.search(
            criteria, offset=request.offset, limit=request.limit
        )
        return PageDTO.create(
            [VAProfileResponseDTO.from_domain(profile) for profile in profiles],
            total, request.page, request.limit,
        )


# Company profiles

class CreateCompanyUseCase(AuthorizedUseCase, CommandUseCase[CreateCompanyRequestDTO, OwnCompanyResponseDTO]):
    """Create the caller's company profile and switch their account to the company role."""

    def __init__(self, company_repository: CompanyRepository, user_repository: UserRepository):
        super().__init__()
        self.company_repository = company_repository
        self.user_repository = user_repository
        self.completion = ProfileCompletionService()

    async def _execute_command_logic(self, request: CreateCompanyRequestDTO) -> OwnCompanyResponseDTO:
        if self.company_repository.find_by_user_id(self.current_user_id):
            raise DuplicateEntityError("Company", "user_id", self.current_user_id,
                                       "Company profile already exists")

        company = Company(user_id=self.current_user_id, **request.model_dump(by_alias=False))
        company = self.company_repository.save(company)

        user = self.user_repository.find_by_id(self.current_user_id)
        if not user:
            raise EntityNotFoundError("User")
        user.complete_profile(Role.COMPANY)
        self.user_repository.save(user)

        return _own_company_response(company, self.completion)


class GetOwnCompanyUseCase(AuthorizedUseCase, QueryUseCase[None, OwnCompanyResponseDTO]):

    def __init__(self, company_repository: CompanyRepository):
        super().__init__()
        self.company_repository = company_repository
        self.completion = ProfileCompletionService()

    async def _execute_query_logic(self, request: None) -> OwnCompanyResponseDTO:
        company = self.company_repository.find_by_user_id(self.current_user_id)
        if not company:
            raise EntityNotFoundError("Company profile")
        return _own_company_response(company, self.completion)


class UpdateCompanyUseCase(AuthorizedUseCase, CommandUseCase[UpdateCompanyRequestDTO, OwnCompanyResponseDTO]):

    def __init__(self, company_repository: CompanyRepository):
        super().__init__()
        self.company_repository = company_repository
        self.completion = ProfileCompletionService()

    async def _execute_command_logic(self, request: UpdateCompanyRequestDTO) -> OwnCompanyResponseDTO:
        company = self.company_repository.find_by_user_id(self.current_user_id)
        if not company:
            raise EntityNotFoundError("Company profile")
        company.update(**request.changes())
        return _own_company_response(self.company_repository.save(company), self.completion)


class ViewCompanyUseCase(QueryUseCase[int, CompanyResponseDTO]):

    def __init__(self, company_repository: CompanyRepository):
        super().__init__()
        self.company_repository = company_repository

    async def _execute_query_logic(self, company_id: int) -> CompanyResponseDTO:
        company = self.company_repository.find_by_id(company_id)
        if not company:
            raise EntityNotFoundError("Company profile")
        return CompanyResponseDTO.from_domain(company)
