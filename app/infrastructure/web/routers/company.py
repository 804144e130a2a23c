"""
Company profile router.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.application.dto.profile_dto import CreateCompanyRequestDTO, UpdateCompanyRequestDTO
from app.application.use_cases.profile_use_cases import (
    CreateCompanyUseCase,
    GetOwnCompanyUseCase,
    UpdateCompanyUseCase,
    ViewCompanyUseCase,
)
from app.infrastructure.auth import CurrentUser
from app.infrastructure.rate_limiting import create_rate_limit
from app.infrastructure.repositories import SQLAlchemyCompanyRepository, SQLAlchemyUserRepository
from app.infrastructure.web.dependencies import get_company_repository, get_user_repository
from app.infrastructure.web.responses import success_response, unwrap_result


router = APIRouter()

CompanyRepository = Annotated[SQLAlchemyCompanyRepository, Depends(get_company_repository)]


@router.get("/profile")
async def get_own_profile(user: CurrentUser, repository: CompanyRepository):
    use_case = GetOwnCompanyUseCase(repository).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute()))


@router.post("/profile", status_code=status.HTTP_201_CREATED)
async def create_profile(
    request: CreateCompanyRequestDTO,
    user: CurrentUser,
    repository: CompanyRepository,
    user_repository: Annotated[SQLAlchemyUserRepository, Depends(get_user_repository)],
    _: None = Depends(create_rate_limit)
):
    """
    Create the caller's company profile and switch the account to the company role.
    """
    use_case = CreateCompanyUseCase(repository, user_repository).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(request)), "Company profile created successfully")


@router.put("/profile")
async def update_profile(request: UpdateCompanyRequestDTO, user: CurrentUser, repository: CompanyRepository):
    use_case = UpdateCompanyUseCase(repository).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(request)), "Company profile updated successfully")


@router.get("/profile/{company_id}")
async def view_profile(company_id: int, repository: CompanyRepository):
    return success_response(unwrap_result(await ViewCompanyUseCase(repository).execute(company_id)))
