"""
VA profile router.
Own profile management, public profile views and search.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from app.application.dto.profile_dto import (
    CreateVAProfileRequestDTO,
    UpdateVAProfileRequestDTO,
    SearchVAProfilesRequestDTO,
)
from app.application.use_cases.profile_use_cases import (
    CreateVAProfileUseCase,
    GetOwnVAProfileUseCase,
    UpdateVAProfileUseCase,
    ViewVAProfileUseCase,
    SearchVAProfilesUseCase,
)
from app.infrastructure.auth import CurrentUser
from app.infrastructure.pagination import PaginationParams, pagination_params, split_csv
from app.infrastructure.rate_limiting import create_rate_limit, search_rate_limit
from app.infrastructure.repositories import SQLAlchemyUserRepository, SQLAlchemyVAProfileRepository
from app.infrastructure.web.dependencies import get_user_repository, get_va_profile_repository
from app.infrastructure.web.responses import page_response, success_response, unwrap_result


router = APIRouter()

VAProfileRepository = Annotated[SQLAlchemyVAProfileRepository, Depends(get_va_profile_repository)]


@router.get("/profile")
async def get_own_profile(user: CurrentUser, repository: VAProfileRepository):
    """Get the caller's VA profile with its completion percentage."""
    use_case = GetOwnVAProfileUseCase(repository).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute()))


@router.post("/profile", status_code=status.HTTP_201_CREATED)
async def create_profile(
    request: CreateVAProfileRequestDTO,
    user: CurrentUser,
    repository: VAProfileRepository,
    user_repository: Annotated[SQLAlchemyUserRepository, Depends(get_user_repository)],
    _: None = Depends(create_rate_limit)
):
    """
    Create the caller's VA profile.

    - **name**, **country**, **hourlyRate** (1-200), **skills** (at least one) are required
    - the account is switched to the va role and marked profile complete
    """
    use_case = CreateVAProfileUseCase(repository, user_repository).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(request)), "VA profile created successfully")


@router.put("/profile")
async def update_profile(request: UpdateVAProfileRequestDTO, user: CurrentUser, repository: VAProfileRepository):
    use_case = UpdateVAProfileUseCase(repository).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(request)), "VA profile updated successfully")


@router.get("/search")
async def search_profiles(
    repository: VAProfileRepository,
    pagination: Annotated[PaginationParams, Depends(pagination_params)],
    query: Optional[str] = Query(None, max_length=255, description="Search name and bio"),
    country: Optional[str] = Query(None),
    min_rate: Optional[float] = Query(None, alias="minRate", ge=0),
    max_rate: Optional[float] = Query(None, alias="maxRate", ge=0),
    skills: Optional[str] = Query(None, description="Comma-separated skills"),
    availability: Optional[bool] = Query(None),
    _: None = Depends(search_rate_limit)
):
    """
    Search VA profiles.

    - **skills**: comma-separated; a profile matches when it has any of them
    """
    request = SearchVAProfilesRequestDTO(
        page=pagination.page,
        limit=pagination.limit,
        query=query,
        country=country,
        min_rate=min_rate,
        max_rate=max_rate,
        skills=split_csv(skills),
        availability=availability,
    )
    return page_response(unwrap_result(await SearchVAProfilesUseCase(repository).execute(request)))


@router.get("/profile/{profile_id}")
async def view_profile(profile_id: int, repository: VAProfileRepository):
    """Public view of a VA profile. Counts as a profile view."""
    result = await ViewVAProfileUseCase(repository).execute(profile_id)
    return success_response(unwrap_result(result))
