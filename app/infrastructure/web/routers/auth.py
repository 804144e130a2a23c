"""
Authentication router.
Keeps the internal user record in step with the Firebase identity.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.application.dto.user_dto import (
    SyncUserRequestDTO,
    UpdateUserRequestDTO,
    UpdateRoleRequestDTO,
    ForgotPasswordRequestDTO,
)
from app.application.use_cases.auth_use_cases import (
    SyncUserUseCase,
    GetCurrentUserUseCase,
    UpdateUserUseCase,
    UpdateRoleUseCase,
    RequestPasswordResetUseCase,
    CreateCustomTokenUseCase,
)
from app.domain.services.gateways import IdentityProvider, VerifiedIdentity
from app.infrastructure.auth import CurrentUser, get_identity_provider, get_verified_identity
from app.infrastructure.rate_limiting import auth_rate_limit
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from app.infrastructure.web.dependencies import get_user_repository
from app.infrastructure.web.responses import message_response, success_response, unwrap_result


router = APIRouter()

UserRepository = Annotated[SQLAlchemyUserRepository, Depends(get_user_repository)]


@router.post("/sync")
async def sync_user(
    identity: Annotated[VerifiedIdentity, Depends(get_verified_identity)],
    repository: UserRepository,
    _: None = Depends(auth_rate_limit)
):
    """
    Create the internal user for the verified Firebase identity.
    New accounts start with the va role.
    """
    if not identity.email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Token has no email address", "code": "VALIDATION_ERROR"}
        )

    request = SyncUserRequestDTO(uid=identity.uid, email=identity.email)
    result = unwrap_result(await SyncUserUseCase(repository).execute(request))
    return success_response(result.user, result.message)


@router.get("/me")
async def get_me(user: CurrentUser, repository: UserRepository):
    use_case = GetCurrentUserUseCase(repository).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute()))


@router.put("/profile")
async def update_profile(request: UpdateUserRequestDTO, user: CurrentUser, repository: UserRepository):
    """
    Update the account email and/or role.

    - **email**: must not belong to another account
    - **role**: company or va
    """
    use_case = UpdateUserUseCase(repository).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(request)), "Profile updated successfully")


@router.put("/role")
async def update_role(request: UpdateRoleRequestDTO, user: CurrentUser, repository: UserRepository):
    use_case = UpdateRoleUseCase(repository).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(request)), "Role updated successfully")


@router.post("/forgot-password")
async def forgot_password(
    request: ForgotPasswordRequestDTO,
    repository: UserRepository,
    identity_provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
    _: None = Depends(auth_rate_limit)
):
    """
    Send a password reset link. The answer is the same whether or not the account exists.
    """
    use_case = RequestPasswordResetUseCase(repository, identity_provider)
    return message_response(unwrap_result(await use_case.execute(request)))


@router.post("/custom-token")
async def create_custom_token(
    user: CurrentUser,
    repository: UserRepository,
    identity_provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
    _: None = Depends(auth_rate_limit)
):
    use_case = CreateCustomTokenUseCase(repository, identity_provider).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute()))
