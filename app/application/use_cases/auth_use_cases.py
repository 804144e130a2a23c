"""
Authentication use cases for the application layer.
Keeps internal users in step with their Firebase identities.
"""

import logging

from app.application.use_cases.base_use_case import (
    AuthorizedUseCase, CommandUseCase, QueryUseCase
)
from app.application.dto.user_dto import (
    SyncUserRequestDTO, UpdateUserRequestDTO, UpdateRoleRequestDTO,
    ForgotPasswordRequestDTO, UserResponseDTO, SyncUserResponseDTO,
    CustomTokenResponseDTO
)
from app.domain.models.base import EntityNotFoundError, DuplicateEntityError
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.domain.services.gateways import IdentityProvider


logger = logging.getLogger(__name__)

PASSWORD_RESET_MESSAGE = "If an account exists with this email, a password reset link has been sent"


class SyncUserUseCase(CommandUseCase[SyncUserRequestDTO, SyncUserResponseDTO]):
    """Create the internal user for a verified identity, once."""

    def __init__(self, user_repository: UserRepository):
        super().__init__()
        self.user_repository = user_repository

    async def _execute_command_logic(self, request: SyncUserRequestDTO) -> SyncUserResponseDTO:
        existing = self.user_repository.find_by_email(request.email)
        if existing:
            if not existing.firebase_uid:
                existing.firebase_uid = request.uid
                existing = self.user_repository.save(existing)
            return SyncUserResponseDTO(
                user=UserResponseDTO.from_domain(existing),
                created=False,
                message="User already exists",
            )

        user = self.user_repository.save(User.register(str(request.email), request.uid))
        logger.info(f"Created user {user.id} for identity {request.uid}")
        return SyncUserResponseDTO(
            user=UserResponseDTO.from_domain(user),
            created=True,
            message="User created successfully",
        )


class GetCurrentUserUseCase(AuthorizedUseCase, QueryUseCase[None, UserResponseDTO]):
    """Use case for reading the caller's own account."""

    def __init__(self, user_repository: UserRepository):
        super().__init__()
        self.user_repository = user_repository

    async def _execute_query_logic(self, request: None) -> UserResponseDTO:
        user = self.user_repository.find_by_id(self.current_user_id)
        if not user:
            raise EntityNotFoundError("User")
        return UserResponseDTO.from_domain(user)


class UpdateUserUseCase(AuthorizedUseCase, CommandUseCase[UpdateUserRequestDTO, UserResponseDTO]):
    """Use case for updating the caller's email and role."""

    def __init__(self, user_repository: UserRepository):
        super().__init__()
        self.user_repository = user_repository

    async def _execute_command_logic(self, request: UpdateUserRequestDTO) -> UserResponseDTO:
        user = self.user_repository.find_by_id(self.current_user_id)
        if not user:
            raise EntityNotFoundError("User")

        if request.email is not None and str(request.email).lower() != user.email:
            other = self.user_repository.find_by_email(str(request.email))
            if other and other.id != user.id:
                raise DuplicateEntityError("User", "email", request.email, "Email already exists")
            user.change_email(str(request.email))

        if request.role is not None:
            user.change_role(request.role)

        return UserResponseDTO.from_domain(self.user_repository.save(user))


class UpdateRoleUseCase(AuthorizedUseCase, CommandUseCase[UpdateRoleRequestDTO, UserResponseDTO]):

    def __init__(self, user_repository: UserRepository):
        super().__init__()
        self.user_repository = user_repository

    async def _execute_command_logic(self, request: UpdateRoleRequestDTO) -> UserResponseDTO:
        user = self.user_repository.find_by_id(self.current_user_id)
        if not user:
            raise EntityNotFoundError("User")
        user.change_role(request.role)
        return UserResponseDTO.from_domain(self.user_repository.save(user))


class RequestPasswordResetUseCase(CommandUseCase[ForgotPasswordRequestDTO, str]):
    """
    Send a reset link when the account exists. The answer is the same
    either way so the endpoint cannot be used to probe for accounts.
    """

    def __init__(self, user_repository: UserRepository, identity_provider: IdentityProvider):
        super().__init__()
        self.user_repository = user_repository
        self.identity_provider = identity_provider

    async def _execute_command_logic(self, request: ForgotPasswordRequestDTO) -> str:
        user = self.user_repository.find_by_email(str(request.email))
        if user:
            try:
                self.identity_provider.generate_password_reset_link(user.email)
                logger.info(f"Password reset link generated for user {user.id}")
            except Exception:
                logger.exception("Password reset link generation failed")
        return PASSWORD_RESET_MESSAGE


class CreateCustomTokenUseCase(AuthorizedUseCase, CommandUseCase[None, CustomTokenResponseDTO]):

    def __init__(self, user_repository: UserRepository, identity_provider: IdentityProvider):
        super().__init__()
        self.user_repository = user_repository
        self.identity_provider = identity_provider

    async def _execute_command_logic(self, request: None) -> CustomTokenResponseDTO:
        user = self.user_repository.find_by_id(self.current_user_id)
        if not user:
            raise EntityNotFoundError("User")
        token = self.identity_provider.create_custom_token(user.firebase_uid or user.id)
        return CustomTokenResponseDTO(custom_token=token)
