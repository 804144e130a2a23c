"""
Unit tests for authentication use cases.
"""

import pytest
from unittest.mock import Mock
from app.application.dto.user_dto import (
    SyncUserRequestDTO, UpdateUserRequestDTO, UpdateRoleRequestDTO, ForgotPasswordRequestDTO
)
from app.application.use_cases.auth_use_cases import (
    SyncUserUseCase, UpdateUserUseCase, UpdateRoleUseCase,
    RequestPasswordResetUseCase, CreateCustomTokenUseCase, PASSWORD_RESET_MESSAGE
)
from app.domain.models.user import User, Role, AuthenticatedUser


class TestSyncUserUseCase:

    def setup_method(self):
        self.repository = Mock()
        self.repository.save.side_effect = lambda user: user
        self.use_case = SyncUserUseCase(self.repository)

    @pytest.mark.asyncio
    async def test_creates_new_user(self):
        self.repository.find_by_email.return_value = None

        result = await self.use_case.execute(SyncUserRequestDTO(uid="fb-1", email="new@example.com"))

        assert result.success is True
        assert result.data.created is True
        assert result.data.message == "User created successfully"
        assert result.data.user.role == Role.VA
        saved = self.repository.save.call_args[0][0]
        assert saved.firebase_uid == "fb-1"

    @pytest.mark.asyncio
    async def test_existing_user_returned_unchanged(self):
        existing = User(id="u1", email="old@example.com", firebase_uid="fb-1", role=Role.COMPANY)
        self.repository.find_by_email.return_value = existing

        result = await self.use_case.execute(SyncUserRequestDTO(uid="fb-1", email="old@example.com"))

        assert result.data.created is False
        assert result.data.message == "User already exists"
        assert result.data.user.role == Role.COMPANY
        self.repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_existing_user_gets_uid_linked(self):
        existing = User(id="u1", email="old@example.com")
        self.repository.find_by_email.return_value = existing

        await self.use_case.execute(SyncUserRequestDTO(uid="fb-9", email="old@example.com"))

        assert existing.firebase_uid == "fb-9"
        self.repository.save.assert_called_once()


class TestUpdateUserUseCase:

    def setup_method(self):
        self.user = User(id="u1", email="me@example.com")
        self.repository = Mock()
        self.repository.find_by_id.return_value = self.user
        self.repository.save.side_effect = lambda user: user
        self.current = AuthenticatedUser(uid="u1", email="me@example.com", role=Role.VA)

    @pytest.mark.asyncio
    async def test_duplicate_email(self):
        self.repository.find_by_email.return_value = User(id="u2", email="taken@example.com")

        use_case = UpdateUserUseCase(self.repository).set_current_user(self.current)
        result = await use_case.execute(UpdateUserRequestDTO(email="taken@example.com"))

        assert result.error_code == "DUPLICATE_ENTITY"
        assert result.error == "Email already exists"

    @pytest.mark.asyncio
    async def test_update_email_and_role(self):
        self.repository.find_by_email.return_value = None

        use_case = UpdateUserUseCase(self.repository).set_current_user(self.current)
        result = await use_case.execute(UpdateUserRequestDTO(email="New@Example.com", role="company"))

        assert result.success is True
        assert result.data.email == "new@example.com"
        assert result.data.role == Role.COMPANY

    @pytest.mark.asyncio
    async def test_admin_role_rejected(self):
        use_case = UpdateRoleUseCase(self.repository).set_current_user(self.current)
        result = await use_case.execute(UpdateRoleRequestDTO(role="admin"))

        assert result.error_code == "BUSINESS_RULE_VIOLATION"
        self.repository.save.assert_not_called()


class TestRequestPasswordResetUseCase:

    def setup_method(self):
        self.repository = Mock()
        self.identity_provider = Mock()

    @pytest.mark.asyncio
    async def test_unknown_email_gets_same_answer(self):
        self.repository.find_by_email.return_value = None

        use_case = RequestPasswordResetUseCase(self.repository, self.identity_provider)
        result = await use_case.execute(ForgotPasswordRequestDTO(email="ghost@example.com"))

        assert result.data == PASSWORD_RESET_MESSAGE
        self.identity_provider.generate_password_reset_link.assert_not_called()

    @pytest.mark.asyncio
    async def test_provider_failure_is_not_revealed(self):
        self.repository.find_by_email.return_value = User(id="u1", email="me@example.com")
        self.identity_provider.generate_password_reset_link.side_effect = RuntimeError("down")

        use_case = RequestPasswordResetUseCase(self.repository, self.identity_provider)
        result = await use_case.execute(ForgotPasswordRequestDTO(email="me@example.com"))

        assert result.success is True
        assert result.data == PASSWORD_RESET_MESSAGE


class TestCreateCustomTokenUseCase:

    @pytest.mark.asyncio
    async def test_token_for_firebase_uid(self):
        repository = Mock()
        repository.find_by_id.return_value = User(id="u1", email="me@example.com", firebase_uid="fb-1")
        identity_provider = Mock()
        identity_provider.create_custom_token.return_value = "custom-token"
        current = AuthenticatedUser(uid="u1", email="me@example.com", role=Role.VA)

        use_case = CreateCustomTokenUseCase(repository, identity_provider).set_current_user(current)
        result = await use_case.execute()

        assert result.data.custom_token == "custom-token"
        identity_provider.create_custom_token.assert_called_once_with("fb-1")
