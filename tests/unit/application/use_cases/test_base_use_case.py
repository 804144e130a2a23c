"""
Unit tests for the base use case patterns.
"""

import pytest
from unittest.mock import AsyncMock, Mock
from app.application.use_cases.base_use_case import (
    UseCaseResult, AuthorizedUseCase, CommandUseCase, QueryUseCase
)
from app.domain.events.marketplace_events import MatchCreated
from app.domain.models.base import (
    BusinessRuleViolation, EntityNotFoundError, PaymentRequiredError, ValidationError
)
from app.domain.models.matching import Match
from app.domain.models.user import AuthenticatedUser, Role


class TestUseCaseResult:
    """Test cases for UseCaseResult."""

    def test_success_result(self):
        result = UseCaseResult.success_result({"id": 1, "name": "test"})

        assert result.success is True
        assert result.data == {"id": 1, "name": "test"}
        assert result.error is None
        assert result.error_code is None

    def test_error_result(self):
        result = UseCaseResult.error_result("Something went wrong", "TEST_ERROR")

        assert result.success is False
        assert result.data is None
        assert result.error == "Something went wrong"
        assert result.error_code == "TEST_ERROR"

    @pytest.mark.parametrize("exc,code", [
        (ValidationError("bad"), "VALIDATION_ERROR"),
        (BusinessRuleViolation("no"), "BUSINESS_RULE_VIOLATION"),
        (EntityNotFoundError("Match"), "ENTITY_NOT_FOUND"),
        (PaymentRequiredError(), "PAYMENT_REQUIRED"),
        (RuntimeError("boom"), "UNKNOWN_ERROR"),
    ])
    def test_from_exception(self, exc, code):
        assert UseCaseResult.from_exception(exc).error_code == code


class EchoQuery(AuthorizedUseCase, QueryUseCase[str, str]):

    async def _check_authorization(self, request: str) -> None:
        self._require_role(Role.COMPANY)

    async def _execute_query_logic(self, request: str) -> str:
        return f"{self.current_user_id}:{request}"


class AnnounceCommand(CommandUseCase[None, int]):

    async def _execute_command_logic(self, request: None) -> int:
        match = Match(id=3, job_posting_id=1, va_profile_id=2, company_id=4)
        match.announce("company-user", "va-user")
        self._collect_events(match)
        return match.id


class TestAuthorizedUseCase:

    @pytest.mark.asyncio
    async def test_requires_user(self):
        result = await EchoQuery().execute("hello")
        assert result.success is False
        assert result.error_code == "PERMISSION_DENIED"

    @pytest.mark.asyncio
    async def test_role_check(self):
        user = AuthenticatedUser(uid="u1", email="a@b.com", role=Role.VA)
        result = await EchoQuery().set_current_user(user).execute("hello")
        assert result.error_code == "PERMISSION_DENIED"
        assert result.error == "Only company users can perform this action"

    @pytest.mark.asyncio
    async def test_success_has_metadata(self):
        user = AuthenticatedUser(uid="u1", email="a@b.com", role=Role.COMPANY)
        result = await EchoQuery().set_current_user(user).execute("hello")
        assert result.success is True
        assert result.data == "u1:hello"
        assert "execution_time_seconds" in result.metadata


class TestCommandUseCase:

    @pytest.mark.asyncio
    async def test_events_published_after_command(self):
        dispatcher = Mock()
        dispatcher.dispatch_all = AsyncMock()

        result = await AnnounceCommand(event_dispatcher=dispatcher).execute()

        assert result.success is True
        events = dispatcher.dispatch_all.call_args[0][0]
        assert len(events) == 1
        assert isinstance(events[0], MatchCreated)

    @pytest.mark.asyncio
    async def test_events_dropped_without_dispatcher(self):
        use_case = AnnounceCommand()
        result = await use_case.execute()
        assert result.success is True
        assert use_case.events == []
