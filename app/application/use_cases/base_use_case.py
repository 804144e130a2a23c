"""
Use case building blocks.

A use case validates its request, runs against the repositories and
reports back through ``UseCaseResult`` instead of raising, so the web
layer maps every outcome to a response in one place.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, TypeVar, Generic, List
from dataclasses import dataclass
from datetime import datetime, timezone

from app.domain.events.base import DomainEvent, EventDispatcher
from app.domain.models.base import (
    AggregateRoot,
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    PermissionDeniedError,
)
from app.domain.models.user import AuthenticatedUser, Role


logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')

# Codes for the two generic domain errors; every other DomainException carries its own.
_GENERIC_ERROR_CODES = (
    (ValidationError, "VALIDATION_ERROR"),
    (BusinessRuleViolation, "BUSINESS_RULE_VIOLATION"),
)


@dataclass
class UseCaseResult(Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success_result(cls, data: T, metadata: Optional[Dict[str, Any]] = None) -> "UseCaseResult[T]":
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def error_result(cls, error: str, error_code: Optional[str] = None,
                     metadata: Optional[Dict[str, Any]] = None) -> "UseCaseResult[T]":
        return cls(success=False, error=error, error_code=error_code, metadata=metadata)

    @classmethod
    def from_exception(cls, exc: Exception) -> "UseCaseResult[T]":
        """Translate an exception into a failed result with a stable error code."""
        if not isinstance(exc, DomainException):
            return cls.error_result(str(exc), "UNKNOWN_ERROR")
        for exc_type, code in _GENERIC_ERROR_CODES:
            if isinstance(exc, exc_type):
                return cls.error_result(exc.message, code)
        return cls.error_result(exc.message, exc.code)


class BaseUseCase(ABC, Generic[T, R]):
    """Runs validation then business logic, and never lets an exception escape."""

    async def execute(self, request: T = None) -> UseCaseResult[R]:
        started = time.perf_counter()
        try:
            await self._validate_request(request)
            data = await self._execute_business_logic(request)
        except Exception as exc:
            self._log_failure(exc)
            result = UseCaseResult.from_exception(exc)
            result.metadata = self._timing(started, "failed_at")
            result.metadata["exception_type"] = type(exc).__name__
            return result

        return UseCaseResult.success_result(data, metadata=self._timing(started, "executed_at"))

    def _log_failure(self, exc: Exception) -> None:
        name = type(self).__name__
        if isinstance(exc, DomainException):
            logger.info(f"{name} rejected: {exc.code}: {exc.message}")
        else:
            logger.exception(f"{name} failed unexpectedly")

    @staticmethod
    def _timing(started: float, stamp: str) -> Dict[str, Any]:
        return {
            "execution_time_seconds": time.perf_counter() - started,
            stamp: datetime.now(timezone.utc).isoformat(),
        }

    async def _validate_request(self, request: T) -> None:
        """Request DTOs that know how to check themselves get checked here."""
        validate = getattr(request, 'validate_request', None)
        if callable(validate):
            validate()

    @abstractmethod
    async def _execute_business_logic(self, request: T) -> R:
        ...


class QueryUseCase(BaseUseCase[T, R]):
    """Read-only use case."""

    async def _execute_business_logic(self, request: T) -> R:
        return await self._execute_query_logic(request)

    @abstractmethod
    async def _execute_query_logic(self, request: T) -> R:
        ...


class CommandUseCase(BaseUseCase[T, R]):
    """
    Write use case. Events raised by the aggregates it touched are
    collected during the command and dispatched once it succeeds.
    """

    def __init__(self, event_dispatcher: Optional[EventDispatcher] = None):
        super().__init__()
        self.events: List[DomainEvent] = []
        self.event_dispatcher = event_dispatcher

    async def _execute_business_logic(self, request: T) -> R:
        outcome = await self._execute_command_logic(request)
        await self._publish_events()
        return outcome

    @abstractmethod
    async def _execute_command_logic(self, request: T) -> R:
        ...

    def _collect_events(self, *aggregates: AggregateRoot) -> None:
        for aggregate in aggregates:
            self.events.extend(aggregate.pull_events())

    async def _publish_events(self) -> None:
        pending, self.events = self.events, []
        if not pending:
            return
        if self.event_dispatcher is None:
            logger.debug(f"No dispatcher configured, dropping {len(pending)} event(s)")
            return
        await self.event_dispatcher.dispatch_all(pending)


class AuthorizedUseCase(BaseUseCase[T, R]):
    """Mixin for use cases that act on behalf of a signed-in user."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.current_user: Optional[AuthenticatedUser] = None

    def set_current_user(self, user: AuthenticatedUser) -> "AuthorizedUseCase":
        self.current_user = user
        return self

    @property
    def current_user_id(self) -> Optional[str]:
        return self.current_user.uid if self.current_user else None

    async def _validate_request(self, request: T) -> None:
        await super()._validate_request(request)
        if not self.current_user:
            raise PermissionDeniedError("User authentication required")
        await self._check_authorization(request)

    async def _check_authorization(self, request: T) -> None:
        """Role or ownership checks that can run before touching data."""

    def _require_role(self, *roles: Role, message: Optional[str] = None) -> None:
        if self.current_user.role in roles:
            return
        names = " or ".join(role.value for role in roles)
        raise PermissionDeniedError(message or f"Only {names} users can perform this action")

    def _require_owner(self, resource_owner_id: Optional[str], message: str = "Access denied") -> None:
        if self.current_user_id != resource_owner_id:
            raise PermissionDeniedError(message)
