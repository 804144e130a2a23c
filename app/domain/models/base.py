"""
Entity base classes and the domain error hierarchy.

Every domain error carries a stable ``code``; the web layer turns the
code into an HTTP status, so raising the right class is all a model
or use case has to do.
"""

from datetime import datetime, timezone
from typing import Optional, Any, Dict, List
from abc import ABC
from dataclasses import dataclass, field

from app.domain.events.base import DomainEvent


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(kw_only=True, eq=False)
class BaseEntity(ABC):
    """Identity plus timestamps. Two entities are equal when type and id match."""

    id: Optional[Any] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        self.created_at = self.created_at or utcnow()
        self.updated_at = self.updated_at or self.created_at

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(id(self)) if self.id is None else hash((type(self).__name__, self.id))

    @property
    def is_new(self) -> bool:
        """Not yet persisted."""
        return self.id is None

    def mark_as_updated(self) -> None:
        self.updated_at = utcnow()

    def apply_changes(self, changes: Dict[str, Any]) -> None:
        """Partial update: None means "not given", private names are ignored."""
        for name, value in changes.items():
            if value is None or name.startswith("_") or not hasattr(self, name):
                continue
            setattr(self, name, value)

    def validate(self) -> None:
        """Raise ValidationError when the entity is in an invalid state."""


@dataclass(kw_only=True, eq=False)
class AggregateRoot(BaseEntity):
    """Entity that records domain events until a use case pulls them."""

    _events: List[DomainEvent] = field(default_factory=list, init=False, repr=False)

    def add_event(self, event: DomainEvent) -> None:
        self._events.append(event)

    def pull_events(self) -> List[DomainEvent]:
        pending, self._events = self._events, []
        return pending


class DomainException(Exception):

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code or type(self).__name__


class ValidationError(DomainException):
    """Bad input; ``field`` names the offending attribute when known."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field


class BusinessRuleViolation(DomainException):
    """Valid input that the current state does not allow."""

    def __init__(self, message: str):
        super().__init__(message, "BUSINESS_RULE_VIOLATION")


class EntityNotFoundError(DomainException):

    def __init__(self, entity_type: str, entity_id: Any = None):
        suffix = "" if entity_id is None else f" with id {entity_id}"
        super().__init__(f"{entity_type}{suffix} not found", "ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateEntityError(DomainException):

    def __init__(self, entity_type: str, field: str, value: Any, message: Optional[str] = None):
        super().__init__(message or f"{entity_type} with {field}='{value}' already exists",
                         "DUPLICATE_ENTITY")
        self.entity_type = entity_type
        self.field = field
        self.value = value


class PermissionDeniedError(DomainException):

    def __init__(self, message: str = "Access denied"):
        super().__init__(message, "PERMISSION_DENIED")


class PaymentRequiredError(DomainException):
    """The action is gated behind a completed payment."""

    def __init__(self, message: str = "Payment required"):
        super().__init__(message, "PAYMENT_REQUIRED")


class ExternalServiceError(DomainException):
    """Firebase, Stripe or storage call failed."""

    def __init__(self, service: str, message: str):
        super().__init__(message, "EXTERNAL_SERVICE_ERROR")
        self.service = service


def check_length(value: Optional[str], field_name: str, label: str,
                 min_length: int, max_length: Optional[int] = None) -> None:
    """Length rule shared by entity validators; None means the field was not given."""
    if value is None:
        return
    if len(value.strip()) < min_length:
        raise ValidationError(f"{label} must be at least {min_length} characters", field_name)
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{label} too long (max {max_length} characters)", field_name)
