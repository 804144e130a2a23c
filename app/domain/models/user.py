"""
User domain entity.
An internal user mirrors one Firebase identity.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import uuid

from .base import AggregateRoot, ValidationError, BusinessRuleViolation


class Role(str, Enum):
    """Closed set of marketplace roles."""
    COMPANY = "company"
    VA = "va"
    ADMIN = "admin"

    @classmethod
    def self_assignable(cls) -> tuple["Role", ...]:
        """Roles a user may pick for themselves."""
        return (cls.COMPANY, cls.VA)


@dataclass(kw_only=True, eq=False)
class User(AggregateRoot):
    """Platform user."""

    id: Optional[str] = None
    email: str
    firebase_uid: Optional[str] = None
    role: Role = Role.VA
    profile_complete: bool = False

    def __post_init__(self):
        super().__post_init__()
        if isinstance(self.role, str):
            self.role = Role(self.role)
        self.validate()

    @classmethod
    def register(cls, email: str, firebase_uid: Optional[str] = None) -> "User":
        """Create a new user with the default role."""
        return cls(
            id=str(uuid.uuid4()),
            email=email.strip().lower(),
            firebase_uid=firebase_uid,
        )

    def validate(self) -> None:
        if not self.email or "@" not in self.email:
            raise ValidationError("A valid email is required", "email")
        if len(self.email) > 255:
            raise ValidationError("Email too long (max 255 characters)", "email")

    def change_email(self, email: str) -> None:
        self.email = email.strip().lower()
        self.validate()
        self.mark_as_updated()

    def change_role(self, role: Role | str) -> None:
        """Switch between company and VA; admin is never self-assigned."""
        try:
            role = Role(role)
        except ValueError:
            raise ValidationError(f"Invalid role: {role}", "role")
        if role not in Role.self_assignable():
            raise BusinessRuleViolation("Role must be either 'company' or 'va'")
        self.role = role
        self.mark_as_updated()

    def complete_profile(self, role: Role) -> None:
        """Called once a VA or company profile exists."""
        self.role = role
        self.profile_complete = True
        self.mark_as_updated()


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity attached to a verified request."""

    uid: str
    email: str
    role: Role
    profile_complete: bool = False

    @classmethod
    def from_user(cls, user: User) -> "AuthenticatedUser":
        return cls(
            uid=user.id,
            email=user.email,
            role=user.role,
            profile_complete=user.profile_complete,
        )

    @property
    def is_company(self) -> bool:
        return self.role == Role.COMPANY

    @property
    def is_va(self) -> bool:
        return self.role == Role.VA

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
