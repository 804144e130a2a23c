"""
Mutual-interest matching between job postings and VA profiles.

A company votes on VAs for one of its postings and a VA votes on postings.
Both votes for the same (job posting, VA profile) pair live in a single
MatchVote row; when both are true a Match is created, once, and kept even
if a vote later flips.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from app.domain.events.marketplace_events import MatchCreated
from .base import AggregateRoot, BaseEntity, ValidationError, PermissionDeniedError, utcnow
from .user import Role


class VoteSide(str, Enum):
    COMPANY = "company"
    VA = "va"

    @classmethod
    def for_role(cls, role: Role) -> "VoteSide":
        """Voting side of a role; admins do not vote."""
        if role == Role.COMPANY:
            return cls.COMPANY
        if role == Role.VA:
            return cls.VA
        raise PermissionDeniedError("Only companies and VAs can vote")

    @property
    def opposite(self) -> "VoteSide":
        return VoteSide.VA if self == VoteSide.COMPANY else VoteSide.COMPANY


@dataclass(kw_only=True, eq=False)
class MatchVote(BaseEntity):
    """Both sides' votes on one job posting / VA profile pair."""

    job_posting_id: int
    va_profile_id: int
    vote_by_company: Optional[bool] = None
    vote_by_va: Optional[bool] = None

    def __post_init__(self):
        super().__post_init__()
        if not self.job_posting_id or not self.va_profile_id:
            raise ValidationError("Job posting and VA profile are required")

    def vote_of(self, side: VoteSide) -> Optional[bool]:
        return self.vote_by_company if side == VoteSide.COMPANY else self.vote_by_va

    def record(self, side: VoteSide, vote: bool) -> None:
        if side == VoteSide.COMPANY:
            self.vote_by_company = vote
        else:
            self.vote_by_va = vote
        self.mark_as_updated()

    @property
    def is_mutual(self) -> bool:
        return self.vote_by_company is True and self.vote_by_va is True


@dataclass(kw_only=True, eq=False)
class Match(AggregateRoot):
    """Permanent record that both sides said yes."""

    job_posting_id: int
    va_profile_id: int
    company_id: int
    contact_unlocked: bool = False
    unlocked_at: Optional[datetime] = None

    @classmethod
    def from_votes(cls, votes: MatchVote, company_id: int) -> "Match":
        if not votes.is_mutual:
            raise ValidationError("A match requires a yes vote from both sides")
        return cls(
            job_posting_id=votes.job_posting_id,
            va_profile_id=votes.va_profile_id,
            company_id=company_id,
        )

    def announce(self, company_user_id: str, va_user_id: str, job_title: str = "") -> None:
        """Raise MatchCreated once the match has an id."""
        self.add_event(MatchCreated(
            match_id=self.id,
            job_posting_id=self.job_posting_id,
            va_profile_id=self.va_profile_id,
            company_user_id=company_user_id,
            va_user_id=va_user_id,
            job_title=job_title,
        ))

    def unlock_contact(self) -> None:
        if self.contact_unlocked:
            return
        self.contact_unlocked = True
        self.unlocked_at = utcnow()
        self.mark_as_updated()
