"""Matching rules shared by the vote, list and discovery use cases.
"""

from dataclasses import dataclass
from typing import Optional

from app.domain.models.base import PermissionDeniedError
from app.domain.models.matching import MatchVote, VoteSide
from app.domain.models.user import AuthenticatedUser, Role


DISCOVERY_LIMIT = 20


@dataclass(frozen=True)
class MatchScope:
    """Which matches a user may see. No filter at all means every match."""

    company_id: Optional[int] = None
    va_profile_id: Optional[int] = None
    everything: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.everything and self.company_id is None and self.va_profile_id is None


class MatchingService:
    """
    Domain service for vote bookkeeping and match visibility.
    """

    def apply_vote(self, votes: MatchVote, side: VoteSide, vote: bool) -> bool:
        """
        Record one side's vote. Returns True when the pair now has a yes
        from both sides and a match should exist.
        """
        votes.record(side, vote)
        return vote and votes.vote_of(side.opposite) is True

    def match_scope_for(
        self,
        user: AuthenticatedUser,
        company_id: Optional[int] = None,
        va_profile_id: Optional[int] = None,
    ) -> MatchScope:
        """
        Matches visible to a user: a company sees its own postings' matches,
        a VA sees matches on its profile, an admin sees all.
        """
        if user.role == Role.ADMIN:
            return MatchScope(everything=True)
        if user.role == Role.COMPANY:
            return MatchScope(company_id=company_id)
        if user.role == Role.VA:
            return MatchScope(va_profile_id=va_profile_id)
        raise PermissionDeniedError()
