"""
Matching repository interfaces.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from app.domain.models.matching import MatchVote, Match
from app.domain.services.matching_service import MatchScope


class MatchVoteRepository(ABC):
    """
    One row per (job posting, VA profile) pair holding both sides' votes.
    """

    @abstractmethod
    def find_by_pair(self, job_posting_id: int, va_profile_id: int) -> Optional[MatchVote]:
        pass

    @abstractmethod
    def save(self, votes: MatchVote) -> MatchVote:
        """
        Insert or update the vote row for the pair.
        """
        pass


class MatchRepository(ABC):

    @abstractmethod
    def find_by_id(self, match_id: int) -> Optional[Match]:
        pass

    @abstractmethod
    def find_by_pair(self, job_posting_id: int, va_profile_id: int) -> Optional[Match]:
        pass

    @abstractmethod
    def save(self, match: Match) -> Match:
        """
        Persist a match. Raises DuplicateEntityError when the pair already
        has one.
        """
        pass

    @abstractmethod
    def find_by_scope(self, scope: MatchScope) -> List[Match]:
        """
        Matches visible within the scope, newest first.
        """
        pass
