"""
Unit tests for match votes and matches.
"""

import pytest
from app.domain.events.marketplace_events import MatchCreated
from app.domain.models.base import ValidationError, PermissionDeniedError
from app.domain.models.matching import MatchVote, Match, VoteSide
from app.domain.models.user import Role


class TestVoteSide:

    def test_for_role(self):
        assert VoteSide.for_role(Role.COMPANY) == VoteSide.COMPANY
        assert VoteSide.for_role(Role.VA) == VoteSide.VA

    def test_admin_cannot_vote(self):
        with pytest.raises(PermissionDeniedError):
            VoteSide.for_role(Role.ADMIN)

    def test_opposite(self):
        assert VoteSide.COMPANY.opposite == VoteSide.VA
        assert VoteSide.VA.opposite == VoteSide.COMPANY


class TestMatchVote:

    def test_record_each_side(self):
        votes = MatchVote(job_posting_id=1, va_profile_id=2)
        votes.record(VoteSide.COMPANY, True)
        assert votes.vote_by_company is True
        assert votes.vote_by_va is None
        assert not votes.is_mutual

        votes.record(VoteSide.VA, True)
        assert votes.is_mutual

    def test_no_vote_is_not_mutual(self):
        votes = MatchVote(job_posting_id=1, va_profile_id=2, vote_by_company=True, vote_by_va=False)
        assert not votes.is_mutual

    def test_requires_pair(self):
        with pytest.raises(ValidationError):
            MatchVote(job_posting_id=None, va_profile_id=2)


class TestMatch:

    def test_from_votes(self):
        votes = MatchVote(job_posting_id=1, va_profile_id=2, vote_by_company=True, vote_by_va=True)
        match = Match.from_votes(votes, company_id=7)
        assert match.company_id == 7
        assert match.contact_unlocked is False

    def test_from_votes_requires_mutual_yes(self):
        votes = MatchVote(job_posting_id=1, va_profile_id=2, vote_by_company=True)
        with pytest.raises(ValidationError):
            Match.from_votes(votes, company_id=7)

    def test_announce_raises_event(self):
        match = Match(id=10, job_posting_id=1, va_profile_id=2, company_id=7)
        match.announce("company-user", "va-user", "Executive Assistant")
        events = match.pull_events()
        assert len(events) == 1
        assert isinstance(events[0], MatchCreated)
        assert events[0].match_id == 10
        assert match.pull_events() == []

    def test_unlock_is_idempotent(self):
        match = Match(id=10, job_posting_id=1, va_profile_id=2, company_id=7)
        match.unlock_contact()
        first_unlock = match.unlocked_at
        match.unlock_contact()
        assert match.contact_unlocked is True
        assert match.unlocked_at == first_unlock
