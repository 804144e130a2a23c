"""
Match vote and match mappers.
"""

from app.domain.models.matching import MatchVote, Match
from app.infrastructure.db.models import MatchVoteModel, MatchModel
from .base_mapper import BaseMapper


class MatchVoteMapper(BaseMapper):

    def domain_to_model(self, votes: MatchVote) -> MatchVoteModel:
        return MatchVoteModel(
            id=votes.id,
            job_posting_id=votes.job_posting_id,
            va_profile_id=votes.va_profile_id,
            vote_by_company=votes.vote_by_company,
            vote_by_va=votes.vote_by_va,
            created_at=votes.created_at,
            updated_at=votes.updated_at,
        )

    def model_to_domain(self, model: MatchVoteModel) -> MatchVote:
        return MatchVote(
            id=model.id,
            job_posting_id=model.job_posting_id,
            va_profile_id=model.va_profile_id,
            vote_by_company=model.vote_by_company,
            vote_by_va=model.vote_by_va,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class MatchMapper(BaseMapper):

    def domain_to_model(self, match: Match) -> MatchModel:
        return MatchModel(
            id=match.id,
            job_posting_id=match.job_posting_id,
            va_profile_id=match.va_profile_id,
            company_id=match.company_id,
            contact_unlocked=match.contact_unlocked,
            unlocked_at=match.unlocked_at,
            created_at=match.created_at,
            updated_at=match.updated_at,
        )

    def model_to_domain(self, model: MatchModel) -> Match:
        return Match(
            id=model.id,
            job_posting_id=model.job_posting_id,
            va_profile_id=model.va_profile_id,
            company_id=model.company_id,
            contact_unlocked=bool(model.contact_unlocked),
            unlocked_at=model.unlocked_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
