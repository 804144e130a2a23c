"""
Match vote and match repository implementations using SQLAlchemy.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.models.base import DuplicateEntityError
from app.domain.models.matching import MatchVote, Match
from app.domain.repositories.matching_repository import MatchVoteRepository, MatchRepository
from app.domain.services.matching_service import MatchScope
from app.infrastructure.db.models import MatchVoteModel, MatchModel
from app.infrastructure.mappers.matching_mapper import MatchVoteMapper, MatchMapper
from .base_repository import SQLAlchemyRepository


logger = logging.getLogger(__name__)


class SQLAlchemyMatchVoteRepository(SQLAlchemyRepository, MatchVoteRepository):
    """Upserts the single vote row of a job posting / VA profile pair."""

    model = MatchVoteModel
    entity_name = "Match vote"

    def __init__(self, session: Session):
        super().__init__(session, MatchVoteMapper())

    def find_by_pair(self, job_posting_id: int, va_profile_id: int) -> Optional[MatchVote]:
        return self._first(
            self.session.query(MatchVoteModel).filter_by(
                job_posting_id=job_posting_id, va_profile_id=va_profile_id
            )
        )

    def save(self, votes: MatchVote) -> MatchVote:
        if votes.is_new:
            existing = self.session.query(MatchVoteModel).filter_by(
                job_posting_id=votes.job_posting_id, va_profile_id=votes.va_profile_id
            ).first()
            if existing is not None:
                # Another request created the row first; write our side onto it
                votes.id = existing.id
                votes.vote_by_company = (
                    votes.vote_by_company if votes.vote_by_company is not None
                    else existing.vote_by_company
                )
                votes.vote_by_va = (
                    votes.vote_by_va if votes.vote_by_va is not None else existing.vote_by_va
                )
        return super().save(votes)


class SQLAlchemyMatchRepository(SQLAlchemyRepository, MatchRepository):
    """SQLAlchemy implementation of match repository."""

    model = MatchModel
    entity_name = "Match"

    def __init__(self, session: Session):
        super().__init__(session, MatchMapper())

    def find_by_pair(self, job_posting_id: int, va_profile_id: int) -> Optional[Match]:
        return self._first(
            self.session.query(MatchModel).filter_by(
                job_posting_id=job_posting_id, va_profile_id=va_profile_id
            )
        )

    def save(self, match: Match) -> Match:
        if not match.is_new:
            return super().save(match)

        model = self.mapper.domain_to_model(match)
        try:
            # Savepoint so a lost race leaves the rest of the transaction usable
            with self.session.begin_nested():
                self.session.add(model)
        except IntegrityError:
            logger.info(
                f"Match for job {match.job_posting_id} / VA {match.va_profile_id} already exists"
            )
            raise DuplicateEntityError(
                "Match", "job_posting_id/va_profile_id",
                f"{match.job_posting_id}/{match.va_profile_id}",
            )
        match.id = model.id
        return match

    def find_by_scope(self, scope: MatchScope) -> List[Match]:
        if scope.is_empty:
            return []
        query = self.session.query(MatchModel)
        if not scope.everything:
            if scope.company_id is not None:
                query = query.filter(MatchModel.company_id == scope.company_id)
            if scope.va_profile_id is not None:
                query = query.filter(MatchModel.va_profile_id == scope.va_profile_id)
        return self._all(query.order_by(MatchModel.id.desc()))
