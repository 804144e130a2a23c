"""
Job posting and proposal repository implementations using SQLAlchemy.
"""

from typing import List, Optional, Tuple

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.models.base import DuplicateEntityError
from app.domain.models.job import JobPosting, JobPostingStatus, Proposal
from app.domain.repositories.job_repository import (
    JobPostingRepository,
    ProposalRepository,
    JobSearchCriteria,
)
from app.infrastructure.db.models import JobPostingModel, ProposalModel, MatchVoteModel
from app.infrastructure.mappers.job_mapper import JobPostingMapper, ProposalMapper
from .base_repository import SQLAlchemyRepository
from .profile_repository import json_list_contains


class SQLAlchemyJobPostingRepository(SQLAlchemyRepository, JobPostingRepository):
    """SQLAlchemy implementation of job posting repository."""

    model = JobPostingModel
    entity_name = "Job posting"

    def __init__(self, session: Session):
        super().__init__(session, JobPostingMapper())

    def find_open(self, criteria: JobSearchCriteria,
                  offset: int = 0, limit: int = 20) -> Tuple[List[JobPosting], int]:
        query = self.session.query(JobPostingModel).filter(
            JobPostingModel.status == JobPostingStatus.OPEN
        )

        if criteria.search:
            pattern = f"%{criteria.search}%"
            query = query.filter(or_(
                JobPostingModel.title.ilike(pattern),
                JobPostingModel.description.ilike(pattern),
            ))
        if criteria.category:
            query = query.filter(JobPostingModel.category == criteria.category)
        if criteria.skills:
            query = query.filter(or_(
                *(json_list_contains(JobPostingModel.skills_required, skill)
                  for skill in criteria.skills)
            ))
        if criteria.experience_level:
            query = query.filter(JobPostingModel.experience_level == criteria.experience_level)
        if criteria.employment_type:
            query = query.filter(JobPostingModel.employment_type == criteria.employment_type)
        if criteria.job_type:
            query = query.filter(JobPostingModel.job_type == criteria.job_type)
        if criteria.remote is not None:
            query = query.filter(JobPostingModel.remote.is_(criteria.remote))

        query = query.order_by(JobPostingModel.featured.desc(), JobPostingModel.id.desc())
        return self._page(query, offset, limit)

    def find_by_company(self, company_id: int) -> List[JobPosting]:
        return self._all(
            self.session.query(JobPostingModel)
            .filter_by(company_id=company_id)
            .order_by(JobPostingModel.id.desc())
        )

    def find_discoverable_for_va(self, va_profile_id: int, limit: int) -> List[JobPosting]:
        already_voted = select(MatchVoteModel.job_posting_id).where(
            MatchVoteModel.va_profile_id == va_profile_id,
            MatchVoteModel.vote_by_va.is_not(None),
        )
        query = (
            self.session.query(JobPostingModel)
            .filter(
                JobPostingModel.status == JobPostingStatus.OPEN,
                JobPostingModel.id.not_in(already_voted),
            )
            .order_by(JobPostingModel.id.desc())
            .limit(limit)
        )
        return self._all(query)


class SQLAlchemyProposalRepository(SQLAlchemyRepository, ProposalRepository):
    """SQLAlchemy implementation of proposal repository."""

    model = ProposalModel
    entity_name = "Proposal"

    def __init__(self, session: Session):
        super().__init__(session, ProposalMapper())

    def save(self, proposal: Proposal) -> Proposal:
        try:
            return super().save(proposal)
        except IntegrityError:
            self.session.rollback()
            raise DuplicateEntityError(
                "Proposal", "job_posting_id", proposal.job_posting_id,
                "You have already submitted a proposal for this job",
            )

    def find_by_job_and_va(self, job_posting_id: int, va_profile_id: int) -> Optional[Proposal]:
        return self._first(
            self.session.query(ProposalModel).filter_by(
                job_posting_id=job_posting_id, va_profile_id=va_profile_id
            )
        )

    def find_by_job(self, job_posting_id: int) -> List[Proposal]:
        return self._all(
            self.session.query(ProposalModel)
            .filter_by(job_posting_id=job_posting_id)
            .order_by(ProposalModel.id.desc())
        )

    def find_by_va(self, va_profile_id: int) -> List[Proposal]:
        return self._all(
            self.session.query(ProposalModel)
            .filter_by(va_profile_id=va_profile_id)
            .order_by(ProposalModel.id.desc())
        )
