"""
VA profile and company repository implementations using SQLAlchemy.
"""

from typing import List, Optional, Tuple

from sqlalchemy import String, cast, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.models.base import DuplicateEntityError
from app.domain.models.profile import VAProfile, Company
from app.domain.models.user import Role
from app.domain.repositories.profile_repository import (
    VAProfileRepository,
    CompanyRepository,
    VASearchCriteria,
)
from app.infrastructure.db.models import VAProfileModel, CompanyModel, UserModel, MatchVoteModel
from app.infrastructure.mappers.profile_mapper import VAProfileMapper, CompanyMapper
from .base_repository import SQLAlchemyRepository


def json_list_contains(column, value: str):
    """Match one element of a JSON string list, on both PostgreSQL and SQLite."""
    return cast(column, String).ilike(f'%"{value}"%')


class SQLAlchemyVAProfileRepository(SQLAlchemyRepository, VAProfileRepository):
    """SQLAlchemy implementation of VA profile repository."""

    model = VAProfileModel
    entity_name = "VA profile"

    def __init__(self, session: Session):
        super().__init__(session, VAProfileMapper())

    def save(self, profile: VAProfile) -> VAProfile:
        try:
            return super().save(profile)
        except IntegrityError:
            self.session.rollback()
            raise DuplicateEntityError(
                "VA profile", "user_id", profile.user_id, "VA profile already exists"
            )

    def find_by_user_id(self, user_id: str) -> Optional[VAProfile]:
        return self._first(self.session.query(VAProfileModel).filter_by(user_id=user_id))

    def search(self, criteria: VASearchCriteria,
               offset: int = 0, limit: int = 20) -> Tuple[List[VAProfile], int]:
        query = self.session.query(VAProfileModel)

        if criteria.query:
            pattern = f"%{criteria.query}%"
            query = query.filter(or_(
                VAProfileModel.name.ilike(pattern),
                VAProfileModel.bio.ilike(pattern),
                cast(VAProfileModel.skills, String).ilike(pattern),
            ))
        if criteria.country:
            query = query.filter(VAProfileModel.country.ilike(criteria.country))
        if criteria.min_rate is not None:
            query = query.filter(VAProfileModel.hourly_rate >= criteria.min_rate)
        if criteria.max_rate is not None:
            query = query.filter(VAProfileModel.hourly_rate <= criteria.max_rate)
        if criteria.skills:
            query = query.filter(or_(
                *(json_list_contains(VAProfileModel.skills, skill) for skill in criteria.skills)
            ))
        if criteria.availability is not None:
            query = query.filter(VAProfileModel.availability.is_(criteria.availability))

        query = query.order_by(VAProfileModel.id.desc())
        return self._page(query, offset, limit)

    def find_discoverable_for_job(self, job_posting_id: int, limit: int) -> List[VAProfile]:
        already_voted = select(MatchVoteModel.va_profile_id).where(
            MatchVoteModel.job_posting_id == job_posting_id
        )
        query = (
            self.session.query(VAProfileModel)
            .join(UserModel, UserModel.id == VAProfileModel.user_id)
            .filter(
                VAProfileModel.availability.is_(True),
                UserModel.role == Role.VA,
                VAProfileModel.id.not_in(already_voted),
            )
            .order_by(VAProfileModel.country.asc(), VAProfileModel.hourly_rate.asc())
            .limit(limit)
        )
        return self._all(query)


class SQLAlchemyCompanyRepository(SQLAlchemyRepository, CompanyRepository):
    """SQLAlchemy implementation of company repository."""

    model = CompanyModel
    entity_name = "Company"

    def __init__(self, session: Session):
        super().__init__(session, CompanyMapper())

    def save(self, company: Company) -> Company:
        try:
            return super().save(company)
        except IntegrityError:
            self.session.rollback()
            raise DuplicateEntityError(
                "Company", "user_id", company.user_id, "Company profile already exists"
            )

    def find_by_user_id(self, user_id: str) -> Optional[Company]:
        return self._first(self.session.query(CompanyModel).filter_by(user_id=user_id))
