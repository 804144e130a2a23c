"""
User repository implementation using SQLAlchemy.
"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.models.base import DuplicateEntityError
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.db.models import UserModel
from app.infrastructure.mappers.user_mapper import UserMapper
from .base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository, UserRepository):
    """SQLAlchemy implementation of user repository."""

    model = UserModel
    entity_name = "User"

    def __init__(self, session: Session):
        super().__init__(session, UserMapper())

    def save(self, user: User) -> User:
        """User ids are generated up front, so insert vs update is decided by lookup."""
        model = self.session.get(UserModel, user.id)
        try:
            if model is None:
                self.session.add(self.mapper.domain_to_model(user))
            else:
                self.mapper.update_model(model, user)
            self.session.flush()
        except IntegrityError:
            self.session.rollback()
            raise DuplicateEntityError("User", "email", user.email, "Email already exists")
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        return self._first(
            self.session.query(UserModel).filter(func.lower(UserModel.email) == email.strip().lower())
        )

    def find_by_firebase_uid(self, firebase_uid: str) -> Optional[User]:
        return self._first(self.session.query(UserModel).filter_by(firebase_uid=firebase_uid))
