"""
User mapper for converting between domain entities and database models.
"""

from app.domain.models.user import User, Role
from app.infrastructure.db.models import UserModel
from .base_mapper import BaseMapper


class UserMapper(BaseMapper):
    """Maps between User domain entity and UserModel database model."""

    def domain_to_model(self, user: User) -> UserModel:
        """Convert User domain entity to UserModel."""
        return UserModel(
            id=user.id,
            email=user.email,
            firebase_uid=user.firebase_uid,
            role=user.role,
            profile_complete=user.profile_complete,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def model_to_domain(self, model: UserModel) -> User:
        """Convert UserModel to User domain entity."""
        return User(
            id=model.id,
            email=model.email,
            firebase_uid=model.firebase_uid,
            role=Role(model.role),
            profile_complete=bool(model.profile_complete),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
