"""
User repository interface.
Defines the contract for user data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.models.user import User


class UserRepository(ABC):
    """
    Repository interface for User aggregate.
    """

    @abstractmethod
    def save(self, user: User) -> User:
        """
        Insert or update a user. Ids are assigned by the application.
        """
        pass

    @abstractmethod
    def find_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        """
        Find a user by email address (case-insensitive).
        """
        pass

    @abstractmethod
    def find_by_firebase_uid(self, firebase_uid: str) -> Optional[User]:
        pass
