"""
Notification repository interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from app.domain.models.notification import Notification


class NotificationRepository(ABC):

    @abstractmethod
    def save(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    def find_by_id(self, notification_id: int) -> Optional[Notification]:
        pass

    @abstractmethod
    def find_for_user(self, user_id: str, unread_only: bool = False,
                      offset: int = 0, limit: int = 20) -> Tuple[List[Notification], int]:
        """
        Notifications of a user, newest first, with the total count.
        """
        pass

    @abstractmethod
    def count_unread(self, user_id: str) -> int:
        pass

    @abstractmethod
    def mark_all_read(self, user_id: str) -> int:
        """
        Mark every unread notification of the user as read. Returns how many changed.
        """
        pass
