"""
Notification repository implementation using SQLAlchemy.
"""

from typing import List, Tuple

from sqlalchemy.orm import Session

from app.domain.models.base import utcnow
from app.domain.models.notification import Notification
from app.domain.repositories.notification_repository import NotificationRepository
from app.infrastructure.db.models import NotificationModel
from app.infrastructure.mappers.notification_mapper import NotificationMapper
from .base_repository import SQLAlchemyRepository


class SQLAlchemyNotificationRepository(SQLAlchemyRepository, NotificationRepository):
    """SQLAlchemy implementation of notification repository."""

    model = NotificationModel
    entity_name = "Notification"

    def __init__(self, session: Session):
        super().__init__(session, NotificationMapper())

    def find_for_user(self, user_id: str, unread_only: bool = False,
                      offset: int = 0, limit: int = 20) -> Tuple[List[Notification], int]:
        query = self.session.query(NotificationModel).filter_by(user_id=user_id)
        if unread_only:
            query = query.filter(NotificationModel.read.is_(False))
        query = query.order_by(NotificationModel.id.desc())
        return self._page(query, offset, limit)

    def count_unread(self, user_id: str) -> int:
        return self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id,
            NotificationModel.read.is_(False),
        ).count()

    def mark_all_read(self, user_id: str) -> int:
        updated = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id,
            NotificationModel.read.is_(False),
        ).update({"read": True, "updated_at": utcnow()}, synchronize_session=False)
        self.session.flush()
        return updated
