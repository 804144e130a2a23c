"""
Notification mapper.
"""

from app.domain.models.notification import Notification
from app.infrastructure.db.models import NotificationModel
from .base_mapper import BaseMapper


class NotificationMapper(BaseMapper):

    def domain_to_model(self, notification: Notification) -> NotificationModel:
        return NotificationModel(
            id=notification.id,
            user_id=notification.user_id,
            type=notification.type.value,
            title=notification.title,
            message=notification.message,
            data=dict(notification.data),
            read=notification.read,
            priority=notification.priority,
            created_at=notification.created_at,
            updated_at=notification.updated_at,
        )

    def model_to_domain(self, model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            title=model.title,
            message=model.message,
            data=dict(model.data or {}),
            read=bool(model.read),
            priority=model.priority,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
