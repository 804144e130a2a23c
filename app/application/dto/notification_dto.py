"""
Notification DTOs for the application layer.
"""

from typing import Any, Dict
from pydantic import Field

from app.domain.models.notification import NotificationType, NotificationPriority
from .base_dto import BaseDTO, ListRequestDTO, ResponseDTO


class ListNotificationsRequestDTO(ListRequestDTO):
    unread_only: bool = Field(default=False, description="Only unread notifications")


class NotificationResponseDTO(ResponseDTO):
    user_id: str
    type: NotificationType
    title: str
    message: str
    data: Dict[str, Any] = Field(default_factory=dict)
    read: bool = False
    priority: NotificationPriority = NotificationPriority.NORMAL


class MarkAllReadResponseDTO(BaseDTO):
    updated: int
