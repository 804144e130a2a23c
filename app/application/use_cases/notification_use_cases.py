"""
Notification use cases for the application layer.
"""

from app.application.use_cases.base_use_case import (
    AuthorizedUseCase, CommandUseCase, QueryUseCase
)
from app.application.dto.base_dto import PageDTO
from app.application.dto.notification_dto import (
    ListNotificationsRequestDTO, NotificationResponseDTO, MarkAllReadResponseDTO
)
from app.domain.models.base import EntityNotFoundError
from app.domain.repositories.notification_repository import NotificationRepository


class ListNotificationsUseCase(AuthorizedUseCase, QueryUseCase[ListNotificationsRequestDTO, PageDTO]):
    """The caller's notifications, newest first."""

    def __init__(self, notification_repository: NotificationRepository):
        super().__init__()
        self.notification_repository = notification_repository

    async def _execute_query_logic(self, request: ListNotificationsRequestDTO) -> PageDTO:
        notifications, total = self.notification_repository.find_for_user(
            self.current_user_id, unread_only=request.unread_only,
            offset=request.offset, limit=request.limit,
        )
        return PageDTO.create(
            [NotificationResponseDTO.from_domain(n) for n in notifications],
            total, request.page, request.limit,
        )


class MarkNotificationReadUseCase(AuthorizedUseCase, CommandUseCase[int, NotificationResponseDTO]):

    def __init__(self, notification_repository: NotificationRepository):
        super().__init__()
        self.notification_repository = notification_repository

    async def _execute_command_logic(self, notification_id: int) -> NotificationResponseDTO:
        notification = self.notification_repository.find_by_id(notification_id)
        # Other users' notifications are reported as missing
        if not notification or notification.user_id != self.current_user_id:
            raise EntityNotFoundError("Notification")
        notification.mark_read()
        return NotificationResponseDTO.from_domain(self.notification_repository.save(notification))


class MarkAllNotificationsReadUseCase(AuthorizedUseCase, CommandUseCase[None, MarkAllReadResponseDTO]):

    def __init__(self, notification_repository: NotificationRepository):
        super().__init__()
        self.notification_repository = notification_repository

    async def _execute_command_logic(self, request: None) -> MarkAllReadResponseDTO:
        updated = self.notification_repository.mark_all_read(self.current_user_id)
        return MarkAllReadResponseDTO(updated=updated)
