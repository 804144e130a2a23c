"""
Notification router.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.application.dto.notification_dto import ListNotificationsRequestDTO
from app.application.use_cases.notification_use_cases import (
    ListNotificationsUseCase,
    MarkNotificationReadUseCase,
    MarkAllNotificationsReadUseCase,
)
from app.infrastructure.auth import CurrentUser
from app.infrastructure.pagination import PaginationParams, pagination_params
from app.infrastructure.repositories import SQLAlchemyNotificationRepository
from app.infrastructure.web.dependencies import get_notification_repository
from app.infrastructure.web.responses import page_response, success_response, unwrap_result


router = APIRouter()

NotificationRepository = Annotated[SQLAlchemyNotificationRepository, Depends(get_notification_repository)]


@router.get("")
async def list_notifications(
    user: CurrentUser,
    repository: NotificationRepository,
    pagination: Annotated[PaginationParams, Depends(pagination_params)],
    unread_only: bool = Query(False, alias="unreadOnly")
):
    """The caller's notifications, newest first."""
    request = ListNotificationsRequestDTO(page=pagination.page, limit=pagination.limit, unread_only=unread_only)
    use_case = ListNotificationsUseCase(repository).set_current_user(user)
    return page_response(unwrap_result(await use_case.execute(request)))


@router.put("/read-all")
async def mark_all_read(user: CurrentUser, repository: NotificationRepository):
    use_case = MarkAllNotificationsReadUseCase(repository).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute()), "All notifications marked as read")


@router.put("/{notification_id}/read")
async def mark_read(notification_id: int, user: CurrentUser, repository: NotificationRepository):
    use_case = MarkNotificationReadUseCase(repository).set_current_user(user)
    return success_response(unwrap_result(await use_case.execute(notification_id)))
