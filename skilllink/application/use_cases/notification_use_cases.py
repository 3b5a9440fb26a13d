"""
Notification use cases.
"""

import logging
from typing import List, Optional, Tuple

from skilllink.application.use_cases.base_use_case import CommandUseCase, PaginatedQueryUseCase
from skilllink.application.dto.notification_dto import (
    CreateNotificationRequestDTO,
    NotificationResponseDTO,
)
from skilllink.domain.models.base import AuthorizationError, EntityNotFoundError, ValidationError
from skilllink.domain.models.notification import NotificationType
from skilllink.domain.services.notification_service import NotificationService


logger = logging.getLogger(__name__)


def _parse_type(value: Optional[str]) -> Optional[NotificationType]:
    if value is None:
        return None
    try:
        return NotificationType(value)
    except ValueError:
        raise ValidationError(f"Invalid notification type: {value}", "type")


class ListNotificationsUseCase(PaginatedQueryUseCase):
    """The caller's notifications, newest first."""

    async def execute(self, user_id: int, page: Optional[int] = None, limit: Optional[int] = None,
                      notification_type: Optional[str] = None,
                      is_read: Optional[bool] = None) -> Tuple[List[NotificationResponseDTO], int, int]:
        page, limit = self._page(page, limit)
        notifications, total = self.uow.notifications.list_for_user(
            user_id, page, limit, _parse_type(notification_type), is_read
        )
        return [NotificationResponseDTO.from_domain(n) for n in notifications], page, total


class CreateNotificationUseCase(CommandUseCase):
    """Admin-authored notification for any user."""

    def __init__(self, uow, notification_service: NotificationService, dispatcher=None):
        super().__init__(uow, dispatcher)
        self.notification_service = notification_service

    async def execute(self, user_id: int, request: CreateNotificationRequestDTO) -> NotificationResponseDTO:
        caller = self.uow.users.get_by_id(user_id)
        if not caller or not caller.is_admin:
            raise AuthorizationError("Admin only")
        if request.user_id is None or not request.message:
            raise ValidationError("userId and message required")

        notification = await self.notification_service.notify(
            request.user_id,
            request.message,
            title=request.title,
            type=_parse_type(request.type) or NotificationType.SYSTEM,
            link=request.link,
            email=request.email,
        )
        await self._commit()
        logger.info(f"Admin {user_id} notified user {request.user_id}")
        return NotificationResponseDTO.from_domain(notification)


class MarkNotificationReadUseCase(CommandUseCase):

    def __init__(self, uow, notification_service: NotificationService, dispatcher=None):
        super().__init__(uow, dispatcher)
        self.notification_service = notification_service

    async def execute(self, user_id: int, notification_id: int) -> NotificationResponseDTO:
        notification = self.notification_service.mark_read(user_id, notification_id)
        if notification is None:
            raise EntityNotFoundError("Notification")
        await self._commit()
        return NotificationResponseDTO.from_domain(notification)


class MarkAllNotificationsReadUseCase(CommandUseCase):

    def __init__(self, uow, notification_service: NotificationService, dispatcher=None):
        super().__init__(uow, dispatcher)
        self.notification_service = notification_service

    async def execute(self, user_id: int) -> int:
        changed = self.notification_service.mark_all_read(user_id)
        await self._commit()
        return changed
