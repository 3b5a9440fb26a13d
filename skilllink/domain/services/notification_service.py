"""
Notification service.
Creates in-app notifications and sends the optional email copy.
"""

import logging
from typing import Optional, Dict, Any

from skilllink.domain.models.base import EntityNotFoundError, ValidationError
from skilllink.domain.models.notification import Notification, NotificationType
from skilllink.domain.repositories.notification_repository import NotificationRepository
from skilllink.domain.repositories.user_repository import UserRepositoryInterface
from skilllink.domain.services.email_service import EmailServiceInterface


logger = logging.getLogger(__name__)


class NotificationService:
    """
    Domain service for notification dispatch.
    Email delivery is best effort: failures are logged and the
    notification is kept with `email_sent` left False.
    """

    def __init__(
        self,
        notification_repository: NotificationRepository,
        user_repository: UserRepositoryInterface,
        email_service: Optional[EmailServiceInterface] = None,
    ):
        self.notification_repository = notification_repository
        self.user_repository = user_repository
        self.email_service = email_service

    async def notify(
        self,
        user_id: Optional[int],
        message: Optional[str],
        title: Optional[str] = None,
        type: NotificationType = NotificationType.SYSTEM,
        link: Optional[str] = None,
        meta: Optional[Dict[str, Any]] = None,
        email: bool = False,
    ) -> Notification:
        """
        Create a notification for a user.

        Raises:
            ValidationError: user_id or message missing
            EntityNotFoundError: user does not exist
        """
        if user_id is None or not message:
            raise ValidationError("userId and message are required")

        user = self.user_repository.get_by_id(user_id)
        if not user:
            raise EntityNotFoundError("User")

        notification = Notification(
            user_id=user_id,
            message=message,
            title=title,
            type=type,
            account_type=user.account_type.value,
            link=link,
            meta=meta or {},
        )
        notification = self.notification_repository.save(notification)

        if email and user.email and self.email_service is not None:
            try:
                sent = await self.email_service.send_notification_email(
                    to=user.email,
                    recipient_name=user.name,
                    title=title,
                    message=message,
                    link=link,
                )
            except Exception as e:
                logger.warning(f"Notification email to user {user_id} failed: {e}")
                sent = False
            if sent:
                notification.email_sent = True
                notification = self.notification_repository.save(notification)

        return notification

    def mark_read(self, user_id: int, notification_id: int) -> Optional[Notification]:
        """Mark one of the user's notifications read; None when it is not theirs."""
        notification = self.notification_repository.get_by_id(notification_id)
        if not notification or notification.user_id != user_id:
            return None
        if notification.mark_read():
            notification = self.notification_repository.save(notification)
        return notification

    def mark_all_read(self, user_id: int) -> int:
        return self.notification_repository.mark_all_read(user_id)
