"""
Notification DTOs.
"""

from typing import Optional, Dict, Any
from datetime import datetime

from skilllink.domain.models.notification import Notification
from .base_dto import RequestDTO, ResponseDTO


class CreateNotificationRequestDTO(RequestDTO):
    user_id: Optional[int] = None
    title: Optional[str] = None
    message: Optional[str] = None
    type: Optional[str] = None
    link: Optional[str] = None
    email: bool = False


class NotificationResponseDTO(ResponseDTO):
    user_id: int
    account_type: Optional[str] = None
    title: Optional[str] = None
    message: str
    type: str
    link: Optional[str] = None
    meta: Dict[str, Any] = {}
    is_read: bool
    read_at: Optional[datetime] = None
    email_sent: bool

    @classmethod
    def from_domain(cls, notification: Notification) -> "NotificationResponseDTO":
        return cls(
            id=notification.id,
            user_id=notification.user_id,
            account_type=notification.account_type,
            title=notification.title,
            message=notification.message,
            type=notification.type.value,
            link=notification.link,
            meta=notification.meta,
            is_read=notification.is_read,
            read_at=notification.read_at,
            email_sent=notification.email_sent,
            created_at=notification.created_at,
            updated_at=notification.updated_at,
        )
