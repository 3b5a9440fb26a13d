"""
Notification mapper.
"""

from skilllink.domain.models.notification import Notification
from skilllink.infrastructure.db.models import NotificationModel


class NotificationMapper:
    """Maps between Notification domain entity and NotificationModel."""

    def domain_to_model(self, notification: Notification) -> NotificationModel:
        return NotificationModel(
            id=notification.id,
            user_id=notification.user_id,
            account_type=notification.account_type,
            title=notification.title,
            message=notification.message,
            type=notification.type.value,
            link=notification.link,
            meta=dict(notification.meta or {}),
            is_read=notification.is_read,
            read_at=notification.read_at,
            email_sent=notification.email_sent,
            created_at=notification.created_at,
            updated_at=notification.updated_at
        )

    def model_to_domain(self, model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            account_type=model.account_type,
            title=model.title,
            message=model.message,
            type=model.type,
            link=model.link,
            meta=dict(model.meta or {}),
            is_read=bool(model.is_read),
            read_at=model.read_at,
            email_sent=bool(model.email_sent),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
