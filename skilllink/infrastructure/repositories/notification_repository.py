"""
Notification repository implementation using SQLAlchemy.
"""

from datetime import datetime
from typing import Optional, List, Tuple

from sqlalchemy.orm import Session

from skilllink.domain.models.notification import Notification, NotificationType
from skilllink.domain.models.base import EntityNotFoundError
from skilllink.domain.repositories.notification_repository import NotificationRepository
from skilllink.infrastructure.db.models import NotificationModel
from skilllink.infrastructure.mappers.notification_mapper import NotificationMapper
from skilllink.infrastructure.pagination import paginator


class SQLAlchemyNotificationRepository(NotificationRepository):

    def __init__(self, session: Session):
        self.session = session
        self.mapper = NotificationMapper()
        self.model = NotificationModel

    def save(self, notification: Notification) -> Notification:
        if notification.is_new:
            model = self.mapper.domain_to_model(notification)
            self.session.add(model)
        else:
            model = self.session.get(NotificationModel, notification.id)
            if not model:
                raise EntityNotFoundError("Notification", notification.id)
            model.is_read = notification.is_read
            model.read_at = notification.read_at
            model.email_sent = notification.email_sent
            model.updated_at = notification.updated_at

        self.session.flush()
        if notification.is_new:
            notification.id = model.id
        return notification

    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        model = self.session.get(NotificationModel, notification_id)
        return self.mapper.model_to_domain(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        page: int,
        limit: int,
        notification_type: Optional[NotificationType] = None,
        is_read: Optional[bool] = None,
    ) -> Tuple[List[Notification], int]:
        query = self.session.query(NotificationModel).filter(NotificationModel.user_id == user_id)
        if notification_type is not None:
            query = query.filter(NotificationModel.type == NotificationType(notification_type).value)
        if is_read is not None:
            query = query.filter(NotificationModel.is_read.is_(is_read))
        query = query.order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        models, meta = paginator.paginate(query, page, limit)
        return [self.mapper.model_to_domain(m) for m in models], meta.total

    def mark_all_read(self, user_id: int) -> int:
        now = datetime.utcnow()
        changed = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id,
            NotificationModel.is_read.is_(False),
        ).update(
            {"is_read": True, "read_at": now, "updated_at": now},
            synchronize_session=False,
        )
        self.session.flush()
        return changed
