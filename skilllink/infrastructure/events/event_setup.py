"""
Event system setup.
Builds a dispatcher per request, bound to that request's unit of work.
"""

import logging
from typing import Optional

from skilllink.domain.events.base import EventDispatcher
from skilllink.domain.repositories.unit_of_work import UnitOfWork
from skilllink.domain.services.email_service import EmailServiceInterface
from skilllink.domain.services.notification_service import NotificationService
from skilllink.infrastructure.email import get_email_service
from .notification_handlers import (
    InviteNotificationHandler,
    ProjectNotificationHandler,
    PaymentNotificationHandler,
    ReviewNotificationHandler,
)

logger = logging.getLogger(__name__)


def create_event_dispatcher(
    uow: UnitOfWork,
    email_service: Optional[EmailServiceInterface] = None,
) -> EventDispatcher:
    """Set up and register all notification handlers."""
    service = NotificationService(
        uow.notifications,
        uow.users,
        email_service or get_email_service(),
    )
    dispatcher = EventDispatcher()

    for handler_cls in (
        InviteNotificationHandler,
        ProjectNotificationHandler,
        PaymentNotificationHandler,
        ReviewNotificationHandler,
    ):
        dispatcher.register_global_handler(handler_cls(uow, service))

    logger.debug(f"Event handlers registered: {dispatcher.get_registered_handlers()}")
    return dispatcher
