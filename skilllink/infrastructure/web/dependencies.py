"""
Request-scoped dependencies shared by the routers.
FastAPI caches each dependency per request, so the unit of work, the
dispatcher and the notification service all share one session.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from skilllink.domain.events.base import EventDispatcher
from skilllink.domain.services.email_service import EmailServiceInterface
from skilllink.domain.services.notification_service import NotificationService
from skilllink.infrastructure.db.database import get_db
from skilllink.infrastructure.email import get_email_service
from skilllink.infrastructure.events.event_setup import create_event_dispatcher
from skilllink.infrastructure.repositories.unit_of_work import SQLAlchemyUnitOfWork


def get_uow(session: Session = Depends(get_db)) -> SQLAlchemyUnitOfWork:
    """Dependency to get the unit of work bound to the request session."""
    return SQLAlchemyUnitOfWork(session)


def get_mailer() -> EmailServiceInterface:
    return get_email_service()


def get_dispatcher(
    uow: Annotated[SQLAlchemyUnitOfWork, Depends(get_uow)],
    mailer: Annotated[EmailServiceInterface, Depends(get_mailer)],
) -> EventDispatcher:
    return create_event_dispatcher(uow, mailer)


def get_notification_service(
    uow: Annotated[SQLAlchemyUnitOfWork, Depends(get_uow)],
    mailer: Annotated[EmailServiceInterface, Depends(get_mailer)],
) -> NotificationService:
    return NotificationService(uow.notifications, uow.users, mailer)


UnitOfWorkDep = Annotated[SQLAlchemyUnitOfWork, Depends(get_uow)]
DispatcherDep = Annotated[EventDispatcher, Depends(get_dispatcher)]
NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
