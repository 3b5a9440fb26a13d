"""
SQLAlchemy unit of work.
Wraps the request session; use cases commit once per command.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from skilllink.domain.models.base import ConcurrencyConflictError, DuplicateEntityError
from skilllink.domain.repositories.unit_of_work import UnitOfWork
from skilllink.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from skilllink.infrastructure.repositories.job_repository import SQLAlchemyJobRepository
from skilllink.infrastructure.repositories.invite_repository import SQLAlchemyInviteRepository
from skilllink.infrastructure.repositories.project_repository import SQLAlchemyProjectRepository
from skilllink.infrastructure.repositories.payment_repository import SQLAlchemyPaymentRepository
from skilllink.infrastructure.repositories.notification_repository import SQLAlchemyNotificationRepository
from skilllink.infrastructure.repositories.review_repository import SQLAlchemyReviewRepository


logger = logging.getLogger(__name__)


class SQLAlchemyUnitOfWork(UnitOfWork):

    def __init__(self, session: Session):
        self.session = session
        self.users = SQLAlchemyUserRepository(session)
        self.jobs = SQLAlchemyJobRepository(session)
        self.invites = SQLAlchemyInviteRepository(session)
        self.projects = SQLAlchemyProjectRepository(session)
        self.payments = SQLAlchemyPaymentRepository(session)
        self.notifications = SQLAlchemyNotificationRepository(session)
        self.reviews = SQLAlchemyReviewRepository(session)

    def commit(self) -> None:
        try:
            self.session.commit()
        except StaleDataError as e:
            self.session.rollback()
            logger.warning(f"Optimistic version check failed: {e}")
            raise ConcurrencyConflictError()
        except IntegrityError as e:
            self.session.rollback()
            logger.warning(f"Integrity error on commit: {e.orig}")
            raise DuplicateEntityError("Record", "key", None, "Conflicting record already exists")

    def rollback(self) -> None:
        self.session.rollback()
