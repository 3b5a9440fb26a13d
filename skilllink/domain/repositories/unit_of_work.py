"""
Unit of work interface.
Groups the repositories of one request around a single transaction.
"""

from abc import ABC, abstractmethod

from skilllink.domain.repositories.user_repository import UserRepositoryInterface
from skilllink.domain.repositories.job_repository import JobRepository
from skilllink.domain.repositories.invite_repository import InviteRepository
from skilllink.domain.repositories.project_repository import ProjectRepository
from skilllink.domain.repositories.payment_repository import PaymentRepository
from skilllink.domain.repositories.notification_repository import NotificationRepository
from skilllink.domain.repositories.review_repository import ReviewRepository


class UnitOfWork(ABC):
    users: UserRepositoryInterface
    jobs: JobRepository
    invites: InviteRepository
    projects: ProjectRepository
    payments: PaymentRepository
    notifications: NotificationRepository
    reviews: ReviewRepository

    @abstractmethod
    def commit(self) -> None:
        """
        Commit every pending change.
        Raises ConcurrencyConflictError when an optimistic check fails.
        """
        pass

    @abstractmethod
    def rollback(self) -> None:
        pass
