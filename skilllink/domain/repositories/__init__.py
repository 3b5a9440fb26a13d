"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .user_repository import UserRepositoryInterface, WorkerSearchFilters
from .job_repository import JobRepository
from .invite_repository import InviteRepository
from .project_repository import ProjectRepository
from .payment_repository import PaymentRepository
from .notification_repository import NotificationRepository
from .review_repository import ReviewRepository
from .unit_of_work import UnitOfWork

__all__ = [
    "UserRepositoryInterface",
    "WorkerSearchFilters",
    "JobRepository",
    "InviteRepository",
    "ProjectRepository",
    "PaymentRepository",
    "NotificationRepository",
    "ReviewRepository",
    "UnitOfWork",
]
