"""
Infrastructure repositories module.
Contains SQLAlchemy implementations of domain repositories.
"""

from .user_repository import SQLAlchemyUserRepository
from .job_repository import SQLAlchemyJobRepository
from .invite_repository import SQLAlchemyInviteRepository
from .project_repository import SQLAlchemyProjectRepository
from .payment_repository import SQLAlchemyPaymentRepository
from .notification_repository import SQLAlchemyNotificationRepository
from .review_repository import SQLAlchemyReviewRepository
from .unit_of_work import SQLAlchemyUnitOfWork

__all__ = [
    "SQLAlchemyUserRepository",
    "SQLAlchemyJobRepository",
    "SQLAlchemyInviteRepository",
    "SQLAlchemyProjectRepository",
    "SQLAlchemyPaymentRepository",
    "SQLAlchemyNotificationRepository",
    "SQLAlchemyReviewRepository",
    "SQLAlchemyUnitOfWork"
]
