"""
Infrastructure mappers module.
Contains mappers for converting between domain entities and database models.
"""

from .user_mapper import UserMapper
from .job_mapper import JobMapper
from .invite_mapper import InviteMapper
from .project_mapper import ProjectMapper
from .payment_mapper import PaymentMapper, WalletMapper
from .notification_mapper import NotificationMapper
from .review_mapper import ReviewMapper

__all__ = [
    "UserMapper",
    "JobMapper",
    "InviteMapper",
    "ProjectMapper",
    "PaymentMapper",
    "WalletMapper",
    "NotificationMapper",
    "ReviewMapper"
]
