"""
Domain models for the Skill Link marketplace.
This module exports all domain entities and value objects.
"""

# Base classes
from .base import (
    BaseEntity,
    AggregateRoot,
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    AuthenticationError,
    AuthorizationError,
    EntityNotFoundError,
    DuplicateEntityError,
    ConcurrencyConflictError,
    ValueObject
)

# Domain entities
from .user import (
    User,
    UserRole,
    AccountType,
    SkilledWorkerProfile,
    EmployerProfile
)

from .job import (
    Job,
    BudgetRange
)

from .invite import (
    Invite,
    InviteType,
    InviteStatus,
    ApplicationStatus,
    InviteAction
)

from .project import (
    Project,
    ProjectStatus,
    Milestone,
    MilestoneStatus,
    ProjectMessage,
    Submission,
    ProjectEvent,
    ProjectEventType,
    EventResolution,
    ResolutionKind
)

from .payment import (
    Payment,
    PaymentType,
    PaymentStatus,
    Wallet
)

from .notification import (
    Notification,
    NotificationType
)

from .review import (
    Review,
    ReviewCreated
)

__all__ = [
    # Base
    "BaseEntity",
    "AggregateRoot",
    "DomainException",
    "ValidationError",
    "BusinessRuleViolation",
    "AuthenticationError",
    "AuthorizationError",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "ConcurrencyConflictError",
    "ValueObject",

    # User
    "User",
    "UserRole",
    "AccountType",
    "SkilledWorkerProfile",
    "EmployerProfile",

    # Job
    "Job",
    "BudgetRange",

    # Invite
    "Invite",
    "InviteType",
    "InviteStatus",
    "ApplicationStatus",
    "InviteAction",

    # Project
    "Project",
    "ProjectStatus",
    "Milestone",
    "MilestoneStatus",
    "ProjectMessage",
    "Submission",
    "ProjectEvent",
    "ProjectEventType",
    "EventResolution",
    "ResolutionKind",

    # Payment
    "Payment",
    "PaymentType",
    "PaymentStatus",
    "Wallet",

    # Notification
    "Notification",
    "NotificationType",

    # Review
    "Review",
    "ReviewCreated",
]
