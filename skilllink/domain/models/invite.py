"""
Invite domain model.
One ledger row links (employer, worker, job). Employer-initiated invites and
worker-initiated applications each have their own status vocabulary and a
single transition table that is the only way a status changes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Tuple, Union

from skilllink.domain.models.base import (
    AggregateRoot,
    ValidationError,
    AuthorizationError,
)


class InviteType(str, Enum):
    INVITE = "invite"
    APPLICATION = "application"


class InviteStatus(str, Enum):
    """Status vocabulary of employer-initiated invites."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    APPROVED = "approved"
    DECLINED = "declined"
    COMPLETED = "completed"


class ApplicationStatus(str, Enum):
    """Status vocabulary of worker-initiated applications."""
    APPLIED = "applied"
    APPROVED = "approved"
    DECLINED = "declined"
    COMPLETED = "completed"


class InviteAction(str, Enum):
    ACCEPT = "accept"
    DECLINE = "decline"
    APPROVE = "approve"
    COMPLETE = "complete"


AnyStatus = Union[InviteStatus, ApplicationStatus]

# (type, current status, action) -> next status
TRANSITIONS: Dict[Tuple[InviteType, str, InviteAction], AnyStatus] = {
    (InviteType.INVITE, InviteStatus.PENDING.value, InviteAction.ACCEPT): InviteStatus.APPROVED,
    (InviteType.INVITE, InviteStatus.PENDING.value, InviteAction.DECLINE): InviteStatus.DECLINED,
    (InviteType.INVITE, InviteStatus.ACCEPTED.value, InviteAction.APPROVE): InviteStatus.APPROVED,
    (InviteType.INVITE, InviteStatus.APPROVED.value, InviteAction.COMPLETE): InviteStatus.COMPLETED,
    (InviteType.INVITE, InviteStatus.ACCEPTED.value, InviteAction.COMPLETE): InviteStatus.COMPLETED,
    (InviteType.APPLICATION, ApplicationStatus.APPLIED.value, InviteAction.APPROVE): ApplicationStatus.APPROVED,
    (InviteType.APPLICATION, ApplicationStatus.APPLIED.value, InviteAction.DECLINE): ApplicationStatus.DECLINED,
    (InviteType.APPLICATION, ApplicationStatus.APPROVED.value, InviteAction.COMPLETE): ApplicationStatus.COMPLETED,
}

# Statuses that still block a new application for the same (worker, job)
OPEN_APPLICATION_STATUSES = (ApplicationStatus.APPLIED.value, ApplicationStatus.APPROVED.value)
OPEN_INVITE_STATUSES = (InviteStatus.PENDING.value, InviteStatus.ACCEPTED.value)


def parse_status(invite_type: InviteType, value: str) -> AnyStatus:
    """Parse a raw status string within the vocabulary of the given type."""
    enum_cls = InviteStatus if invite_type == InviteType.INVITE else ApplicationStatus
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {invite_type.value} status: {value}", "status")


def next_status(invite_type: InviteType, current: AnyStatus, action: InviteAction) -> AnyStatus:
    """
    Resolve a transition.

    Raises:
        ValidationError: when the action is not allowed from the current status
    """
    target = TRANSITIONS.get((invite_type, current.value, action))
    if target is None:
        raise ValidationError(
            f"Cannot {action.value} {invite_type.value} with status '{current.value}'",
            "status",
        )
    return target


def can_transition(invite_type: InviteType, current: AnyStatus, action: InviteAction) -> bool:
    return (invite_type, current.value, action) in TRANSITIONS


@dataclass
class Invite(AggregateRoot):
    """Invite / application ledger entry."""

    employer_id: int
    worker_id: int
    job_id: int
    type: InviteType
    status: AnyStatus
    message: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        self.type = InviteType(self.type)
        raw = self.status.value if isinstance(self.status, Enum) else self.status
        self.status = parse_status(self.type, raw)

    @classmethod
    def new_invite(cls, employer_id: int, worker_id: int, job_id: int, message: Optional[str] = None) -> "Invite":
        return cls(
            employer_id=employer_id,
            worker_id=worker_id,
            job_id=job_id,
            type=InviteType.INVITE,
            status=InviteStatus.PENDING,
            message=message,
        )

    @classmethod
    def new_application(cls, employer_id: int, worker_id: int, job_id: int, message: Optional[str] = None) -> "Invite":
        return cls(
            employer_id=employer_id,
            worker_id=worker_id,
            job_id=job_id,
            type=InviteType.APPLICATION,
            status=ApplicationStatus.APPLIED,
            message=message,
        )

    @property
    def is_invite(self) -> bool:
        return self.type == InviteType.INVITE

    @property
    def is_application(self) -> bool:
        return self.type == InviteType.APPLICATION

    def is_party(self, user_id: int) -> bool:
        return user_id in (self.employer_id, self.worker_id)

    def ensure_party(self, user_id: int) -> None:
        if not self.is_party(user_id):
            raise AuthorizationError("Not authorized to view this invite")

    def _apply(self, action: InviteAction) -> AnyStatus:
        self.status = next_status(self.type, self.status, action)
        self.mark_as_updated()
        return self.status

    def respond(self, worker_id: int, action: InviteAction) -> AnyStatus:
        """Worker accepts or declines an employer invite."""
        if not self.is_invite:
            raise ValidationError("Only invites can be accepted or declined by the worker")
        if self.worker_id != worker_id:
            raise AuthorizationError("Not authorized to respond to this invite")
        if self.status != InviteStatus.PENDING:
            raise ValidationError(f"Invite is not pending (status '{self.status.value}')", "status")
        return self._apply(action)

    def approve(self, employer_id: int) -> AnyStatus:
        """Employer approves an accepted invite or an applied application."""
        if self.employer_id != employer_id:
            raise AuthorizationError("Not authorized to approve this record")
        return self._apply(InviteAction.APPROVE)

    def decline_application(self, employer_id: int) -> AnyStatus:
        if not self.is_application:
            raise ValidationError("Only applications can be declined by the employer")
        if self.employer_id != employer_id:
            raise AuthorizationError("Not authorized to decline this application")
        return self._apply(InviteAction.DECLINE)

    def complete(self) -> bool:
        """Mark the engagement completed when the project finishes; no-op when not allowed."""
        if not can_transition(self.type, self.status, InviteAction.COMPLETE):
            return False
        self._apply(InviteAction.COMPLETE)
        return True
