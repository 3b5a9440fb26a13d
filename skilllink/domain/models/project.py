"""
Project domain model.
The engagement between one employer (creator) and one worker (assignee),
with milestones, an append-only event log, messages and file submissions.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple

from skilllink.domain.models.base import (
    AggregateRoot,
    BaseEntity,
    ValidationError,
    AuthorizationError,
    EntityNotFoundError,
    ConcurrencyConflictError,
    to_decimal,
    to_naive_utc,
)
from skilllink.domain.events.project_events import (
    ProjectAssigned,
    ProjectCompleted,
    MilestoneSubmitted,
    MilestoneApproved,
    ProjectMessagePosted,
    SubmissionAdded,
    PaymentRequested,
    DeadlineExtended,
    DeadlineExtensionRequested,
    DeadlineExtensionApproved,
    SupportRequested,
)


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class MilestoneStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"
    APPROVED = "approved"


class ProjectEventType(str, Enum):
    PAYMENT_REQUEST = "payment_request"
    DEADLINE_EXTENSION = "deadline_extension"
    SUPPORT = "support"


class ResolutionKind(str, Enum):
    PAID = "paid"
    APPROVED = "approved"


PROJECT_STATUS_TRANSITIONS = {
    ProjectStatus.ACTIVE: {ProjectStatus.COMPLETED, ProjectStatus.ARCHIVED},
    ProjectStatus.COMPLETED: {ProjectStatus.ARCHIVED},
    ProjectStatus.ARCHIVED: set(),
}

PROJECT_MUTABLE_FIELDS = (
    "title", "category", "budget", "currency", "deadline",
    "progress", "status", "assigned_to", "milestones",
)

WORKER_MILESTONE_STATUSES = (MilestoneStatus.IN_PROGRESS, MilestoneStatus.SUBMITTED)
MILESTONE_MUTABLE_FIELDS = ("title", "description", "deadline", "status")


def _parse_enum(enum_cls, value, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {value}", field_name)


@dataclass
class Milestone(BaseEntity):
    """Trackable sub-deliverable of a project."""

    title: str
    description: Optional[str] = None
    deadline: Optional[datetime] = None
    status: MilestoneStatus = MilestoneStatus.NOT_STARTED
    project_id: Optional[int] = None

    def __post_init__(self):
        super().__post_init__()
        self.status = _parse_enum(MilestoneStatus, self.status, "milestone status")
        self.deadline = to_naive_utc(self.deadline)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Milestone":
        if not data.get("title"):
            raise ValidationError("Milestone title is required", "milestones")
        return cls(
            title=data["title"],
            description=data.get("description"),
            deadline=data.get("deadline"),
            status=data.get("status") or MilestoneStatus.NOT_STARTED,
        )


@dataclass
class ProjectMessage(BaseEntity):
    project_id: int
    sender_id: int
    text: str


@dataclass
class Submission(BaseEntity):
    """Reference to an uploaded file; created_at doubles as the upload time."""

    project_id: int
    uploaded_by: int
    url: str
    filename: Optional[str] = None
    note: Optional[str] = None

    @property
    def uploaded_at(self) -> datetime:
        return self.created_at


@dataclass
class EventResolution(BaseEntity):
    """Linked record closing an event (payment released, extension approved)."""

    event_id: int
    kind: ResolutionKind
    resolved_by: int
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ProjectEvent(BaseEntity):
    """
    Append-only audit entry.
    Resolutions never rewrite `data`; `payload` merges them for display.
    """

    project_id: int
    type: ProjectEventType
    created_by: int
    text: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)
    related_event_id: Optional[int] = None
    resolution: Optional[EventResolution] = None

    def __post_init__(self):
        super().__post_init__()
        self.type = _parse_enum(ProjectEventType, self.type, "event type")

    @property
    def is_resolved(self) -> bool:
        return self.resolution is not None

    @property
    def amount(self) -> Decimal:
        try:
            value = to_decimal(self.data.get("amount", 0))
        except ValidationError:
            return Decimal("0")
        return value if value > 0 else Decimal("0")

    @property
    def payload(self) -> Dict[str, Any]:
        merged = dict(self.data)
        if self.resolution is not None:
            merged.update(self.resolution.data)
        return merged


@dataclass
class Project(AggregateRoot):
    """
    Project aggregate root.
    The creator owns structural edits; creator and assignee share the
    message, submission and event streams.
    """

    title: str
    created_by: int
    category: Optional[str] = None
    budget: Decimal = Decimal("0")
    currency: str = "NGN"
    deadline: Optional[datetime] = None
    progress: int = 0
    status: ProjectStatus = ProjectStatus.ACTIVE
    assigned_to: Optional[int] = None
    job_id: Optional[int] = None
    milestones: List[Milestone] = field(default_factory=list)

    def __post_init__(self):
        super().__post_init__()
        self.status = _parse_enum(ProjectStatus, self.status, "status")
        self.budget = to_decimal(self.budget if self.budget is not None else 0, "budget")
        self.deadline = to_naive_utc(self.deadline)

    @classmethod
    def create(
        cls,
        created_by: int,
        title: Optional[str],
        category: Optional[str] = None,
        budget: Any = None,
        currency: Optional[str] = None,
        deadline: Optional[datetime] = None,
        assigned_to: Optional[int] = None,
        job_id: Optional[int] = None,
        milestones: Optional[List[Dict[str, Any]]] = None,
    ) -> "Project":
        if not title:
            raise ValidationError("title is required", "title")
        project = cls(
            title=title,
            created_by=created_by,
            category=category,
            budget=budget if budget is not None else Decimal("0"),
            currency=currency or "NGN",
            deadline=deadline,
            assigned_to=assigned_to,
            job_id=job_id,
            milestones=[Milestone.from_dict(m) for m in (milestones or [])],
        )
        project.validate()
        return project

    def validate(self) -> None:
        if not self.title or not str(self.title).strip():
            raise ValidationError("title is required", "title")
        if self.budget < 0:
            raise ValidationError("budget cannot be negative", "budget")
        if not 0 <= int(self.progress or 0) <= 100:
            raise ValidationError("progress must be between 0 and 100", "progress")

    # Membership

    def is_creator(self, user_id: int) -> bool:
        return self.created_by == user_id

    def is_assignee(self, user_id: int) -> bool:
        return self.assigned_to is not None and self.assigned_to == user_id

    def is_member(self, user_id: int) -> bool:
        return self.is_creator(user_id) or self.is_assignee(user_id)

    def ensure_member(self, user_id: int, message: str = "Not authorized to access this project") -> None:
        if not self.is_member(user_id):
            raise AuthorizationError(message)

    def ensure_creator(self, user_id: int, message: str = "Only the project creator can do this") -> None:
        if not self.is_creator(user_id):
            raise AuthorizationError(message)

    def ensure_assignee(self, user_id: int, message: str = "Only the assigned worker can do this") -> None:
        if not self.is_assignee(user_id):
            raise AuthorizationError(message)

    def counterpart_of(self, user_id: int) -> Optional[int]:
        """The other participant, or None when the project is unassigned."""
        if self.is_creator(user_id):
            return self.assigned_to
        if self.is_assignee(user_id):
            return self.created_by
        return None

    # Structural edits

    def announce_assignment(self) -> None:
        if self.assigned_to is not None:
            self.add_event(ProjectAssigned(self.id, self.title, self.created_by, self.assigned_to))

    def apply_update(self, actor_id: int, changes: Dict[str, Any]) -> bool:
        """
        Apply a whitelisted partial update made by the creator.

        Returns:
            True when this update moved the project into `completed`
        """
        self.ensure_creator(actor_id, "Not authorized")
        previous_assignee = self.assigned_to
        completed_now = False

        for key, value in changes.items():
            if key not in PROJECT_MUTABLE_FIELDS:
                continue
            if key == "status":
                completed_now = self._change_status(_parse_enum(ProjectStatus, value, "status"))
            elif key == "budget":
                self.budget = to_decimal(value if value is not None else 0, "budget")
            elif key == "deadline":
                self.deadline = to_naive_utc(value)
            elif key == "progress":
                self.progress = int(value or 0)
            elif key == "milestones":
                self.milestones = [Milestone.from_dict(m) for m in (value or [])]
            else:
                setattr(self, key, value)

        self.validate()
        self.mark_as_updated()

        if self.assigned_to is not None and self.assigned_to != previous_assignee:
            self.announce_assignment()
        if completed_now:
            self.add_event(ProjectCompleted(self.id, self.title, self.created_by, self.assigned_to))
        return completed_now

    def _change_status(self, new_status: ProjectStatus) -> bool:
        if new_status == self.status:
            return False
        if new_status not in PROJECT_STATUS_TRANSITIONS[self.status]:
            raise ValidationError(
                f"Cannot move project from '{self.status.value}' to '{new_status.value}'", "status"
            )
        self.status = new_status
        if new_status == ProjectStatus.COMPLETED:
            self.progress = 100
            return True
        return False

    # Milestones

    def find_milestone(self, milestone_id: int) -> Milestone:
        for milestone in self.milestones:
            if milestone.id == milestone_id:
                return milestone
        raise EntityNotFoundError("Milestone", milestone_id)

    def update_milestone(self, milestone_id: int, actor_id: int, changes: Dict[str, Any]) -> Milestone:
        """
        Role-gated milestone edit.
        The assignee may only move status to in_progress or submitted;
        the creator may edit any field, including approval.
        """
        self.ensure_member(actor_id, "Not authorized to update milestones on this project")
        milestone = self.find_milestone(milestone_id)
        changes = {k: v for k, v in changes.items() if k in MILESTONE_MUTABLE_FIELDS}
        previous_status = milestone.status

        if not self.is_creator(actor_id):
            if set(changes) - {"status"}:
                raise AuthorizationError("Workers can only update milestone status")
            if "status" in changes:
                requested = _parse_enum(MilestoneStatus, changes["status"], "milestone status")
                if requested not in WORKER_MILESTONE_STATUSES:
                    raise AuthorizationError("Workers can only set milestones to in_progress or submitted")

        for key, value in changes.items():
            if key == "status":
                milestone.status = _parse_enum(MilestoneStatus, value, "milestone status")
            elif key == "deadline":
                milestone.deadline = to_naive_utc(value)
            elif key == "title":
                if not value:
                    raise ValidationError("Milestone title is required", "title")
                milestone.title = value
            else:
                setattr(milestone, key, value)
        milestone.mark_as_updated()
        self.mark_as_updated()

        if milestone.status != previous_status:
            if milestone.status == MilestoneStatus.SUBMITTED:
                self.add_event(MilestoneSubmitted(
                    self.id, self.title, self.created_by, self.assigned_to, milestone.id, milestone.title
                ))
            elif milestone.status == MilestoneStatus.APPROVED:
                self.add_event(MilestoneApproved(
                    self.id, self.title, self.created_by, self.assigned_to, milestone.id, milestone.title
                ))
        return milestone

    # Shared streams

    def post_message(self, sender_id: int, text: Optional[str]) -> ProjectMessage:
        self.ensure_member(sender_id, "Not authorized to message on this project")
        if not text or not text.strip():
            raise ValidationError("text is required", "text")
        message = ProjectMessage(project_id=self.id, sender_id=sender_id, text=text.strip())
        self.mark_as_updated()
        self.add_event(ProjectMessagePosted(
            self.id, self.title, self.created_by, self.assigned_to, sender_id, message.text
        ))
        return message

    def add_submission(self, uploader_id: int, url: Optional[str],
                       filename: Optional[str] = None, note: Optional[str] = None) -> Submission:
        self.ensure_member(uploader_id, "Not authorized to share files on this project")
        if not url:
            raise ValidationError("url is required", "url")
        filename = filename or url.rstrip("/").rsplit("/", 1)[-1] or "file"
        submission = Submission(
            project_id=self.id, uploaded_by=uploader_id, url=url, filename=filename, note=note
        )
        self.mark_as_updated()
        self.add_event(SubmissionAdded(
            self.id, self.title, self.created_by, self.assigned_to, uploader_id, filename
        ))
        return submission

    def ensure_can_remove_submission(self, actor_id: int) -> None:
        self.ensure_member(actor_id, "Not authorized to remove files on this project")

    def _log(self, event_type: ProjectEventType, actor_id: int, text: Optional[str],
             data: Dict[str, Any], related_event_id: Optional[int] = None) -> ProjectEvent:
        self.mark_as_updated()
        return ProjectEvent(
            project_id=self.id,
            type=event_type,
            created_by=actor_id,
            text=text,
            data=data,
            related_event_id=related_event_id,
        )

    # Quick actions

    def request_payment(self, worker_id: int, amount: Any, note: Optional[str] = None) -> ProjectEvent:
        self.ensure_assignee(worker_id, "Only the assigned worker can request payment")
        amount = to_decimal(amount if amount is not None else 0)
        if amount <= 0:
            raise ValidationError("amount must be greater than 0", "amount")
        event = self._log(
            ProjectEventType.PAYMENT_REQUEST,
            worker_id,
            note or "Payment requested",
            {"amount": float(amount), "currency": self.currency, "note": note},
        )
        self.add_event(PaymentRequested(self.id, self.title, self.created_by, self.assigned_to, amount))
        return event

    def extend_deadline(self, employer_id: int, new_deadline: Optional[datetime],
                        reason: Optional[str] = None) -> ProjectEvent:
        self.ensure_creator(employer_id, "Only the project creator can extend the deadline")
        if new_deadline is None:
            raise ValidationError("newDeadline is required", "new_deadline")
        previous = self.deadline
        self.deadline = to_naive_utc(new_deadline)
        event = self._log(
            ProjectEventType.DEADLINE_EXTENSION,
            employer_id,
            reason or "Deadline extended",
            {
                "previousDeadline": previous.isoformat() if previous else None,
                "newDeadline": self.deadline.isoformat(),
                "reason": reason,
            },
        )
        self.add_event(DeadlineExtended(self.id, self.title, self.created_by, self.assigned_to, self.deadline))
        return event

    def request_deadline_extension(self, worker_id: int, proposed_date: Optional[datetime],
                                   reason: Optional[str] = None) -> ProjectEvent:
        """Record a proposal only; the deadline moves when the creator approves."""
        self.ensure_assignee(worker_id, "Only the assigned worker can request an extension")
        if proposed_date is None:
            raise ValidationError("proposedDate is required", "proposed_date")
        proposed_date = to_naive_utc(proposed_date)
        event = self._log(
            ProjectEventType.DEADLINE_EXTENSION,
            worker_id,
            reason or "Deadline extension requested",
            {"proposedDate": proposed_date.isoformat(), "reason": reason, "requested": True},
        )
        self.add_event(DeadlineExtensionRequested(
            self.id, self.title, self.created_by, self.assigned_to, proposed_date
        ))
        return event

    def approve_deadline_extension(
        self,
        employer_id: int,
        request: ProjectEvent,
        override_date: Optional[datetime] = None,
    ) -> Tuple[EventResolution, ProjectEvent]:
        """
        Apply a requested extension.

        Returns:
            The resolution for the original request and the confirmation event
        """
        self.ensure_creator(employer_id, "Only the project creator can approve an extension")
        # Only worker requests qualify, not extensions or confirmations logged by the employer
        if (request.project_id != self.id
                or request.type != ProjectEventType.DEADLINE_EXTENSION
                or not request.data.get("requested")):
            raise EntityNotFoundError("Deadline extension request", request.id)
        if request.is_resolved:
            raise ConcurrencyConflictError("Deadline extension already approved")

        new_deadline = to_naive_utc(override_date)
        if new_deadline is None and request.data.get("proposedDate"):
            new_deadline = datetime.fromisoformat(request.data["proposedDate"])
        if new_deadline is None:
            raise ValidationError("No proposed date to apply", "new_deadline")

        previous = self.deadline
        self.deadline = new_deadline
        approved_at = datetime.utcnow()
        resolution = EventResolution(
            event_id=request.id,
            kind=ResolutionKind.APPROVED,
            resolved_by=employer_id,
            data={
                "approved": True,
                "approvedAt": approved_at.isoformat(),
                "approvedDate": new_deadline.isoformat(),
            },
        )
        confirmation = self._log(
            ProjectEventType.DEADLINE_EXTENSION,
            employer_id,
            "Deadline extension approved",
            {
                "previousDeadline": previous.isoformat() if previous else None,
                "newDeadline": new_deadline.isoformat(),
                "approvedEventId": request.id,
                "approved": True,
            },
            related_event_id=request.id,
        )
        self.add_event(DeadlineExtensionApproved(
            self.id, self.title, self.created_by, self.assigned_to, new_deadline
        ))
        return resolution, confirmation

    def contact_support(self, actor_id: int, text: Optional[str]) -> ProjectEvent:
        self.ensure_member(actor_id, "Not authorized to contact support for this project")
        if not text or not text.strip():
            raise ValidationError("text is required", "text")
        event = self._log(ProjectEventType.SUPPORT, actor_id, text.strip(), {"status": "open"})
        self.add_event(SupportRequested(self.id, self.title, self.created_by, self.assigned_to, actor_id))
        return event

    def resolve_payment_request(self, request: ProjectEvent, employer_id: int,
                                payment_id: int, amount: Decimal) -> Optional[EventResolution]:
        """Link a payment to the request it settles; unrelated events are ignored."""
        if request.project_id != self.id or request.type != ProjectEventType.PAYMENT_REQUEST:
            return None
        if request.is_resolved:
            raise ConcurrencyConflictError("Payment request already paid")
        return EventResolution(
            event_id=request.id,
            kind=ResolutionKind.PAID,
            resolved_by=employer_id,
            data={
                "paid": True,
                "paidAt": datetime.utcnow().isoformat(),
                "paymentId": payment_id,
                "paidAmount": float(amount),
            },
        )
