"""
Project lifecycle domain events.
Raised by the Project aggregate and turned into notifications by the
infrastructure event handlers.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from skilllink.domain.events.base import DomainEvent


class ProjectLifecycleEvent(DomainEvent):
    """Base payload shared by every project event."""

    def __init__(self, project_id: int, project_title: str, employer_id: int, worker_id: Optional[int]):
        super().__init__()
        self.project_id = project_id
        self.project_title = project_title
        self.employer_id = employer_id
        self.worker_id = worker_id


class ProjectAssigned(ProjectLifecycleEvent):
    """A worker was assigned to the project (on create or update)."""

    @property
    def event_name(self) -> str:
        return "project.assigned"


class ProjectCompleted(ProjectLifecycleEvent):

    @property
    def event_name(self) -> str:
        return "project.completed"


class MilestoneSubmitted(ProjectLifecycleEvent):

    def __init__(self, project_id: int, project_title: str, employer_id: int, worker_id: Optional[int],
                 milestone_id: int, milestone_title: str):
        super().__init__(project_id, project_title, employer_id, worker_id)
        self.milestone_id = milestone_id
        self.milestone_title = milestone_title

    @property
    def event_name(self) -> str:
        return "project.milestone.submitted"


class MilestoneApproved(MilestoneSubmitted):

    @property
    def event_name(self) -> str:
        return "project.milestone.approved"


class ProjectMessagePosted(ProjectLifecycleEvent):
    """A member posted a message; the other member is the recipient."""

    def __init__(self, project_id: int, project_title: str, employer_id: int, worker_id: Optional[int],
                 sender_id: int, text: str):
        super().__init__(project_id, project_title, employer_id, worker_id)
        self.sender_id = sender_id
        self.text = text

    @property
    def event_name(self) -> str:
        return "project.message.posted"


class SubmissionAdded(ProjectLifecycleEvent):

    def __init__(self, project_id: int, project_title: str, employer_id: int, worker_id: Optional[int],
                 uploader_id: int, filename: str):
        super().__init__(project_id, project_title, employer_id, worker_id)
        self.uploader_id = uploader_id
        self.filename = filename

    @property
    def event_name(self) -> str:
        return "project.submission.added"


class PaymentRequested(ProjectLifecycleEvent):

    def __init__(self, project_id: int, project_title: str, employer_id: int, worker_id: Optional[int],
                 amount: Decimal):
        super().__init__(project_id, project_title, employer_id, worker_id)
        self.amount = amount

    @property
    def event_name(self) -> str:
        return "project.payment.requested"


class DeadlineExtended(ProjectLifecycleEvent):
    """Employer moved the deadline directly."""

    def __init__(self, project_id: int, project_title: str, employer_id: int, worker_id: Optional[int],
                 deadline: datetime):
        super().__init__(project_id, project_title, employer_id, worker_id)
        self.deadline = deadline

    @property
    def event_name(self) -> str:
        return "project.deadline.extended"


class DeadlineExtensionRequested(DeadlineExtended):

    @property
    def event_name(self) -> str:
        return "project.deadline.extension_requested"


class DeadlineExtensionApproved(DeadlineExtended):

    @property
    def event_name(self) -> str:
        return "project.deadline.extension_approved"


class SupportRequested(ProjectLifecycleEvent):

    def __init__(self, project_id: int, project_title: str, employer_id: int, worker_id: Optional[int],
                 requester_id: int):
        super().__init__(project_id, project_title, employer_id, worker_id)
        self.requester_id = requester_id

    @property
    def event_name(self) -> str:
        return "project.support.requested"
