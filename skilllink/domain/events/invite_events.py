"""
Invite and application domain events.
"""

from skilllink.domain.events.base import DomainEvent


class _InviteEvent(DomainEvent):
    """Common payload for invite ledger events."""

    def __init__(self, invite_id: int, job_id: int, job_title: str, employer_id: int, worker_id: int):
        super().__init__()
        self.invite_id = invite_id
        self.job_id = job_id
        self.job_title = job_title
        self.employer_id = employer_id
        self.worker_id = worker_id


class InviteCreated(_InviteEvent):
    """Employer invited a worker to a job."""

    @property
    def event_name(self) -> str:
        return "invite.created"


class InviteAccepted(_InviteEvent):
    """Worker accepted an invite and a project was opened."""

    def __init__(self, invite_id: int, job_id: int, job_title: str, employer_id: int,
                 worker_id: int, project_id: int):
        super().__init__(invite_id, job_id, job_title, employer_id, worker_id)
        self.project_id = project_id

    @property
    def event_name(self) -> str:
        return "invite.accepted"


class InviteDeclined(_InviteEvent):

    @property
    def event_name(self) -> str:
        return "invite.declined"


class InviteApproved(_InviteEvent):
    """Employer approved a previously accepted invite."""

    @property
    def event_name(self) -> str:
        return "invite.approved"


class ApplicationSubmitted(_InviteEvent):

    @property
    def event_name(self) -> str:
        return "application.submitted"


class ApplicationApproved(_InviteEvent):

    @property
    def event_name(self) -> str:
        return "application.approved"


class ApplicationDeclined(_InviteEvent):

    @property
    def event_name(self) -> str:
        return "application.declined"
