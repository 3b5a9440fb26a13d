"""
Project DTOs for the application layer.
Data Transfer Objects for projects and their child streams.
"""

from typing import Optional, List, Dict, Any
from datetime import datetime

from pydantic import Field

from skilllink.domain.models.project import (
    Project,
    Milestone,
    ProjectMessage,
    Submission,
    ProjectEvent,
)
from .base_dto import BaseDTO, RequestDTO, ResponseDTO, PartySummaryDTO


# Request DTOs
class MilestoneRequestDTO(RequestDTO):
    title: Optional[str] = None
    description: Optional[str] = None
    deadline: Optional[datetime] = None
    status: Optional[str] = None


class CreateProjectRequestDTO(RequestDTO):
    title: Optional[str] = None
    category: Optional[str] = None
    budget: Optional[float] = None
    currency: Optional[str] = None
    deadline: Optional[datetime] = None
    assigned_to: Optional[int] = None
    job_id: Optional[int] = None
    milestones: Optional[List[MilestoneRequestDTO]] = None


class UpdateProjectRequestDTO(RequestDTO):
    """Whitelisted partial update; other keys are dropped."""

    title: Optional[str] = None
    category: Optional[str] = None
    budget: Optional[float] = None
    currency: Optional[str] = None
    deadline: Optional[datetime] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    status: Optional[str] = None
    assigned_to: Optional[int] = None
    milestones: Optional[List[MilestoneRequestDTO]] = None


class MessageRequestDTO(RequestDTO):
    text: Optional[str] = None


class SubmissionRequestDTO(RequestDTO):
    url: Optional[str] = None
    filename: Optional[str] = None
    note: Optional[str] = None


class RequestPaymentDTO(RequestDTO):
    amount: Optional[float] = None
    note: Optional[str] = None


class ExtendDeadlineDTO(RequestDTO):
    new_deadline: Optional[datetime] = None
    reason: Optional[str] = None


class DeadlineExtensionRequestDTO(RequestDTO):
    proposed_date: Optional[datetime] = None
    reason: Optional[str] = None


class ApproveDeadlineExtensionDTO(RequestDTO):
    new_deadline: Optional[datetime] = None


class SupportRequestDTO(RequestDTO):
    text: Optional[str] = None


# Response DTOs
class MilestoneResponseDTO(ResponseDTO):
    title: str
    description: Optional[str] = None
    deadline: Optional[datetime] = None
    status: str

    @classmethod
    def from_domain(cls, milestone: Milestone) -> "MilestoneResponseDTO":
        return cls(
            id=milestone.id,
            title=milestone.title,
            description=milestone.description,
            deadline=milestone.deadline,
            status=milestone.status.value,
            created_at=milestone.created_at,
            updated_at=milestone.updated_at,
        )


class ProjectResponseDTO(ResponseDTO):
    title: str
    category: Optional[str] = None
    budget: float
    currency: str
    deadline: Optional[datetime] = None
    progress: int
    status: str
    created_by: int
    assigned_to: Optional[int] = None
    job_id: Optional[int] = None
    version: int
    milestones: List[MilestoneResponseDTO] = []
    creator: Optional[PartySummaryDTO] = None
    assignee: Optional[PartySummaryDTO] = None

    @classmethod
    def from_domain(cls, project: Project, users: Optional[Dict[int, Any]] = None) -> "ProjectResponseDTO":
        users = users or {}
        creator = users.get(project.created_by)
        assignee = users.get(project.assigned_to) if project.assigned_to else None
        return cls(
            id=project.id,
            title=project.title,
            category=project.category,
            budget=float(project.budget),
            currency=project.currency,
            deadline=project.deadline,
            progress=project.progress,
            status=project.status.value,
            created_by=project.created_by,
            assigned_to=project.assigned_to,
            job_id=project.job_id,
            version=project.version,
            milestones=[MilestoneResponseDTO.from_domain(m) for m in project.milestones],
            creator=PartySummaryDTO.from_domain(creator) if creator else None,
            assignee=PartySummaryDTO.from_domain(assignee) if assignee else None,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class MessageResponseDTO(ResponseDTO):
    project_id: int
    sender: int
    text: str

    @classmethod
    def from_domain(cls, message: ProjectMessage) -> "MessageResponseDTO":
        return cls(
            id=message.id,
            project_id=message.project_id,
            sender=message.sender_id,
            text=message.text,
            created_at=message.created_at,
        )


class SubmissionResponseDTO(ResponseDTO):
    project_id: int
    uploaded_by: int
    url: str
    filename: Optional[str] = None
    note: Optional[str] = None
    uploaded_at: datetime

    @classmethod
    def from_domain(cls, submission: Submission) -> "SubmissionResponseDTO":
        return cls(
            id=submission.id,
            project_id=submission.project_id,
            uploaded_by=submission.uploaded_by,
            url=submission.url,
            filename=submission.filename,
            note=submission.note,
            uploaded_at=submission.uploaded_at,
            created_at=submission.created_at,
        )


class ProjectEventResponseDTO(ResponseDTO):
    """Event with its resolution merged into `data`."""

    project_id: int
    type: str
    created_by: int
    text: Optional[str] = None
    data: Dict[str, Any] = {}
    related_event_id: Optional[int] = None
    resolved: bool = False

    @classmethod
    def from_domain(cls, event: ProjectEvent) -> "ProjectEventResponseDTO":
        return cls(
            id=event.id,
            project_id=event.project_id,
            type=event.type.value,
            created_by=event.created_by,
            text=event.text,
            data=event.payload,
            related_event_id=event.related_event_id,
            resolved=event.is_resolved,
            created_at=event.created_at,
        )
