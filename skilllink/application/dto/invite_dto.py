"""
Invite and application DTOs.
"""

from typing import Optional

from skilllink.domain.models.invite import Invite
from .base_dto import RequestDTO, ResponseDTO, PartySummaryDTO
from .job_dto import JobSummaryDTO


class CreateInviteRequestDTO(RequestDTO):
    job_id: Optional[int] = None
    worker_id: Optional[int] = None
    message: Optional[str] = None


class InviteResponseDTO(ResponseDTO):
    employer_id: int
    worker_id: int
    job_id: int
    type: str
    status: str
    message: Optional[str] = None
    job: Optional[JobSummaryDTO] = None
    employer: Optional[PartySummaryDTO] = None
    worker: Optional[PartySummaryDTO] = None

    @classmethod
    def from_domain(cls, invite: Invite, job=None, employer=None, worker=None) -> "InviteResponseDTO":
        return cls(
            id=invite.id,
            employer_id=invite.employer_id,
            worker_id=invite.worker_id,
            job_id=invite.job_id,
            type=invite.type.value,
            status=invite.status.value,
            message=invite.message,
            job=JobSummaryDTO.from_domain(job) if job else None,
            employer=PartySummaryDTO.from_domain(employer) if employer else None,
            worker=PartySummaryDTO.from_domain(worker) if worker else None,
            created_at=invite.created_at,
            updated_at=invite.updated_at,
        )
