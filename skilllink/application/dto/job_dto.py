"""
Job DTOs for the application layer.
"""

from typing import Optional, List

from skilllink.domain.models.job import Job
from .base_dto import BaseDTO, RequestDTO, ResponseDTO, PartySummaryDTO


class BudgetRangeDTO(BaseDTO):
    min: Optional[float] = None
    max: Optional[float] = None


class CreateJobRequestDTO(RequestDTO):
    title: Optional[str] = None
    description: Optional[str] = None
    budget_range: Optional[BudgetRangeDTO] = None
    timeline: Optional[str] = None
    required_skills: Optional[List[str] | str] = None


class UpdateJobRequestDTO(CreateJobRequestDTO):
    is_active: Optional[bool] = None


class ApplyToJobRequestDTO(RequestDTO):
    message: Optional[str] = None


class JobResponseDTO(ResponseDTO):
    employer_id: int
    title: str
    description: str
    budget_range: BudgetRangeDTO
    timeline: Optional[str] = None
    required_skills: List[str] = []
    is_active: bool
    employer: Optional[PartySummaryDTO] = None

    @classmethod
    def from_domain(cls, job: Job, employer=None) -> "JobResponseDTO":
        return cls(
            id=job.id,
            employer_id=job.employer_id,
            title=job.title,
            description=job.description,
            budget_range=BudgetRangeDTO(**job.budget_range.to_dict()),
            timeline=job.timeline,
            required_skills=job.required_skills,
            is_active=job.is_active,
            employer=PartySummaryDTO.from_domain(employer) if employer else None,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )


class JobSummaryDTO(BaseDTO):
    id: int
    title: str
    timeline: Optional[str] = None
    budget_range: Optional[BudgetRangeDTO] = None
    required_skills: List[str] = []
    is_active: bool = True

    @classmethod
    def from_domain(cls, job: Job) -> "JobSummaryDTO":
        return cls(
            id=job.id,
            title=job.title,
            timeline=job.timeline,
            budget_range=BudgetRangeDTO(**job.budget_range.to_dict()),
            required_skills=job.required_skills,
            is_active=job.is_active,
        )
