"""
Job use cases for the application layer.
Implements business logic for job postings.
"""

import logging
from typing import List

from skilllink.application.use_cases.base_use_case import CommandUseCase, QueryUseCase
from skilllink.application.dto.job_dto import (
    CreateJobRequestDTO,
    UpdateJobRequestDTO,
    JobResponseDTO,
)
from skilllink.domain.models.base import AuthorizationError, EntityNotFoundError
from skilllink.domain.models.job import Job


logger = logging.getLogger(__name__)


class _JobAccess:
    """Shared lookups for job use cases."""

    def _get_job(self, job_id: int) -> Job:
        job = self.uow.jobs.get_by_id(job_id)
        if not job:
            raise EntityNotFoundError("Job")
        return job

    def _get_owned_job(self, job_id: int, user_id: int) -> Job:
        job = self._get_job(job_id)
        if job.employer_id != user_id:
            raise AuthorizationError("Not authorized")
        return job

    def _to_dto(self, job: Job) -> JobResponseDTO:
        return JobResponseDTO.from_domain(job, self.uow.users.get_by_id(job.employer_id))


class CreateJobUseCase(_JobAccess, CommandUseCase):
    """Use case for posting a new job."""

    async def execute(self, user_id: int, request: CreateJobRequestDTO) -> JobResponseDTO:
        employer = self._load_user(user_id)
        employer.require_employer("Only employers can post jobs")

        budget = request.budget_range
        job = Job.create(
            employer_id=employer.id,
            title=request.title,
            description=request.description,
            budget_min=budget.min if budget else None,
            budget_max=budget.max if budget else None,
            timeline=request.timeline,
            required_skills=request.required_skills,
        )
        job = self.uow.jobs.save(job)
        await self._commit()

        logger.info(f"Employer {employer.id} posted job {job.id}")
        return JobResponseDTO.from_domain(job, employer)


class ListMyJobsUseCase(QueryUseCase):
    """Jobs authored by the caller, newest first."""

    async def execute(self, user_id: int) -> List[JobResponseDTO]:
        employer = self.uow.users.get_by_id(user_id)
        jobs = self.uow.jobs.list_by_employer(user_id)
        return [JobResponseDTO.from_domain(job, employer) for job in jobs]


class GetJobUseCase(_JobAccess, QueryUseCase):

    async def execute(self, job_id: int) -> JobResponseDTO:
        return self._to_dto(self._get_job(job_id))


class UpdateJobUseCase(_JobAccess, CommandUseCase):
    """Owner-only partial update of a job posting."""

    async def execute(self, user_id: int, job_id: int, request: UpdateJobRequestDTO) -> JobResponseDTO:
        job = self._get_owned_job(job_id, user_id)
        job.update(request.changes())
        job = self.uow.jobs.save(job)
        await self._commit()
        return self._to_dto(job)


class DeleteJobUseCase(_JobAccess, CommandUseCase):

    async def execute(self, user_id: int, job_id: int) -> None:
        job = self._get_owned_job(job_id, user_id)
        self.uow.jobs.delete(job.id)
        await self._commit()
        logger.info(f"Job {job_id} deleted by {user_id}")
