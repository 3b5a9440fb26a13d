"""
Invite and application use cases.
Every status change goes through the Invite transition table; accepting an
invite opens the Project and closes the Job in the same transaction.
"""

import logging
from typing import List, Optional, Dict, Any, Tuple

from skilllink.application.use_cases.base_use_case import CommandUseCase, QueryUseCase
from skilllink.application.dto.invite_dto import CreateInviteRequestDTO, InviteResponseDTO
from skilllink.application.dto.job_dto import ApplyToJobRequestDTO
from skilllink.application.dto.project_dto import ProjectResponseDTO
from skilllink.domain.events.invite_events import (
    InviteCreated,
    InviteAccepted,
    InviteDeclined,
    InviteApproved,
    ApplicationSubmitted,
    ApplicationApproved,
    ApplicationDeclined,
)
from skilllink.domain.models.base import (
    ValidationError,
    AuthorizationError,
    EntityNotFoundError,
    DuplicateEntityError,
)
from skilllink.domain.models.invite import (
    Invite,
    InviteType,
    InviteAction,
    OPEN_APPLICATION_STATUSES,
)
from skilllink.domain.models.job import Job
from skilllink.domain.models.project import Project
from skilllink.domain.models.user import AccountType


logger = logging.getLogger(__name__)


class _InviteAccess:
    """Shared lookups and serialization for invite use cases."""

    not_found_label = "Invite"

    def _get_invite(self, invite_id: int) -> Invite:
        invite = self.uow.invites.get_by_id(invite_id)
        if not invite:
            raise EntityNotFoundError(self.not_found_label)
        return invite

    def _job_title(self, invite: Invite, job: Optional[Job] = None) -> str:
        job = job or self.uow.jobs.get_by_id(invite.job_id)
        return job.title if job else "Job"

    def _event_args(self, invite: Invite, job: Optional[Job] = None) -> Tuple:
        return invite.id, invite.job_id, self._job_title(invite, job), invite.employer_id, invite.worker_id

    def _to_dtos(self, invites: List[Invite]) -> List[InviteResponseDTO]:
        jobs = self.uow.jobs.get_many({i.job_id for i in invites})
        users = self._users_by_id([i.employer_id for i in invites] + [i.worker_id for i in invites])
        return [
            InviteResponseDTO.from_domain(
                invite,
                job=jobs.get(invite.job_id),
                employer=users.get(invite.employer_id),
                worker=users.get(invite.worker_id),
            )
            for invite in invites
        ]

    def _to_dto(self, invite: Invite) -> InviteResponseDTO:
        return self._to_dtos([invite])[0]


class CreateInviteUseCase(_InviteAccess, CommandUseCase):
    """Employer invites a worker to one of their jobs."""

    async def execute(self, user_id: int, request: CreateInviteRequestDTO) -> InviteResponseDTO:
        employer = self._load_user(user_id)
        employer.require_employer("Only employers can invite")
        if not request.job_id or not request.worker_id:
            raise ValidationError("jobId and workerId are required")

        job = self.uow.jobs.get_by_id(request.job_id)
        if not job or job.employer_id != employer.id:
            raise ValidationError("Invalid job or not your job", "job_id")

        worker = self.uow.users.get_by_id(request.worker_id)
        if not worker or not worker.is_worker or not worker.is_active:
            raise EntityNotFoundError("Worker")

        invite = Invite.new_invite(employer.id, worker.id, job.id, request.message)
        invite = self.uow.invites.save(invite)
        self.collect(InviteCreated(*self._event_args(invite, job)))
        await self._commit()

        logger.info(f"Invite {invite.id} created for worker {worker.id} on job {job.id}")
        return InviteResponseDTO.from_domain(invite, job=job, employer=employer, worker=worker)


class ApplyToJobUseCase(_InviteAccess, CommandUseCase):
    """Worker applies to an open job."""

    async def execute(self, user_id: int, job_id: int, request: ApplyToJobRequestDTO) -> InviteResponseDTO:
        worker = self._load_user(user_id)
        worker.require_worker("Only skilled workers can apply to jobs")

        job = self.uow.jobs.get_by_id(job_id)
        if not job:
            raise EntityNotFoundError("Job")
        if not job.is_active:
            raise ValidationError("Job is not accepting applications", "job_id")

        if self.uow.invites.find_open_application(worker.id, job.id, OPEN_APPLICATION_STATUSES):
            raise DuplicateEntityError("Application", "job_id", job.id, "You have already applied to this job")

        application = Invite.new_application(job.employer_id, worker.id, job.id, request.message)
        application = self.uow.invites.save(application)
        self.collect(ApplicationSubmitted(*self._event_args(application, job)))
        await self._commit()

        logger.info(f"Worker {worker.id} applied to job {job.id}")
        return self._to_dto(application)


class AcceptInviteUseCase(_InviteAccess, CommandUseCase):
    """
    Worker accepts an employer invite.
    The invite is approved, a Project is opened for the pair and the Job is
    closed in one commit.
    """

    async def execute(self, user_id: int, invite_id: int) -> Tuple[InviteResponseDTO, ProjectResponseDTO]:
        invite = self._get_invite(invite_id)
        if not invite.is_invite:
            raise ValidationError("Only employer invites can be accepted by worker")
        if invite.worker_id != user_id:
            raise AuthorizationError("Not authorized to accept this invite")

        job = self.uow.jobs.get_by_id(invite.job_id)
        invite.respond(user_id, InviteAction.ACCEPT)
        if not job:
            raise EntityNotFoundError("Linked job")

        project = Project.create(
            created_by=invite.employer_id,
            title=job.title or "Project",
            category=job.timeline or "General",
            budget=job.budget_range.ceiling,
            currency="NGN",
            assigned_to=invite.worker_id,
            job_id=job.id,
        )
        job.close()

        self.uow.invites.save(invite)
        project = self.uow.projects.save(project)
        self.uow.jobs.save(job)
        project.announce_assignment()

        self.collect(InviteAccepted(*self._event_args(invite, job), project.id), project)
        await self._commit()

        logger.info(f"Invite {invite.id} accepted; project {project.id} opened, job {job.id} closed")
        users = self._users_by_id([project.created_by, project.assigned_to])
        return self._to_dto(invite), ProjectResponseDTO.from_domain(project, users)


class DeclineInviteUseCase(_InviteAccess, CommandUseCase):

    async def execute(self, user_id: int, invite_id: int) -> InviteResponseDTO:
        invite = self._get_invite(invite_id)
        if not invite.is_invite:
            raise ValidationError("Only employer invites can be declined by worker")
        if invite.worker_id != user_id:
            raise AuthorizationError("Not authorized to decline this invite")

        invite.respond(user_id, InviteAction.DECLINE)
        self.uow.invites.save(invite)
        self.collect(InviteDeclined(*self._event_args(invite)))
        await self._commit()
        return self._to_dto(invite)


class ApproveInviteOrApplicationUseCase(_InviteAccess, CommandUseCase):
    """
    Employer approves an accepted invite or an applied application.
    Approval neither opens a Project nor closes the Job.
    """

    async def execute(self, user_id: int, invite_id: int) -> InviteResponseDTO:
        invite = self._get_invite(invite_id)
        invite.approve(user_id)
        self.uow.invites.save(invite)

        event_cls = ApplicationApproved if invite.is_application else InviteApproved
        self.collect(event_cls(*self._event_args(invite)))
        await self._commit()

        logger.info(f"{invite.type.value.capitalize()} {invite.id} approved by employer {user_id}")
        return self._to_dto(invite)


class DeclineApplicationUseCase(_InviteAccess, CommandUseCase):

    not_found_label = "Application"

    async def execute(self, user_id: int, invite_id: int) -> InviteResponseDTO:
        invite = self._get_invite(invite_id)
        invite.decline_application(user_id)
        self.uow.invites.save(invite)
        self.collect(ApplicationDeclined(*self._event_args(invite)))
        await self._commit()
        return self._to_dto(invite)


class ListInvitesUseCase(_InviteAccess, QueryUseCase):
    """Employers see their employer-side rows, workers their worker-side rows."""

    async def execute(self, user_id: int, invite_type: Optional[str] = None,
                      status: Optional[str] = None, job_id: Optional[int] = None) -> List[InviteResponseDTO]:
        user = self._load_user(user_id)
        if invite_type is not None:
            try:
                invite_type = InviteType(invite_type)
            except ValueError:
                # No row carries an unknown type
                return []

        side: Dict[str, Any] = (
            {"employer_id": user.id} if user.account_type == AccountType.EMPLOYER
            else {"worker_id": user.id}
        )
        invites = self.uow.invites.list(
            invite_type=invite_type,
            statuses=[status] if status else None,
            job_id=job_id,
            **side,
        )
        return self._to_dtos(invites)


class GetInviteUseCase(_InviteAccess, QueryUseCase):

    async def execute(self, user_id: int, invite_id: int) -> InviteResponseDTO:
        invite = self._get_invite(invite_id)
        invite.ensure_party(user_id)
        return self._to_dto(invite)
