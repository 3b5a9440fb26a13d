"""
Project use cases for the application layer.
Implements business logic for project operations.
"""

import logging
from typing import List, Optional, Tuple, Dict, Any

from skilllink.config import settings
from skilllink.application.use_cases.base_use_case import (
    CommandUseCase,
    QueryUseCase,
    PaginatedQueryUseCase,
)
from skilllink.application.dto.base_dto import PaginationDTO
from skilllink.application.dto.project_dto import (
    CreateProjectRequestDTO,
    UpdateProjectRequestDTO,
    MilestoneRequestDTO,
    MessageRequestDTO,
    SubmissionRequestDTO,
    RequestPaymentDTO,
    ExtendDeadlineDTO,
    DeadlineExtensionRequestDTO,
    ApproveDeadlineExtensionDTO,
    SupportRequestDTO,
    ProjectResponseDTO,
    MilestoneResponseDTO,
    MessageResponseDTO,
    SubmissionResponseDTO,
    ProjectEventResponseDTO,
)
from skilllink.domain.models.base import EntityNotFoundError
from skilllink.domain.models.project import Project, ProjectEvent


logger = logging.getLogger(__name__)


class _ProjectAccess:
    """Shared lookups for project use cases."""

    def _get_project(self, project_id: int) -> Project:
        project = self.uow.projects.get_by_id(project_id)
        if not project:
            raise EntityNotFoundError("Project")
        return project

    def _get_member_project(self, project_id: int, user_id: int,
                            message: str = "Not authorized to access this project") -> Project:
        project = self._get_project(project_id)
        project.ensure_member(user_id, message)
        return project

    def _require_active_worker(self, worker_id: int) -> None:
        worker = self.uow.users.get_by_id(worker_id)
        if not worker or not worker.is_worker or not worker.is_active:
            raise EntityNotFoundError("Worker")

    def _to_dto(self, project: Project) -> ProjectResponseDTO:
        users = self._users_by_id([project.created_by, project.assigned_to])
        return ProjectResponseDTO.from_domain(project, users)

    def _to_dtos(self, projects: List[Project]) -> List[ProjectResponseDTO]:
        ids = [p.created_by for p in projects] + [p.assigned_to for p in projects]
        users = self._users_by_id(ids)
        return [ProjectResponseDTO.from_domain(p, users) for p in projects]


def _milestone_dicts(milestones: Optional[List[MilestoneRequestDTO]]) -> List[Dict[str, Any]]:
    return [m.model_dump(exclude_unset=True) for m in (milestones or [])]


# Project CRUD

class ListProjectsUseCase(_ProjectAccess, QueryUseCase):
    """Projects the user created or is assigned to, newest update first."""

    async def execute(self, user_id: int) -> List[ProjectResponseDTO]:
        return self._to_dtos(self.uow.projects.list_for_member(user_id))


class GetProjectUseCase(_ProjectAccess, QueryUseCase):

    async def execute(self, user_id: int, project_id: int) -> ProjectResponseDTO:
        project = self._get_member_project(project_id, user_id, "Not authorized to view this project")
        return self._to_dto(project)


class CreateProjectUseCase(_ProjectAccess, CommandUseCase):
    """Use case for creating a new project."""

    async def execute(self, user_id: int, request: CreateProjectRequestDTO) -> ProjectResponseDTO:
        employer = self._load_user(user_id)
        employer.require_employer("Only employers can create projects")
        if request.assigned_to is not None:
            self._require_active_worker(request.assigned_to)

        project = Project.create(
            created_by=employer.id,
            title=request.title,
            category=request.category,
            budget=request.budget,
            currency=request.currency or settings.default_currency,
            deadline=request.deadline,
            assigned_to=request.assigned_to,
            job_id=request.job_id,
            milestones=_milestone_dicts(request.milestones),
        )
        project = self.uow.projects.save(project)
        project.announce_assignment()
        self.collect(project)
        await self._commit()

        logger.info(f"Project {project.id} created by employer {employer.id}")
        return self._to_dto(project)


class UpdateProjectUseCase(_ProjectAccess, CommandUseCase):
    """
    Creator-only partial update.
    Moving the project into `completed` completes the matching invite
    records and closes the linked job in the same commit.
    """

    async def execute(self, user_id: int, project_id: int, request: UpdateProjectRequestDTO) -> ProjectResponseDTO:
        project = self._get_project(project_id)
        changes = request.changes()
        if "milestones" in changes:
            changes["milestones"] = _milestone_dicts(request.milestones)
        if changes.get("assigned_to") is not None and project.is_creator(user_id):
            self._require_active_worker(changes["assigned_to"])

        completed_now = project.apply_update(user_id, changes)
        project = self.uow.projects.save(project)
        if completed_now:
            self._complete_engagement(project)

        self.collect(project)
        await self._commit()
        return self._to_dto(project)

    def _complete_engagement(self, project: Project) -> None:
        if project.job_id is None:
            return
        if project.assigned_to is not None:
            for invite in self.uow.invites.find_by_job_and_worker(project.job_id, project.assigned_to):
                if invite.complete():
                    self.uow.invites.save(invite)
        job = self.uow.jobs.get_by_id(project.job_id)
        if job and job.is_active:
            job.close()
            self.uow.jobs.save(job)
        logger.info(f"Project {project.id} completed; job {project.job_id} closed")


class UpdateMilestoneUseCase(_ProjectAccess, CommandUseCase):
    """Role-gated milestone edit; returns the project and the edited milestone."""

    async def execute(self, user_id: int, project_id: int, milestone_id: int,
                      request: MilestoneRequestDTO) -> Tuple[ProjectResponseDTO, MilestoneResponseDTO]:
        project = self._get_project(project_id)
        milestone = project.update_milestone(milestone_id, user_id, request.changes())
        project = self.uow.projects.save(project)
        self.collect(project)
        await self._commit()
        return self._to_dto(project), MilestoneResponseDTO.from_domain(milestone)


# Messages

class ListMessagesUseCase(_ProjectAccess, PaginatedQueryUseCase):

    async def execute(self, user_id: int, project_id: int, page: Optional[int] = None,
                      limit: Optional[int] = None) -> Tuple[List[MessageResponseDTO], PaginationDTO]:
        self._get_member_project(project_id, user_id, "Not authorized to view messages on this project")
        page, limit = self._page(page, limit)
        messages, total = self.uow.projects.list_messages(project_id, page, limit)
        return [MessageResponseDTO.from_domain(m) for m in messages], PaginationDTO(page=page, limit=limit, total=total)


class AddMessageUseCase(_ProjectAccess, CommandUseCase):

    async def execute(self, user_id: int, project_id: int, request: MessageRequestDTO) -> MessageResponseDTO:
        project = self._get_project(project_id)
        message = project.post_message(user_id, request.text)
        message = self.uow.projects.add_message(message)
        self.uow.projects.save(project)
        self.collect(project)
        await self._commit()
        return MessageResponseDTO.from_domain(message)


# Submissions

class ListSubmissionsUseCase(_ProjectAccess, PaginatedQueryUseCase):

    async def execute(self, user_id: int, project_id: int, page: Optional[int] = None,
                      limit: Optional[int] = None) -> Tuple[List[SubmissionResponseDTO], PaginationDTO]:
        self._get_member_project(project_id, user_id, "Not authorized to view files on this project")
        page, limit = self._page(page, limit)
        submissions, total = self.uow.projects.list_submissions(project_id, page, limit)
        return (
            [SubmissionResponseDTO.from_domain(s) for s in submissions],
            PaginationDTO(page=page, limit=limit, total=total),
        )


class AddSubmissionUseCase(_ProjectAccess, CommandUseCase):

    async def execute(self, user_id: int, project_id: int, request: SubmissionRequestDTO) -> SubmissionResponseDTO:
        project = self._get_project(project_id)
        submission = project.add_submission(user_id, request.url, request.filename, request.note)
        submission = self.uow.projects.add_submission(submission)
        self.uow.projects.save(project)
        self.collect(project)
        await self._commit()
        return SubmissionResponseDTO.from_domain(submission)


class DeleteSubmissionUseCase(_ProjectAccess, CommandUseCase):

    async def execute(self, user_id: int, project_id: int, submission_id: int) -> None:
        project = self._get_project(project_id)
        project.ensure_can_remove_submission(user_id)
        submission = self.uow.projects.get_submission(project_id, submission_id)
        if not submission:
            raise EntityNotFoundError("Submission")
        self.uow.projects.delete_submission(submission.id)
        await self._commit()


# Events

class ListEventsUseCase(_ProjectAccess, PaginatedQueryUseCase):

    async def execute(self, user_id: int, project_id: int, page: Optional[int] = None,
                      limit: Optional[int] = None) -> Tuple[List[ProjectEventResponseDTO], PaginationDTO]:
        self._get_member_project(project_id, user_id, "Not authorized to view events on this project")
        page, limit = self._page(page, limit)
        events, total = self.uow.projects.list_events(project_id, page, limit)
        return (
            [ProjectEventResponseDTO.from_domain(e) for e in events],
            PaginationDTO(page=page, limit=limit, total=total),
        )


# Quick actions

class _QuickActionUseCase(_ProjectAccess, CommandUseCase):
    """Append an event to the project log and persist the project with it."""

    async def _record(self, project: Project, event: ProjectEvent) -> ProjectEventResponseDTO:
        event = self.uow.projects.add_event(event)
        self.uow.projects.save(project)
        self.collect(project)
        await self._commit()
        logger.info(f"Project {project.id}: {event.type.value} event {event.id} by user {event.created_by}")
        return ProjectEventResponseDTO.from_domain(event)


class RequestPaymentUseCase(_QuickActionUseCase):

    async def execute(self, user_id: int, project_id: int, request: RequestPaymentDTO) -> ProjectEventResponseDTO:
        project = self._get_project(project_id)
        event = project.request_payment(user_id, request.amount, request.note)
        return await self._record(project, event)


class ExtendDeadlineUseCase(_QuickActionUseCase):

    async def execute(self, user_id: int, project_id: int,
                      request: ExtendDeadlineDTO) -> Tuple[ProjectResponseDTO, ProjectEventResponseDTO]:
        project = self._get_project(project_id)
        event = project.extend_deadline(user_id, request.new_deadline, request.reason)
        event_dto = await self._record(project, event)
        return self._to_dto(project), event_dto


class RequestDeadlineExtensionUseCase(_QuickActionUseCase):
    """Worker proposal; the deadline itself does not move."""

    async def execute(self, user_id: int, project_id: int,
                      request: DeadlineExtensionRequestDTO) -> ProjectEventResponseDTO:
        project = self._get_project(project_id)
        event = project.request_deadline_extension(user_id, request.proposed_date, request.reason)
        return await self._record(project, event)


class ApproveDeadlineExtensionUseCase(_QuickActionUseCase):
    """
    Creator applies a requested extension.
    The request is closed with a resolution row and a confirmation event
    pointing at it is appended.
    """

    async def execute(self, user_id: int, project_id: int, event_id: int,
                      request: ApproveDeadlineExtensionDTO) -> Tuple[ProjectResponseDTO, ProjectEventResponseDTO]:
        project = self._get_project(project_id)
        project.ensure_creator(user_id, "Only the project creator can approve an extension")
        extension_request = self.uow.projects.get_event(event_id)
        if not extension_request:
            raise EntityNotFoundError("Deadline extension request")

        resolution, confirmation = project.approve_deadline_extension(
            user_id, extension_request, request.new_deadline
        )
        self.uow.projects.add_resolution(resolution)
        event_dto = await self._record(project, confirmation)
        return self._to_dto(project), event_dto


class ContactSupportUseCase(_QuickActionUseCase):

    async def execute(self, user_id: int, project_id: int, request: SupportRequestDTO) -> ProjectEventResponseDTO:
        project = self._get_project(project_id)
        event = project.contact_support(user_id, request.text)
        return await self._record(project, event)
