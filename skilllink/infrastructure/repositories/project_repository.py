"""
Project repository implementation using SQLAlchemy.
The child streams live in their own tables and are paginated by
(created_at, id).
"""

from datetime import datetime
from typing import Optional, List, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from skilllink.domain.models.project import (
    Project,
    ProjectStatus,
    ProjectMessage,
    Submission,
    ProjectEvent,
    ProjectEventType,
    EventResolution,
)
from skilllink.domain.models.base import EntityNotFoundError, ConcurrencyConflictError
from skilllink.domain.repositories.project_repository import ProjectRepository
from skilllink.infrastructure.db.models import (
    ProjectModel,
    ProjectMessageModel,
    SubmissionModel,
    ProjectEventModel,
    EventResolutionModel,
)
from skilllink.infrastructure.mappers.project_mapper import ProjectMapper
from skilllink.infrastructure.pagination import paginator


class SQLAlchemyProjectRepository(ProjectRepository):
    """SQLAlchemy implementation of project repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ProjectMapper()
        self.model = ProjectModel

    def save(self, project: Project) -> Project:
        """Save a project; the stored version must match the loaded one."""
        if project.is_new:
            model = self.mapper.domain_to_model(project)
            self.session.add(model)
        else:
            model = self.session.get(ProjectModel, project.id)
            if not model:
                raise EntityNotFoundError("Project", project.id)
            if model.version != project.version:
                raise ConcurrencyConflictError("Project was modified concurrently, please retry")
            self.mapper.update_model(model, project)

        try:
            self.session.flush()
        except StaleDataError:
            self.session.rollback()
            raise ConcurrencyConflictError("Project was modified concurrently, please retry")
        project.id = model.id
        project.version = model.version
        for milestone, row in zip(project.milestones, model.milestones):
            milestone.id = row.id
            milestone.project_id = model.id
        return project

    def get_by_id(self, project_id: int) -> Optional[Project]:
        model = self.session.get(ProjectModel, project_id)
        return self.mapper.model_to_domain(model) if model else None

    def _newest(self, query):
        models = query.order_by(ProjectModel.updated_at.desc(), ProjectModel.id.desc()).all()
        return [self.mapper.model_to_domain(m) for m in models]

    def list_for_member(self, user_id: int) -> List[Project]:
        return self._newest(self.session.query(ProjectModel).filter(
            or_(ProjectModel.created_by == user_id, ProjectModel.assigned_to == user_id)
        ))

    def list_by_creator(self, creator_id: int, status: Optional[ProjectStatus] = None) -> List[Project]:
        query = self.session.query(ProjectModel).filter(ProjectModel.created_by == creator_id)
        if status is not None:
            query = query.filter(ProjectModel.status == ProjectStatus(status).value)
        return self._newest(query)

    def list_by_assignee(self, worker_id: int, status: Optional[ProjectStatus] = None) -> List[Project]:
        query = self.session.query(ProjectModel).filter(ProjectModel.assigned_to == worker_id)
        if status is not None:
            query = query.filter(ProjectModel.status == ProjectStatus(status).value)
        return self._newest(query)

    # Messages

    def add_message(self, message: ProjectMessage) -> ProjectMessage:
        model = self.mapper.message_to_model(message)
        self.session.add(model)
        self.session.flush()
        message.id = model.id
        return message

    def list_messages(self, project_id: int, page: int, limit: int) -> Tuple[List[ProjectMessage], int]:
        query = self.session.query(ProjectMessageModel).filter(
            ProjectMessageModel.project_id == project_id
        ).order_by(ProjectMessageModel.created_at.asc(), ProjectMessageModel.id.asc())
        models, meta = paginator.paginate(query, page, limit)
        return [self.mapper.message_to_domain(m) for m in models], meta.total

    def latest_messages_for(self, user_id: int, limit: int) -> List[ProjectMessage]:
        models = (
            self.session.query(ProjectMessageModel)
            .join(ProjectModel, ProjectModel.id == ProjectMessageModel.project_id)
            .filter(
                or_(ProjectModel.created_by == user_id, ProjectModel.assigned_to == user_id),
                ProjectMessageModel.sender_id != user_id,
            )
            .order_by(ProjectMessageModel.created_at.desc(), ProjectMessageModel.id.desc())
            .limit(limit)
            .all()
        )
        return [self.mapper.message_to_domain(m) for m in models]

    def count_messages_since(self, user_id: int, since: datetime) -> int:
        return (
            self.session.query(ProjectMessageModel)
            .join(ProjectModel, ProjectModel.id == ProjectMessageModel.project_id)
            .filter(
                or_(ProjectModel.created_by == user_id, ProjectModel.assigned_to == user_id),
                ProjectMessageModel.sender_id != user_id,
                ProjectMessageModel.created_at >= since,
            )
            .count()
        )

    # Submissions

    def add_submission(self, submission: Submission) -> Submission:
        model = self.mapper.submission_to_model(submission)
        self.session.add(model)
        self.session.flush()
        submission.id = model.id
        return submission

    def get_submission(self, project_id: int, submission_id: int) -> Optional[Submission]:
        model = self.session.query(SubmissionModel).filter(
            SubmissionModel.id == submission_id,
            SubmissionModel.project_id == project_id,
        ).first()
        return self.mapper.submission_to_domain(model) if model else None

    def list_submissions(self, project_id: int, page: int, limit: int) -> Tuple[List[Submission], int]:
        query = self.session.query(SubmissionModel).filter(
            SubmissionModel.project_id == project_id
        ).order_by(SubmissionModel.created_at.asc(), SubmissionModel.id.asc())
        models, meta = paginator.paginate(query, page, limit)
        return [self.mapper.submission_to_domain(m) for m in models], meta.total

    def delete_submission(self, submission_id: int) -> bool:
        model = self.session.get(SubmissionModel, submission_id)
        if not model:
            return False
        self.session.delete(model)
        self.session.flush()
        return True

    # Events

    def add_event(self, event: ProjectEvent) -> ProjectEvent:
        model = self.mapper.event_to_model(event)
        self.session.add(model)
        self.session.flush()
        event.id = model.id
        return event

    def get_event(self, event_id: int) -> Optional[ProjectEvent]:
        model = self.session.get(ProjectEventModel, event_id)
        return self.mapper.event_to_domain(model) if model else None

    def list_events(self, project_id: int, page: int, limit: int) -> Tuple[List[ProjectEvent], int]:
        query = self.session.query(ProjectEventModel).filter(
            ProjectEventModel.project_id == project_id
        ).order_by(ProjectEventModel.created_at.asc(), ProjectEventModel.id.asc())
        models, meta = paginator.paginate(query, page, limit)
        return [self.mapper.event_to_domain(m) for m in models], meta.total

    def add_resolution(self, resolution: EventResolution) -> EventResolution:
        existing = self.session.query(EventResolutionModel.id).filter(
            EventResolutionModel.event_id == resolution.event_id
        ).first()
        if existing:
            raise ConcurrencyConflictError("Event was already resolved")
        model = self.mapper.resolution_to_model(resolution)
        self.session.add(model)
        try:
            self.session.flush()
        except IntegrityError:
            self.session.rollback()
            raise ConcurrencyConflictError("Event was already resolved")
        resolution.id = model.id
        return resolution

    def unresolved_payment_requests(self, creator_id: int) -> List[ProjectEvent]:
        models = (
            self.session.query(ProjectEventModel)
            .join(ProjectModel, ProjectModel.id == ProjectEventModel.project_id)
            .outerjoin(EventResolutionModel, EventResolutionModel.event_id == ProjectEventModel.id)
            .filter(
                ProjectModel.created_by == creator_id,
                ProjectEventModel.type == ProjectEventType.PAYMENT_REQUEST.value,
                EventResolutionModel.id.is_(None),
            )
            .order_by(ProjectEventModel.created_at.desc(), ProjectEventModel.id.desc())
            .all()
        )
        return [self.mapper.event_to_domain(m) for m in models]
