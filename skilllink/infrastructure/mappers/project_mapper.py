"""
Project mapper for converting between domain entities and database models.
Covers the aggregate root, its milestones and the append-only child streams.
"""

from decimal import Decimal

from skilllink.domain.models.project import (
    Project,
    Milestone,
    ProjectMessage,
    Submission,
    ProjectEvent,
    EventResolution,
)
from skilllink.infrastructure.db.models import (
    ProjectModel,
    MilestoneModel,
    ProjectMessageModel,
    SubmissionModel,
    ProjectEventModel,
    EventResolutionModel,
)


class ProjectMapper:
    """Maps between Project domain entity and ProjectModel database model."""

    def domain_to_model(self, project: Project) -> ProjectModel:
        """Convert Project domain entity to a new ProjectModel."""
        model = ProjectModel(id=project.id, created_at=project.created_at)
        self.update_model(model, project)
        return model

    def update_model(self, model: ProjectModel, project: Project) -> None:
        """Copy scalar state and reconcile milestones by id."""
        model.title = project.title
        model.category = project.category
        model.budget = project.budget
        model.currency = project.currency
        model.deadline = project.deadline
        model.progress = project.progress
        model.status = project.status.value
        model.created_by = project.created_by
        model.assigned_to = project.assigned_to
        model.job_id = project.job_id
        model.updated_at = project.updated_at

        existing = {m.id: m for m in model.milestones if m.id is not None}
        rows = []
        for milestone in project.milestones:
            row = existing.get(milestone.id) if milestone.id is not None else None
            if row is None:
                row = MilestoneModel(created_at=milestone.created_at)
            self.update_milestone_model(row, milestone)
            rows.append(row)
        model.milestones = rows

    def update_milestone_model(self, model: MilestoneModel, milestone: Milestone) -> None:
        model.title = milestone.title
        model.description = milestone.description
        model.deadline = milestone.deadline
        model.status = milestone.status.value
        model.updated_at = milestone.updated_at

    def model_to_domain(self, model: ProjectModel) -> Project:
        """Convert ProjectModel to Project domain entity."""
        return Project(
            id=model.id,
            title=model.title,
            category=model.category,
            budget=Decimal(str(model.budget or 0)),
            currency=model.currency or "NGN",
            deadline=model.deadline,
            progress=model.progress or 0,
            status=model.status,
            created_by=model.created_by,
            assigned_to=model.assigned_to,
            job_id=model.job_id,
            milestones=[self.milestone_to_domain(m) for m in model.milestones],
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version or 1,
        )

    def milestone_to_domain(self, model: MilestoneModel) -> Milestone:
        return Milestone(
            id=model.id,
            project_id=model.project_id,
            title=model.title,
            description=model.description,
            deadline=model.deadline,
            status=model.status,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    # Append-only streams

    def message_to_model(self, message: ProjectMessage) -> ProjectMessageModel:
        return ProjectMessageModel(
            project_id=message.project_id,
            sender_id=message.sender_id,
            text=message.text,
            created_at=message.created_at,
        )

    def message_to_domain(self, model: ProjectMessageModel) -> ProjectMessage:
        return ProjectMessage(
            id=model.id,
            project_id=model.project_id,
            sender_id=model.sender_id,
            text=model.text,
            created_at=model.created_at,
            updated_at=model.created_at,
        )

    def submission_to_model(self, submission: Submission) -> SubmissionModel:
        return SubmissionModel(
            project_id=submission.project_id,
            uploaded_by=submission.uploaded_by,
            url=submission.url,
            filename=submission.filename,
            note=submission.note,
            created_at=submission.created_at,
        )

    def submission_to_domain(self, model: SubmissionModel) -> Submission:
        return Submission(
            id=model.id,
            project_id=model.project_id,
            uploaded_by=model.uploaded_by,
            url=model.url,
            filename=model.filename,
            note=model.note,
            created_at=model.created_at,
            updated_at=model.created_at,
        )

    def event_to_model(self, event: ProjectEvent) -> ProjectEventModel:
        return ProjectEventModel(
            project_id=event.project_id,
            type=event.type.value,
            created_by=event.created_by,
            text=event.text,
            data=dict(event.data),
            related_event_id=event.related_event_id,
            created_at=event.created_at,
        )

    def event_to_domain(self, model: ProjectEventModel) -> ProjectEvent:
        return ProjectEvent(
            id=model.id,
            project_id=model.project_id,
            type=model.type,
            created_by=model.created_by,
            text=model.text,
            data=dict(model.data or {}),
            related_event_id=model.related_event_id,
            resolution=self.resolution_to_domain(model.resolution) if model.resolution else None,
            created_at=model.created_at,
            updated_at=model.created_at,
        )

    def resolution_to_model(self, resolution: EventResolution) -> EventResolutionModel:
        return EventResolutionModel(
            event_id=resolution.event_id,
            kind=resolution.kind.value,
            resolved_by=resolution.resolved_by,
            data=dict(resolution.data),
            created_at=resolution.created_at,
        )

    def resolution_to_domain(self, model: EventResolutionModel) -> EventResolution:
        return EventResolution(
            id=model.id,
            event_id=model.event_id,
            kind=model.kind,
            resolved_by=model.resolved_by,
            data=dict(model.data or {}),
            created_at=model.created_at,
            updated_at=model.created_at,
        )
