"""
Job mapper for converting between domain entities and database models.
"""

from decimal import Decimal

from skilllink.domain.models.job import Job, BudgetRange
from skilllink.infrastructure.db.models import JobModel


class JobMapper:
    """Maps between Job domain entity and JobModel database model."""

    def domain_to_model(self, job: Job) -> JobModel:
        """Convert Job domain entity to JobModel."""
        return JobModel(
            id=job.id,
            employer_id=job.employer_id,
            title=job.title,
            description=job.description,
            budget_min=job.budget_range.min,
            budget_max=job.budget_range.max,
            timeline=job.timeline,
            required_skills=list(job.required_skills),
            is_active=job.is_active,
            created_at=job.created_at,
            updated_at=job.updated_at,
            version=job.version
        )

    def model_to_domain(self, model: JobModel) -> Job:
        """Convert JobModel to Job domain entity."""
        return Job(
            id=model.id,
            employer_id=model.employer_id,
            title=model.title,
            description=model.description,
            budget_range=BudgetRange(
                min=Decimal(str(model.budget_min or 0)),
                max=Decimal(str(model.budget_max or 0)),
            ),
            timeline=model.timeline,
            required_skills=model.required_skills or [],
            is_active=bool(model.is_active),
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version or 1,
        )
