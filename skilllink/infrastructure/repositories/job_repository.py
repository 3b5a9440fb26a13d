"""
Job repository implementation using SQLAlchemy.
"""

from typing import Optional, List, Dict, Tuple, Iterable

from sqlalchemy import or_
from sqlalchemy.orm import Session

from skilllink.domain.models.job import Job
from skilllink.domain.models.base import EntityNotFoundError
from skilllink.domain.repositories.job_repository import JobRepository
from skilllink.infrastructure.db.models import JobModel
from skilllink.infrastructure.mappers.job_mapper import JobMapper
from skilllink.infrastructure.pagination import paginator


class SQLAlchemyJobRepository(JobRepository):
    """SQLAlchemy implementation of job repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = JobMapper()
        self.model = JobModel

    def save(self, job: Job) -> Job:
        if job.is_new:
            model = self.mapper.domain_to_model(job)
            self.session.add(model)
        else:
            model = self.session.get(JobModel, job.id)
            if not model:
                raise EntityNotFoundError("Job", job.id)
            updated_model = self.mapper.domain_to_model(job)
            for column in JobModel.__table__.columns.keys():
                if column not in ("id", "created_at"):
                    setattr(model, column, getattr(updated_model, column))

        self.session.flush()
        if job.is_new:
            job.id = model.id
        return job

    def get_by_id(self, job_id: int) -> Optional[Job]:
        model = self.session.get(JobModel, job_id)
        return self.mapper.model_to_domain(model) if model else None

    def get_many(self, job_ids: Iterable[int]) -> Dict[int, Job]:
        ids = {i for i in job_ids if i is not None}
        if not ids:
            return {}
        models = self.session.query(JobModel).filter(JobModel.id.in_(ids)).all()
        return {m.id: self.mapper.model_to_domain(m) for m in models}

    def list_by_employer(self, employer_id: int, active_only: bool = False) -> List[Job]:
        query = self.session.query(JobModel).filter(JobModel.employer_id == employer_id)
        if active_only:
            query = query.filter(JobModel.is_active.is_(True))
        models = query.order_by(JobModel.created_at.desc(), JobModel.id.desc()).all()
        return [self.mapper.model_to_domain(m) for m in models]

    def list_all(self, page: int, limit: int, q: Optional[str] = None) -> Tuple[List[Job], int]:
        query = self.session.query(JobModel)
        if q:
            pattern = f"%{q.strip()}%"
            query = query.filter(or_(JobModel.title.ilike(pattern), JobModel.description.ilike(pattern)))
        query = query.order_by(JobModel.created_at.desc(), JobModel.id.desc())
        models, meta = paginator.paginate(query, page, limit)
        return [self.mapper.model_to_domain(m) for m in models], meta.total

    def delete(self, job_id: int) -> bool:
        model = self.session.get(JobModel, job_id)
        if not model:
            return False
        self.session.delete(model)
        self.session.flush()
        return True
