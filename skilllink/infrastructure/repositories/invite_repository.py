"""
Invite repository implementation using SQLAlchemy.
"""

from datetime import datetime
from typing import Optional, List, Sequence

from sqlalchemy.orm import Session

from skilllink.domain.models.invite import Invite, InviteType
from skilllink.domain.models.base import EntityNotFoundError
from skilllink.domain.repositories.invite_repository import InviteRepository
from skilllink.infrastructure.db.models import InviteModel
from skilllink.infrastructure.mappers.invite_mapper import InviteMapper


class SQLAlchemyInviteRepository(InviteRepository):
    """SQLAlchemy implementation of the invite ledger."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = InviteMapper()
        self.model = InviteModel

    def save(self, invite: Invite) -> Invite:
        if invite.is_new:
            model = self.mapper.domain_to_model(invite)
            self.session.add(model)
        else:
            model = self.session.get(InviteModel, invite.id)
            if not model:
                raise EntityNotFoundError("Invite", invite.id)
            model.status = invite.status.value
            model.message = invite.message
            model.updated_at = invite.updated_at

        self.session.flush()
        if invite.is_new:
            invite.id = model.id
        return invite

    def get_by_id(self, invite_id: int) -> Optional[Invite]:
        model = self.session.get(InviteModel, invite_id)
        return self.mapper.model_to_domain(model) if model else None

    def find_open_application(self, worker_id: int, job_id: int, statuses: Sequence[str]) -> Optional[Invite]:
        model = self.session.query(InviteModel).filter(
            InviteModel.worker_id == worker_id,
            InviteModel.job_id == job_id,
            InviteModel.type == InviteType.APPLICATION.value,
            InviteModel.status.in_(list(statuses)),
        ).first()
        return self.mapper.model_to_domain(model) if model else None

    def find_by_job_and_worker(self, job_id: int, worker_id: int) -> List[Invite]:
        models = self.session.query(InviteModel).filter(
            InviteModel.job_id == job_id,
            InviteModel.worker_id == worker_id,
        ).order_by(InviteModel.id).all()
        return [self.mapper.model_to_domain(m) for m in models]

    def _filtered(self, employer_id=None, worker_id=None, invite_type=None, statuses=None,
                  job_id=None, created_from=None):
        query = self.session.query(InviteModel)
        if employer_id is not None:
            query = query.filter(InviteModel.employer_id == employer_id)
        if worker_id is not None:
            query = query.filter(InviteModel.worker_id == worker_id)
        if invite_type is not None:
            query = query.filter(InviteModel.type == InviteType(invite_type).value)
        if statuses:
            query = query.filter(InviteModel.status.in_(list(statuses)))
        if job_id is not None:
            query = query.filter(InviteModel.job_id == job_id)
        if created_from is not None:
            query = query.filter(InviteModel.created_at >= created_from)
        return query

    def list(
        self,
        employer_id: Optional[int] = None,
        worker_id: Optional[int] = None,
        invite_type: Optional[InviteType] = None,
        statuses: Optional[Sequence[str]] = None,
        job_id: Optional[int] = None,
        created_from: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Invite]:
        query = self._filtered(employer_id, worker_id, invite_type, statuses, job_id, created_from)
        query = query.order_by(InviteModel.created_at.desc(), InviteModel.id.desc())
        if limit:
            query = query.limit(limit)
        return [self.mapper.model_to_domain(m) for m in query.all()]

    def count(
        self,
        employer_id: Optional[int] = None,
        worker_id: Optional[int] = None,
        invite_type: Optional[InviteType] = None,
        statuses: Optional[Sequence[str]] = None,
    ) -> int:
        return self._filtered(employer_id, worker_id, invite_type, statuses).count()
