"""
User repository implementation using SQLAlchemy.
"""

from typing import Optional, List, Dict, Any, Tuple, Iterable

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from skilllink.domain.models.user import User, AccountType
from skilllink.domain.models.base import EntityNotFoundError, DuplicateEntityError
from skilllink.domain.repositories.user_repository import (
    UserRepositoryInterface,
    WorkerSearchFilters,
)
from skilllink.infrastructure.db.models import (
    UserModel,
    SkilledWorkerProfileModel,
    WorkerSkillModel,
)
from skilllink.infrastructure.mappers.user_mapper import UserMapper, skill_key
from skilllink.infrastructure.pagination import paginator


class SQLAlchemyUserRepository(UserRepositoryInterface):
    """SQLAlchemy implementation of user repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = UserMapper()
        self.model = UserModel

    def save(self, user: User) -> User:
        """Save a user entity."""
        if user.is_new:
            if self.session.query(UserModel.id).filter(UserModel.email == user.email).first():
                raise DuplicateEntityError("User", "email", user.email, "Email already in use")
            self._check_phone(user)
            model = self.mapper.domain_to_model(user)
            self.session.add(model)
        else:
            model = self.session.get(UserModel, user.id)
            if not model:
                raise EntityNotFoundError("User", user.id)
            self._check_phone(user)
            self.mapper.update_model(model, user)

        self.session.flush()
        if user.is_new:
            user.id = model.id
        return user

    def _check_phone(self, user: User) -> None:
        if not user.phone:
            return
        query = self.session.query(UserModel.id).filter(UserModel.phone == user.phone)
        if user.id is not None:
            query = query.filter(UserModel.id != user.id)
        if query.first():
            raise DuplicateEntityError("User", "phone", user.phone, "Phone already in use")

    def get_by_id(self, user_id: int) -> Optional[User]:
        model = self.session.get(UserModel, user_id)
        return self.mapper.model_to_domain(model) if model else None

    def get_by_email(self, email: str) -> Optional[User]:
        model = self.session.query(UserModel).filter(
            UserModel.email == (email or "").strip().lower()
        ).first()
        return self.mapper.model_to_domain(model) if model else None

    def get_by_phone(self, phone: str) -> Optional[User]:
        model = self.session.query(UserModel).filter(UserModel.phone == phone).first()
        return self.mapper.model_to_domain(model) if model else None

    def get_many(self, user_ids: Iterable[int]) -> Dict[int, User]:
        ids = {i for i in user_ids if i is not None}
        if not ids:
            return {}
        models = self.session.query(UserModel).filter(UserModel.id.in_(ids)).all()
        return {m.id: self.mapper.model_to_domain(m) for m in models}

    def _active_workers(self):
        return (
            self.session.query(UserModel)
            .join(SkilledWorkerProfileModel, SkilledWorkerProfileModel.user_id == UserModel.id)
            .filter(
                UserModel.account_type == AccountType.SKILLED_WORKER.value,
                UserModel.is_active.is_(True),
            )
        )

    def search_workers(self, filters: WorkerSearchFilters, page: int, limit: int) -> Tuple[List[User], int]:
        profile = SkilledWorkerProfileModel
        query = self._active_workers()

        if filters.q:
            pattern = f"%{filters.q.strip()}%"
            query = query.filter(or_(
                UserModel.name.ilike(pattern),
                profile.full_name.ilike(pattern),
                profile.professional_title.ilike(pattern),
                profile.short_bio.ilike(pattern),
            ))
        for skill in filters.skills:
            key = skill_key(skill)
            if key:
                query = query.filter(profile.skills.any(WorkerSkillModel.skill == key))
        if filters.location:
            query = query.filter(profile.location.ilike(f"%{filters.location.strip()}%"))
        if filters.min_rate is not None:
            query = query.filter(profile.hourly_rate >= filters.min_rate)
        if filters.max_rate is not None:
            query = query.filter(profile.hourly_rate <= filters.max_rate)
        if filters.availability:
            query = query.filter(func.lower(profile.availability) == filters.availability.strip().lower())
        if filters.min_rating is not None:
            query = query.filter(profile.rating >= filters.min_rating)

        query = query.order_by(profile.rating.desc(), UserModel.id.asc())
        models, meta = paginator.paginate(query, page, limit)
        return [self.mapper.model_to_domain(m) for m in models], meta.total

    def worker_filter_meta(self) -> Dict[str, Any]:
        profile = SkilledWorkerProfileModel
        rows = (
            self.session.query(profile.primary_skills, profile.location, profile.availability)
            .join(UserModel, UserModel.id == profile.user_id)
            .filter(
                UserModel.account_type == AccountType.SKILLED_WORKER.value,
                UserModel.is_active.is_(True),
            )
            .all()
        )
        skills, locations, availability = set(), set(), set()
        for primary_skills, location, avail in rows:
            skills.update(s for s in (primary_skills or []) if s)
            if location:
                locations.add(location)
            if avail:
                availability.add(avail)

        rate_min, rate_max = (
            self.session.query(func.min(profile.hourly_rate), func.max(profile.hourly_rate))
            .join(UserModel, UserModel.id == profile.user_id)
            .filter(
                UserModel.account_type == AccountType.SKILLED_WORKER.value,
                UserModel.is_active.is_(True),
            )
            .one()
        )
        return {
            "skills": sorted(skills, key=str.lower),
            "locations": sorted(locations, key=str.lower),
            "availability": sorted(availability, key=str.lower),
            "rate": {
                "min": float(rate_min) if rate_min is not None else 0,
                "max": float(rate_max) if rate_max is not None else 0,
            },
        }

    def list_users(self, page: int, limit: int, q: Optional[str] = None,
                   account_type: Optional[str] = None) -> Tuple[List[User], int]:
        query = self.session.query(UserModel)
        if q:
            pattern = f"%{q.strip()}%"
            query = query.filter(or_(UserModel.name.ilike(pattern), UserModel.email.ilike(pattern)))
        if account_type:
            query = query.filter(UserModel.account_type == account_type)
        query = query.order_by(UserModel.created_at.desc(), UserModel.id.desc())
        models, meta = paginator.paginate(query, page, limit)
        return [self.mapper.model_to_domain(m) for m in models], meta.total
