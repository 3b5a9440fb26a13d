"""
User mapper for converting between domain entities and database models.
"""

from dataclasses import fields
from decimal import Decimal
from typing import Optional

from skilllink.domain.models.user import (
    User,
    UserRole,
    AccountType,
    SkilledWorkerProfile,
    EmployerProfile,
)
from skilllink.infrastructure.db.models import (
    UserModel,
    SkilledWorkerProfileModel,
    EmployerProfileModel,
    WorkerSkillModel,
)


WORKER_FIELDS = tuple(f.name for f in fields(SkilledWorkerProfile))
EMPLOYER_FIELDS = tuple(f.name for f in fields(EmployerProfile))


def skill_key(skill: str) -> str:
    """Case-insensitive key stored for skill filtering."""
    return skill.strip().lower()


class UserMapper:
    """Maps between User domain entity and the users table plus profile rows."""

    def domain_to_model(self, user: User) -> UserModel:
        """Convert User domain entity to a new UserModel."""
        model = UserModel(id=user.id, created_at=user.created_at)
        self.update_model(model, user)
        return model

    def update_model(self, model: UserModel, user: User) -> None:
        """Copy entity state onto an existing model, profiles included."""
        model.email = user.email
        model.phone = user.phone
        model.firstname = user.firstname
        model.lastname = user.lastname
        model.name = user.name
        model.password_hash = user.password_hash
        model.role = user.role.value
        model.account_type = user.account_type.value
        model.is_active = user.is_active
        model.is_email_verified = user.is_email_verified
        model.is_phone_verified = user.is_phone_verified
        model.failed_login_attempts = user.failed_login_attempts
        model.lock_until = user.lock_until
        model.version = user.version
        model.updated_at = user.updated_at

        if model.skilled_worker is None:
            model.skilled_worker = SkilledWorkerProfileModel()
        worker = model.skilled_worker
        for name in WORKER_FIELDS:
            setattr(worker, name, getattr(user.skilled_worker, name))

        wanted = {skill_key(s) for s in user.skilled_worker.primary_skills if skill_key(s)}
        current = {s.skill: s for s in worker.skills}
        for key, row in current.items():
            if key not in wanted:
                worker.skills.remove(row)
        for key in sorted(wanted - set(current)):
            worker.skills.append(WorkerSkillModel(skill=key))

        if model.employer is None:
            model.employer = EmployerProfileModel()
        for name in EMPLOYER_FIELDS:
            setattr(model.employer, name, getattr(user.employer, name))

    def model_to_domain(self, model: UserModel) -> User:
        """Convert UserModel to User domain entity."""
        worker = SkilledWorkerProfile()
        if model.skilled_worker is not None:
            data = {name: getattr(model.skilled_worker, name) for name in WORKER_FIELDS}
            data["primary_skills"] = data["primary_skills"] or []
            data["languages_spoken"] = data["languages_spoken"] or []
            data["portfolio_samples"] = data["portfolio_samples"] or []
            data["certifications"] = data["certifications"] or []
            data["rating"] = data["rating"] or 0.0
            data["hourly_rate"] = _to_float(data["hourly_rate"])
            worker = SkilledWorkerProfile(**data)

        employer = EmployerProfile()
        if model.employer is not None:
            data = {name: getattr(model.employer, name) for name in EMPLOYER_FIELDS}
            data["industry"] = data["industry"] or []
            data["verification_docs"] = data["verification_docs"] or []
            employer = EmployerProfile(**data)

        return User(
            id=model.id,
            email=model.email,
            phone=model.phone,
            firstname=model.firstname,
            lastname=model.lastname,
            name=model.name or "",
            password_hash=model.password_hash,
            role=UserRole(model.role) if model.role else UserRole.USER,
            account_type=AccountType(model.account_type) if model.account_type else AccountType.SKILLED_WORKER,
            is_active=bool(model.is_active),
            is_email_verified=bool(model.is_email_verified),
            is_phone_verified=bool(model.is_phone_verified),
            failed_login_attempts=model.failed_login_attempts or 0,
            lock_until=model.lock_until,
            skilled_worker=worker,
            employer=employer,
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version or 1,
        )


def _to_float(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None
