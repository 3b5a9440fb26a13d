"""
User domain model.
A marketplace identity with an account type (employer or skilled worker),
a platform role (user or admin) and the matching profile sub-document.
"""

from dataclasses import dataclass, field, fields, asdict
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, List, Dict, Any

from skilllink.domain.models.base import (
    AggregateRoot,
    ValidationError,
    AuthorizationError,
    split_list,
)


class UserRole(str, Enum):
    """Platform role."""
    USER = "user"
    ADMIN = "admin"


class AccountType(str, Enum):
    """Marketplace side the user acts on."""
    SKILLED_WORKER = "skilled_worker"
    EMPLOYER = "employer"


class MediaType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


COMPANY_SIZES = ("1-10", "11-50", "51-200", "201-500", "501-1000", "1000+")
SHORT_BIO_MAX = 250


@dataclass
class SkilledWorkerProfile:
    """Discovery and display fields for a skilled worker."""

    profile_image: Optional[str] = None
    full_name: Optional[str] = None
    location: Optional[str] = None
    contact_preference: Optional[str] = None
    professional_title: Optional[str] = None
    primary_skills: List[str] = field(default_factory=list)
    years_of_experience: Optional[int] = None
    languages_spoken: List[str] = field(default_factory=list)
    hourly_rate: Optional[float] = None
    availability: Optional[str] = None
    rating: float = 0.0
    portfolio_samples: List[Dict[str, Any]] = field(default_factory=list)
    certifications: List[Dict[str, Any]] = field(default_factory=list)
    nin_document: Optional[str] = None
    short_bio: Optional[str] = None

    def __post_init__(self):
        self.primary_skills = split_list(self.primary_skills)
        self.languages_spoken = split_list(self.languages_spoken)

    def validate(self) -> None:
        if self.years_of_experience is not None and not 0 <= self.years_of_experience <= 60:
            raise ValidationError("yearsOfExperience must be between 0 and 60", "years_of_experience")
        if self.hourly_rate is not None and self.hourly_rate < 0:
            raise ValidationError("hourlyRate cannot be negative", "hourly_rate")
        if not 0 <= (self.rating or 0) <= 5:
            raise ValidationError("rating must be between 0 and 5", "rating")
        if self.short_bio and len(self.short_bio) > SHORT_BIO_MAX:
            raise ValidationError(f"shortBio cannot exceed {SHORT_BIO_MAX} characters", "short_bio")
        for sample in self.portfolio_samples:
            if not sample.get("url"):
                raise ValidationError("Portfolio sample url is required", "portfolio_samples")
            media_type = sample.get("media_type") or MediaType.IMAGE.value
            if media_type not in (MediaType.IMAGE.value, MediaType.VIDEO.value):
                raise ValidationError(f"Invalid media type: {media_type}", "portfolio_samples")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class EmployerProfile:
    """Company fields shown to workers."""

    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    location: Optional[str] = None
    contact_preference: Optional[str] = None
    industry: List[str] = field(default_factory=list)
    website: Optional[str] = None
    company_size: Optional[str] = None
    short_bio: Optional[str] = None
    verification_docs: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self):
        self.industry = split_list(self.industry)

    def validate(self) -> None:
        if self.company_size and self.company_size not in COMPANY_SIZES:
            raise ValidationError(
                f"companySize must be one of {', '.join(COMPANY_SIZES)}", "company_size"
            )
        if self.short_bio and len(self.short_bio) > SHORT_BIO_MAX:
            raise ValidationError(f"shortBio cannot exceed {SHORT_BIO_MAX} characters", "short_bio")
        for doc in self.verification_docs:
            if not doc.get("file_url"):
                raise ValidationError("Verification document fileUrl is required", "verification_docs")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _apply_changes(target: Any, changes: Dict[str, Any]) -> None:
    known = {f.name for f in fields(target)}
    for key, value in changes.items():
        if key not in known:
            raise ValidationError(f"Unknown profile field: {key}", key)
        setattr(target, key, value)
    target.__post_init__()


@dataclass
class User(AggregateRoot):
    """
    User aggregate root.
    `name` is always derived from firstname and lastname.
    """

    email: str
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    name: str = ""
    phone: Optional[str] = None
    password_hash: Optional[str] = field(default=None, repr=False)
    role: UserRole = UserRole.USER
    account_type: AccountType = AccountType.SKILLED_WORKER
    is_active: bool = True
    is_email_verified: bool = False
    is_phone_verified: bool = False
    failed_login_attempts: int = 0
    lock_until: Optional[datetime] = None
    skilled_worker: SkilledWorkerProfile = field(default_factory=SkilledWorkerProfile)
    employer: EmployerProfile = field(default_factory=EmployerProfile)

    def __post_init__(self):
        super().__post_init__()
        self.email = (self.email or "").strip().lower()
        self.refresh_name()

    @classmethod
    def register(
        cls,
        email: str,
        password_hash: str,
        firstname: Optional[str] = None,
        lastname: Optional[str] = None,
        phone: Optional[str] = None,
        account_type: Optional[str] = None,
        skilled_worker: Optional[Dict[str, Any]] = None,
        employer: Optional[Dict[str, Any]] = None,
    ) -> "User":
        """Create a new marketplace user."""
        if not email or not (firstname or lastname):
            raise ValidationError("firstname/lastname, email and password are required")
        user = cls(
            email=email,
            firstname=firstname,
            lastname=lastname,
            phone=phone or None,
            password_hash=password_hash,
            account_type=(
                AccountType.EMPLOYER if account_type == AccountType.EMPLOYER.value
                else AccountType.SKILLED_WORKER
            ),
        )
        if skilled_worker:
            _apply_changes(user.skilled_worker, skilled_worker)
        if employer:
            _apply_changes(user.employer, employer)
        user.validate()
        return user

    def refresh_name(self) -> None:
        parts = [p.strip() for p in (self.firstname, self.lastname) if p and p.strip()]
        if parts:
            self.name = " ".join(parts)

    def validate(self) -> None:
        if not self.email or "@" not in self.email:
            raise ValidationError("A valid email is required", "email")
        if not self.name:
            raise ValidationError("firstname or lastname is required", "name")
        self.skilled_worker.validate()
        self.employer.validate()

    @property
    def is_employer(self) -> bool:
        return self.account_type == AccountType.EMPLOYER

    @property
    def is_worker(self) -> bool:
        return self.account_type == AccountType.SKILLED_WORKER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def display_name(self) -> str:
        """Name shown on cards: worker full name, company name, then account name."""
        if self.is_worker and self.skilled_worker.full_name:
            return self.skilled_worker.full_name
        if self.is_employer and self.employer.company_name:
            return self.employer.company_name
        return self.name

    def require_employer(self, message: str = "Only employers can perform this action") -> None:
        if not self.is_employer:
            raise AuthorizationError(message)

    def require_worker(self, message: str = "Only skilled workers can perform this action") -> None:
        if not self.is_worker:
            raise AuthorizationError(message)

    def update_profile(
        self,
        firstname: Optional[str] = None,
        lastname: Optional[str] = None,
        account_type: Optional[str] = None,
        skilled_worker: Optional[Dict[str, Any]] = None,
        employer: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Apply a partial profile update; unspecified fields stay untouched."""
        if firstname is not None:
            self.firstname = firstname
        if lastname is not None:
            self.lastname = lastname
        if account_type is not None:
            try:
                self.account_type = AccountType(account_type)
            except ValueError:
                raise ValidationError(f"Invalid account type: {account_type}", "account_type")
        if skilled_worker:
            _apply_changes(self.skilled_worker, skilled_worker)
        if employer:
            _apply_changes(self.employer, employer)
        self.refresh_name()
        self.validate()
        self.mark_as_updated()

    def update_employer_step(self, changes: Dict[str, Any], allowed: tuple) -> None:
        """Apply one step of the employer onboarding wizard."""
        if not self.is_employer:
            raise ValidationError("Employer account required")
        _apply_changes(self.employer, {k: v for k, v in changes.items() if k in allowed})
        self.validate()
        self.mark_as_updated()

    # Login bookkeeping

    def is_locked(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.utcnow()
        return self.lock_until is not None and self.lock_until > now

    def record_failed_login(self, max_attempts: int, lock_minutes: int) -> None:
        self.failed_login_attempts += 1
        if self.failed_login_attempts >= max_attempts:
            self.lock_until = datetime.utcnow() + timedelta(minutes=lock_minutes)
            self.failed_login_attempts = 0
        self.mark_as_updated()

    def record_successful_login(self) -> None:
        if self.failed_login_attempts or self.lock_until:
            self.failed_login_attempts = 0
            self.lock_until = None
            self.mark_as_updated()

    def mark_contact_verified(self, channel: str) -> None:
        if channel == "email":
            self.is_email_verified = True
        elif channel == "phone":
            self.is_phone_verified = True
        self.mark_as_updated()
