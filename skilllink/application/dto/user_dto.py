"""
User DTOs for the application layer.
Data Transfer Objects for authentication and profile operations.
"""

from typing import Optional, List
from datetime import datetime

from pydantic import EmailStr, Field

from skilllink.domain.models.user import User, SkilledWorkerProfile, EmployerProfile
from .base_dto import BaseDTO, RequestDTO, ResponseDTO


# Nested DTOs
class PortfolioSampleDTO(BaseDTO):
    url: Optional[str] = None
    caption: Optional[str] = None
    media_type: Optional[str] = "image"


class DocumentDTO(BaseDTO):
    label: Optional[str] = None
    file_url: Optional[str] = None


class SkilledWorkerProfileDTO(BaseDTO):
    """Skilled worker profile fields; every field is optional on input."""

    profile_image: Optional[str] = None
    full_name: Optional[str] = None
    location: Optional[str] = None
    contact_preference: Optional[str] = None
    professional_title: Optional[str] = None
    primary_skills: Optional[List[str] | str] = None
    years_of_experience: Optional[int] = None
    languages_spoken: Optional[List[str] | str] = None
    hourly_rate: Optional[float] = None
    availability: Optional[str] = None
    rating: Optional[float] = None
    portfolio_samples: Optional[List[PortfolioSampleDTO]] = None
    certifications: Optional[List[DocumentDTO]] = None
    nin_document: Optional[str] = None
    short_bio: Optional[str] = None

    @classmethod
    def from_domain(cls, profile: SkilledWorkerProfile) -> "SkilledWorkerProfileDTO":
        return cls.model_validate(profile.to_dict())


class EmployerProfileDTO(BaseDTO):
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    location: Optional[str] = None
    contact_preference: Optional[str] = None
    industry: Optional[List[str] | str] = None
    website: Optional[str] = None
    company_size: Optional[str] = None
    short_bio: Optional[str] = None
    verification_docs: Optional[List[DocumentDTO]] = None

    @classmethod
    def from_domain(cls, profile: EmployerProfile) -> "EmployerProfileDTO":
        return cls.model_validate(profile.to_dict())


# Request DTOs
class RegisterRequestDTO(RequestDTO):
    """DTO for user registration."""

    firstname: Optional[str] = None
    lastname: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    account_type: Optional[str] = None
    skilled_worker: Optional[SkilledWorkerProfileDTO] = None
    employer: Optional[EmployerProfileDTO] = None


class LoginRequestDTO(RequestDTO):
    email: Optional[str] = None
    password: Optional[str] = None


class SendOtpRequestDTO(RequestDTO):
    email: Optional[EmailStr] = None
    phone: Optional[str] = None


class VerifyOtpRequestDTO(RequestDTO):
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    code: Optional[str] = None


class UpdateProfileRequestDTO(RequestDTO):
    """Partial profile update; only sent fields change."""

    firstname: Optional[str] = None
    lastname: Optional[str] = None
    account_type: Optional[str] = None
    skilled_worker: Optional[SkilledWorkerProfileDTO] = None
    employer: Optional[EmployerProfileDTO] = None


class EmployerStepRequestDTO(RequestDTO):
    """
    One onboarding step. Fields may be sent at the top level or nested
    under `employer`.
    """

    employer: Optional[EmployerProfileDTO] = None
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    location: Optional[str] = None
    contact_preference: Optional[str] = None
    industry: Optional[List[str] | str] = None
    website: Optional[str] = None
    company_size: Optional[str] = None
    short_bio: Optional[str] = None
    verification_docs: Optional[List[DocumentDTO]] = None

    def step_changes(self) -> dict:
        if self.employer is not None:
            return self.employer.model_dump(exclude_unset=True)
        changes = self.model_dump(exclude_unset=True)
        changes.pop("employer", None)
        return changes


# Response DTOs
class UserResponseDTO(ResponseDTO):
    """Full user document; the password hash is never included."""

    firstname: Optional[str] = None
    lastname: Optional[str] = None
    name: str
    email: str
    phone: Optional[str] = None
    role: str
    account_type: str
    is_active: bool
    is_email_verified: bool = False
    is_phone_verified: bool = False
    skilled_worker: Optional[SkilledWorkerProfileDTO] = None
    employer: Optional[EmployerProfileDTO] = None

    @classmethod
    def from_domain(cls, user: User) -> "UserResponseDTO":
        return cls(
            id=user.id,
            firstname=user.firstname,
            lastname=user.lastname,
            name=user.name,
            email=user.email,
            phone=user.phone,
            role=user.role.value,
            account_type=user.account_type.value,
            is_active=user.is_active,
            is_email_verified=user.is_email_verified,
            is_phone_verified=user.is_phone_verified,
            skilled_worker=SkilledWorkerProfileDTO.from_domain(user.skilled_worker),
            employer=EmployerProfileDTO.from_domain(user.employer),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class WorkerCardDTO(BaseDTO):
    """Public worker listing entry; contact details are left out."""

    id: int
    name: str
    display_name: str
    account_type: str
    skilled_worker: SkilledWorkerProfileDTO

    @classmethod
    def from_domain(cls, user: User) -> "WorkerCardDTO":
        return cls(
            id=user.id,
            name=user.name,
            display_name=user.display_name,
            account_type=user.account_type.value,
            skilled_worker=SkilledWorkerProfileDTO.from_domain(user.skilled_worker),
        )


class AuthResponseDTO(BaseDTO):
    user: UserResponseDTO
    token: str = Field(description="JWT access token")
