"""
Authentication and profile use cases.
Implements registration, login with lockout, profile edits and OTP checks.
"""

import logging
from typing import Any, Dict, Optional

from skilllink.config import settings
from skilllink.application.use_cases.base_use_case import CommandUseCase, QueryUseCase
from skilllink.application.dto.user_dto import (
    RegisterRequestDTO,
    LoginRequestDTO,
    SendOtpRequestDTO,
    VerifyOtpRequestDTO,
    UpdateProfileRequestDTO,
    EmployerStepRequestDTO,
    UserResponseDTO,
    AuthResponseDTO,
)
from skilllink.domain.models.base import (
    ValidationError,
    AuthenticationError,
    DuplicateEntityError,
)
from skilllink.domain.models.user import User
from skilllink.domain.services.email_service import EmailServiceInterface
from skilllink.domain.services.otp_service import OtpStore, generate_code, otp_key
from skilllink.infrastructure.auth.jwt_handler import create_access_token
from skilllink.infrastructure.auth.password import hash_password, verify_password


logger = logging.getLogger(__name__)


# Employer onboarding steps and the profile keys each one may write
EMPLOYER_STEP_FIELDS = {
    "basic": ("company_name", "company_logo", "location", "contact_preference"),
    "details": ("industry", "company_size", "website", "short_bio"),
    "trust": ("verification_docs",),
}


def issue_token(user: User) -> str:
    return create_access_token(user.id, user.email, user.role.value)


def _profile_changes(dto) -> Optional[Dict[str, Any]]:
    if dto is None:
        return None
    return dto.model_dump(exclude_unset=True)


class RegisterUserUseCase(CommandUseCase):
    """Create an account and sign the new user in."""

    async def execute(self, request: RegisterRequestDTO) -> AuthResponseDTO:
        if not request.email or not request.password or not (request.firstname or request.lastname):
            raise ValidationError("firstname/lastname, email and password are required")

        email = str(request.email).strip().lower()
        if self.uow.users.get_by_email(email):
            raise DuplicateEntityError("User", "email", email, "Email already in use")

        user = User.register(
            email=email,
            password_hash=hash_password(request.password),
            firstname=request.firstname,
            lastname=request.lastname,
            phone=request.phone,
            account_type=request.account_type,
            skilled_worker=_profile_changes(request.skilled_worker),
            employer=_profile_changes(request.employer),
        )
        user = self.uow.users.save(user)
        await self._commit()

        logger.info(f"Registered user {user.id} as {user.account_type.value}")
        return AuthResponseDTO(user=UserResponseDTO.from_domain(user), token=issue_token(user))


class LoginUseCase(CommandUseCase):
    """
    Password login.
    Repeated failures lock the account for a while; failed attempts are
    committed before the error is raised.
    """

    invalid_message = "Invalid credentials"

    async def execute(self, request: LoginRequestDTO) -> AuthResponseDTO:
        if not request.email or not request.password:
            raise ValidationError("email and password are required")

        user = self.uow.users.get_by_email(request.email.strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError(self.invalid_message)
        if user.is_locked():
            raise AuthenticationError("Account temporarily locked")

        if not verify_password(request.password, user.password_hash):
            user.record_failed_login(settings.max_failed_logins, settings.login_lock_minutes)
            self.uow.users.save(user)
            await self._commit()
            logger.warning(f"Failed login for user {user.id}")
            raise AuthenticationError(self.invalid_message)

        self._check_allowed(user)

        user.record_successful_login()
        user = self.uow.users.save(user)
        await self._commit()
        return AuthResponseDTO(user=UserResponseDTO.from_domain(user), token=issue_token(user))

    def _check_allowed(self, user: User) -> None:
        pass


class AdminLoginUseCase(LoginUseCase):
    """Login restricted to admin accounts; anyone else gets the generic error."""

    async def execute(self, request: LoginRequestDTO) -> AuthResponseDTO:
        if not request.email or not request.password:
            raise ValidationError("email and password required")
        return await super().execute(request)

    def _check_allowed(self, user: User) -> None:
        if not user.is_admin:
            raise AuthenticationError(self.invalid_message)


class GetCurrentUserUseCase(QueryUseCase):

    async def execute(self, user_id: int) -> UserResponseDTO:
        return UserResponseDTO.from_domain(self._load_user(user_id))


class UpdateProfileUseCase(CommandUseCase):
    """Partial update of names, account type and profile sub-documents."""

    async def execute(self, user_id: int, request: UpdateProfileRequestDTO) -> UserResponseDTO:
        user = self._load_user(user_id)
        user.update_profile(
            firstname=request.firstname,
            lastname=request.lastname,
            account_type=request.account_type,
            skilled_worker=_profile_changes(request.skilled_worker),
            employer=_profile_changes(request.employer),
        )
        user = self.uow.users.save(user)
        await self._commit()
        return UserResponseDTO.from_domain(user)


class UpdateEmployerStepUseCase(CommandUseCase):
    """One step of the employer onboarding wizard (basic, details or trust)."""

    def __init__(self, uow, dispatcher=None, step: str = "basic"):
        super().__init__(uow, dispatcher)
        if step not in EMPLOYER_STEP_FIELDS:
            raise ValueError(f"Unknown employer step: {step}")
        self.step = step

    async def execute(self, user_id: int, request: EmployerStepRequestDTO) -> UserResponseDTO:
        user = self._load_user(user_id)
        user.update_employer_step(request.step_changes(), EMPLOYER_STEP_FIELDS[self.step])
        user = self.uow.users.save(user)
        await self._commit()
        return UserResponseDTO.from_domain(user)


class SendOtpUseCase(QueryUseCase):
    """
    Issue a one-time code for an email address or phone number.
    Phone codes have no delivery channel yet and are only logged.
    """

    def __init__(self, uow, otp_store: OtpStore, email_service: Optional[EmailServiceInterface] = None):
        super().__init__(uow)
        self.otp_store = otp_store
        self.email_service = email_service

    async def execute(self, request: SendOtpRequestDTO) -> Dict[str, Any]:
        email = str(request.email) if request.email else None
        key = otp_key(email=email, phone=request.phone)
        if key is None:
            raise ValidationError("email or phone is required")

        code = generate_code(settings.otp_length)
        self.otp_store.put(key, code, settings.otp_ttl_seconds)
        ttl_minutes = max(1, settings.otp_ttl_seconds // 60)

        channel = "email" if email else "phone"
        if email and self.email_service is not None:
            await self.email_service.send_otp_code(email, code, ttl_minutes)
        else:
            logger.info(f"OTP issued for {key}")

        result = {"message": "OTP sent", "channel": channel, "expiresIn": settings.otp_ttl_seconds}
        if not settings.is_production:
            result["devCode"] = code
        return result


class VerifyOtpUseCase(CommandUseCase):
    """Consume a code; a known account gets the contact marked verified."""

    def __init__(self, uow, otp_store: OtpStore, dispatcher=None):
        super().__init__(uow, dispatcher)
        self.otp_store = otp_store

    async def execute(self, request: VerifyOtpRequestDTO) -> Dict[str, Any]:
        email = str(request.email) if request.email else None
        key = otp_key(email=email, phone=request.phone)
        if key is None or not request.code:
            raise ValidationError("email or phone and code are required")

        expected = self.otp_store.get(key)
        if expected is None or expected != str(request.code).strip():
            raise ValidationError("Invalid or expired code", "code")
        self.otp_store.delete(key)

        if email:
            user, channel = self.uow.users.get_by_email(email.lower()), "email"
        else:
            user, channel = self.uow.users.get_by_phone(request.phone), "phone"
        if user is not None:
            user.mark_contact_verified(channel)
            self.uow.users.save(user)
            await self._commit()

        return {"verified": True, "channel": channel}
