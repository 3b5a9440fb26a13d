"""
Authentication router for user authentication endpoints.
Handles OTP verification, registration, login and profile management.
"""

from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends, status

from skilllink.infrastructure.auth import CurrentUserId, get_otp_store
from skilllink.infrastructure.web.dependencies import UnitOfWorkDep, DispatcherDep, get_mailer
from skilllink.application.use_cases.auth_use_cases import (
    RegisterUserUseCase,
    LoginUseCase,
    GetCurrentUserUseCase,
    UpdateProfileUseCase,
    UpdateEmployerStepUseCase,
    SendOtpUseCase,
    VerifyOtpUseCase,
)
from skilllink.application.dto.user_dto import (
    RegisterRequestDTO,
    LoginRequestDTO,
    SendOtpRequestDTO,
    VerifyOtpRequestDTO,
    UpdateProfileRequestDTO,
    EmployerStepRequestDTO,
    AuthResponseDTO,
)
from skilllink.domain.services.email_service import EmailServiceInterface
from skilllink.domain.services.otp_service import OtpStore


router = APIRouter()

OtpStoreDep = Annotated[OtpStore, Depends(get_otp_store)]


@router.post("/send-otp")
async def send_otp(
    request: SendOtpRequestDTO,
    uow: UnitOfWorkDep,
    otp_store: OtpStoreDep,
    mailer: Annotated[EmailServiceInterface, Depends(get_mailer)],
) -> Dict[str, Any]:
    """
    Issue a one-time code.

    - **email** or **phone**: where the code goes
    """
    return await SendOtpUseCase(uow, otp_store, mailer).execute(request)


@router.post("/verify-otp")
async def verify_otp(
    request: VerifyOtpRequestDTO,
    uow: UnitOfWorkDep,
    otp_store: OtpStoreDep,
) -> Dict[str, Any]:
    """Consume a one-time code and mark the contact verified."""
    return await VerifyOtpUseCase(uow, otp_store).execute(request)


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponseDTO)
async def register(request: RegisterRequestDTO, uow: UnitOfWorkDep, dispatcher: DispatcherDep):
    """
    Register a new user account.

    - **firstname** / **lastname**: at least one is required
    - **email**: unique, stored lowercased
    - **password**: plain text, hashed with bcrypt
    - **accountType**: `skilled_worker` (default) or `employer`
    """
    return await RegisterUserUseCase(uow, dispatcher).execute(request)


@router.post("/login", response_model=AuthResponseDTO)
async def login(request: LoginRequestDTO, uow: UnitOfWorkDep):
    """
    Authenticate user and return an access token.
    Repeated failures lock the account for a while.
    """
    return await LoginUseCase(uow).execute(request)


@router.get("/me")
async def me(user_id: CurrentUserId, uow: UnitOfWorkDep) -> Dict[str, Any]:
    return {"user": await GetCurrentUserUseCase(uow).execute(user_id)}


@router.patch("/profile")
async def update_profile(
    request: UpdateProfileRequestDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
) -> Dict[str, Any]:
    """Partial profile update; list fields accept comma-separated strings."""
    return {"user": await UpdateProfileUseCase(uow).execute(user_id, request)}


async def _employer_step(step: str, user_id: int, request: EmployerStepRequestDTO, uow) -> Dict[str, Any]:
    user = await UpdateEmployerStepUseCase(uow, step=step).execute(user_id, request)
    return {"user": user}


@router.patch("/profile/employer/basic")
async def employer_basic(request: EmployerStepRequestDTO, user_id: CurrentUserId, uow: UnitOfWorkDep):
    """Company name, logo, location and contact preference."""
    return await _employer_step("basic", user_id, request, uow)


@router.patch("/profile/employer/details")
async def employer_details(request: EmployerStepRequestDTO, user_id: CurrentUserId, uow: UnitOfWorkDep):
    """Industry, company size, website and bio."""
    return await _employer_step("details", user_id, request, uow)


@router.patch("/profile/employer/trust")
async def employer_trust(request: EmployerStepRequestDTO, user_id: CurrentUserId, uow: UnitOfWorkDep):
    """Verification documents."""
    return await _employer_step("trust", user_id, request, uow)
