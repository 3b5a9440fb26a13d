"""
Admin back-office router.
Login is public; every other route requires an admin token.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Response

from skilllink.config import settings
from skilllink.infrastructure.auth import require_admin
from skilllink.infrastructure.web.dependencies import UnitOfWorkDep
from skilllink.application.use_cases.auth_use_cases import AdminLoginUseCase
from skilllink.application.use_cases.admin_use_cases import (
    AdminListUsersUseCase,
    AdminGetUserUseCase,
    AdminListJobsUseCase,
    AdminGetJobUseCase,
    AdminListPaymentsUseCase,
    AdminGetPaymentUseCase,
)
from skilllink.application.dto.job_dto import JobResponseDTO
from skilllink.application.dto.payment_dto import PaymentResponseDTO
from skilllink.application.dto.user_dto import LoginRequestDTO, AuthResponseDTO, UserResponseDTO


ADMIN_COOKIE_NAME = "auth_token"

router = APIRouter()
protected = APIRouter(dependencies=[Depends(require_admin)])


@router.post("/login", response_model=AuthResponseDTO)
async def admin_login(request: LoginRequestDTO, response: Response, uow: UnitOfWorkDep):
    """Admin accounts only; the token is also set as an httpOnly cookie."""
    result = await AdminLoginUseCase(uow).execute(request)
    response.set_cookie(
        ADMIN_COOKIE_NAME,
        result.token,
        max_age=settings.jwt_access_token_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
    return result


@protected.get("/users")
async def list_users(
    uow: UnitOfWorkDep,
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    q: Optional[str] = Query(None, description="Name or email contains"),
    account_type: Optional[str] = Query(None, alias="accountType"),
) -> Dict[str, Any]:
    data, meta = await AdminListUsersUseCase(uow).execute(page, limit, q, account_type)
    return {"data": data, "meta": meta}


@protected.get("/users/{user_id}", response_model=UserResponseDTO)
async def get_user(user_id: int, uow: UnitOfWorkDep):
    return await AdminGetUserUseCase(uow).execute(user_id)


@protected.get("/jobs")
async def list_jobs(
    uow: UnitOfWorkDep,
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    q: Optional[str] = Query(None, description="Title contains"),
) -> Dict[str, Any]:
    data, meta = await AdminListJobsUseCase(uow).execute(page, limit, q)
    return {"data": data, "meta": meta}


@protected.get("/jobs/{job_id}", response_model=JobResponseDTO)
async def get_job(job_id: int, uow: UnitOfWorkDep):
    return await AdminGetJobUseCase(uow).execute(job_id)


@protected.get("/payments")
async def list_payments(
    uow: UnitOfWorkDep,
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    type: Optional[str] = Query(None, description="earning, deposit or withdrawal"),
) -> Dict[str, Any]:
    data, meta = await AdminListPaymentsUseCase(uow).execute(page, limit, type)
    return {"data": data, "meta": meta}


@protected.get("/payments/{payment_id}", response_model=PaymentResponseDTO)
async def get_payment(payment_id: int, uow: UnitOfWorkDep):
    return await AdminGetPaymentUseCase(uow).execute(payment_id)


router.include_router(protected)
