"""
Employer router.
Dashboard, wallet deposits and payments to workers.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Query, status

from skilllink.infrastructure.auth import CurrentUserId
from skilllink.infrastructure.web.dependencies import UnitOfWorkDep, DispatcherDep
from skilllink.application.use_cases.employer_use_cases import EmployerDashboardUseCase
from skilllink.application.use_cases.payment_use_cases import (
    EmployerPaymentsOverviewUseCase,
    EmployerPaymentsHistoryUseCase,
    PayWorkerUseCase,
    DepositUseCase,
)
from skilllink.application.dto.payment_dto import DepositRequestDTO, PayWorkerRequestDTO, EmployerOverviewDTO


router = APIRouter()


@router.get("/dashboard")
async def employer_dashboard(user_id: CurrentUserId, uow: UnitOfWorkDep) -> Dict[str, Any]:
    """Summary counters, active jobs, pending actions and recent applications."""
    return await EmployerDashboardUseCase(uow).execute(user_id)


@router.get("/payments/overview", response_model=EmployerOverviewDTO)
async def payments_overview(user_id: CurrentUserId, uow: UnitOfWorkDep):
    """`{accountBalance, totalSpent, pendingPayments}`."""
    return await EmployerPaymentsOverviewUseCase(uow).execute(user_id)


@router.get("/payments/history")
async def payments_history(
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1),
) -> Dict[str, Any]:
    history, pagination = await EmployerPaymentsHistoryUseCase(uow).execute(user_id, page, limit)
    return {"history": history, "pagination": pagination}


@router.post("/wallet/deposit", status_code=status.HTTP_201_CREATED)
async def deposit(
    request: DepositRequestDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
) -> Dict[str, Any]:
    """Top up the employer wallet."""
    return {"deposit": await DepositUseCase(uow).execute(user_id, request)}


@router.post("/projects/{project_id}/payments", status_code=status.HTTP_201_CREATED)
async def pay_worker(
    project_id: int,
    request: PayWorkerRequestDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """
    Pay the project assignee from the employer wallet.

    - **amount**: required, > 0
    - **eventId**: optional payment request to mark as paid
    """
    payment = await PayWorkerUseCase(uow, dispatcher).execute(user_id, project_id, request)
    return {"message": "Payment sent to worker", "payment": payment}
