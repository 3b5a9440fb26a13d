"""
Skilled worker router.
Public discovery plus the authenticated worker's jobs, dashboard and finances.
"""

from datetime import date
from typing import Any, Dict, Optional

from fastapi import APIRouter, Query, status

from skilllink.infrastructure.auth import CurrentUserId
from skilllink.infrastructure.web.dependencies import UnitOfWorkDep, DispatcherDep
from skilllink.application.use_cases.worker_use_cases import (
    SearchWorkersUseCase,
    WorkerFilterMetaUseCase,
    GetWorkerProfileUseCase,
    ListWorkerInvitationsUseCase,
    ListWorkerActiveJobsUseCase,
    ListWorkerCompletedJobsUseCase,
    WorkerDashboardUseCase,
)
from skilllink.application.use_cases.invite_use_cases import AcceptInviteUseCase, DeclineInviteUseCase
from skilllink.application.use_cases.payment_use_cases import (
    WorkerPaymentsOverviewUseCase,
    WorkerPaymentsHistoryUseCase,
    RequestWithdrawalUseCase,
)
from skilllink.application.dto.payment_dto import WithdrawalRequestDTO, WorkerOverviewDTO


router = APIRouter()


@router.get("/public")
async def list_workers(
    uow: UnitOfWorkDep,
    q: Optional[str] = Query(None, description="Name, title or bio contains"),
    skills: Optional[str] = Query(None, description="Comma-separated; all must match"),
    location: Optional[str] = Query(None),
    min_rate: Optional[float] = Query(None, alias="minRate"),
    max_rate: Optional[float] = Query(None, alias="maxRate"),
    availability: Optional[str] = Query(None),
    min_rating: Optional[float] = Query(None, alias="minRating"),
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1),
) -> Dict[str, Any]:
    """Public worker search, highest rating first."""
    items, pagination = await SearchWorkersUseCase(uow).execute(
        page, limit, q, skills, location, min_rate, max_rate, availability, min_rating
    )
    return {"items": items, "pagination": pagination}


@router.get("/meta")
async def workers_meta(uow: UnitOfWorkDep) -> Dict[str, Any]:
    """Distinct skills, locations, availability values and the hourly rate range."""
    return await WorkerFilterMetaUseCase(uow).execute()


# Authenticated worker endpoints; declared before /{worker_id}

@router.get("/dashboard")
async def worker_dashboard(user_id: CurrentUserId, uow: UnitOfWorkDep) -> Dict[str, Any]:
    return await WorkerDashboardUseCase(uow).execute(user_id)


def _job_filters(
    q: Optional[str] = None,
    category: Optional[str] = None,
    date_from: Optional[date] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    return {"q": q, "category": category, "date_from": date_from, "page": page, "limit": limit}


@router.get("/jobs/invitations")
async def job_invitations(
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    q: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    date_from: Optional[date] = Query(None, alias="dateFrom"),
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1),
) -> Dict[str, Any]:
    """Employer invites addressed to the caller."""
    invitations, pagination = await ListWorkerInvitationsUseCase(uow).execute(
        user_id, **_job_filters(q, category, date_from, page, limit)
    )
    return {"invitations": invitations, "pagination": pagination}


@router.get("/jobs/active")
async def active_jobs(
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    q: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    date_from: Optional[date] = Query(None, alias="dateFrom"),
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1),
) -> Dict[str, Any]:
    """Invite records in `accepted` or `approved`."""
    jobs, pagination = await ListWorkerActiveJobsUseCase(uow).execute(
        user_id, **_job_filters(q, category, date_from, page, limit)
    )
    return {"activeJobs": jobs, "pagination": pagination}


@router.get("/jobs/completed")
async def completed_jobs(
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    q: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    date_from: Optional[date] = Query(None, alias="dateFrom"),
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1),
) -> Dict[str, Any]:
    jobs, pagination = await ListWorkerCompletedJobsUseCase(uow).execute(
        user_id, **_job_filters(q, category, date_from, page, limit)
    )
    return {"completedJobs": jobs, "pagination": pagination}


@router.post("/jobs/invitations/{invite_id}/accept")
async def accept_invitation(
    invite_id: int,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """Same as accepting through /api/invites."""
    invite, project = await AcceptInviteUseCase(uow, dispatcher).execute(user_id, invite_id)
    return {"message": "Invitation accepted successfully", "invite": invite, "project": project}


@router.post("/jobs/invitations/{invite_id}/decline")
async def decline_invitation(
    invite_id: int,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    invite = await DeclineInviteUseCase(uow, dispatcher).execute(user_id, invite_id)
    return {"message": "Invitation declined successfully", "invite": invite}


# Payments and finance

@router.get("/payments/overview", response_model=WorkerOverviewDTO)
async def payments_overview(user_id: CurrentUserId, uow: UnitOfWorkDep):
    """`{availableBalance, totalEarnings, pendingWithdrawals, totalWithdrawn}`."""
    return await WorkerPaymentsOverviewUseCase(uow).execute(user_id)


@router.get("/payments/history")
async def payments_history(
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1),
) -> Dict[str, Any]:
    history, pagination = await WorkerPaymentsHistoryUseCase(uow).execute(user_id, page, limit)
    return {"history": history, "pagination": pagination}


@router.post("/payments/withdrawals", status_code=status.HTTP_201_CREATED)
async def request_withdrawal(
    request: WithdrawalRequestDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """Pending withdrawal; the amount leaves the available balance right away."""
    withdrawal = await RequestWithdrawalUseCase(uow, dispatcher).execute(user_id, request)
    return {"withdrawal": withdrawal}


@router.get("/{worker_id}")
async def get_worker(worker_id: int, uow: UnitOfWorkDep) -> Dict[str, Any]:
    """Public profile of an active skilled worker."""
    return {"worker": await GetWorkerProfileUseCase(uow).execute(worker_id)}
