"""
Invites router.
Employers invite workers to jobs; workers accept or decline.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Query, status

from skilllink.infrastructure.auth import CurrentUserId
from skilllink.infrastructure.web.dependencies import UnitOfWorkDep, DispatcherDep
from skilllink.application.use_cases.invite_use_cases import (
    CreateInviteUseCase,
    AcceptInviteUseCase,
    DeclineInviteUseCase,
    ApproveInviteOrApplicationUseCase,
    ListInvitesUseCase,
    GetInviteUseCase,
)
from skilllink.application.dto.invite_dto import CreateInviteRequestDTO


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_invite(
    request: CreateInviteRequestDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """
    Invite a worker to one of the caller's jobs.

    - **jobId**: a job the caller owns
    - **workerId**: an active skilled worker
    - **message**: optional note
    """
    return {"invite": await CreateInviteUseCase(uow, dispatcher).execute(user_id, request)}


@router.get("")
async def list_invites(
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    type: Optional[str] = Query(None, description="invite or application"),
    status: Optional[str] = Query(None, description="Filter by status"),
    job_id: Optional[int] = Query(None, alias="jobId"),
) -> Dict[str, Any]:
    """Invites and applications on the caller's side, newest first."""
    invites = await ListInvitesUseCase(uow).execute(user_id, type, status, job_id)
    return {"invites": invites}


@router.get("/{invite_id}")
async def get_invite(invite_id: int, user_id: CurrentUserId, uow: UnitOfWorkDep) -> Dict[str, Any]:
    return {"invite": await GetInviteUseCase(uow).execute(user_id, invite_id)}


@router.post("/{invite_id}/accept")
async def accept_invite(
    invite_id: int,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """Accept a pending invite; opens the project and closes the job."""
    invite, project = await AcceptInviteUseCase(uow, dispatcher).execute(user_id, invite_id)
    return {"invite": invite, "project": project}


@router.post("/{invite_id}/decline")
async def decline_invite(
    invite_id: int,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    return {"invite": await DeclineInviteUseCase(uow, dispatcher).execute(user_id, invite_id)}


@router.post("/{invite_id}/approve")
async def approve_invite(
    invite_id: int,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """Employer approval of an accepted invite or an applied application."""
    return {"invite": await ApproveInviteOrApplicationUseCase(uow, dispatcher).execute(user_id, invite_id)}
