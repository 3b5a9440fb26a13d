"""
Job postings router.
Handles CRUD for jobs plus worker applications and their review.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Response, status

from skilllink.infrastructure.auth import CurrentUserId
from skilllink.infrastructure.web.dependencies import UnitOfWorkDep, DispatcherDep
from skilllink.application.use_cases.job_use_cases import (
    CreateJobUseCase,
    ListMyJobsUseCase,
    GetJobUseCase,
    UpdateJobUseCase,
    DeleteJobUseCase,
)
from skilllink.application.use_cases.invite_use_cases import (
    ApplyToJobUseCase,
    ApproveInviteOrApplicationUseCase,
    DeclineApplicationUseCase,
)
from skilllink.application.dto.job_dto import (
    CreateJobRequestDTO,
    UpdateJobRequestDTO,
    ApplyToJobRequestDTO,
)


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_job(
    request: CreateJobRequestDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
) -> Dict[str, Any]:
    """
    Post a new job.

    - **title**: required
    - **description**: required
    - **budgetRange**: `{min, max}`, both required, min <= max
    - **timeline**: free text
    - **requiredSkills**: list or comma-separated string
    """
    return {"job": await CreateJobUseCase(uow).execute(user_id, request)}


@router.get("")
async def list_my_jobs(user_id: CurrentUserId, uow: UnitOfWorkDep) -> Dict[str, Any]:
    """Jobs posted by the caller, newest first."""
    return {"jobs": await ListMyJobsUseCase(uow).execute(user_id)}


# Application review; declared before the /{job_id} routes
@router.post("/applications/{invite_id}/approve")
async def approve_application(
    invite_id: int,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """Approve an application (or a legacy accepted invite). The job stays open."""
    invite = await ApproveInviteOrApplicationUseCase(uow, dispatcher).execute(user_id, invite_id)
    return {"invite": invite}


@router.post("/applications/{invite_id}/decline")
async def decline_application(
    invite_id: int,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    invite = await DeclineApplicationUseCase(uow, dispatcher).execute(user_id, invite_id)
    return {"invite": invite}


@router.get("/{job_id}")
async def get_job(job_id: int, user_id: CurrentUserId, uow: UnitOfWorkDep) -> Dict[str, Any]:
    return {"job": await GetJobUseCase(uow).execute(job_id)}


@router.patch("/{job_id}")
async def update_job(
    job_id: int,
    request: UpdateJobRequestDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
) -> Dict[str, Any]:
    """Owner-only partial update; `isActive` reopens or closes the posting."""
    return {"job": await UpdateJobUseCase(uow).execute(user_id, job_id, request)}


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job(job_id: int, user_id: CurrentUserId, uow: UnitOfWorkDep):
    await DeleteJobUseCase(uow).execute(user_id, job_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{job_id}/apply", status_code=status.HTTP_201_CREATED)
async def apply_to_job(
    job_id: int,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
    request: Optional[ApplyToJobRequestDTO] = Body(None),
) -> Dict[str, Any]:
    """Apply as a skilled worker; one open application per job."""
    request = request or ApplyToJobRequestDTO()
    application = await ApplyToJobUseCase(uow, dispatcher).execute(user_id, job_id, request)
    return {"application": application}
