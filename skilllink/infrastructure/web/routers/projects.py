"""
Project management router.
Projects, milestones, messages, file submissions, the event log and quick actions.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Query, Response, status

from skilllink.infrastructure.auth import CurrentUserId
from skilllink.infrastructure.web.dependencies import UnitOfWorkDep, DispatcherDep
from skilllink.application.use_cases.project_use_cases import (
    ListProjectsUseCase,
    GetProjectUseCase,
    CreateProjectUseCase,
    UpdateProjectUseCase,
    UpdateMilestoneUseCase,
    ListMessagesUseCase,
    AddMessageUseCase,
    ListSubmissionsUseCase,
    AddSubmissionUseCase,
    DeleteSubmissionUseCase,
    ListEventsUseCase,
    RequestPaymentUseCase,
    ExtendDeadlineUseCase,
    RequestDeadlineExtensionUseCase,
    ApproveDeadlineExtensionUseCase,
    ContactSupportUseCase,
)
from skilllink.application.dto.project_dto import (
    CreateProjectRequestDTO,
    UpdateProjectRequestDTO,
    MilestoneRequestDTO,
    MessageRequestDTO,
    SubmissionRequestDTO,
    RequestPaymentDTO,
    ExtendDeadlineDTO,
    DeadlineExtensionRequestDTO,
    ApproveDeadlineExtensionDTO,
    SupportRequestDTO,
)


router = APIRouter()

PageParam = Query(None, ge=1, description="Page number (1-based)")
LimitParam = Query(None, ge=1, description="Items per page")


@router.get("")
async def list_projects(user_id: CurrentUserId, uow: UnitOfWorkDep) -> Dict[str, Any]:
    """Projects the caller created or is assigned to."""
    return {"projects": await ListProjectsUseCase(uow).execute(user_id)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    request: CreateProjectRequestDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """
    Create a project.

    - **title**: required
    - **budget**: defaults to 0
    - **currency**: defaults to NGN
    - **assignedTo**: optional active worker
    - **milestones**: optional initial milestones
    """
    return {"project": await CreateProjectUseCase(uow, dispatcher).execute(user_id, request)}


@router.get("/{project_id}")
async def get_project(project_id: int, user_id: CurrentUserId, uow: UnitOfWorkDep) -> Dict[str, Any]:
    return {"project": await GetProjectUseCase(uow).execute(user_id, project_id)}


@router.patch("/{project_id}")
async def update_project(
    project_id: int,
    request: UpdateProjectRequestDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """
    Creator-only partial update.
    Setting `status` to `completed` also completes the matching invite
    records and closes the linked job.
    """
    project = await UpdateProjectUseCase(uow, dispatcher).execute(user_id, project_id, request)
    return {"project": project}


# Messages

@router.get("/{project_id}/messages")
async def list_messages(
    project_id: int,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    page: Optional[int] = PageParam,
    limit: Optional[int] = LimitParam,
) -> Dict[str, Any]:
    messages, pagination = await ListMessagesUseCase(uow).execute(user_id, project_id, page, limit)
    return {"messages": messages, "pagination": pagination}


@router.post("/{project_id}/messages", status_code=status.HTTP_201_CREATED)
async def add_message(
    project_id: int,
    request: MessageRequestDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    message = await AddMessageUseCase(uow, dispatcher).execute(user_id, project_id, request)
    return {"message": message}


# Submissions

@router.get("/{project_id}/submissions")
async def list_submissions(
    project_id: int,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    page: Optional[int] = PageParam,
    limit: Optional[int] = LimitParam,
) -> Dict[str, Any]:
    submissions, pagination = await ListSubmissionsUseCase(uow).execute(user_id, project_id, page, limit)
    return {"submissions": submissions, "pagination": pagination}


@router.post("/{project_id}/submissions", status_code=status.HTTP_201_CREATED)
async def add_submission(
    project_id: int,
    request: SubmissionRequestDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """Share a file by URL; `filename` defaults to the last URL segment."""
    submission = await AddSubmissionUseCase(uow, dispatcher).execute(user_id, project_id, request)
    return {"submission": submission}


@router.delete("/{project_id}/submissions/{submission_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_submission(
    project_id: int,
    submission_id: int,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
):
    await DeleteSubmissionUseCase(uow).execute(user_id, project_id, submission_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Events

@router.get("/{project_id}/events")
async def list_events(
    project_id: int,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    page: Optional[int] = PageParam,
    limit: Optional[int] = LimitParam,
) -> Dict[str, Any]:
    events, pagination = await ListEventsUseCase(uow).execute(user_id, project_id, page, limit)
    return {"events": events, "pagination": pagination}


# Milestones

@router.patch("/{project_id}/milestones/{milestone_id}")
async def update_milestone(
    project_id: int,
    milestone_id: int,
    request: MilestoneRequestDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """
    Assignee may move the status to `in_progress` or `submitted` only;
    the creator may edit every field.
    """
    project, milestone = await UpdateMilestoneUseCase(uow, dispatcher).execute(
        user_id, project_id, milestone_id, request
    )
    return {"project": project, "milestone": milestone}


# Quick actions

@router.post("/{project_id}/actions/request-payment", status_code=status.HTTP_201_CREATED)
async def request_payment(
    project_id: int,
    request: RequestPaymentDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    event = await RequestPaymentUseCase(uow, dispatcher).execute(user_id, project_id, request)
    return {"event": event}


@router.post("/{project_id}/actions/extend-deadline")
async def extend_deadline(
    project_id: int,
    request: ExtendDeadlineDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """Creator moves the deadline directly."""
    project, event = await ExtendDeadlineUseCase(uow, dispatcher).execute(user_id, project_id, request)
    return {"project": project, "event": event}


@router.post("/{project_id}/actions/contact-support", status_code=status.HTTP_201_CREATED)
async def contact_support(
    project_id: int,
    request: SupportRequestDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    event = await ContactSupportUseCase(uow, dispatcher).execute(user_id, project_id, request)
    return {"event": event}


@router.post("/{project_id}/actions/request-deadline-extension", status_code=status.HTTP_201_CREATED)
async def request_deadline_extension(
    project_id: int,
    request: DeadlineExtensionRequestDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """Worker proposes a new date; the deadline does not move until approved."""
    event = await RequestDeadlineExtensionUseCase(uow, dispatcher).execute(user_id, project_id, request)
    return {"event": event}


@router.post("/{project_id}/actions/approve-deadline-extension/{event_id}")
async def approve_deadline_extension(
    project_id: int,
    event_id: int,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
    request: Optional[ApproveDeadlineExtensionDTO] = Body(None),
) -> Dict[str, Any]:
    """Apply a requested extension; `newDeadline` overrides the proposed date."""
    request = request or ApproveDeadlineExtensionDTO()
    project, event = await ApproveDeadlineExtensionUseCase(uow, dispatcher).execute(
        user_id, project_id, event_id, request
    )
    return {"project": project, "event": event}
