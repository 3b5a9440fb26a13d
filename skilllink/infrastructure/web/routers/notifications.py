"""
Notifications router.
In-app notifications for the signed-in user; admins may create them.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Query, status

from skilllink.infrastructure.auth import CurrentUserId
from skilllink.infrastructure.web.dependencies import UnitOfWorkDep, NotificationServiceDep
from skilllink.application.use_cases.notification_use_cases import (
    ListNotificationsUseCase,
    CreateNotificationUseCase,
    MarkNotificationReadUseCase,
    MarkAllNotificationsReadUseCase,
)
from skilllink.application.dto.notification_dto import CreateNotificationRequestDTO


router = APIRouter()


@router.get("")
async def list_notifications(
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    type: Optional[str] = Query(None, description="Filter by notification type"),
    is_read: Optional[bool] = Query(None, alias="isRead"),
) -> Dict[str, Any]:
    """The caller's notifications, newest first."""
    notifications, page, total = await ListNotificationsUseCase(uow).execute(
        user_id, page, limit, type, is_read
    )
    return {"notifications": notifications, "page": page, "total": total}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_notification(
    request: CreateNotificationRequestDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    service: NotificationServiceDep,
) -> Dict[str, Any]:
    """Admin only. `userId` and `message` are required; `email` also sends a copy."""
    notification = await CreateNotificationUseCase(uow, service).execute(user_id, request)
    return {"notification": notification}


@router.patch("/read-all")
async def mark_all_read(
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    service: NotificationServiceDep,
) -> Dict[str, Any]:
    await MarkAllNotificationsReadUseCase(uow, service).execute(user_id)
    return {"ok": True}


@router.patch("/{notification_id}/read")
async def mark_read(
    notification_id: int,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    service: NotificationServiceDep,
) -> Dict[str, Any]:
    notification = await MarkNotificationReadUseCase(uow, service).execute(user_id, notification_id)
    return {"notification": notification}
