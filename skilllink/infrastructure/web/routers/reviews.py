"""
Reviews router.
Project participants review each other once the project is completed.
"""

from typing import Any, Dict

from fastapi import APIRouter, status

from skilllink.infrastructure.auth import CurrentUserId
from skilllink.infrastructure.web.dependencies import UnitOfWorkDep, DispatcherDep
from skilllink.application.use_cases.review_use_cases import (
    CreateReviewUseCase,
    ListReviewsForUserUseCase,
    ListMyReviewsUseCase,
)
from skilllink.application.dto.review_dto import CreateReviewRequestDTO


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_review(
    request: CreateReviewRequestDTO,
    user_id: CurrentUserId,
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
) -> Dict[str, Any]:
    """
    Review the other participant of a completed project.

    - **projectId**: required
    - **rating**: 1 to 5
    - **publicFeedback** / **privateFeedback**: optional
    """
    return {"review": await CreateReviewUseCase(uow, dispatcher).execute(user_id, request)}


@router.get("/worker/{worker_id}")
async def list_worker_reviews(worker_id: int, uow: UnitOfWorkDep) -> Dict[str, Any]:
    reviews, stats = await ListReviewsForUserUseCase(uow).execute(worker_id)
    return {"reviews": reviews, "stats": stats}


@router.get("/employer/{employer_id}")
async def list_employer_reviews(employer_id: int, uow: UnitOfWorkDep) -> Dict[str, Any]:
    reviews, stats = await ListReviewsForUserUseCase(uow).execute(employer_id)
    return {"reviews": reviews, "stats": stats}


@router.get("/history/me")
async def list_my_reviews(user_id: CurrentUserId, uow: UnitOfWorkDep) -> Dict[str, Any]:
    """Reviews the caller has written."""
    return {"reviews": await ListMyReviewsUseCase(uow).execute(user_id)}
