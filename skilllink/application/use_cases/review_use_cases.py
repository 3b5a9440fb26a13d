"""
Review use cases.
Reviews unlock on completed projects; a worker's profile rating follows
the average of the reviews they received.
"""

import logging
from typing import List, Tuple

from skilllink.application.use_cases.base_use_case import CommandUseCase, QueryUseCase
from skilllink.application.dto.review_dto import (
    CreateReviewRequestDTO,
    ReviewResponseDTO,
    ReviewStatsDTO,
)
from skilllink.domain.models.base import EntityNotFoundError, ValidationError
from skilllink.domain.models.review import Review


logger = logging.getLogger(__name__)


class _ReviewAccess:

    def _to_dtos(self, reviews: List[Review], include_private: bool = False) -> List[ReviewResponseDTO]:
        users = self._users_by_id([r.reviewer_id for r in reviews] + [r.reviewee_id for r in reviews])
        titles = {}
        for project_id in {r.project_id for r in reviews}:
            project = self.uow.projects.get_by_id(project_id)
            titles[project_id] = project.title if project else None
        return [
            ReviewResponseDTO.from_domain(
                review,
                project_title=titles.get(review.project_id),
                reviewer=users.get(review.reviewer_id),
                reviewee=users.get(review.reviewee_id),
                include_private=include_private,
            )
            for review in reviews
        ]

    def _stats(self, reviewee_id: int) -> ReviewStatsDTO:
        average, count = self.uow.reviews.stats_for(reviewee_id)
        return ReviewStatsDTO(average=round(float(average or 0), 2), count=count)


class CreateReviewUseCase(_ReviewAccess, CommandUseCase):
    """A project participant reviews the other participant."""

    async def execute(self, user_id: int, request: CreateReviewRequestDTO) -> ReviewResponseDTO:
        if not request.project_id or not request.rating:
            raise ValidationError("projectId and rating are required")

        project = self.uow.projects.get_by_id(request.project_id)
        if not project:
            raise EntityNotFoundError("Project")

        review = Review.for_project(
            project,
            user_id,
            request.rating,
            public_feedback=request.public_feedback,
            private_feedback=request.private_feedback,
        )
        review = self.uow.reviews.add(review)
        self._refresh_rating(review.reviewee_id)

        self.collect(review.created_event(project.title))
        await self._commit()

        logger.info(f"User {user_id} reviewed user {review.reviewee_id} on project {project.id}")
        return self._to_dtos([review], include_private=True)[0]

    def _refresh_rating(self, reviewee_id: int) -> None:
        reviewee = self.uow.users.get_by_id(reviewee_id)
        if reviewee is None or not reviewee.is_worker:
            return
        reviewee.skilled_worker.rating = self._stats(reviewee_id).average
        self.uow.users.save(reviewee)


class ListReviewsForUserUseCase(_ReviewAccess, QueryUseCase):
    """Public reviews received by a worker or employer, with rating stats."""

    async def execute(self, reviewee_id: int) -> Tuple[List[ReviewResponseDTO], ReviewStatsDTO]:
        reviews = self.uow.reviews.list_for_reviewee(reviewee_id)
        return self._to_dtos(reviews), self._stats(reviewee_id)


class ListMyReviewsUseCase(_ReviewAccess, QueryUseCase):
    """Reviews authored by the caller."""

    async def execute(self, user_id: int) -> List[ReviewResponseDTO]:
        return self._to_dtos(self.uow.reviews.list_by_reviewer(user_id), include_private=True)
