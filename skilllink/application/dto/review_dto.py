"""
Review DTOs.
"""

from typing import Optional

from skilllink.domain.models.review import Review
from .base_dto import BaseDTO, RequestDTO, ResponseDTO, PartySummaryDTO


class CreateReviewRequestDTO(RequestDTO):
    project_id: Optional[int] = None
    rating: Optional[int] = None
    public_feedback: Optional[str] = None
    private_feedback: Optional[str] = None


class ReviewResponseDTO(ResponseDTO):
    project_id: int
    project_title: Optional[str] = None
    reviewer_id: int
    reviewee_id: int
    rating: int
    public_feedback: Optional[str] = None
    private_feedback: Optional[str] = None
    reviewer: Optional[PartySummaryDTO] = None
    reviewee: Optional[PartySummaryDTO] = None

    @classmethod
    def from_domain(cls, review: Review, project_title: Optional[str] = None,
                    reviewer=None, reviewee=None, include_private: bool = False) -> "ReviewResponseDTO":
        return cls(
            id=review.id,
            project_id=review.project_id,
            project_title=project_title,
            reviewer_id=review.reviewer_id,
            reviewee_id=review.reviewee_id,
            rating=review.rating,
            public_feedback=review.public_feedback,
            private_feedback=review.private_feedback if include_private else None,
            reviewer=PartySummaryDTO.from_domain(reviewer) if reviewer else None,
            reviewee=PartySummaryDTO.from_domain(reviewee) if reviewee else None,
            created_at=review.created_at,
        )


class ReviewStatsDTO(BaseDTO):
    average: float
    count: int
