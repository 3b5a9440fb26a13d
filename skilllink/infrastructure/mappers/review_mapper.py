"""
Review mapper.
"""

from skilllink.domain.models.review import Review
from skilllink.infrastructure.db.models import ReviewModel


class ReviewMapper:
    """Maps between Review domain entity and ReviewModel database model."""

    def domain_to_model(self, review: Review) -> ReviewModel:
        return ReviewModel(
            id=review.id,
            project_id=review.project_id,
            reviewer_id=review.reviewer_id,
            reviewee_id=review.reviewee_id,
            rating=review.rating,
            public_feedback=review.public_feedback,
            private_feedback=review.private_feedback,
            created_at=review.created_at,
            updated_at=review.updated_at
        )

    def model_to_domain(self, model: ReviewModel) -> Review:
        return Review(
            id=model.id,
            project_id=model.project_id,
            reviewer_id=model.reviewer_id,
            reviewee_id=model.reviewee_id,
            rating=model.rating,
            public_feedback=model.public_feedback,
            private_feedback=model.private_feedback,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
