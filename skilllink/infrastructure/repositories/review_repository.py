"""
Review repository implementation using SQLAlchemy.
"""

from typing import Optional, List, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from skilllink.domain.models.review import Review
from skilllink.domain.models.base import DuplicateEntityError
from skilllink.domain.repositories.review_repository import ReviewRepository
from skilllink.infrastructure.db.models import ReviewModel
from skilllink.infrastructure.mappers.review_mapper import ReviewMapper


class SQLAlchemyReviewRepository(ReviewRepository):

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ReviewMapper()
        self.model = ReviewModel

    def add(self, review: Review) -> Review:
        if self.find(review.project_id, review.reviewer_id):
            raise DuplicateEntityError(
                "Review", "project", review.project_id, "You have already reviewed this user for this project"
            )
        model = self.mapper.domain_to_model(review)
        self.session.add(model)
        try:
            self.session.flush()
        except IntegrityError:
            self.session.rollback()
            raise DuplicateEntityError(
                "Review", "project", review.project_id, "You have already reviewed this user for this project"
            )
        review.id = model.id
        return review

    def find(self, project_id: int, reviewer_id: int) -> Optional[Review]:
        model = self.session.query(ReviewModel).filter(
            ReviewModel.project_id == project_id,
            ReviewModel.reviewer_id == reviewer_id,
        ).first()
        return self.mapper.model_to_domain(model) if model else None

    def list_for_reviewee(self, reviewee_id: int) -> List[Review]:
        models = self.session.query(ReviewModel).filter(
            ReviewModel.reviewee_id == reviewee_id
        ).order_by(ReviewModel.created_at.desc(), ReviewModel.id.desc()).all()
        return [self.mapper.model_to_domain(m) for m in models]

    def list_by_reviewer(self, reviewer_id: int) -> List[Review]:
        models = self.session.query(ReviewModel).filter(
            ReviewModel.reviewer_id == reviewer_id
        ).order_by(ReviewModel.created_at.desc(), ReviewModel.id.desc()).all()
        return [self.mapper.model_to_domain(m) for m in models]

    def stats_for(self, reviewee_id: int) -> Tuple[float, int]:
        average, count = self.session.query(
            func.avg(ReviewModel.rating), func.count(ReviewModel.id)
        ).filter(ReviewModel.reviewee_id == reviewee_id).one()
        return round(float(average or 0), 2), int(count or 0)
