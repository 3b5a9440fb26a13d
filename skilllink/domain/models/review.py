"""
Review domain model.
Reviews unlock once a project completes; each participant may review the
other exactly once per project.
"""

from dataclasses import dataclass
from typing import Optional

from skilllink.domain.models.base import BaseEntity, ValidationError, AuthorizationError
from skilllink.domain.models.project import Project, ProjectStatus
from skilllink.domain.events.base import DomainEvent


class ReviewCreated(DomainEvent):

    def __init__(self, review_id: int, project_id: int, project_title: str,
                 reviewer_id: int, reviewee_id: int, rating: int):
        super().__init__()
        self.review_id = review_id
        self.project_id = project_id
        self.project_title = project_title
        self.reviewer_id = reviewer_id
        self.reviewee_id = reviewee_id
        self.rating = rating

    @property
    def event_name(self) -> str:
        return "review.created"


@dataclass
class Review(BaseEntity):
    project_id: int
    reviewer_id: int
    reviewee_id: int
    rating: int
    public_feedback: Optional[str] = None
    private_feedback: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        self.validate()

    def validate(self) -> None:
        try:
            rating = int(self.rating)
        except (TypeError, ValueError):
            raise ValidationError("rating must be an integer between 1 and 5", "rating")
        if rating != self.rating or not 1 <= rating <= 5:
            raise ValidationError("rating must be an integer between 1 and 5", "rating")
        if self.reviewer_id == self.reviewee_id:
            raise ValidationError("You cannot review yourself")

    @classmethod
    def for_project(cls, project: Project, reviewer_id: int, rating: int,
                    public_feedback: Optional[str] = None,
                    private_feedback: Optional[str] = None) -> "Review":
        """
        Build a review of the other participant.

        Raises:
            AuthorizationError: reviewer is not on the project
            ValidationError: project not completed or rating out of range
        """
        project.ensure_member(reviewer_id, "Only project participants can leave a review")
        if project.status != ProjectStatus.COMPLETED:
            raise ValidationError("Reviews are only allowed on completed projects", "project_id")
        reviewee_id = project.counterpart_of(reviewer_id)
        if reviewee_id is None:
            raise ValidationError("Project has no counterpart to review", "project_id")
        return cls(
            project_id=project.id,
            reviewer_id=reviewer_id,
            reviewee_id=reviewee_id,
            rating=rating,
            public_feedback=public_feedback,
            private_feedback=private_feedback,
        )

    def created_event(self, project_title: str) -> ReviewCreated:
        return ReviewCreated(
            self.id, self.project_id, project_title, self.reviewer_id, self.reviewee_id, self.rating
        )
