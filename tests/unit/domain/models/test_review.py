"""
Unit tests for the Review domain model.
"""

import pytest

from skilllink.domain.models.base import ValidationError, AuthorizationError
from skilllink.domain.models.project import Project, ProjectStatus
from skilllink.domain.models.review import Review


EMPLOYER, WORKER = 1, 2


def completed_project(**overrides) -> Project:
    data = dict(
        id=10, title="Kitchen remodel", created_by=EMPLOYER,
        assigned_to=WORKER, status=ProjectStatus.COMPLETED,
    )
    data.update(overrides)
    return Project(**data)


class TestReview:
    """Test cases for project reviews."""

    def test_worker_reviews_employer(self):
        review = Review.for_project(completed_project(), WORKER, 5, public_feedback="Paid on time")

        assert review.reviewee_id == EMPLOYER
        assert review.project_id == 10
        assert review.rating == 5

    def test_employer_reviews_worker(self):
        review = Review.for_project(completed_project(), EMPLOYER, 4, private_feedback="Slightly late")

        assert review.reviewee_id == WORKER
        assert review.private_feedback == "Slightly late"

    def test_outsider_rejected(self):
        with pytest.raises(AuthorizationError, match="Only project participants can leave a review"):
            Review.for_project(completed_project(), 3, 5)

    def test_project_must_be_completed(self):
        with pytest.raises(ValidationError, match="Reviews are only allowed on completed projects"):
            Review.for_project(completed_project(status=ProjectStatus.ACTIVE), WORKER, 5)

    @pytest.mark.parametrize("rating", [0, 6, 4.5, "five"])
    def test_rating_range(self, rating):
        with pytest.raises(ValidationError, match="rating must be an integer between 1 and 5"):
            Review.for_project(completed_project(), WORKER, rating)

    def test_unassigned_project_has_no_counterpart(self):
        with pytest.raises(ValidationError, match="no counterpart"):
            Review.for_project(completed_project(assigned_to=None), EMPLOYER, 5)

    def test_created_event(self):
        review = Review.for_project(completed_project(), WORKER, 5)
        review.id = 3

        event = review.created_event("Kitchen remodel")

        assert event.reviewee_id == EMPLOYER
        assert event.rating == 5
