"""
Unit tests for the Job domain model.
"""

import pytest
from decimal import Decimal

from skilllink.domain.models.base import ValidationError, AuthorizationError
from skilllink.domain.models.job import Job, BudgetRange


def make_job(**overrides) -> Job:
    data = dict(
        employer_id=1,
        title="Rewire office",
        description="Two floors",
        budget_min=100,
        budget_max=500,
        timeline="2 weeks",
        required_skills="wiring, solar",
    )
    data.update(overrides)
    return Job.create(**data)


class TestJobCreation:
    """Test cases for posting jobs."""

    def test_create(self):
        job = make_job()

        assert job.is_active
        assert job.budget_range == BudgetRange(min=Decimal("100"), max=Decimal("500"))
        assert job.required_skills == ["wiring", "solar"]

    @pytest.mark.parametrize("missing", ["title", "description", "budget_min", "budget_max"])
    def test_required_fields(self, missing):
        with pytest.raises(ValidationError, match="title, description and budgetRange min/max are required"):
            make_job(**{missing: None})

    def test_min_above_max(self):
        with pytest.raises(ValidationError, match="budgetRange.min cannot exceed budgetRange.max"):
            make_job(budget_min=600)

    def test_negative_budget(self):
        with pytest.raises(ValidationError, match="Budget values cannot be negative"):
            make_job(budget_min=-1)

    def test_zero_budget_allowed(self):
        """Zero is a valid bound."""
        job = make_job(budget_min=0, budget_max=0)

        assert job.budget_range.ceiling == Decimal("0")

    def test_ceiling_is_max(self):
        assert make_job().budget_range.ceiling == Decimal("500")


class TestJobUpdate:
    """Test cases for owner edits."""

    def test_update_ignores_unknown_fields(self):
        job = make_job()

        job.update({"employer_id": 99, "title": "Rewire warehouse"})

        assert job.employer_id == 1
        assert job.title == "Rewire warehouse"

    def test_partial_budget_update_keeps_other_bound(self):
        job = make_job()

        job.update({"budget_range": {"max": 900}})

        assert job.budget_range.min == Decimal("100")
        assert job.budget_range.max == Decimal("900")

    def test_update_cannot_break_budget(self):
        job = make_job()

        with pytest.raises(ValidationError):
            job.update({"budget_range": {"max": 50}})

    def test_update_splits_skills(self):
        job = make_job()

        job.update({"required_skills": "plumbing,  tiling"})

        assert job.required_skills == ["plumbing", "tiling"]

    def test_blank_title_rejected(self):
        job = make_job()

        with pytest.raises(ValidationError, match="title is required"):
            job.update({"title": "   "})

    def test_ensure_owner(self):
        job = make_job()

        job.ensure_owner(1)
        with pytest.raises(AuthorizationError):
            job.ensure_owner(2)

    def test_close(self):
        job = make_job()

        job.close()
        job.close()

        assert not job.is_active
