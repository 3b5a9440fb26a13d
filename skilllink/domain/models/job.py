"""
Job domain model.
An employer-authored posting with a budget range and required skills.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, List, Dict, Any

from skilllink.domain.models.base import (
    AggregateRoot,
    ValueObject,
    ValidationError,
    AuthorizationError,
    split_list,
    to_decimal,
)


@dataclass(frozen=True)
class BudgetRange(ValueObject):
    """Inclusive budget bounds for a job."""

    min: Decimal
    max: Decimal

    def validate(self) -> None:
        if self.min < 0 or self.max < 0:
            raise ValidationError("Budget values cannot be negative", "budget_range")
        if self.min > self.max:
            raise ValidationError("budgetRange.min cannot exceed budgetRange.max", "budget_range")

    @classmethod
    def from_values(cls, minimum: Any, maximum: Any) -> "BudgetRange":
        if minimum is None or maximum is None:
            raise ValidationError("budgetRange.min and budgetRange.max are required", "budget_range")
        return cls(min=to_decimal(minimum, "budgetRange.min"), max=to_decimal(maximum, "budgetRange.max"))

    @property
    def ceiling(self) -> Decimal:
        """Amount used as project budget: max, else min, else zero."""
        if self.max is not None:
            return self.max
        return self.min if self.min is not None else Decimal("0")

    def to_dict(self) -> Dict[str, Any]:
        return {"min": float(self.min), "max": float(self.max)}


JOB_MUTABLE_FIELDS = ("title", "description", "budget_range", "timeline", "required_skills", "is_active")


@dataclass
class Job(AggregateRoot):
    """Job posting aggregate root."""

    employer_id: int
    title: str
    description: str
    budget_range: BudgetRange
    timeline: Optional[str] = None
    required_skills: List[str] = field(default_factory=list)
    is_active: bool = True

    def __post_init__(self):
        super().__post_init__()
        self.required_skills = split_list(self.required_skills)

    @classmethod
    def create(
        cls,
        employer_id: int,
        title: Optional[str],
        description: Optional[str],
        budget_min: Any,
        budget_max: Any,
        timeline: Optional[str] = None,
        required_skills: Any = None,
    ) -> "Job":
        if not title or not description or budget_min is None or budget_max is None:
            raise ValidationError("title, description and budgetRange min/max are required")
        job = cls(
            employer_id=employer_id,
            title=title.strip(),
            description=description,
            budget_range=BudgetRange.from_values(budget_min, budget_max),
            timeline=timeline,
            required_skills=required_skills or [],
        )
        job.validate()
        return job

    def validate(self) -> None:
        if not self.title or not self.title.strip():
            raise ValidationError("title is required", "title")
        if not self.description:
            raise ValidationError("description is required", "description")

    def ensure_owner(self, user_id: int) -> None:
        if self.employer_id != user_id:
            raise AuthorizationError("Not authorized to modify this job")

    def update(self, changes: Dict[str, Any]) -> None:
        """Apply whitelisted changes; other keys are ignored."""
        for key, value in changes.items():
            if key not in JOB_MUTABLE_FIELDS:
                continue
            if key == "budget_range":
                value = BudgetRange.from_values(
                    value.get("min", self.budget_range.min),
                    value.get("max", self.budget_range.max),
                )
            elif key == "required_skills":
                value = split_list(value)
            setattr(self, key, value)
        self.validate()
        self.mark_as_updated()

    def close(self) -> None:
        if self.is_active:
            self.is_active = False
            self.mark_as_updated()
