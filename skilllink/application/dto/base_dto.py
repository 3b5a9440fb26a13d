"""
Base DTOs for the application layer.
Provides common patterns for request/response data transfer objects.
JSON field names are camelCase; Python attributes stay snake_case.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(
        # Accept both camelCase aliases and field names
        alias_generator=to_camel,
        populate_by_name=True,
        # Convert enum values to their values
        use_enum_values=True,
        from_attributes=True,
    )


class RequestDTO(BaseDTO):
    """Base class for request DTOs; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    def changes(self) -> Dict[str, Any]:
        """Fields the client actually sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class ResponseDTO(BaseDTO):
    """Base class for response DTOs."""

    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PaginationDTO(BaseDTO):
    """`{page, limit, total}` block returned with paginated lists."""

    page: int = Field(description="Current page number")
    limit: int = Field(description="Items per page")
    total: int = Field(description="Total number of items")


class PartySummaryDTO(BaseDTO):
    """Compact user reference embedded in other resources."""

    id: int
    name: str
    display_name: Optional[str] = None
    account_type: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_domain(cls, user, include_email: bool = False) -> "PartySummaryDTO":
        return cls(
            id=user.id,
            name=user.name,
            display_name=user.display_name,
            account_type=user.account_type.value,
            email=user.email if include_email else None,
        )


def dump_all(items: List[BaseModel]) -> List[Dict[str, Any]]:
    """Serialize a list of DTOs with camelCase keys."""
    return [item.model_dump(by_alias=True, mode="json") for item in items]
