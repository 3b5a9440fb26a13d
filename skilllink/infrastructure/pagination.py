"""
Offset pagination utilities for SQLAlchemy queries.
"""

from dataclasses import dataclass
from typing import List, Any, Tuple, Optional

from sqlalchemy.orm import Query


@dataclass
class PaginationMetadata:
    """Pagination metadata for responses."""
    page: int
    limit: int
    total: int

    def to_dict(self) -> dict:
        return {"page": self.page, "limit": self.limit, "total": self.total}


def normalize_page(page: Optional[int], limit: Optional[int], default_limit: int,
                   max_limit: int = 100) -> Tuple[int, int]:
    """Clamp page to >= 1 and limit to [1, max_limit]."""
    page = max(1, int(page or 1))
    limit = int(limit or default_limit)
    limit = max(1, min(limit, max_limit))
    return page, limit


class OffsetPagination:
    """
    Offset-based pagination.
    The total count is taken from the unordered query.
    """

    def __init__(self, default_page_size: int = 20, max_page_size: int = 100):
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def paginate(
        self,
        query: Query,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> Tuple[List[Any], PaginationMetadata]:
        """
        Paginate query using offset-based pagination.

        Args:
            query: SQLAlchemy query to paginate, already ordered
            page: Page number (1-based)
            page_size: Number of items per page

        Returns:
            Tuple of (items, pagination_metadata)
        """
        page, page_size = normalize_page(page, page_size, self.default_page_size, self.max_page_size)
        total = query.order_by(None).count()
        items = query.offset((page - 1) * page_size).limit(page_size).all()
        return items, PaginationMetadata(page=page, limit=page_size, total=total)


paginator = OffsetPagination()
