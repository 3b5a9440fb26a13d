"""
Review repository interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from skilllink.domain.models.review import Review


class ReviewRepository(ABC):

    @abstractmethod
    def add(self, review: Review) -> Review:
        """Raises DuplicateEntityError for a second review of the same pair."""
        pass

    @abstractmethod
    def find(self, project_id: int, reviewer_id: int) -> Optional[Review]:
        pass

    @abstractmethod
    def list_for_reviewee(self, reviewee_id: int) -> List[Review]:
        pass

    @abstractmethod
    def list_by_reviewer(self, reviewer_id: int) -> List[Review]:
        pass

    @abstractmethod
    def stats_for(self, reviewee_id: int) -> Tuple[float, int]:
        """Average rating (0 when none) and count."""
        pass
