"""
Job repository interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Tuple, Iterable

from skilllink.domain.models.job import Job


class JobRepository(ABC):
    """Repository interface for Job postings."""

    @abstractmethod
    def save(self, job: Job) -> Job:
        pass

    @abstractmethod
    def get_by_id(self, job_id: int) -> Optional[Job]:
        pass

    @abstractmethod
    def get_many(self, job_ids: Iterable[int]) -> Dict[int, Job]:
        pass

    @abstractmethod
    def list_by_employer(self, employer_id: int, active_only: bool = False) -> List[Job]:
        """Jobs authored by an employer, newest first."""
        pass

    @abstractmethod
    def list_all(self, page: int, limit: int, q: Optional[str] = None) -> Tuple[List[Job], int]:
        pass

    @abstractmethod
    def delete(self, job_id: int) -> bool:
        pass
