"""
User repository interface.
Defines the contract for user data persistence operations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any, Tuple, Iterable

from skilllink.domain.models.user import User


@dataclass
class WorkerSearchFilters:
    """Public worker search criteria; every filter is optional."""

    q: Optional[str] = None
    skills: List[str] = field(default_factory=list)
    location: Optional[str] = None
    min_rate: Optional[float] = None
    max_rate: Optional[float] = None
    availability: Optional[str] = None
    min_rating: Optional[float] = None


class UserRepositoryInterface(ABC):
    """Repository interface for the User aggregate."""

    @abstractmethod
    def save(self, user: User) -> User:
        """
        Save a user entity.
        Raises DuplicateEntityError when the email or phone is taken.
        """
        pass

    @abstractmethod
    def get_by_id(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_by_phone(self, phone: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_many(self, user_ids: Iterable[int]) -> Dict[int, User]:
        """Bulk load users keyed by id; unknown ids are skipped."""
        pass

    @abstractmethod
    def search_workers(self, filters: WorkerSearchFilters, page: int, limit: int) -> Tuple[List[User], int]:
        """
        Search active skilled workers, highest rating first.
        Returns the page of users and the total match count.
        """
        pass

    @abstractmethod
    def worker_filter_meta(self) -> Dict[str, Any]:
        """Distinct skills, locations and availability values plus the hourly rate range."""
        pass

    @abstractmethod
    def list_users(self, page: int, limit: int, q: Optional[str] = None,
                   account_type: Optional[str] = None) -> Tuple[List[User], int]:
        pass
