"""
Invite repository interface.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from skilllink.domain.models.invite import Invite, InviteType


class InviteRepository(ABC):
    """Repository interface for the invite / application ledger."""

    @abstractmethod
    def save(self, invite: Invite) -> Invite:
        pass

    @abstractmethod
    def get_by_id(self, invite_id: int) -> Optional[Invite]:
        pass

    @abstractmethod
    def find_open_application(self, worker_id: int, job_id: int, statuses: Sequence[str]) -> Optional[Invite]:
        """An application by this worker for this job whose status is one of `statuses`."""
        pass

    @abstractmethod
    def find_by_job_and_worker(self, job_id: int, worker_id: int) -> List[Invite]:
        pass

    @abstractmethod
    def list(
        self,
        employer_id: Optional[int] = None,
        worker_id: Optional[int] = None,
        invite_type: Optional[InviteType] = None,
        statuses: Optional[Sequence[str]] = None,
        job_id: Optional[int] = None,
        created_from: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Invite]:
        """Filter the ledger, newest first."""
        pass

    @abstractmethod
    def count(
        self,
        employer_id: Optional[int] = None,
        worker_id: Optional[int] = None,
        invite_type: Optional[InviteType] = None,
        statuses: Optional[Sequence[str]] = None,
    ) -> int:
        pass
