"""
Project repository interface.
Covers the Project aggregate and its append-only child streams.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from skilllink.domain.models.project import (
    Project,
    ProjectStatus,
    ProjectMessage,
    Submission,
    ProjectEvent,
    EventResolution,
)


class ProjectRepository(ABC):
    """Repository interface for Project aggregate."""

    @abstractmethod
    def save(self, project: Project) -> Project:
        """
        Save a project with its milestones.
        Raises ConcurrencyConflictError when the stored version moved on.
        """
        pass

    @abstractmethod
    def get_by_id(self, project_id: int) -> Optional[Project]:
        pass

    @abstractmethod
    def list_for_member(self, user_id: int) -> List[Project]:
        """Projects the user created or is assigned to, most recently updated first."""
        pass

    @abstractmethod
    def list_by_creator(self, creator_id: int, status: Optional[ProjectStatus] = None) -> List[Project]:
        pass

    @abstractmethod
    def list_by_assignee(self, worker_id: int, status: Optional[ProjectStatus] = None) -> List[Project]:
        pass

    # Messages

    @abstractmethod
    def add_message(self, message: ProjectMessage) -> ProjectMessage:
        pass

    @abstractmethod
    def list_messages(self, project_id: int, page: int, limit: int) -> Tuple[List[ProjectMessage], int]:
        """Oldest first."""
        pass

    @abstractmethod
    def latest_messages_for(self, user_id: int, limit: int) -> List[ProjectMessage]:
        """Newest messages on the user's projects that someone else sent."""
        pass

    @abstractmethod
    def count_messages_since(self, user_id: int, since: datetime) -> int:
        """Messages on the user's projects sent by someone else at or after `since`."""
        pass

    # Submissions

    @abstractmethod
    def add_submission(self, submission: Submission) -> Submission:
        pass

    @abstractmethod
    def get_submission(self, project_id: int, submission_id: int) -> Optional[Submission]:
        pass

    @abstractmethod
    def list_submissions(self, project_id: int, page: int, limit: int) -> Tuple[List[Submission], int]:
        pass

    @abstractmethod
    def delete_submission(self, submission_id: int) -> bool:
        pass

    # Events

    @abstractmethod
    def add_event(self, event: ProjectEvent) -> ProjectEvent:
        pass

    @abstractmethod
    def get_event(self, event_id: int) -> Optional[ProjectEvent]:
        pass

    @abstractmethod
    def list_events(self, project_id: int, page: int, limit: int) -> Tuple[List[ProjectEvent], int]:
        pass

    @abstractmethod
    def add_resolution(self, resolution: EventResolution) -> EventResolution:
        """Raises ConcurrencyConflictError if the event already has one."""
        pass

    @abstractmethod
    def unresolved_payment_requests(self, creator_id: int) -> List[ProjectEvent]:
        """Open payment_request events across the creator's projects."""
        pass
