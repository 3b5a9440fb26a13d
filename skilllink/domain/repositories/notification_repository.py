"""
Notification repository interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from skilllink.domain.models.notification import Notification, NotificationType


class NotificationRepository(ABC):

    @abstractmethod
    def save(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        pass

    @abstractmethod
    def list_for_user(
        self,
        user_id: int,
        page: int,
        limit: int,
        notification_type: Optional[NotificationType] = None,
        is_read: Optional[bool] = None,
    ) -> Tuple[List[Notification], int]:
        """Newest first."""
        pass

    @abstractmethod
    def mark_all_read(self, user_id: int) -> int:
        """Returns the number of rows changed."""
        pass
