"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.

Use cases raise domain exceptions; the web layer maps them to HTTP
status codes. Commands commit the unit of work once and only then hand
the collected domain events to the dispatcher.
"""

import logging
from abc import ABC
from typing import Any, Dict, Iterable, List, Optional, Tuple

from skilllink.config import settings
from skilllink.domain.events.base import DomainEvent, EventDispatcher
from skilllink.domain.models.base import BaseEntity, EntityNotFoundError
from skilllink.domain.models.user import User
from skilllink.domain.repositories.unit_of_work import UnitOfWork
from skilllink.infrastructure.pagination import normalize_page


logger = logging.getLogger(__name__)


class BaseUseCase(ABC):
    """
    Base class for all use cases.
    Holds the unit of work of the current request.
    """

    def __init__(self, uow: UnitOfWork, dispatcher: Optional[EventDispatcher] = None):
        self.uow = uow
        self.dispatcher = dispatcher

    def _load_user(self, user_id: int, label: str = "User") -> User:
        user = self.uow.users.get_by_id(user_id)
        if not user:
            raise EntityNotFoundError(label)
        return user

    def _users_by_id(self, user_ids: Iterable[Optional[int]]) -> Dict[int, User]:
        return self.uow.users.get_many({uid for uid in user_ids if uid is not None})


class QueryUseCase(BaseUseCase):
    """
    Base class for query use cases (read operations).
    """
    pass


class PaginatedQueryUseCase(QueryUseCase):
    """
    Base class for paginated query use cases.
    """

    default_page_size: int = settings.default_page_size
    max_page_size: int = settings.max_page_size

    def _page(self, page: Optional[int], limit: Optional[int]) -> Tuple[int, int]:
        return normalize_page(page, limit, self.default_page_size, self.max_page_size)


class CommandUseCase(BaseUseCase):
    """
    Base class for command use cases (write operations).
    Includes transaction handling and event publishing.
    """

    def __init__(self, uow: UnitOfWork, dispatcher: Optional[EventDispatcher] = None):
        super().__init__(uow, dispatcher)
        self.events: List[DomainEvent] = []

    def collect(self, *sources: Any) -> None:
        """Queue events pulled from aggregates, or events passed directly."""
        for source in sources:
            if source is None:
                continue
            if isinstance(source, DomainEvent):
                self.events.append(source)
            elif isinstance(source, BaseEntity):
                self.events.extend(source.pull_events())

    async def _commit(self) -> None:
        """Commit the transaction, then publish what was collected."""
        self.uow.commit()
        await self._publish_events()

    async def _publish_events(self) -> None:
        """Publish collected domain events."""
        events, self.events = self.events, []
        if self.dispatcher is None or not events:
            return
        await self.dispatcher.dispatch_all(events)
