"""
Base classes for domain events and event handling.
Provides the foundation for event-driven side effects such as notifications.
"""

import logging
from abc import ABC, abstractmethod
from typing import List
from datetime import datetime
import uuid


logger = logging.getLogger(__name__)


class DomainEvent(ABC):
    """Base class for all domain events."""

    def __init__(self):
        self.event_id = str(uuid.uuid4())
        self.occurred_at = datetime.utcnow()

    @property
    @abstractmethod
    def event_name(self) -> str:
        """Return the dotted name of the event."""
        pass

    @property
    def event_type(self) -> str:
        return self.__class__.__name__


class EventHandler(ABC):
    """Base class for event handlers."""

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """Handle a domain event."""
        pass

    @abstractmethod
    def can_handle(self, event: DomainEvent) -> bool:
        """Check if this handler can process the given event."""
        pass


class EventDispatcher:
    """Dispatches domain events to registered handlers."""

    def __init__(self):
        self._global_handlers: List[EventHandler] = []

    def register_global_handler(self, handler: EventHandler) -> None:
        """Register a handler that receives all events."""
        self._global_handlers.append(handler)
        logger.debug(f"Registered global handler {handler.__class__.__name__}")

    async def dispatch(self, event: DomainEvent) -> None:
        """Dispatch event to all registered handlers."""
        logger.info(f"Dispatching event: {event.event_name} (ID: {event.event_id})")

        all_handlers = [h for h in self._global_handlers if h.can_handle(event)]

        if not all_handlers:
            logger.warning(f"No handlers registered for event: {event.event_type}")
            return

        # Handlers share the request session, so run them one at a time
        for handler in all_handlers:
            await self._safe_handle(handler, event)

    async def dispatch_all(self, events: List[DomainEvent]) -> None:
        for event in events:
            await self.dispatch(event)

    async def _safe_handle(self, handler: EventHandler, event: DomainEvent) -> None:
        """Safely execute event handler with error handling."""
        try:
            await handler.handle(event)
            logger.debug(f"Handler {handler.__class__.__name__} processed {event.event_type}")
        except Exception as e:
            logger.error(
                f"Handler {handler.__class__.__name__} failed to process "
                f"{event.event_type}: {str(e)}"
            )

    def get_registered_handlers(self) -> List[str]:
        """Names of the registered handlers."""
        return [h.__class__.__name__ for h in self._global_handlers]
