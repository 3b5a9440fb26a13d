"""
Domain events raised by marketplace aggregates.
"""

from .base import DomainEvent, EventHandler, EventDispatcher

__all__ = [
    "DomainEvent",
    "EventHandler",
    "EventDispatcher",
]
