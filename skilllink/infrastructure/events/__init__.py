"""
Domain event wiring for notifications.
"""

from .event_setup import create_event_dispatcher

__all__ = ["create_event_dispatcher"]
