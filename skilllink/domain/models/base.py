"""
Base entity and value objects for the domain layer.
This module contains the foundational classes for all domain entities
and the exception hierarchy shared by every layer.
"""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional, Any, Dict, Iterable, List, Union
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from skilllink.domain.events.base import DomainEvent


@dataclass(kw_only=True)
class BaseEntity(ABC):
    """
    Base class for all domain entities.
    Provides common attributes and behavior for all entities.
    """

    id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    # Domain events
    _events: list[DomainEvent] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self):
        """Initialize entity after creation."""
        if self.created_at is None:
            self.created_at = datetime.utcnow()
        if self.updated_at is None:
            self.updated_at = datetime.utcnow()

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and are of the same type."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        if self.id is None:
            return hash(id(self))
        return hash((self.__class__.__name__, self.id))

    def mark_as_updated(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.utcnow()

    def add_event(self, event: DomainEvent) -> None:
        """Add a domain event."""
        self._events.append(event)

    def pull_events(self) -> list[DomainEvent]:
        """Get and clear all domain events."""
        events = self._events.copy()
        self._events.clear()
        return events

    @property
    def is_new(self) -> bool:
        """Check if entity is new (not persisted)."""
        return self.id is None

    def validate(self) -> None:
        """
        Validate the entity's state.
        Should be overridden by subclasses to implement specific validation rules.
        Raises ValidationError if the entity is in an invalid state.
        """
        pass


@dataclass(kw_only=True)
class AggregateRoot(BaseEntity):
    """
    Base class for aggregate roots.
    Aggregate roots are the entry points to aggregates and handle domain events.
    """

    version: int = field(default=1)

    def increment_version(self) -> None:
        """Increment the aggregate version for optimistic locking."""
        self.version += 1
        self.mark_as_updated()


class DomainException(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """Exception raised when entity validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "ValidationError")
        self.field = field


class BusinessRuleViolation(DomainException):
    """Exception raised when a business rule is violated."""

    def __init__(self, message: str):
        super().__init__(message, "BusinessRuleViolation")


class AuthenticationError(DomainException):
    """Raised when the caller could not be identified."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, "AuthenticationError")


class AuthorizationError(DomainException):
    """Raised when the caller is known but not allowed to act."""

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, "AuthorizationError")


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any = None):
        message = f"{entity_type} not found"
        if entity_id is not None:
            message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, "NotFound")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateEntityError(DomainException):
    """Exception raised when trying to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: Any, message: Optional[str] = None):
        message = message or f"{entity_type} with {field}='{value}' already exists"
        super().__init__(message, "Conflict")
        self.entity_type = entity_type
        self.field = field
        self.value = value


class ConcurrencyConflictError(DomainException):
    """Raised when an optimistic version check fails."""

    def __init__(self, message: str = "The resource was modified concurrently, please retry"):
        super().__init__(message, "Conflict")


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.
    Value objects are immutable and are compared by their values.
    """

    def __post_init__(self):
        """Validate value object after creation."""
        self.validate()

    @abstractmethod
    def validate(self) -> None:
        """Validate the value object's state."""
        pass


def split_list(value: Union[None, str, Iterable[str]]) -> List[str]:
    """
    Normalize list-like input.
    Comma-separated strings are split, items are stripped and blanks dropped.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = list(value)
    return [str(item).strip() for item in items if item is not None and str(item).strip()]


def to_decimal(value: Any, field_name: str = "amount") -> Decimal:
    """Coerce numeric input to Decimal, raising ValidationError on garbage."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"{field_name} must be a number", field_name)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Store datetimes as naive UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
