"""
Notification domain model.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any

from skilllink.domain.models.base import BaseEntity, ValidationError


class NotificationType(str, Enum):
    SYSTEM = "system"
    JOB = "job"
    INVITE = "invite"
    APPLICATION = "application"
    PROJECT = "project"
    PAYMENT = "payment"
    REVIEW = "review"


@dataclass
class Notification(BaseEntity):
    """In-app notification addressed to a single user."""

    user_id: int
    message: str
    title: Optional[str] = None
    type: NotificationType = NotificationType.SYSTEM
    account_type: Optional[str] = None
    link: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    read_at: Optional[datetime] = None
    email_sent: bool = False

    def __post_init__(self):
        super().__post_init__()
        try:
            self.type = NotificationType(self.type or NotificationType.SYSTEM)
        except ValueError:
            raise ValidationError(f"Invalid notification type: {self.type}", "type")
        self.validate()

    def validate(self) -> None:
        if self.user_id is None:
            raise ValidationError("userId is required", "user_id")
        if not self.message:
            raise ValidationError("message is required", "message")

    def mark_read(self) -> bool:
        """Returns False when the notification was already read."""
        if self.is_read:
            return False
        self.is_read = True
        self.read_at = datetime.utcnow()
        self.mark_as_updated()
        return True
