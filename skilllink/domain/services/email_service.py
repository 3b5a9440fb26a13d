"""
Email service interface.
Defines the outbound emails the marketplace sends.
"""

from abc import ABC, abstractmethod
from typing import Optional


class EmailServiceInterface(ABC):
    """Email delivery port used by notification dispatch and OTP."""

    @abstractmethod
    async def send_notification_email(
        self,
        to: str,
        recipient_name: str,
        title: Optional[str],
        message: str,
        link: Optional[str] = None,
    ) -> bool:
        """
        Send a notification email.
        Returns True when the message was handed to the transport.
        """
        pass

    @abstractmethod
    async def send_otp_code(self, to: str, code: str, ttl_minutes: int) -> bool:
        """Send a one-time verification code."""
        pass
