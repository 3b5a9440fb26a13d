"""
Domain services for Skill Link.
"""

from .email_service import EmailServiceInterface
from .notification_service import NotificationService
from .otp_service import OtpStore, generate_code, otp_key

__all__ = [
    "EmailServiceInterface",
    "NotificationService",
    "OtpStore",
    "generate_code",
    "otp_key",
]
