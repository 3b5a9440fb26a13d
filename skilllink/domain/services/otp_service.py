"""
One-time password store interface and code generation.
"""

import secrets
from abc import ABC, abstractmethod
from typing import Optional


class OtpStore(ABC):
    """Keyed store of short-lived verification codes."""

    @abstractmethod
    def put(self, key: str, code: str, ttl_seconds: int) -> None:
        """Store a code, replacing any previous code for the key."""
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the live code for the key, or None when missing or expired."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass


def generate_code(length: int = 6) -> str:
    """Numeric code of the given length."""
    return "".join(str(secrets.randbelow(10)) for _ in range(length))


def otp_key(email: Optional[str] = None, phone: Optional[str] = None) -> Optional[str]:
    """Normalized store key: lowercased email, else the phone number."""
    if email:
        return f"email:{email.strip().lower()}"
    if phone:
        return f"phone:{phone.strip()}"
    return None
