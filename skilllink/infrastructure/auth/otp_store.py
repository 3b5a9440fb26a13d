"""
In-memory OTP store.
Codes live in the process only; a multi-process deployment needs a shared
key-value store behind the same interface.
"""

import threading
import time
from typing import Dict, Optional, Tuple

from skilllink.domain.services.otp_service import OtpStore


class InMemoryOtpStore(OtpStore):
    """Thread-safe dictionary of `key -> (code, expires_at)`."""

    def __init__(self, clock=time.monotonic):
        self._codes: Dict[str, Tuple[str, float]] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def put(self, key: str, code: str, ttl_seconds: int) -> None:
        with self._lock:
            self._codes[key] = (code, self._clock() + ttl_seconds)

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._codes.get(key)
            if entry is None:
                return None
            code, expires_at = entry
            if expires_at <= self._clock():
                del self._codes[key]
                return None
            return code

    def delete(self, key: str) -> None:
        with self._lock:
            self._codes.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._codes.clear()


otp_store = InMemoryOtpStore()


def get_otp_store() -> OtpStore:
    """Dependency to get the process-wide OTP store."""
    return otp_store
