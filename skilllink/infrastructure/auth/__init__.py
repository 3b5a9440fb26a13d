"""
Authentication infrastructure.
"""

from .jwt_handler import JWTHandler, create_access_token
from .password import hash_password, verify_password
from .otp_store import InMemoryOtpStore, get_otp_store
from .dependencies import (
    get_current_user_id,
    get_current_user_payload,
    get_optional_user_id,
    require_admin,
    CurrentUserId,
    CurrentUserPayload,
)

__all__ = [
    "JWTHandler",
    "create_access_token",
    "hash_password",
    "verify_password",
    "InMemoryOtpStore",
    "get_otp_store",
    "get_current_user_id",
    "get_current_user_payload",
    "get_optional_user_id",
    "require_admin",
    "CurrentUserId",
    "CurrentUserPayload",
]
