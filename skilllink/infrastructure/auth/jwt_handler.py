"""
JWT token handler.
Issues and validates the HS256 access tokens used by the API.
"""

from typing import Optional, Dict, Any
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from skilllink.config import get_settings
from skilllink.domain.models.base import AuthenticationError


class JWTHandler:
    """Handles JWT token creation, validation and user extraction."""

    def __init__(self):
        self.settings = get_settings()
        self.jwt_secret = self.settings.jwt_secret_key
        self.jwt_algorithm = self.settings.jwt_algorithm

    def create_access_token(
        self,
        user_id: int,
        email: str,
        role: str = "user",
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create an access token carrying `{sub, email, role}`.

        Args:
            user_id: Subject of the token
            email: User email
            role: Platform role (`user` or `admin`)
            expires_delta: Lifetime override, defaults to the configured one
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.settings.jwt_access_token_expire_minutes))
        to_encode = {
            "sub": str(user_id),
            "email": email,
            "role": role,
            "iat": now,
            "exp": expire,
        }
        return jwt.encode(to_encode, self.jwt_secret, algorithm=self.jwt_algorithm)

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a token.

        Raises:
            AuthenticationError: If token is invalid or expired
        """
        if token.startswith("Bearer "):
            token = token[7:]
        try:
            payload = jwt.decode(token, self.jwt_secret, algorithms=[self.jwt_algorithm])
        except JWTError:
            raise AuthenticationError("Invalid or expired token")

        if "sub" not in payload:
            raise AuthenticationError("Token missing user ID (sub claim)")
        return payload

    def get_user_id(self, token: str) -> int:
        """Extract the numeric user ID from a token."""
        payload = self.verify_token(token)
        try:
            return int(payload["sub"])
        except (TypeError, ValueError):
            raise AuthenticationError("Invalid token subject")

    def get_user_role(self, token: str) -> Optional[str]:
        try:
            return self.verify_token(token).get("role")
        except AuthenticationError:
            return None

    def is_token_valid(self, token: str) -> bool:
        try:
            self.verify_token(token)
            return True
        except AuthenticationError:
            return False


jwt_handler = JWTHandler()


def create_access_token(user_id: int, email: str, role: str = "user",
                        expires_delta: Optional[timedelta] = None) -> str:
    """Module-level shortcut used by auth use cases and tests."""
    return jwt_handler.create_access_token(user_id, email, role, expires_delta)
