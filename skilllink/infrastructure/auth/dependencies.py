"""
Authentication dependencies for FastAPI.
The token is read from the bearer header, then from the `auth_token`
and `token` cookies.
"""

from typing import Optional, Annotated, Any, Dict

from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from skilllink.domain.models.base import AuthenticationError
from skilllink.infrastructure.auth.jwt_handler import JWTHandler, jwt_handler


AUTH_COOKIE_NAMES = ("auth_token", "token")

# Bearer is optional so the cookie fallback can run
security = HTTPBearer(auto_error=False)


def get_jwt_handler() -> JWTHandler:
    """Dependency to get JWT handler."""
    return jwt_handler


def extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if credentials and credentials.credentials:
        return credentials.credentials
    for name in AUTH_COOKIE_NAMES:
        token = request.cookies.get(name)
        if token:
            return token
    return None


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=message,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user_payload(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    handler: Annotated[JWTHandler, Depends(get_jwt_handler)],
) -> Dict[str, Any]:
    """
    FastAPI dependency to get current user's full token payload.

    Raises:
        HTTPException: 401 when the token is missing or invalid
    """
    token = extract_token(request, credentials)
    if not token:
        raise _unauthorized("Authentication required")
    try:
        return handler.verify_token(token)
    except AuthenticationError as e:
        raise _unauthorized(e.message)


async def get_current_user_id(
    payload: Annotated[Dict[str, Any], Depends(get_current_user_payload)],
) -> int:
    """FastAPI dependency to get current authenticated user ID."""
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise _unauthorized("Invalid token subject")


async def get_optional_user_id(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    handler: Annotated[JWTHandler, Depends(get_jwt_handler)],
) -> Optional[int]:
    """
    FastAPI dependency to optionally get authenticated user ID.
    Returns None if no token or invalid token.
    """
    token = extract_token(request, credentials)
    if not token:
        return None
    try:
        return handler.get_user_id(token)
    except AuthenticationError:
        return None


async def require_admin(
    payload: Annotated[Dict[str, Any], Depends(get_current_user_payload)],
) -> Dict[str, Any]:
    """Allow only tokens carrying the admin role."""
    if payload.get("role") != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin privileges required")
    return payload


CurrentUserId = Annotated[int, Depends(get_current_user_id)]
CurrentUserPayload = Annotated[Dict[str, Any], Depends(get_current_user_payload)]
