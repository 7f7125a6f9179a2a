"""
API dependencies for dependency injection
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from domain.enums import UserRole
from app.security import decode_access_token
from app.exceptions import ForbiddenError, UnauthorizedError

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Identity carried by a verified bearer token"""

    user_id: UUID
    role: UserRole


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    """
    Resolve the caller from ``Authorization: Bearer <token>``.

    The token alone is trusted; no database lookup happens here.

    Raises:
        UnauthorizedError: header missing, token invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing token", code="MISSING_TOKEN")

    claims = decode_access_token(credentials.credentials)
    try:
        user_id = UUID(str(claims["sub"]))
        role = UserRole(claims.get("role", UserRole.USER.value))
    except (KeyError, ValueError):
        raise UnauthorizedError("Invalid token", code="INVALID_TOKEN")
    return CurrentUser(user_id=user_id, role=role)


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if user.role != UserRole.ADMIN:
        raise ForbiddenError("Admin access required")
    return user
