"""
Password hashing, bearer tokens and one-time verification codes.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID

import bcrypt
import jwt

from app.config import settings
from app.exceptions import UnauthorizedError


def utcnow() -> datetime:
    """Naive UTC timestamp, the representation stored in every DateTime column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False


def create_access_token(user_id: UUID, role: str) -> str:
    """Issue a signed bearer token for ``user_id``."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": role,
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expires_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify a bearer token and return its claims.

    Raises:
        UnauthorizedError: expired, tampered or malformed token
    """
    try:
        return jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token expired", code="TOKEN_EXPIRED")
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid token", code="INVALID_TOKEN")


def generate_verification_code() -> str:
    """Six random digits, 100000..999999."""
    return str(100000 + secrets.randbelow(900000))


def code_expiry() -> datetime:
    return utcnow() + timedelta(minutes=settings.verification_code_ttl_minutes)


def codes_equal(submitted: str, stored: str) -> bool:
    return secrets.compare_digest(submitted.strip().encode("utf-8"), stored.encode("utf-8"))


def is_expired(expires_at: Optional[datetime]) -> bool:
    return expires_at is None or expires_at < utcnow()
