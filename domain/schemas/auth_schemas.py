from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from uuid import UUID

from domain.enums import UserRole


def _normalize_email(value: str) -> str:
    return value.strip().lower()


def _check_password_bytes(value: str) -> str:
    # bcrypt only accepts 72 bytes of input
    if len(value.encode("utf-8")) > 72:
        raise ValueError("password must be at most 72 bytes")
    return value


class RegisterRequest(BaseModel):
    """Schema for creating an account"""

    email: EmailStr
    name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=8, max_length=72)

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, v: str) -> str:
        return _check_password_bytes(v)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class VerifyEmailRequest(BaseModel):
    user_id: UUID
    code: str = Field(..., min_length=6, max_length=6, pattern=r"^[0-9]{6}$")


class ResendVerificationRequest(BaseModel):
    user_id: UUID


class ForgotPasswordRequest(BaseModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class ResetPasswordRequest(BaseModel):
    email: EmailStr
    code: str = Field(..., min_length=6, max_length=6, pattern=r"^[0-9]{6}$")
    new_password: str = Field(..., min_length=8, max_length=72)

    @field_validator("new_password")
    @classmethod
    def check_password_bytes(cls, v: str) -> str:
        return _check_password_bytes(v)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=72)

    @field_validator("new_password")
    @classmethod
    def check_password_bytes(cls, v: str) -> str:
        return _check_password_bytes(v)


class UserSummary(BaseModel):
    """Public view of an account, as embedded in other responses"""

    user_id: UUID
    email: str
    name: str

    model_config = {"from_attributes": True}


class AuthUser(UserSummary):
    role: UserRole
    avatar: Optional[str] = None
    is_email_verified: bool


class RegisterResponse(BaseModel):
    message: str
    user: AuthUser
    requires_verification: bool = True


class TokenResponse(BaseModel):
    """Bearer token issued after login or verification"""

    message: Optional[str] = None
    token: str
    user: AuthUser


class MessageResponse(BaseModel):
    message: str


class AdminPingResponse(BaseModel):
    ok: bool = True
    role: UserRole
