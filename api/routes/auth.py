"""Authentication and account routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from domain.models import get_db_session
from domain.mappers import UserMapper
from domain.schemas.auth_schemas import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    VerifyEmailRequest,
    ResendVerificationRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    ChangePasswordRequest,
    TokenResponse,
    MessageResponse,
    AuthUser,
    AdminPingResponse,
)
from services.auth_service import AuthService
from api.dependencies import CurrentUser, get_current_user, require_admin

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("kitchensathi.api.auth")


@router.post(
    "/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED
)
def register(payload: RegisterRequest, db: Session = Depends(get_db_session)):
    """Create an account; a 6-digit code is emailed for verification."""
    user = AuthService.register(db, payload)
    return RegisterResponse(
        message="Registration successful. Please check your email for the verification code.",
        user=UserMapper.to_auth_user(user),
        requires_verification=True,
    )


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db_session)):
    user, token = AuthService.login(db, payload.email, payload.password)
    return TokenResponse(token=token, user=UserMapper.to_auth_user(user))


@router.post("/verify-email", response_model=TokenResponse)
def verify_email(payload: VerifyEmailRequest, db: Session = Depends(get_db_session)):
    user, token = AuthService.verify_email(db, payload.user_id, payload.code)
    return TokenResponse(
        message="Email verified successfully",
        token=token,
        user=UserMapper.to_auth_user(user),
    )


@router.post("/resend-verification", response_model=MessageResponse)
def resend_verification(
    payload: ResendVerificationRequest, db: Session = Depends(get_db_session)
):
    AuthService.resend_verification(db, payload.user_id)
    return MessageResponse(message="Verification code sent successfully")


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    payload: ForgotPasswordRequest, db: Session = Depends(get_db_session)
):
    return MessageResponse(message=AuthService.forgot_password(db, payload.email))


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(payload: ResetPasswordRequest, db: Session = Depends(get_db_session)):
    AuthService.reset_password(db, payload)
    return MessageResponse(message="Password reset successfully")


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    payload: ChangePasswordRequest,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    AuthService.change_password(db, current.user_id, payload)
    return MessageResponse(message="Password changed successfully")


@router.delete("/delete-account", response_model=MessageResponse)
def delete_account(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Delete the caller's account and all data it owns."""
    AuthService.delete_account(db, current.user_id)
    return MessageResponse(message="Account deleted successfully")


@router.get("/me", response_model=AuthUser)
def me(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return UserMapper.to_auth_user(AuthService.get_user(db, current.user_id))


@router.get("/admin/ping", response_model=AdminPingResponse)
def admin_ping(current: CurrentUser = Depends(require_admin)):
    return AdminPingResponse(ok=True, role=current.role)
