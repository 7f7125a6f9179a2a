from typing import Tuple
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from domain.models import AppUser
from domain.enums import UserRole
from domain.schemas.auth_schemas import (
    RegisterRequest,
    ResetPasswordRequest,
    ChangePasswordRequest,
)
from repositories import UserRepository
from adapters import email_adapter
from app import security
from services import uploads
from app.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServiceUnavailableError,
    ServiceValidationError,
    UnauthorizedError,
)

logger = logging.getLogger("kitchensathi.auth")

FORGOT_PASSWORD_MESSAGE = (
    "If an account exists with this email, a password reset code has been sent."
)


class AuthService:
    """Registration, login, email verification and password management"""

    @staticmethod
    def register(db: Session, payload: RegisterRequest) -> AppUser:
        """
        Create an unverified account and email it a verification code.

        Args:
            db: Database session
            payload: email (already normalized), name, password

        Returns:
            The new AppUser

        Raises:
            ConflictError: email already registered
        """
        repo = UserRepository(db)
        if repo.email_exists(payload.email):
            logger.warning(f"register_conflict email={payload.email}")
            raise ConflictError("User already exists", code="EMAIL_TAKEN")

        code = security.generate_verification_code()
        user = AppUser(
            email=payload.email,
            name=payload.name,
            password_hash=security.hash_password(payload.password),
            role=UserRole.USER,
            preferences={},
            is_email_verified=False,
            email_verification_code=code,
            email_verification_expires=security.code_expiry(),
        )
        user = repo.create_user(user)
        logger.info(f"user_registered user_id={user.user_id}")

        if not email_adapter.send_verification_email(user.email, user.name, code):
            logger.warning(f"verification_email_not_sent user_id={user.user_id}")
        return user

    @staticmethod
    def login(db: Session, email: str, password: str) -> Tuple[AppUser, str]:
        """
        Check credentials and issue a bearer token.

        Raises:
            UnauthorizedError: unknown email or wrong password
            ForbiddenError: email not verified yet (details carry the user id)
        """
        user = UserRepository(db).get_by_email(email)
        if not user or not security.verify_password(password, user.password_hash):
            logger.warning(f"login_failed email={email}")
            raise UnauthorizedError("Invalid credentials", code="INVALID_CREDENTIALS")

        if not user.is_email_verified:
            raise ForbiddenError(
                "Please verify your email before logging in",
                code="EMAIL_NOT_VERIFIED",
                details={"requires_verification": True, "user_id": str(user.user_id)},
            )

        logger.info(f"login_succeeded user_id={user.user_id}")
        return user, security.create_access_token(user.user_id, user.role.value)

    @staticmethod
    def verify_email(db: Session, user_id: UUID, code: str) -> Tuple[AppUser, str]:
        """
        Confirm the emailed code; verified users are logged in right away.

        Raises:
            NotFoundError: unknown user
            ServiceValidationError: already verified, no code, wrong or expired code
        """
        repo = UserRepository(db)
        user = repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.is_email_verified:
            raise ServiceValidationError("Email already verified")
        if not user.email_verification_code:
            raise ServiceValidationError("No verification code found. Please request a new one.")
        if not security.codes_equal(code, user.email_verification_code):
            raise ServiceValidationError("Invalid verification code", code="INVALID_CODE")
        if security.is_expired(user.email_verification_expires):
            raise ServiceValidationError(
                "Verification code has expired. Please request a new one.",
                code="CODE_EXPIRED",
            )

        user.is_email_verified = True
        user.email_verification_code = None
        user.email_verification_expires = None
        user = repo.update(user)
        logger.info(f"email_verified user_id={user.user_id}")
        return user, security.create_access_token(user.user_id, user.role.value)

    @staticmethod
    def resend_verification(db: Session, user_id: UUID) -> None:
        """
        Issue a fresh verification code.

        Raises:
            NotFoundError: unknown user
            ServiceValidationError: already verified
            ServiceUnavailableError: the email could not be sent
        """
        repo = UserRepository(db)
        user = repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.is_email_verified:
            raise ServiceValidationError("Email already verified")

        code = security.generate_verification_code()
        user.email_verification_code = code
        user.email_verification_expires = security.code_expiry()
        repo.update(user)

        if not email_adapter.send_verification_email(user.email, user.name, code):
            raise ServiceUnavailableError("Failed to send verification email")
        logger.info(f"verification_resent user_id={user.user_id}")

    @staticmethod
    def forgot_password(db: Session, email: str) -> str:
        """Store and email a reset code; the reply never reveals whether the email exists."""
        repo = UserRepository(db)
        user = repo.get_by_email(email)
        if not user:
            logger.info(f"password_reset_unknown_email email={email}")
            return FORGOT_PASSWORD_MESSAGE

        code = security.generate_verification_code()
        user.password_reset_code = code
        user.password_reset_expires = security.code_expiry()
        repo.update(user)

        if not email_adapter.send_password_reset_email(user.email, user.name, code):
            logger.warning(f"password_reset_email_not_sent user_id={user.user_id}")
        return FORGOT_PASSWORD_MESSAGE

    @staticmethod
    def reset_password(db: Session, payload: ResetPasswordRequest) -> None:
        """
        Set a new password using an emailed reset code.

        Raises:
            NotFoundError: unknown email
            ServiceValidationError: no reset pending, wrong or expired code
        """
        repo = UserRepository(db)
        user = repo.get_by_email(payload.email)
        if not user:
            raise NotFoundError("User not found")
        if not user.password_reset_code:
            raise ServiceValidationError("No reset code found. Please request a new one.")
        if not security.codes_equal(payload.code, user.password_reset_code):
            raise ServiceValidationError("Invalid reset code", code="INVALID_CODE")
        if security.is_expired(user.password_reset_expires):
            raise ServiceValidationError(
                "Reset code has expired. Please request a new one.", code="CODE_EXPIRED"
            )

        user.password_hash = security.hash_password(payload.new_password)
        user.password_reset_code = None
        user.password_reset_expires = None
        repo.update(user)
        logger.info(f"password_reset user_id={user.user_id}")

    @staticmethod
    def change_password(
        db: Session, user_id: UUID, payload: ChangePasswordRequest
    ) -> None:
        """
        Raises:
            NotFoundError: account vanished
            UnauthorizedError: current password wrong
            ServiceValidationError: new password equals the current one
        """
        repo = UserRepository(db)
        user = repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if not security.verify_password(payload.current_password, user.password_hash):
            raise UnauthorizedError("Current password is incorrect")
        if payload.current_password == payload.new_password:
            raise ServiceValidationError(
                "New password must be different from the current password"
            )

        user.password_hash = security.hash_password(payload.new_password)
        repo.update(user)
        logger.info(f"password_changed user_id={user_id}")

    @staticmethod
    def get_user(db: Session, user_id: UUID) -> AppUser:
        user = UserRepository(db).get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def delete_account(db: Session, user_id: UUID) -> None:
        """
        Delete the account and everything it owns: groceries, meal plans,
        calorie log, user recipes (with their shares), shares received,
        saved recipes and notifications.
        """
        repo = UserRepository(db)
        user = repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        image_ids = [r.image_public_id for r in user.user_recipes if r.image_public_id]

        # shares this user received go away with the account
        for share in list(user.shares_received):
            recipe = share.recipe
            if recipe is not None and recipe.share_count > 0:
                recipe.share_count -= 1

        try:
            repo.delete_user(user)
        except Exception:
            db.rollback()
            logger.exception(f"account_delete_failed user_id={user_id}")
            raise
        for public_id in image_ids:
            uploads.discard_image(public_id)
        logger.info(f"account_deleted user_id={user_id}")
