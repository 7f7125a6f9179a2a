from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from domain.models import AppUser
from domain.mappers import UserMapper
from domain.schemas.profile_schemas import (
    ProfileUpdateRequest,
    PreferencesUpdate,
    NotificationSettingsUpdate,
)
from repositories import UserRepository
from adapters import image_host
from app.config import settings
from app.exceptions import NotFoundError
from services import uploads

logger = logging.getLogger("kitchensathi.profile")


class ProfileService:
    """Business logic for profile management"""

    @staticmethod
    def get_user_profile(db: Session, user_id: UUID) -> AppUser:
        """Retrieve the caller's account"""
        user = UserRepository(db).get_by_id(user_id)
        if not user:
            logger.warning(f"profile_not_found user_id={user_id}")
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def update_profile(
        db: Session, user_id: UUID, payload: ProfileUpdateRequest
    ) -> AppUser:
        """
        Apply a partial profile update.

        Only fields present in the payload change; explicit nulls clear optional
        fields. Preferences are merged key by key into the stored document.

        Args:
            db: Database session
            user_id: Caller
            payload: Fields to change

        Returns:
            Updated AppUser
        """
        repo = UserRepository(db)
        user = ProfileService.get_user_profile(db, user_id)
        changes = payload.model_dump(exclude_unset=True, exclude={"preferences"})

        try:
            for field, value in changes.items():
                if field == "name":
                    if value is None:
                        continue
                    value = value.strip()
                setattr(user, field, value)

            if payload.preferences is not None:
                ProfileService._merge_preferences(user, payload.preferences)

            user = repo.update(user)
        except Exception:
            db.rollback()
            logger.exception(f"profile_update_failed user_id={user_id}")
            raise

        logger.info(
            f"profile_updated user_id={user_id} fields={sorted(changes)} "
            f"preferences={payload.preferences is not None}"
        )
        return user

    @staticmethod
    def update_notification_settings(
        db: Session, user_id: UUID, payload: NotificationSettingsUpdate
    ) -> AppUser:
        user = ProfileService.get_user_profile(db, user_id)
        ProfileService._merge_preferences(user, PreferencesUpdate(notifications=payload))
        user = UserRepository(db).update(user)
        logger.info(f"notification_settings_updated user_id={user_id}")
        return user

    @staticmethod
    def upload_avatar(
        db: Session,
        user_id: UUID,
        content: Optional[bytes],
        filename: Optional[str],
        content_type: Optional[str],
    ) -> str:
        """Host a new avatar image and point the profile at it; returns the URL."""
        user = ProfileService.get_user_profile(db, user_id)
        url, _public_id = uploads.store_image(
            content,
            filename,
            content_type,
            settings.avatar_folder,
            image_host.AVATAR_TRANSFORMATION,
        )
        user.avatar = url
        UserRepository(db).update(user)
        logger.info(f"avatar_updated user_id={user_id}")
        return url

    @staticmethod
    def _merge_preferences(user: AppUser, update: PreferencesUpdate) -> None:
        current = UserMapper.preferences(user).model_dump(mode="json")
        incoming = update.model_dump(mode="json", exclude_none=True)

        notifications = incoming.pop("notifications", None)
        if notifications:
            current["notifications"].update(notifications)
        current.update(incoming)

        # reassign so SQLAlchemy sees the JSON column change
        user.preferences = current
