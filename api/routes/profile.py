"""Profile and preference routes for the signed-in user"""

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session
import logging

from domain.models import get_db_session
from domain.mappers import UserMapper
from domain.schemas.profile_schemas import (
    ProfileResponse,
    ProfileUpdateRequest,
    NotificationSettingsUpdate,
    AvatarResponse,
)
from services.profile_service import ProfileService
from api.dependencies import CurrentUser, get_current_user

router = APIRouter(prefix="/profile", tags=["Profile"])
logger = logging.getLogger("kitchensathi.api.profile")


@router.get("", response_model=ProfileResponse)
def get_profile(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """
    Get the caller's profile: body measurements used by calorie analytics
    and the preference document with defaults filled in.
    """
    user = ProfileService.get_user_profile(db, current.user_id)
    return UserMapper.to_profile(user)


@router.patch("", response_model=ProfileResponse)
def update_profile(
    payload: ProfileUpdateRequest,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """
    Partial update. Only fields present in the body change; ``preferences``
    is merged key by key into the stored preferences.
    """
    user = ProfileService.update_profile(db, current.user_id, payload)
    return UserMapper.to_profile(user)


@router.patch("/notifications", response_model=ProfileResponse)
def update_notification_settings(
    payload: NotificationSettingsUpdate,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    user = ProfileService.update_notification_settings(db, current.user_id, payload)
    return UserMapper.to_profile(user)


@router.post("/avatar", response_model=AvatarResponse)
def upload_avatar(
    avatar: UploadFile = File(...),
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Upload a profile picture (multipart field ``avatar``)"""
    url = ProfileService.upload_avatar(
        db, current.user_id, avatar.file.read(), avatar.filename, avatar.content_type
    )
    return AvatarResponse(url=url)
