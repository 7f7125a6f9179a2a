from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from uuid import UUID

from domain.enums import Gender, Theme, UserRole


class NotificationSettings(BaseModel):
    """Which channels the user wants to hear from"""

    email: bool = True
    in_app: bool = True
    expiry_alerts: bool = True


class UserPreferences(BaseModel):
    """Account preferences stored on the user record; missing keys take defaults"""

    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    theme: Theme = Theme.AUTO
    language: str = Field("en", min_length=2, max_length=10)
    profile_visibility: bool = True
    share_activity: bool = False
    allow_sharing: bool = True


class NotificationSettingsUpdate(BaseModel):
    email: Optional[bool] = None
    in_app: Optional[bool] = None
    expiry_alerts: Optional[bool] = None


class PreferencesUpdate(BaseModel):
    notifications: Optional[NotificationSettingsUpdate] = None
    theme: Optional[Theme] = None
    language: Optional[str] = Field(None, min_length=2, max_length=10)
    profile_visibility: Optional[bool] = None
    share_activity: Optional[bool] = None
    allow_sharing: Optional[bool] = None


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; only fields present in the payload are changed"""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    avatar: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    weight: Optional[float] = Field(None, gt=0, le=500, description="Weight in kg")
    height: Optional[float] = Field(None, ge=30, le=300, description="Height in cm")
    preferences: Optional[PreferencesUpdate] = None


class ProfileResponse(BaseModel):
    user_id: UUID
    name: str
    email: str
    role: UserRole
    avatar: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    is_email_verified: bool
    preferences: UserPreferences
    created_at: datetime
    updated_at: datetime


class AvatarResponse(BaseModel):
    url: str
