from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import date, datetime
from uuid import UUID

from domain.enums import GroceryStatus


class GroceryNotificationPreferences(BaseModel):
    """Per-item expiry reminder settings"""

    enabled: bool = True
    days_before_expiry: List[int] = Field(default_factory=lambda: [1, 3, 7])
    email_notifications: bool = True
    in_app_notifications: bool = True

    @field_validator("days_before_expiry")
    @classmethod
    def check_days(cls, v: List[int]) -> List[int]:
        if any(day < 0 or day > 30 for day in v):
            raise ValueError("days_before_expiry values must be between 0 and 30")
        return sorted(set(v))


class GroceryItemCreate(BaseModel):
    """Schema for adding an item to the grocery list"""

    name: str = Field(..., min_length=1, max_length=100)
    quantity: float = Field(..., ge=0.01, le=1000, description="Amount, fractions allowed")
    unit: str = Field(..., min_length=1, max_length=20, description="e.g. 'kg', 'pcs'")
    price: Optional[float] = Field(None, ge=0, le=100000)
    status: GroceryStatus = GroceryStatus.PENDING
    expiry_date: Optional[date] = None
    notification_preferences: Optional[GroceryNotificationPreferences] = None


class GroceryItemUpdate(BaseModel):
    """Partial update; send ``expiry_date: null`` to clear the expiry date"""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    quantity: Optional[float] = Field(None, ge=0.01, le=1000)
    unit: Optional[str] = Field(None, min_length=1, max_length=20)
    price: Optional[float] = Field(None, ge=0, le=100000)
    status: Optional[GroceryStatus] = None
    expiry_date: Optional[date] = None
    notification_preferences: Optional[GroceryNotificationPreferences] = None


class GroceryStatusUpdate(BaseModel):
    status: GroceryStatus


class GroceryExpiryUpdate(BaseModel):
    expiry_date: Optional[date] = None
    notification_preferences: Optional[GroceryNotificationPreferences] = None


class GroceryItemResponse(BaseModel):
    """Schema for grocery item response"""

    item_id: UUID
    user_id: UUID
    name: str
    quantity: float
    unit: str
    price: Optional[float] = None
    status: GroceryStatus
    completed: bool
    used_at: Optional[datetime] = None
    expiry_date: Optional[date] = None
    notification_preferences: GroceryNotificationPreferences
    last_notification_sent: Optional[datetime] = None
    notified_for_expiry: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ExpiryDateGroup(BaseModel):
    expiry_date: date = Field(..., alias="date")
    count: int
    items: List[str]

    model_config = {"populate_by_name": True}


class ExpiryStatsResponse(BaseModel):
    total_expiring_items: int
    by_date: List[ExpiryDateGroup]
    next_check: datetime


class ResetNotificationsResponse(BaseModel):
    message: str
    modified_count: int
