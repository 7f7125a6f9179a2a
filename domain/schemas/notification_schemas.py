from pydantic import BaseModel
from typing import Optional, Dict, Any
from datetime import datetime
from uuid import UUID

from domain.enums import NotificationType


class NotificationResponse(BaseModel):
    notification_id: UUID
    user_id: UUID
    type: NotificationType
    title: str
    message: str
    data: Dict[str, Any]
    is_read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class UnreadCountResponse(BaseModel):
    count: int


class NotificationAck(BaseModel):
    success: bool = True
    modified_count: Optional[int] = None
