"""In-app notification inbox routes"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from domain.models import get_db_session
from domain.schemas.notification_schemas import (
    NotificationResponse,
    UnreadCountResponse,
    NotificationAck,
)
from services.notification_service import NotificationService
from api.dependencies import CurrentUser, get_current_user

router = APIRouter(prefix="/notifications", tags=["Notifications"])
logger = logging.getLogger("kitchensathi.api.notifications")


@router.get("", response_model=List[NotificationResponse])
def list_notifications(
    unread_only: bool = False,
    limit: int = Query(50, ge=1, le=200),
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """The caller's notifications, newest first"""
    items = NotificationService.list_notifications(db, current.user_id, unread_only, limit)
    return [NotificationResponse.model_validate(n) for n in items]


@router.get("/unread-count", response_model=UnreadCountResponse)
def unread_count(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return UnreadCountResponse(count=NotificationService.unread_count(db, current.user_id))


@router.patch("/mark-all-read", response_model=NotificationAck)
def mark_all_read(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    count = NotificationService.mark_all_as_read(db, current.user_id)
    return NotificationAck(success=True, modified_count=count)


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
def mark_read(
    notification_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    notification = NotificationService.mark_as_read(db, current.user_id, notification_id)
    return NotificationResponse.model_validate(notification)


@router.delete("/{notification_id}", response_model=NotificationAck)
def delete_notification(
    notification_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    NotificationService.delete_notification(db, current.user_id, notification_id)
    return NotificationAck(success=True)
