from typing import Any, Dict, List, Optional
from uuid import UUID
from datetime import date
from sqlalchemy.orm import Session
import logging

from domain.models import Notification, GroceryItem
from domain.enums import NotificationType
from domain.mappers import UserMapper
from repositories import NotificationRepository, UserRepository
from app.exceptions import NotFoundError

logger = logging.getLogger("kitchensathi.notifications")


def expiry_wording(item_name: str, days_until_expiry: int) -> tuple:
    """Title and message of an expiry notification"""
    if days_until_expiry <= 0:
        return (
            "Item Expires Today!",
            f"{item_name} expires today. Use it or remove it.",
        )
    if days_until_expiry == 1:
        return (
            "Item Expiring Tomorrow",
            f"{item_name} will expire tomorrow. Use it soon!",
        )
    return (
        f"Item Expiring in {days_until_expiry} days",
        f"{item_name} will expire in {days_until_expiry} days. Use it soon!",
    )


class NotificationService:
    """In-app notifications: creation helpers for each event type and the inbox"""

    @staticmethod
    def create_notification(
        db: Session,
        user_id: UUID,
        notification_type: NotificationType,
        title: str,
        message: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> Notification:
        """
        Store a notification for a user.

        When the user switched in-app notifications off the record is still
        kept (for history) but created already read.

        Raises:
            NotFoundError: user does not exist
        """
        user = UserRepository(db).get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        in_app = UserMapper.preferences(user).notifications.in_app
        notification = Notification(
            user_id=user_id,
            type=notification_type,
            title=title,
            message=message,
            data={k: v for k, v in (data or {}).items() if v is not None},
            is_read=not in_app,
        )
        try:
            notification = NotificationRepository(db).create(notification)
        except Exception:
            db.rollback()
            logger.exception(f"notification_create_failed user_id={user_id} type={notification_type.value}")
            raise

        logger.info(
            f"notification_created user_id={user_id} type={notification_type.value} "
            f"notification_id={notification.notification_id}"
        )
        return notification

    @staticmethod
    def notify_grocery_expiry(
        db: Session, item: GroceryItem, days_until_expiry: int
    ) -> Notification:
        title, message = expiry_wording(item.name, days_until_expiry)
        return NotificationService.create_notification(
            db,
            item.user_id,
            NotificationType.GROCERY_EXPIRY,
            title,
            message,
            {
                "grocery_item_id": str(item.item_id),
                "grocery_item_name": item.name,
                "expiry_date": item.expiry_date.isoformat() if item.expiry_date else None,
            },
        )

    @staticmethod
    def notify_recipe_shared(
        db: Session,
        recipient_id: UUID,
        shared_by: str,
        recipe_id: UUID,
        recipe_name: str,
        share_id: UUID,
    ) -> Notification:
        return NotificationService.create_notification(
            db,
            recipient_id,
            NotificationType.RECIPE_SHARED,
            "New Recipe Shared!",
            f'{shared_by} shared "{recipe_name}" with you.',
            {
                "recipe_id": str(recipe_id),
                "recipe_name": recipe_name,
                "share_id": str(share_id),
                "shared_by": shared_by,
            },
        )

    @staticmethod
    def notify_share_status(
        db: Session,
        owner_id: UUID,
        recipient_name: str,
        recipe_name: str,
        share_id: UUID,
        accepted: bool,
    ) -> Notification:
        if accepted:
            type_, title, verb = NotificationType.SHARE_ACCEPTED, "Recipe Share Accepted", "accepted"
        else:
            type_, title, verb = NotificationType.SHARE_REJECTED, "Recipe Share Declined", "declined"
        return NotificationService.create_notification(
            db,
            owner_id,
            type_,
            title,
            f'{recipient_name} {verb} your recipe "{recipe_name}".',
            {"recipe_name": recipe_name, "share_id": str(share_id)},
        )

    @staticmethod
    def notify_meal_reminder(
        db: Session, user_id: UUID, meal_type: str, recipe_name: str, meal_date: date
    ) -> Notification:
        return NotificationService.create_notification(
            db,
            user_id,
            NotificationType.MEAL_REMINDER,
            f"Time for {meal_type}!",
            f"Don't forget: {recipe_name} is planned for {meal_type} today.",
            {
                "meal_type": meal_type,
                "recipe_name": recipe_name,
                "meal_date": meal_date.isoformat(),
            },
        )

    # ------------------------------------------------------------------
    # Inbox
    # ------------------------------------------------------------------

    @staticmethod
    def list_notifications(
        db: Session, user_id: UUID, unread_only: bool = False, limit: int = 50
    ) -> List[Notification]:
        return NotificationRepository(db).get_for_user(user_id, unread_only, limit)

    @staticmethod
    def unread_count(db: Session, user_id: UUID) -> int:
        return NotificationRepository(db).count_unread(user_id)

    @staticmethod
    def mark_as_read(db: Session, user_id: UUID, notification_id: UUID) -> Notification:
        repo = NotificationRepository(db)
        notification = repo.get_owned(notification_id, user_id)
        if not notification:
            raise NotFoundError("Notification not found")
        notification.is_read = True
        return repo.update(notification)

    @staticmethod
    def mark_all_as_read(db: Session, user_id: UUID) -> int:
        count = NotificationRepository(db).mark_all_read(user_id)
        logger.info(f"notifications_marked_read user_id={user_id} count={count}")
        return count

    @staticmethod
    def delete_notification(db: Session, user_id: UUID, notification_id: UUID) -> None:
        repo = NotificationRepository(db)
        notification = repo.get_owned(notification_id, user_id)
        if not notification:
            raise NotFoundError("Notification not found")
        repo.delete_entity(notification)
