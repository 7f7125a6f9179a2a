from typing import Dict, Optional
from datetime import date, timedelta
from sqlalchemy.orm import Session
import logging

from domain.models import GroceryItem
from domain.mappers import UserMapper
from domain.schemas.grocery_schemas import GroceryNotificationPreferences
from repositories import GroceryRepository, UserRepository
from adapters import email_adapter
from app.config import settings
from app.security import utcnow
from services.notification_service import NotificationService

logger = logging.getLogger("kitchensathi.expiry")


class ExpiryService:
    """One pass of the expiry alert job across all users"""

    @staticmethod
    def check_and_notify(db: Session, today: Optional[date] = None) -> Dict[str, int]:
        """
        Alert owners about items expiring within the configured window.

        Each qualifying item gets one in-app notification and, when both the
        owner's and the item's preferences allow it, an email. Items are then
        flagged so later runs skip them until their expiry date changes.

        Args:
            db: Database session
            today: Reference date (defaults to the current UTC date)

        Returns:
            Counters: checked, notified, emailed, skipped
        """
        today = today or utcnow().date()
        window_end = today + timedelta(days=settings.expiry_alert_window_days)
        items = GroceryRepository(db).get_pending_expiry_alerts(today, window_end)
        users = UserRepository(db)

        summary = {"checked": len(items), "notified": 0, "emailed": 0, "skipped": 0}
        logger.info(
            f"expiry_check_started today={today} window_end={window_end} items={len(items)}"
        )

        for item in items:
            user = users.get_by_id(item.user_id)
            if not user:
                summary["skipped"] += 1
                continue

            user_prefs = UserMapper.preferences(user).notifications
            item_prefs = GroceryNotificationPreferences.model_validate(
                item.notification_preferences or {}
            )
            if not user_prefs.expiry_alerts or not item_prefs.enabled:
                summary["skipped"] += 1
                continue

            days_until = (item.expiry_date - today).days
            try:
                if item_prefs.in_app_notifications:
                    NotificationService.notify_grocery_expiry(db, item, days_until)
                if user_prefs.email and item_prefs.email_notifications:
                    if ExpiryService._send_email(user, item, days_until):
                        summary["emailed"] += 1

                item.notified_for_expiry = True
                item.last_notification_sent = utcnow()
                db.commit()
                summary["notified"] += 1
            except Exception:
                db.rollback()
                logger.exception(f"expiry_notify_failed item_id={item.item_id}")
                summary["skipped"] += 1

        logger.info(
            "expiry_check_finished "
            + " ".join(f"{key}={value}" for key, value in summary.items())
        )
        return summary

    @staticmethod
    def _send_email(user, item: GroceryItem, days_until: int) -> bool:
        sent = email_adapter.send_expiry_alert(
            user.email,
            user.name,
            item.name,
            item.expiry_date.strftime("%A, %B %d, %Y"),
            days_until,
        )
        if not sent:
            logger.warning(f"expiry_email_not_sent item_id={item.item_id}")
        return sent
