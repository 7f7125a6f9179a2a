from typing import List, Optional, Dict
from uuid import UUID
from datetime import date, timedelta
from collections import OrderedDict
from sqlalchemy.orm import Session
import logging

from domain.models import GroceryItem, default_notification_preferences
from domain.enums import GroceryStatus
from domain.schemas.grocery_schemas import (
    GroceryItemCreate,
    GroceryItemUpdate,
    GroceryExpiryUpdate,
    ExpiryStatsResponse,
    ExpiryDateGroup,
)
from repositories import GroceryRepository
from app.security import utcnow
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("kitchensathi.groceries")

EXPIRY_STATS_WINDOW_DAYS = 7


def today() -> date:
    return utcnow().date()


class GroceryService:
    """
    Grocery list and the item lifecycle.

    pending (to buy) -> completed (bought) -> used (consumed). Items reach
    ``used`` only from ``completed``; ``used_at`` records when that happened.
    """

    @staticmethod
    def _get_owned(db: Session, user_id: UUID, item_id: UUID) -> GroceryItem:
        item = GroceryRepository(db).get_owned(item_id, user_id)
        if not item:
            raise NotFoundError("Grocery item not found")
        return item

    @staticmethod
    def _apply_status(item: GroceryItem, status: GroceryStatus) -> None:
        """Move an item to ``status`` keeping ``used_at`` in step"""
        if status == GroceryStatus.USED:
            if item.status == GroceryStatus.PENDING:
                raise ServiceValidationError(
                    "Cannot mark pending item as used. Mark as completed first.",
                    code="INVALID_TRANSITION",
                )
            if item.status != GroceryStatus.USED or item.used_at is None:
                item.used_at = utcnow()
        else:
            item.used_at = None
        item.status = status

    @staticmethod
    def _set_expiry(item: GroceryItem, expiry_date: Optional[date]) -> None:
        if item.expiry_date != expiry_date:
            item.expiry_date = expiry_date
            # re-arm the expiry alert for the new date
            item.notified_for_expiry = False
            item.last_notification_sent = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @staticmethod
    def list_items(db: Session, user_id: UUID) -> List[GroceryItem]:
        """All items of a user, newest first"""
        return GroceryRepository(db).get_by_user_id(user_id)

    @staticmethod
    def list_by_status(
        db: Session, user_id: UUID, status: GroceryStatus
    ) -> List[GroceryItem]:
        return GroceryRepository(db).get_by_status(user_id, status)

    @staticmethod
    def get_item(db: Session, user_id: UUID, item_id: UUID) -> GroceryItem:
        return GroceryService._get_owned(db, user_id, item_id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @staticmethod
    def add_item(db: Session, user_id: UUID, payload: GroceryItemCreate) -> GroceryItem:
        """
        Add an item to the user's list.

        Args:
            db: Database session
            user_id: Owner
            payload: Validated item fields

        Returns:
            Created GroceryItem

        Raises:
            ServiceValidationError: item created directly as used
        """
        if payload.status == GroceryStatus.USED:
            raise ServiceValidationError(
                "Cannot mark pending item as used. Mark as completed first.",
                code="INVALID_TRANSITION",
            )
        prefs = (
            payload.notification_preferences.model_dump()
            if payload.notification_preferences
            else default_notification_preferences()
        )
        item = GroceryItem(
            user_id=user_id,
            name=payload.name.strip(),
            quantity=payload.quantity,
            unit=payload.unit.strip(),
            price=payload.price,
            status=payload.status,
            expiry_date=payload.expiry_date,
            notification_preferences=prefs,
            notified_for_expiry=False,
        )
        try:
            item = GroceryRepository(db).create(item)
        except Exception:
            db.rollback()
            logger.exception(f"grocery_add_failed user_id={user_id}")
            raise

        logger.info(
            f"grocery_added user_id={user_id} item_id={item.item_id} "
            f"name={item.name!r} expiry={item.expiry_date}"
        )
        return item

    @staticmethod
    def update_item(
        db: Session, user_id: UUID, item_id: UUID, payload: GroceryItemUpdate
    ) -> GroceryItem:
        """
        Partial update of an item; ``expiry_date: null`` clears the date and a
        status change goes through the lifecycle rules.
        """
        repo = GroceryRepository(db)
        item = GroceryService._get_owned(db, user_id, item_id)
        changes = payload.model_dump(exclude_unset=True)

        for field in ("name", "quantity", "unit", "price"):
            if field in changes:
                value = changes[field]
                if value is None and field != "price":
                    raise ServiceValidationError(f"{field} cannot be null")
                setattr(item, field, value.strip() if isinstance(value, str) else value)

        if "expiry_date" in changes:
            GroceryService._set_expiry(item, changes["expiry_date"])
        if payload.notification_preferences is not None:
            item.notification_preferences = payload.notification_preferences.model_dump()
        if payload.status is not None and payload.status != item.status:
            GroceryService._apply_status(item, payload.status)

        item = repo.update(item)
        logger.info(f"grocery_updated item_id={item_id} fields={sorted(changes)}")
        return item

    @staticmethod
    def set_status(
        db: Session, user_id: UUID, item_id: UUID, status: GroceryStatus
    ) -> GroceryItem:
        repo = GroceryRepository(db)
        item = GroceryService._get_owned(db, user_id, item_id)
        previous = item.status
        GroceryService._apply_status(item, status)
        item = repo.update(item)
        logger.info(
            f"grocery_status item_id={item_id} {previous.value} -> {status.value}"
        )
        return item

    @staticmethod
    def mark_completed(db: Session, user_id: UUID, item_id: UUID) -> GroceryItem:
        return GroceryService.set_status(db, user_id, item_id, GroceryStatus.COMPLETED)

    @staticmethod
    def mark_used(db: Session, user_id: UUID, item_id: UUID) -> GroceryItem:
        return GroceryService.set_status(db, user_id, item_id, GroceryStatus.USED)

    @staticmethod
    def delete_item(db: Session, user_id: UUID, item_id: UUID) -> None:
        repo = GroceryRepository(db)
        item = GroceryService._get_owned(db, user_id, item_id)
        repo.delete_entity(item)
        logger.info(f"grocery_deleted user_id={user_id} item_id={item_id}")

    # ------------------------------------------------------------------
    # Expiry
    # ------------------------------------------------------------------

    @staticmethod
    def update_expiry(
        db: Session, user_id: UUID, item_id: UUID, payload: GroceryExpiryUpdate
    ) -> GroceryItem:
        repo = GroceryRepository(db)
        item = GroceryService._get_owned(db, user_id, item_id)
        GroceryService._set_expiry(item, payload.expiry_date)
        if payload.notification_preferences is not None:
            item.notification_preferences = payload.notification_preferences.model_dump()
        item = repo.update(item)
        logger.info(f"grocery_expiry_set item_id={item_id} expiry={item.expiry_date}")
        return item

    @staticmethod
    def expiring_items(
        db: Session, user_id: UUID, days: int = 7, on: Optional[date] = None
    ) -> List[GroceryItem]:
        """Unused items expiring within ``days`` from today (inclusive), soonest first"""
        start = on or today()
        return GroceryRepository(db).get_expiring(
            user_id, start, start + timedelta(days=days)
        )

    @staticmethod
    def expired_items(
        db: Session, user_id: UUID, on: Optional[date] = None
    ) -> List[GroceryItem]:
        return GroceryRepository(db).get_expired(user_id, on or today())

    @staticmethod
    def expiry_stats(
        db: Session, user_id: UUID, on: Optional[date] = None
    ) -> ExpiryStatsResponse:
        """Unused items expiring in the next week, grouped by date"""
        items = GroceryService.expiring_items(
            db, user_id, EXPIRY_STATS_WINDOW_DAYS, on=on
        )
        groups: Dict[date, List[str]] = OrderedDict()
        for item in items:
            groups.setdefault(item.expiry_date, []).append(item.name)

        return ExpiryStatsResponse(
            total_expiring_items=len(items),
            by_date=[
                ExpiryDateGroup(expiry_date=d, count=len(names), items=names)
                for d, names in groups.items()
            ],
            next_check=utcnow() + timedelta(hours=24),
        )

    @staticmethod
    def reset_expiry_notifications(db: Session, user_id: UUID) -> int:
        count = GroceryRepository(db).reset_expiry_notifications(user_id)
        logger.info(f"expiry_notifications_reset user_id={user_id} count={count}")
        return count
