"""
Grocery Repository - Data access layer for grocery list items
"""

from typing import List, Sequence
from uuid import UUID
from datetime import date, datetime
from sqlalchemy.orm import Session
from sqlalchemy import and_, func

from repositories.base import BaseRepository
from domain.models import GroceryItem
from domain.enums import GroceryStatus

# Items that can still expire on the shelf.
UNUSED_STATUSES = (GroceryStatus.PENDING, GroceryStatus.COMPLETED)


class GroceryRepository(BaseRepository[GroceryItem]):
    """Repository for grocery item data access"""

    id_field = "item_id"

    def __init__(self, db: Session):
        super().__init__(db, GroceryItem)

    def get_by_user_id(self, user_id: UUID) -> List[GroceryItem]:
        """Get all grocery items for a user, newest first"""
        return (
            self.db.query(GroceryItem)
            .filter(GroceryItem.user_id == user_id)
            .order_by(GroceryItem.created_at.desc())
            .all()
        )

    def get_by_status(self, user_id: UUID, status: GroceryStatus) -> List[GroceryItem]:
        return (
            self.db.query(GroceryItem)
            .filter(
                and_(GroceryItem.user_id == user_id, GroceryItem.status == status)
            )
            .order_by(GroceryItem.created_at.desc())
            .all()
        )

    def get_names_by_status(
        self, user_id: UUID, status: GroceryStatus
    ) -> List[str]:
        rows = (
            self.db.query(GroceryItem.name)
            .filter(
                and_(GroceryItem.user_id == user_id, GroceryItem.status == status)
            )
            .all()
        )
        return [row[0] for row in rows]

    def get_expiring(
        self, user_id: UUID, start: date, end: date
    ) -> List[GroceryItem]:
        """Unused items expiring between start and end (inclusive), soonest first"""
        return (
            self.db.query(GroceryItem)
            .filter(
                and_(
                    GroceryItem.user_id == user_id,
                    GroceryItem.status.in_(UNUSED_STATUSES),
                    GroceryItem.expiry_date.isnot(None),
                    GroceryItem.expiry_date >= start,
                    GroceryItem.expiry_date <= end,
                )
            )
            .order_by(GroceryItem.expiry_date.asc(), GroceryItem.name.asc())
            .all()
        )

    def get_expired(self, user_id: UUID, today: date) -> List[GroceryItem]:
        """Unused items whose expiry date has passed, most recently expired first"""
        return (
            self.db.query(GroceryItem)
            .filter(
                and_(
                    GroceryItem.user_id == user_id,
                    GroceryItem.status.in_(UNUSED_STATUSES),
                    GroceryItem.expiry_date.isnot(None),
                    GroceryItem.expiry_date < today,
                )
            )
            .order_by(GroceryItem.expiry_date.desc())
            .all()
        )

    def get_pending_expiry_alerts(self, start: date, end: date) -> List[GroceryItem]:
        """Items of any user due an expiry alert that have not been notified yet"""
        return (
            self.db.query(GroceryItem)
            .filter(
                and_(
                    GroceryItem.status.in_(UNUSED_STATUSES),
                    GroceryItem.expiry_date.isnot(None),
                    GroceryItem.expiry_date >= start,
                    GroceryItem.expiry_date <= end,
                    GroceryItem.notified_for_expiry.is_(False),
                )
            )
            .order_by(GroceryItem.expiry_date.asc())
            .all()
        )

    def reset_expiry_notifications(self, user_id: UUID) -> int:
        """Re-arm expiry alerts for every item of a user"""
        count = (
            self.db.query(GroceryItem)
            .filter(
                and_(
                    GroceryItem.user_id == user_id,
                    GroceryItem.notified_for_expiry.is_(True),
                )
            )
            .update(
                {
                    GroceryItem.notified_for_expiry: False,
                    GroceryItem.last_notification_sent: None,
                },
                synchronize_session=False,
            )
        )
        self.db.commit()
        return count

    def count_by_status(self, user_id: UUID) -> dict:
        rows = (
            self.db.query(GroceryItem.status, func.count(GroceryItem.item_id))
            .filter(GroceryItem.user_id == user_id)
            .group_by(GroceryItem.status)
            .all()
        )
        return {status: count for status, count in rows}

    def top_items(self, user_id: UUID, limit: int = 5) -> Sequence:
        """Most frequently listed item names with count and summed quantity"""
        count_col = func.count(GroceryItem.item_id)
        return (
            self.db.query(
                GroceryItem.name,
                count_col.label("times_listed"),
                func.sum(GroceryItem.quantity).label("total_quantity"),
            )
            .filter(GroceryItem.user_id == user_id)
            .group_by(GroceryItem.name)
            .order_by(count_col.desc(), GroceryItem.name.asc())
            .limit(limit)
            .all()
        )

    def get_used(self, user_id: UUID) -> List[GroceryItem]:
        return self.get_by_status(user_id, GroceryStatus.USED)

    def get_created_since(self, user_id: UUID, since: datetime) -> List[GroceryItem]:
        return (
            self.db.query(GroceryItem)
            .filter(
                and_(GroceryItem.user_id == user_id, GroceryItem.created_at >= since)
            )
            .order_by(GroceryItem.created_at.asc())
            .all()
        )
