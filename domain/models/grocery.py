"""
Grocery list models.
"""

from sqlalchemy import (
    Column,
    Text,
    String,
    Boolean,
    Date,
    DateTime,
    Float,
    JSON,
    ForeignKey,
    Index,
    Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import uuid

from app.security import utcnow
from domain.models.database import Base
from domain.enums import GroceryStatus


def default_notification_preferences() -> dict:
    return {
        "enabled": True,
        "days_before_expiry": [1, 3, 7],
        "email_notifications": True,
        "in_app_notifications": True,
    }


class GroceryItem(Base):
    """An item on the household grocery list, tracked until it is used"""

    __tablename__ = "grocery_item"
    __table_args__ = (
        Index("ix_grocery_item_user_status", "user_id", "status"),
        Index("ix_grocery_item_expiry", "expiry_date", "notified_for_expiry"),
    )

    item_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    name = Column(Text, nullable=False)
    quantity = Column(Float, nullable=False)
    unit = Column(String(20), nullable=False)
    price = Column(Float)
    status = Column(
        SQLEnum(GroceryStatus), nullable=False, default=GroceryStatus.PENDING
    )
    used_at = Column(DateTime)
    expiry_date = Column(Date)
    notification_preferences = Column(
        JSON, nullable=False, default=default_notification_preferences
    )
    last_notification_sent = Column(DateTime)
    notified_for_expiry = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("AppUser", back_populates="grocery_items")

    @property
    def completed(self) -> bool:
        """Bought, whether or not it has been used since"""
        return self.status in (GroceryStatus.COMPLETED, GroceryStatus.USED)
