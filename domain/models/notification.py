"""
In-app notification model.
"""

from sqlalchemy import (
    Column,
    Text,
    Boolean,
    DateTime,
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
from domain.enums import NotificationType


class Notification(Base):
    """Message shown in the user's notification tray"""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_user_read", "user_id", "is_read", "created_at"),
    )

    notification_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    type = Column(SQLEnum(NotificationType), nullable=False)
    title = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("AppUser", back_populates="notifications")
