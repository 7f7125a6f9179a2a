"""
User account model.
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
    Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import uuid

from app.security import utcnow
from domain.models.database import Base
from domain.enums import UserRole, Gender


class AppUser(Base):
    """User account model"""

    __tablename__ = "app_user"

    user_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(320), unique=True, nullable=False, index=True)
    name = Column(Text, nullable=False)
    password_hash = Column(Text, nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.USER)

    avatar = Column(Text)
    date_of_birth = Column(Date)
    gender = Column(SQLEnum(Gender))
    weight = Column(Float)  # kg
    height = Column(Float)  # cm
    preferences = Column(JSON, nullable=False, default=dict)

    is_email_verified = Column(Boolean, nullable=False, default=False)
    email_verification_code = Column(String(6))
    email_verification_expires = Column(DateTime)
    password_reset_code = Column(String(6))
    password_reset_expires = Column(DateTime)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    grocery_items = relationship(
        "GroceryItem", back_populates="user", cascade="all, delete-orphan"
    )
    meal_plans = relationship(
        "MealPlan", back_populates="user", cascade="all, delete-orphan"
    )
    meal_consumptions = relationship(
        "MealConsumption", back_populates="user", cascade="all, delete-orphan"
    )
    user_recipes = relationship(
        "UserRecipe", back_populates="user", cascade="all, delete-orphan"
    )
    saved_recipes = relationship(
        "SavedRecipe", back_populates="user", cascade="all, delete-orphan"
    )
    notifications = relationship(
        "Notification", back_populates="user", cascade="all, delete-orphan"
    )
    shares_sent = relationship(
        "SharedRecipe",
        foreign_keys="SharedRecipe.owner_id",
        back_populates="owner",
        cascade="all, delete-orphan",
    )
    shares_received = relationship(
        "SharedRecipe",
        foreign_keys="SharedRecipe.shared_with_user_id",
        back_populates="recipient",
        cascade="all, delete-orphan",
    )
