"""
Meal planning and consumption models.
"""

from sqlalchemy import (
    Column,
    Text,
    Date,
    DateTime,
    Float,
    Integer,
    ForeignKey,
    UniqueConstraint,
    Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship
import uuid

from app.security import utcnow
from domain.models.database import Base
from domain.enums import MealType


class MealPlan(Base):
    """All meals planned for one user on one day"""

    __tablename__ = "meal_plan"
    __table_args__ = (
        UniqueConstraint("user_id", "plan_date", name="uq_meal_plan_user_date"),
    )

    plan_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    plan_date = Column(Date, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("AppUser", back_populates="meal_plans")
    meals = relationship(
        "MealEntry",
        back_populates="plan",
        order_by="MealEntry.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )


class MealEntry(Base):
    """One recipe slotted into a day's plan"""

    __tablename__ = "meal_entry"

    meal_entry_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    plan_id = Column(
        Uuid, ForeignKey("meal_plan.plan_id", ondelete="CASCADE"), nullable=False
    )
    position = Column(Integer, nullable=False, default=0)
    recipe_id = Column(Text, nullable=False)
    title = Column(Text, nullable=False)
    image = Column(Text, nullable=False, default="")
    servings = Column(Integer, nullable=False, default=1)
    meal_type = Column(SQLEnum(MealType), nullable=False)
    notes = Column(Text)

    plan = relationship("MealPlan", back_populates="meals")


class MealConsumption(Base):
    """Calories eaten, as logged by the user"""

    __tablename__ = "meal_consumption"

    consumption_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    recipe_name = Column(Text, nullable=False)
    calories = Column(Float, nullable=False)
    consumed_at = Column(DateTime, nullable=False, default=utcnow)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("AppUser", back_populates="meal_consumptions")
