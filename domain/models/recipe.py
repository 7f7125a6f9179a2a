"""
Recipe models: user-authored recipes, shares between accounts, and
bookmarks of provider recipes.
"""

from sqlalchemy import (
    Column,
    Text,
    String,
    Boolean,
    DateTime,
    Integer,
    JSON,
    ForeignKey,
    UniqueConstraint,
    Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import uuid

from app.security import utcnow
from domain.models.database import Base
from domain.enums import RecipeMealType, ShareStatus


class UserRecipe(Base):
    """A recipe written by a user"""

    __tablename__ = "user_recipe"

    recipe_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    name = Column(Text, nullable=False)
    description = Column(Text)
    cuisine = Column(Text)
    diet_labels = Column(JSON, nullable=False, default=list)
    ingredients = Column(JSON, nullable=False, default=list)  # [{name, quantity, unit}]
    instructions = Column(JSON, nullable=False, default=list)  # [str]
    cooking_time = Column(Integer)  # minutes
    servings = Column(Integer, nullable=False, default=1)
    meal_type = Column(SQLEnum(RecipeMealType))
    tags = Column(JSON, nullable=False, default=list)
    is_favorite = Column(Boolean, nullable=False, default=False)
    rating = Column(Integer)
    image = Column(Text)
    image_public_id = Column(Text)
    is_public = Column(Boolean, nullable=False, default=False)
    share_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("AppUser", back_populates="user_recipes")
    shares = relationship(
        "SharedRecipe", back_populates="recipe", cascade="all, delete-orphan"
    )


class SharedRecipe(Base):
    """Grant for another account to view a user recipe"""

    __tablename__ = "shared_recipe"
    __table_args__ = (
        UniqueConstraint(
            "recipe_id", "shared_with_user_id", name="uq_shared_recipe_recipient"
        ),
    )

    share_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    recipe_id = Column(
        Uuid, ForeignKey("user_recipe.recipe_id", ondelete="CASCADE"), nullable=False
    )
    owner_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    shared_with_user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    message = Column(String(500))
    status = Column(SQLEnum(ShareStatus), nullable=False, default=ShareStatus.PENDING)
    shared_at = Column(DateTime, nullable=False, default=utcnow)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    recipe = relationship("UserRecipe", back_populates="shares")
    owner = relationship(
        "AppUser", foreign_keys=[owner_id], back_populates="shares_sent"
    )
    recipient = relationship(
        "AppUser", foreign_keys=[shared_with_user_id], back_populates="shares_received"
    )


class SavedRecipe(Base):
    """Bookmark of a recipe from the external provider"""

    __tablename__ = "saved_recipe"
    __table_args__ = (
        UniqueConstraint("user_id", "recipe_id", name="uq_saved_recipe_user_recipe"),
    )

    saved_recipe_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    recipe_id = Column(Text, nullable=False)  # provider id
    title = Column(Text, nullable=False)
    image = Column(Text)
    servings = Column(Integer, nullable=False, default=1)
    ready_in_minutes = Column(Integer, nullable=False, default=0)
    source_url = Column(Text)
    summary = Column(Text)
    cuisines = Column(JSON, nullable=False, default=list)
    diets = Column(JSON, nullable=False, default=list)
    notes = Column(Text)
    rating = Column(Integer)
    saved_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("AppUser", back_populates="saved_recipes")
