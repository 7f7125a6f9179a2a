"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.user import AppUser
from domain.models.grocery import GroceryItem, default_notification_preferences
from domain.models.meal_plan import MealPlan, MealEntry, MealConsumption
from domain.models.recipe import UserRecipe, SharedRecipe, SavedRecipe
from domain.models.notification import Notification

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # User models
    "AppUser",
    # Grocery models
    "GroceryItem",
    "default_notification_preferences",
    # Meal plan models
    "MealPlan",
    "MealEntry",
    "MealConsumption",
    # Recipe models
    "UserRecipe",
    "SharedRecipe",
    "SavedRecipe",
    # Notifications
    "Notification",
]
