"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.user_repository import UserRepository
from repositories.grocery_repository import GroceryRepository
from repositories.meal_plan_repository import (
    MealPlanRepository,
    MealConsumptionRepository,
)
from repositories.recipe_repository import UserRecipeRepository, SavedRecipeRepository
from repositories.shared_recipe_repository import SharedRecipeRepository
from repositories.notification_repository import NotificationRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "GroceryRepository",
    "MealPlanRepository",
    "MealConsumptionRepository",
    "UserRecipeRepository",
    "SavedRecipeRepository",
    "SharedRecipeRepository",
    "NotificationRepository",
]
