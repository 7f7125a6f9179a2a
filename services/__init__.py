"""Services package - Business logic layer"""

from services.auth_service import AuthService
from services.profile_service import ProfileService
from services.grocery_service import GroceryService
from services.expiry_service import ExpiryService
from services.notification_service import NotificationService
from services.meal_plan_service import MealPlanService
from services.recipe_service import RecipeService
from services.user_recipe_service import UserRecipeService
from services.sharing_service import SharingService
from services.analytics_service import AnalyticsService

# Note: uploads and calorie_calculator hold plain functions, not classes

__all__ = [
    "AuthService",
    "ProfileService",
    "GroceryService",
    "ExpiryService",
    "NotificationService",
    "MealPlanService",
    "RecipeService",
    "UserRecipeService",
    "SharingService",
    "AnalyticsService",
]
