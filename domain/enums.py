"""
Domain enums for KitchenSathi.
Contains all enumeration types used across the domain models and schemas.
"""

import enum


class UserRole(str, enum.Enum):
    """Account role"""

    USER = "user"
    ADMIN = "admin"


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class Theme(str, enum.Enum):
    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"


class GroceryStatus(str, enum.Enum):
    """Grocery item lifecycle: pending (to buy) -> completed (bought) -> used"""

    PENDING = "pending"
    COMPLETED = "completed"
    USED = "used"


class MealType(str, enum.Enum):
    """Meal slot in a day's plan"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class RecipeMealType(str, enum.Enum):
    """Meal category of a user recipe"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
    DESSERT = "dessert"


class DietLabel(str, enum.Enum):
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    GLUTEN_FREE = "gluten-free"
    DAIRY_FREE = "dairy-free"
    LOW_CARB = "low-carb"
    KETO = "keto"
    PALEO = "paleo"


class ShareStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class NotificationType(str, enum.Enum):
    GROCERY_EXPIRY = "grocery_expiry"
    RECIPE_SHARED = "recipe_shared"
    MEAL_REMINDER = "meal_reminder"
    SHARE_ACCEPTED = "share_accepted"
    SHARE_REJECTED = "share_rejected"


class CalorieStatus(str, enum.Enum):
    """How a day's intake compares with the recommendation"""

    GOOD = "good"
    OVER = "over"
    UNDER = "under"
