"""API routes package"""

from . import (
    admin,
    analytics,
    auth,
    groceries,
    health,
    meal_plans,
    notifications,
    profile,
    recipes,
    shared_recipes,
    user_recipes,
)

__all__ = [
    "admin",
    "analytics",
    "auth",
    "groceries",
    "health",
    "meal_plans",
    "notifications",
    "profile",
    "recipes",
    "shared_recipes",
    "user_recipes",
]
