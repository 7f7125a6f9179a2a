"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.user_mapper import UserMapper
from domain.mappers.meal_plan_mapper import MealPlanMapper

__all__ = ["UserMapper", "MealPlanMapper"]
