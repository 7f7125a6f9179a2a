"""
Meal plan domain mappers.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from domain.models import MealPlan
from domain.schemas.meal_plan_schemas import MealPlanResponse, MealEntryResponse


class MealPlanMapper:
    """Mapper for meal plan transformations."""

    @staticmethod
    def to_response(
        plan: Optional[MealPlan], user_id: UUID, plan_date: date
    ) -> MealPlanResponse:
        """Days without a stored plan map to an empty plan for that date."""
        if plan is None:
            return MealPlanResponse(user_id=user_id, plan_date=plan_date, meals=[])

        return MealPlanResponse(
            plan_id=plan.plan_id,
            user_id=plan.user_id,
            plan_date=plan.plan_date,
            meals=[MealEntryResponse.model_validate(m) for m in plan.meals],
            created_at=plan.created_at,
            updated_at=plan.updated_at,
        )
