"""
Meal Plan Repository - Data access layer for meal plan operations
"""

from typing import List, Optional, Sequence
from uuid import UUID
from datetime import date, datetime
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import func

from repositories.base import BaseRepository
from domain.models import MealPlan, MealEntry, MealConsumption


class MealPlanRepository(BaseRepository[MealPlan]):
    """Repository for meal plan data access"""

    id_field = "plan_id"

    def __init__(self, db: Session):
        super().__init__(db, MealPlan)

    def get_by_date(self, user_id: UUID, plan_date: date) -> Optional[MealPlan]:
        """Get a user's plan for one day"""
        return (
            self.db.query(MealPlan)
            .options(selectinload(MealPlan.meals))
            .filter(MealPlan.user_id == user_id, MealPlan.plan_date == plan_date)
            .first()
        )

    def get_range(
        self,
        user_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[MealPlan]:
        """Plans between two dates (inclusive, either bound optional), by date"""
        query = (
            self.db.query(MealPlan)
            .options(selectinload(MealPlan.meals))
            .filter(MealPlan.user_id == user_id)
        )
        if start_date:
            query = query.filter(MealPlan.plan_date >= start_date)
        if end_date:
            query = query.filter(MealPlan.plan_date <= end_date)
        return query.order_by(MealPlan.plan_date.asc()).all()

    def count_meals(self, user_id: UUID, since: Optional[date] = None) -> int:
        query = (
            self.db.query(func.count(MealEntry.meal_entry_id))
            .join(MealPlan, MealEntry.plan_id == MealPlan.plan_id)
            .filter(MealPlan.user_id == user_id)
        )
        if since:
            query = query.filter(MealPlan.plan_date >= since)
        return query.scalar() or 0

    def count_meals_by_type(self, user_id: UUID) -> Sequence:
        return (
            self.db.query(MealEntry.meal_type, func.count(MealEntry.meal_entry_id))
            .join(MealPlan, MealEntry.plan_id == MealPlan.plan_id)
            .filter(MealPlan.user_id == user_id)
            .group_by(MealEntry.meal_type)
            .all()
        )


class MealConsumptionRepository(BaseRepository[MealConsumption]):
    """Repository for the calorie log"""

    id_field = "consumption_id"

    def __init__(self, db: Session):
        super().__init__(db, MealConsumption)

    def get_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> List[MealConsumption]:
        """Entries with start <= consumed_at < end, oldest first"""
        return (
            self.db.query(MealConsumption)
            .filter(
                MealConsumption.user_id == user_id,
                MealConsumption.consumed_at >= start,
                MealConsumption.consumed_at < end,
            )
            .order_by(MealConsumption.consumed_at.asc())
            .all()
        )
