from typing import List, Optional, Tuple
from uuid import UUID
from datetime import date, timedelta, timezone
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from domain.models import MealPlan, MealEntry, MealConsumption
from domain.schemas.meal_plan_schemas import (
    MealPlanUpsert,
    MealEntryCreate,
    MealConsumptionCreate,
)
from repositories import MealPlanRepository, MealConsumptionRepository
from app.security import utcnow
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("kitchensathi.meal_plans")


def current_week(on: Optional[date] = None) -> Tuple[date, date]:
    """Monday and Sunday of the week containing ``on``"""
    on = on or utcnow().date()
    monday = on - timedelta(days=on.weekday())
    return monday, monday + timedelta(days=6)


def _entry(meal: MealEntryCreate) -> MealEntry:
    return MealEntry(
        recipe_id=meal.recipe_id,
        title=meal.title.strip(),
        image=meal.image or "",
        servings=meal.servings,
        meal_type=meal.meal_type,
        notes=meal.notes,
    )


class MealPlanService:
    """Per-day meal plans and the calorie log"""

    @staticmethod
    def list_plans(
        db: Session,
        user_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[MealPlan]:
        if start_date and end_date and start_date > end_date:
            raise ServiceValidationError("start_date must not be after end_date")
        return MealPlanRepository(db).get_range(user_id, start_date, end_date)

    @staticmethod
    def get_plan(db: Session, user_id: UUID, plan_date: date) -> Optional[MealPlan]:
        """The stored plan for a day, or None when nothing is planned"""
        return MealPlanRepository(db).get_by_date(user_id, plan_date)

    @staticmethod
    def current_week_plans(
        db: Session, user_id: UUID, on: Optional[date] = None
    ) -> Tuple[date, date, List[MealPlan]]:
        start, end = current_week(on)
        return start, end, MealPlanRepository(db).get_range(user_id, start, end)

    @staticmethod
    def upsert_plan(db: Session, user_id: UUID, payload: MealPlanUpsert) -> MealPlan:
        """
        Replace the meals planned for one day, creating the plan if needed.

        Args:
            db: Database session
            user_id: Owner
            payload: Day and its complete list of meals

        Returns:
            The stored MealPlan
        """
        repo = MealPlanRepository(db)
        plan = repo.get_by_date(user_id, payload.plan_date)
        created = plan is None
        try:
            if created:
                plan = MealPlan(user_id=user_id, plan_date=payload.plan_date)
                db.add(plan)
            plan.meals = [_entry(m) for m in payload.meals]
            plan.updated_at = utcnow()
            db.commit()
            db.refresh(plan)
        except IntegrityError:
            db.rollback()
            logger.warning(f"meal_plan_upsert_conflict user_id={user_id} date={payload.plan_date}")
            raise
        except Exception:
            db.rollback()
            logger.exception(f"meal_plan_upsert_failed user_id={user_id}")
            raise

        logger.info(
            f"meal_plan_saved user_id={user_id} date={payload.plan_date} "
            f"meals={len(payload.meals)} created={created}"
        )
        return plan

    @staticmethod
    def add_meal(
        db: Session, user_id: UUID, plan_date: date, meal: MealEntryCreate
    ) -> MealPlan:
        """Append one meal to a day, creating the day's plan if needed"""
        repo = MealPlanRepository(db)
        plan = repo.get_by_date(user_id, plan_date)
        try:
            if plan is None:
                plan = MealPlan(user_id=user_id, plan_date=plan_date)
                db.add(plan)
            plan.meals.append(_entry(meal))
            plan.updated_at = utcnow()
            db.commit()
            db.refresh(plan)
        except Exception:
            db.rollback()
            logger.exception(f"meal_add_failed user_id={user_id} date={plan_date}")
            raise

        logger.info(
            f"meal_added user_id={user_id} date={plan_date} recipe_id={meal.recipe_id}"
        )
        return plan

    @staticmethod
    def remove_meal(
        db: Session, user_id: UUID, plan_date: date, index: int
    ) -> MealPlan:
        """
        Remove the meal at ``index`` (0-based) from a day's plan.

        Raises:
            NotFoundError: no plan for that day
            ServiceValidationError: index out of range
        """
        repo = MealPlanRepository(db)
        plan = repo.get_by_date(user_id, plan_date)
        if plan is None:
            raise NotFoundError("Meal plan not found")
        if index < 0 or index >= len(plan.meals):
            raise ServiceValidationError("Invalid meal index")

        plan.meals.pop(index)
        plan.updated_at = utcnow()
        db.commit()
        db.refresh(plan)
        logger.info(f"meal_removed user_id={user_id} date={plan_date} index={index}")
        return plan

    @staticmethod
    def delete_plan(db: Session, user_id: UUID, plan_date: date) -> None:
        repo = MealPlanRepository(db)
        plan = repo.get_by_date(user_id, plan_date)
        if plan is None:
            raise NotFoundError("Meal plan not found")
        repo.delete_entity(plan)
        logger.info(f"meal_plan_deleted user_id={user_id} date={plan_date}")

    @staticmethod
    def record_consumption(
        db: Session, user_id: UUID, payload: MealConsumptionCreate
    ) -> MealConsumption:
        """Log calories eaten; timestamps are stored as naive UTC"""
        consumed_at = payload.consumed_at or utcnow()
        if consumed_at.tzinfo is not None:
            consumed_at = consumed_at.astimezone(timezone.utc).replace(tzinfo=None)

        entry = MealConsumption(
            user_id=user_id,
            recipe_name=payload.recipe_name.strip(),
            calories=payload.calories,
            consumed_at=consumed_at,
        )
        entry = MealConsumptionRepository(db).create(entry)
        logger.info(
            f"meal_consumed user_id={user_id} calories={payload.calories} "
            f"consumed_at={consumed_at.isoformat()}"
        )
        return entry
