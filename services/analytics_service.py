from typing import Dict, Optional
from uuid import UUID
from datetime import date, datetime, timedelta
from collections import OrderedDict
from enum import Enum
from sqlalchemy.orm import Session
import logging

from domain.enums import GroceryStatus
from domain.schemas.analytics_schemas import (
    AnalyticsSummary,
    GroceryAnalytics,
    MealAnalytics,
    SavingsAnalytics,
    TopItem,
    TrendPoint,
    TrendsResponse,
    DailyCalories,
    CalorieSummary,
    WeeklyCaloriesResponse,
)
from repositories import (
    GroceryRepository,
    MealPlanRepository,
    MealConsumptionRepository,
    UserRepository,
)
from app.config import settings
from app.security import utcnow
from app.exceptions import NotFoundError, ServiceValidationError
from services import calorie_calculator
from services.meal_plan_service import current_week

logger = logging.getLogger("kitchensathi.analytics")

EXPIRING_SOON_DAYS = 7
TREND_DAYS = 30
CALORIE_DAYS = 7


def _enum_key(value) -> str:
    return value.value if isinstance(value, Enum) else str(value)


class AnalyticsService:
    """Read-only statistics over a user's groceries, meals and calorie log"""

    @staticmethod
    def summary(db: Session, user_id: UUID, today: Optional[date] = None) -> AnalyticsSummary:
        """
        Grocery, meal and savings statistics.

        ``waste_prevention_rate`` is the share of bought items that were used,
        as a whole percentage. Savings value every used item at its price, or
        at ``settings.default_item_price`` when it has none, times quantity.
        """
        today = today or utcnow().date()
        groceries = GroceryRepository(db)
        plans = MealPlanRepository(db)

        by_status = {status.value: 0 for status in GroceryStatus}
        for status, count in groceries.count_by_status(user_id).items():
            by_status[_enum_key(status)] = count
        total = sum(by_status.values())

        processed = by_status["completed"] + by_status["used"]
        rate = round(by_status["used"] / processed * 100) if processed else 0

        top_items = [
            TopItem(
                name=row.name,
                count=row.times_listed,
                total_quantity=float(row.total_quantity or 0),
            )
            for row in groceries.top_items(user_id, limit=5)
        ]
        expiring_soon = len(
            groceries.get_expiring(
                user_id, today, today + timedelta(days=EXPIRING_SOON_DAYS)
            )
        )

        week_start, _ = current_week(today)
        by_type = {
            _enum_key(meal_type): count
            for meal_type, count in plans.count_meals_by_type(user_id)
        }

        savings = sum(
            (item.price or settings.default_item_price) * (item.quantity or 1)
            for item in groceries.get_used(user_id)
        )

        logger.info(
            f"analytics_summary user_id={user_id} items={total} used={by_status['used']}"
        )
        return AnalyticsSummary(
            groceries=GroceryAnalytics(
                total=total,
                by_status=by_status,
                top_items=top_items,
                waste_prevention_rate=rate,
                expiring_soon=expiring_soon,
            ),
            meals=MealAnalytics(
                total=plans.count_meals(user_id),
                this_week=plans.count_meals(user_id, since=week_start),
                by_type=by_type,
            ),
            savings=SavingsAnalytics(estimated=round(savings, 2)),
        )

    @staticmethod
    def trends(db: Session, user_id: UUID, now: Optional[datetime] = None) -> TrendsResponse:
        """Items added over the last 30 days, grouped by creation day"""
        now = now or utcnow()
        items = GroceryRepository(db).get_created_since(
            user_id, now - timedelta(days=TREND_DAYS)
        )

        days: Dict[date, Dict[str, int]] = OrderedDict()
        for item in items:
            day = days.setdefault(
                item.created_at.date(), {"added": 0, "completed": 0, "used": 0}
            )
            day["added"] += 1
            if item.status == GroceryStatus.COMPLETED:
                day["completed"] += 1
            elif item.status == GroceryStatus.USED:
                day["used"] += 1

        return TrendsResponse(
            daily_stats=[TrendPoint(date=d, **counts) for d, counts in days.items()]
        )

    @staticmethod
    def weekly_calories(
        db: Session, user_id: UUID, today: Optional[date] = None
    ) -> WeeklyCaloriesResponse:
        """
        Calories eaten per day over the last 7 days (today included),
        compared with the recommendation from the user's body measurements.

        Raises:
            NotFoundError: unknown user
            ServiceValidationError: profile lacks birth date, gender, weight or height
        """
        user = UserRepository(db).get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if not (user.date_of_birth and user.gender and user.weight and user.height):
            raise ServiceValidationError(
                "Please complete your profile (age, gender, weight, height) "
                "to view calorie analytics",
                code="PROFILE_INCOMPLETE",
            )

        today = today or utcnow().date()
        age = calorie_calculator.age_on(user.date_of_birth, today)
        bmr = calorie_calculator.calculate_bmr(age, user.gender, user.weight, user.height)
        recommended = calorie_calculator.daily_calories(bmr)

        first_day = today - timedelta(days=CALORIE_DAYS - 1)
        start = datetime.combine(first_day, datetime.min.time())
        entries = MealConsumptionRepository(db).get_between(
            user_id, start, start + timedelta(days=CALORIE_DAYS)
        )

        daily = []
        for offset in range(CALORIE_DAYS):
            day = first_day + timedelta(days=offset)
            eaten = [e for e in entries if e.consumed_at.date() == day]
            consumed = round(sum(e.calories for e in eaten))
            daily.append(
                DailyCalories(
                    day=day.strftime("%a"),
                    date=day,
                    consumed=consumed,
                    recommended=recommended,
                    status=calorie_calculator.calorie_status(consumed, recommended),
                    meals=len(eaten),
                )
            )

        total_consumed = sum(d.consumed for d in daily)
        avg_daily = round(total_consumed / CALORIE_DAYS)
        logger.info(
            f"weekly_calories user_id={user_id} recommended={recommended} avg={avg_daily}"
        )
        return WeeklyCaloriesResponse(
            recommended_daily=recommended,
            bmr=bmr,
            daily_calories=daily,
            summary=CalorieSummary(
                total_consumed=total_consumed,
                total_recommended=recommended * CALORIE_DAYS,
                avg_daily=avg_daily,
                overall_status=calorie_calculator.calorie_status(avg_daily, recommended),
            ),
        )
