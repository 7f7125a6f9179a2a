"""Usage analytics routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from domain.models import get_db_session
from domain.schemas.analytics_schemas import (
    AnalyticsSummary,
    TrendsResponse,
    WeeklyCaloriesResponse,
)
from services.analytics_service import AnalyticsService
from api.dependencies import CurrentUser, get_current_user

router = APIRouter(prefix="/analytics", tags=["Analytics"])
logger = logging.getLogger("kitchensathi.api.analytics")


@router.get("/summary", response_model=AnalyticsSummary)
def analytics_summary(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Grocery, meal and savings statistics for the caller"""
    return AnalyticsService.summary(db, current.user_id)


@router.get("/trends", response_model=TrendsResponse)
def analytics_trends(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return AnalyticsService.trends(db, current.user_id)


@router.get("/weekly-calories", response_model=WeeklyCaloriesResponse)
def weekly_calories(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """
    Calories eaten over the last 7 days against the recommendation derived
    from the profile (birth date, gender, weight and height are required).
    """
    return AnalyticsService.weekly_calories(db, current.user_id)
