"""Meal planning and calorie log routes"""

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import Response
from sqlalchemy.orm import Session
import logging
from datetime import date
from typing import List, Optional

from domain.models import get_db_session
from domain.mappers import MealPlanMapper
from domain.schemas.meal_plan_schemas import (
    MealPlanUpsert,
    MealEntryCreate,
    MealPlanResponse,
    WeekPlanResponse,
    MealConsumptionCreate,
    MealConsumptionResponse,
)
from services.meal_plan_service import MealPlanService
from api.dependencies import CurrentUser, get_current_user

router = APIRouter(prefix="/meal-plans", tags=["Meal Plans"])
logger = logging.getLogger("kitchensathi.api.meal_plans")


def _plan(plan, current: CurrentUser, plan_date: date) -> MealPlanResponse:
    return MealPlanMapper.to_response(plan, current.user_id, plan_date)


@router.get("", response_model=List[MealPlanResponse])
def list_meal_plans(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Stored plans in the optional date range, ascending by date"""
    plans = MealPlanService.list_plans(db, current.user_id, start_date, end_date)
    return [_plan(p, current, p.plan_date) for p in plans]


@router.post("", response_model=MealPlanResponse, status_code=status.HTTP_201_CREATED)
def upsert_meal_plan(
    payload: MealPlanUpsert,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Create or replace the whole plan for one day"""
    plan = MealPlanService.upsert_plan(db, current.user_id, payload)
    return _plan(plan, current, payload.plan_date)


@router.get("/week/current", response_model=WeekPlanResponse)
def current_week_plans(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Plans from Monday to Sunday of the current week"""
    start, end, plans = MealPlanService.current_week_plans(db, current.user_id)
    return WeekPlanResponse(
        start_date=start,
        end_date=end,
        meal_plans=[_plan(p, current, p.plan_date) for p in plans],
    )


@router.post(
    "/consume",
    response_model=MealConsumptionResponse,
    status_code=status.HTTP_201_CREATED,
)
def record_consumption(
    payload: MealConsumptionCreate,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Log calories eaten (feeds the weekly calorie analytics)"""
    entry = MealPlanService.record_consumption(db, current.user_id, payload)
    return MealConsumptionResponse.model_validate(entry)


@router.get("/{plan_date}", response_model=MealPlanResponse)
def get_meal_plan(
    plan_date: date = Path(..., description="YYYY-MM-DD"),
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """The day's plan, or an empty plan when nothing is planned"""
    return _plan(MealPlanService.get_plan(db, current.user_id, plan_date), current, plan_date)


@router.post(
    "/{plan_date}/meals",
    response_model=MealPlanResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_meal(
    payload: MealEntryCreate,
    plan_date: date = Path(...),
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    plan = MealPlanService.add_meal(db, current.user_id, plan_date, payload)
    return _plan(plan, current, plan_date)


@router.delete("/{plan_date}/meals/{index}", response_model=MealPlanResponse)
def remove_meal(
    plan_date: date,
    index: int,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Remove the meal at position ``index`` (0-based)"""
    plan = MealPlanService.remove_meal(db, current.user_id, plan_date, index)
    return _plan(plan, current, plan_date)


@router.delete("/{plan_date}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal_plan(
    plan_date: date,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    MealPlanService.delete_plan(db, current.user_id, plan_date)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
