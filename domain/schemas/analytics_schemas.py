from pydantic import BaseModel
from typing import List, Dict
from datetime import date as date_type

from domain.enums import CalorieStatus


class TopItem(BaseModel):
    name: str
    count: int
    total_quantity: float


class GroceryAnalytics(BaseModel):
    total: int
    by_status: Dict[str, int]
    top_items: List[TopItem]
    waste_prevention_rate: int
    expiring_soon: int


class MealAnalytics(BaseModel):
    total: int
    this_week: int
    by_type: Dict[str, int]


class SavingsAnalytics(BaseModel):
    estimated: float


class AnalyticsSummary(BaseModel):
    groceries: GroceryAnalytics
    meals: MealAnalytics
    savings: SavingsAnalytics


class TrendPoint(BaseModel):
    date: date_type
    added: int
    completed: int
    used: int


class TrendsResponse(BaseModel):
    daily_stats: List[TrendPoint]


class DailyCalories(BaseModel):
    day: str
    date: date_type
    consumed: int
    recommended: int
    status: CalorieStatus
    meals: int


class CalorieSummary(BaseModel):
    total_consumed: int
    total_recommended: int
    avg_daily: int
    overall_status: CalorieStatus


class WeeklyCaloriesResponse(BaseModel):
    recommended_daily: int
    bmr: int
    daily_calories: List[DailyCalories]
    summary: CalorieSummary
