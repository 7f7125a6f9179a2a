from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Union
from datetime import date, datetime
from uuid import UUID

from domain.enums import MealType


class MealEntryCreate(BaseModel):
    """A recipe slotted into a day; recipe ids from the provider or user recipes"""

    recipe_id: Union[str, int]
    title: str = Field(..., min_length=1, max_length=200)
    image: str = ""
    servings: int = Field(1, ge=1, le=100)
    meal_type: MealType
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("recipe_id")
    @classmethod
    def recipe_id_as_text(cls, v: Union[str, int]) -> str:
        v = str(v).strip()
        if not v:
            raise ValueError("recipe_id must not be empty")
        return v


class MealPlanUpsert(BaseModel):
    """Replaces every meal planned for ``plan_date``"""

    plan_date: date
    meals: List[MealEntryCreate] = Field(default_factory=list)


class MealEntryResponse(BaseModel):
    recipe_id: str
    title: str
    image: str
    servings: int
    meal_type: MealType
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


class MealPlanResponse(BaseModel):
    """A day's plan; ``plan_id`` is null for days with nothing planned yet"""

    plan_id: Optional[UUID] = None
    user_id: UUID
    plan_date: date
    meals: List[MealEntryResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class WeekPlanResponse(BaseModel):
    start_date: date
    end_date: date
    meal_plans: List[MealPlanResponse]


class MealConsumptionCreate(BaseModel):
    recipe_name: str = Field(..., min_length=1, max_length=200)
    calories: float = Field(..., ge=0, le=20000)
    consumed_at: Optional[datetime] = None


class MealConsumptionResponse(BaseModel):
    consumption_id: UUID
    user_id: UUID
    recipe_name: str
    calories: float
    consumed_at: datetime

    model_config = {"from_attributes": True}
