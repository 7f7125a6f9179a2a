from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Union
from datetime import datetime
from uuid import UUID

from domain.enums import DietLabel, RecipeMealType


class IngredientLine(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    quantity: Optional[str] = Field(None, max_length=50)
    unit: Optional[str] = Field(None, max_length=50)

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_as_text(cls, v: Union[str, int, float, None]) -> Optional[str]:
        return None if v is None else str(v)


def _clean_instructions(steps: List[str]) -> List[str]:
    return [step.strip() for step in steps if step and step.strip()]


def _blank_meal_type(v):
    return None if v == "" else v


class UserRecipeCreate(BaseModel):
    """Schema for writing a new recipe"""

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    cuisine: Optional[str] = Field(None, max_length=100)
    diet_labels: List[DietLabel] = Field(default_factory=list)
    ingredients: List[IngredientLine] = Field(..., min_length=1)
    instructions: List[str] = Field(..., min_length=1)
    cooking_time: Optional[int] = Field(None, ge=0, description="Minutes")
    servings: int = Field(1, ge=1)
    meal_type: Optional[RecipeMealType] = None
    tags: List[str] = Field(default_factory=list)
    is_public: bool = False

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("instructions")
    @classmethod
    def drop_blank_steps(cls, v: List[str]) -> List[str]:
        steps = _clean_instructions(v)
        if not steps:
            raise ValueError("at least one instruction is required")
        return steps

    @field_validator("meal_type", mode="before")
    @classmethod
    def empty_meal_type(cls, v):
        return _blank_meal_type(v)


class UserRecipeUpdate(BaseModel):
    """Partial update of a user recipe"""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    cuisine: Optional[str] = Field(None, max_length=100)
    diet_labels: Optional[List[DietLabel]] = None
    ingredients: Optional[List[IngredientLine]] = Field(None, min_length=1)
    instructions: Optional[List[str]] = None
    cooking_time: Optional[int] = Field(None, ge=0)
    servings: Optional[int] = Field(None, ge=1)
    meal_type: Optional[RecipeMealType] = None
    tags: Optional[List[str]] = None
    is_public: Optional[bool] = None

    @field_validator("instructions")
    @classmethod
    def drop_blank_steps(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        steps = _clean_instructions(v)
        if not steps:
            raise ValueError("at least one instruction is required")
        return steps

    @field_validator("meal_type", mode="before")
    @classmethod
    def empty_meal_type(cls, v):
        return _blank_meal_type(v)


class RatingUpdate(BaseModel):
    """``rating: null`` removes the rating"""

    rating: Optional[int] = Field(None, ge=1, le=5)


class UserRecipeResponse(BaseModel):
    recipe_id: UUID
    user_id: UUID
    name: str
    description: Optional[str] = None
    cuisine: Optional[str] = None
    diet_labels: List[DietLabel]
    ingredients: List[IngredientLine]
    instructions: List[str]
    cooking_time: Optional[int] = None
    servings: int
    meal_type: Optional[RecipeMealType] = None
    tags: List[str]
    is_favorite: bool
    rating: Optional[int] = None
    image: Optional[str] = None
    is_public: bool
    share_count: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserRecipeSummary(BaseModel):
    """Compact view embedded in share listings"""

    recipe_id: UUID
    name: str
    description: Optional[str] = None
    cuisine: Optional[str] = None
    image: Optional[str] = None
    cooking_time: Optional[int] = None
    servings: int
    meal_type: Optional[RecipeMealType] = None

    model_config = {"from_attributes": True}


class UserRecipeEnvelope(BaseModel):
    message: str
    recipe: UserRecipeResponse


class ImageUploadResponse(BaseModel):
    message: str
    image: str
    recipe: UserRecipeResponse
