from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any, Union
from datetime import datetime
from uuid import UUID


# ============================================================================
# Provider recipes
# ============================================================================


class RecipeSummary(BaseModel):
    """A recipe search hit from the external provider"""

    recipe_id: str
    uri: Optional[str] = None
    title: str
    image: Optional[str] = None
    image_type: str = "jpg"
    servings: int = 1
    ready_in_minutes: int = 0
    source_url: Optional[str] = None
    cuisines: List[str] = Field(default_factory=list)
    dish_types: List[str] = Field(default_factory=list)
    diets: List[str] = Field(default_factory=list)
    health_labels: List[str] = Field(default_factory=list)
    meal_types: List[str] = Field(default_factory=list)
    calories: Optional[int] = None
    used_ingredient_count: int = 0
    missed_ingredient_count: int = 0


class Nutrient(BaseModel):
    name: str
    amount: float
    unit: str


class RecipeIngredient(BaseModel):
    name: str
    text: Optional[str] = None
    quantity: Optional[float] = None
    unit: Optional[str] = None
    weight: Optional[float] = None


class RecipeDetail(RecipeSummary):
    summary: Optional[str] = None
    instructions: Optional[str] = None
    ingredient_lines: List[str] = Field(default_factory=list)
    extended_ingredients: List[RecipeIngredient] = Field(default_factory=list)
    nutrients: List[Nutrient] = Field(default_factory=list)


class RecipeSearchRequest(BaseModel):
    """Free-text recipe search against the provider"""

    query: Optional[str] = Field(None, max_length=200)
    diet: Optional[str] = None
    max_calories: Optional[int] = Field(None, gt=0)
    cuisine: Optional[str] = None
    type: Optional[str] = Field(None, description="Meal type, e.g. 'dinner'")
    max_ready_time: Optional[int] = Field(None, gt=0)
    number: int = Field(20, ge=1, le=100)
    offset: int = Field(0, ge=0)
    use_my_ingredients: bool = False


class RecipeSearchResponse(BaseModel):
    recipes: List[RecipeSummary]
    total_results: int
    search_params: Dict[str, Any]


class RecipeSuggestionsResponse(BaseModel):
    recipes: List[RecipeSummary]
    match_type: str
    user_ingredients: List[str]


# ============================================================================
# Saved (bookmarked) provider recipes
# ============================================================================


class SavedRecipeCreate(BaseModel):
    recipe_id: Union[str, int]
    title: str = Field(..., min_length=1, max_length=300)
    image: Optional[str] = None
    servings: int = Field(1, ge=1)
    ready_in_minutes: int = Field(0, ge=0)
    source_url: Optional[str] = None
    summary: Optional[str] = None
    cuisines: List[str] = Field(default_factory=list)
    diets: List[str] = Field(default_factory=list)
    notes: Optional[str] = Field(None, max_length=2000)
    rating: Optional[int] = Field(None, ge=1, le=5)

    @field_validator("recipe_id")
    @classmethod
    def recipe_id_as_text(cls, v: Union[str, int]) -> str:
        v = str(v).strip()
        if not v or len(v) > 200:
            raise ValueError("recipe_id must be 1..200 characters")
        return v


class SavedRecipeUpdate(BaseModel):
    notes: Optional[str] = Field(None, max_length=2000)
    rating: Optional[int] = Field(None, ge=1, le=5)


class SavedRecipeResponse(BaseModel):
    saved_recipe_id: UUID
    user_id: UUID
    recipe_id: str
    title: str
    image: Optional[str] = None
    servings: int
    ready_in_minutes: int
    source_url: Optional[str] = None
    summary: Optional[str] = None
    cuisines: List[str]
    diets: List[str]
    notes: Optional[str] = None
    rating: Optional[int] = None
    saved_at: datetime

    model_config = {"from_attributes": True}


class CleanupResponse(BaseModel):
    message: str
    removed: int
