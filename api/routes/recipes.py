"""Provider recipe search, suggestions and saved recipes"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session
import logging
from typing import List, Optional

from domain.models import get_db_session
from domain.schemas.recipe_schemas import (
    RecipeDetail,
    RecipeSearchRequest,
    RecipeSearchResponse,
    RecipeSuggestionsResponse,
    SavedRecipeCreate,
    SavedRecipeUpdate,
    SavedRecipeResponse,
    CleanupResponse,
)
from services.recipe_service import RecipeService
from api.dependencies import CurrentUser, get_current_user

router = APIRouter(prefix="/recipes", tags=["Recipes"])
logger = logging.getLogger("kitchensathi.api.recipes")


@router.get("/suggestions", response_model=RecipeSuggestionsResponse)
def recipe_suggestions(
    diet: Optional[str] = None,
    max_calories: Optional[int] = Query(None, gt=0),
    cuisine: Optional[str] = None,
    type: Optional[str] = Query(None, description="Meal type, e.g. 'lunch'"),
    max_ready_time: Optional[int] = Query(None, gt=0),
    limit: int = Query(20, ge=1, le=100),
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """
    Recipes for what the caller has bought (completed grocery items).
    Falls back to a general search when nothing has been bought.
    """
    return RecipeService.suggestions(
        db,
        current.user_id,
        diet=diet,
        max_calories=max_calories,
        cuisine=cuisine,
        meal_type=type,
        max_ready_time=max_ready_time,
        limit=limit,
    )


@router.post("/search", response_model=RecipeSearchResponse)
def search_recipes(
    payload: RecipeSearchRequest,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return RecipeService.search(db, current.user_id, payload)


# ---------------------------------------------------------------------------
# Saved recipes
# ---------------------------------------------------------------------------


@router.get("/saved/list", response_model=List[SavedRecipeResponse])
def list_saved_recipes(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    saved = RecipeService.list_saved(db, current.user_id)
    return [SavedRecipeResponse.model_validate(s) for s in saved]


@router.post(
    "/saved", response_model=SavedRecipeResponse, status_code=status.HTTP_201_CREATED
)
def save_recipe(
    payload: SavedRecipeCreate,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    saved = RecipeService.save_recipe(db, current.user_id, payload)
    return SavedRecipeResponse.model_validate(saved)


@router.delete("/saved/cleanup-legacy", response_model=CleanupResponse)
def cleanup_legacy_saved_recipes(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Remove saved recipes whose ids come from the retired numeric-id provider"""
    removed = RecipeService.cleanup_legacy(db, current.user_id)
    return CleanupResponse(
        message="Legacy recipes cleaned up successfully", removed=removed
    )


@router.patch("/saved/{recipe_id}", response_model=SavedRecipeResponse)
def update_saved_recipe(
    recipe_id: str,
    payload: SavedRecipeUpdate,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Update notes or rating of a saved recipe, addressed by its provider id"""
    saved = RecipeService.update_saved(db, current.user_id, recipe_id, payload)
    return SavedRecipeResponse.model_validate(saved)


@router.delete("/saved/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_saved_recipe(
    recipe_id: str,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    RecipeService.delete_saved(db, current.user_id, recipe_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Details (last: the path parameter would shadow the literal paths above)
# ---------------------------------------------------------------------------


@router.get("/{recipe_id}", response_model=RecipeDetail)
def recipe_details(
    recipe_id: str,
    current: CurrentUser = Depends(get_current_user),
):
    """Full recipe from the provider; numeric ids of the retired provider answer 410"""
    return RecipeService.get_details(recipe_id)
