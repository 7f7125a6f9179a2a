"""User-authored recipe routes"""

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from domain.models import get_db_session
from domain.enums import DietLabel, RecipeMealType
from domain.schemas.auth_schemas import MessageResponse
from domain.schemas.user_recipe_schemas import (
    UserRecipeCreate,
    UserRecipeUpdate,
    UserRecipeResponse,
    UserRecipeEnvelope,
    RatingUpdate,
    ImageUploadResponse,
)
from services.user_recipe_service import UserRecipeService
from api.dependencies import CurrentUser, get_current_user

router = APIRouter(prefix="/user-recipes", tags=["User Recipes"])
logger = logging.getLogger("kitchensathi.api.user_recipes")


def _envelope(message: str, recipe) -> UserRecipeEnvelope:
    return UserRecipeEnvelope(
        message=message, recipe=UserRecipeResponse.model_validate(recipe)
    )


@router.get("", response_model=List[UserRecipeResponse])
def list_user_recipes(
    cuisine: Optional[str] = None,
    diet: Optional[DietLabel] = None,
    meal_type: Optional[RecipeMealType] = None,
    search: Optional[str] = None,
    favorite: Optional[bool] = None,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """The caller's recipes, newest first; ``search`` matches the name"""
    recipes = UserRecipeService.list_recipes(
        db,
        current.user_id,
        cuisine=cuisine,
        diet=diet.value if diet else None,
        meal_type=meal_type,
        search=search,
        favorite=favorite,
    )
    return [UserRecipeResponse.model_validate(r) for r in recipes]


@router.post("", response_model=UserRecipeEnvelope, status_code=status.HTTP_201_CREATED)
def create_user_recipe(
    payload: UserRecipeCreate,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    recipe = UserRecipeService.create_recipe(db, current.user_id, payload)
    return _envelope("Recipe created successfully", recipe)


@router.get("/{recipe_id}", response_model=UserRecipeResponse)
def get_user_recipe(
    recipe_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return UserRecipeResponse.model_validate(
        UserRecipeService.get_recipe(db, current.user_id, recipe_id)
    )


@router.put("/{recipe_id}", response_model=UserRecipeEnvelope)
def update_user_recipe(
    recipe_id: UUID,
    payload: UserRecipeUpdate,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    recipe = UserRecipeService.update_recipe(db, current.user_id, recipe_id, payload)
    return _envelope("Recipe updated successfully", recipe)


@router.delete("/{recipe_id}", response_model=MessageResponse)
def delete_user_recipe(
    recipe_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Delete the recipe, its shares and its hosted image"""
    UserRecipeService.delete_recipe(db, current.user_id, recipe_id)
    return MessageResponse(message="Recipe deleted successfully")


@router.patch("/{recipe_id}/favorite", response_model=UserRecipeEnvelope)
def toggle_favorite(
    recipe_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    recipe = UserRecipeService.toggle_favorite(db, current.user_id, recipe_id)
    message = "Added to favorites" if recipe.is_favorite else "Removed from favorites"
    return _envelope(message, recipe)


@router.patch("/{recipe_id}/rating", response_model=UserRecipeEnvelope)
def rate_user_recipe(
    recipe_id: UUID,
    payload: RatingUpdate,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    recipe = UserRecipeService.set_rating(db, current.user_id, recipe_id, payload.rating)
    return _envelope("Rating updated successfully", recipe)


@router.post("/{recipe_id}/image", response_model=ImageUploadResponse)
def upload_user_recipe_image(
    recipe_id: UUID,
    image: UploadFile = File(...),
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Upload a photo (multipart field ``image``); replaces any previous one"""
    content = image.file.read()
    recipe = UserRecipeService.upload_image(
        db, current.user_id, recipe_id, content, image.filename, image.content_type
    )
    return ImageUploadResponse(
        message="Image uploaded successfully",
        image=recipe.image,
        recipe=UserRecipeResponse.model_validate(recipe),
    )


@router.delete("/{recipe_id}/image", response_model=UserRecipeEnvelope)
def delete_user_recipe_image(
    recipe_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    recipe = UserRecipeService.delete_image(db, current.user_id, recipe_id)
    return _envelope("Image deleted successfully", recipe)
