from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from domain.models import UserRecipe
from domain.enums import RecipeMealType
from domain.schemas.user_recipe_schemas import UserRecipeCreate, UserRecipeUpdate
from repositories import UserRecipeRepository
from adapters import image_host
from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError
from services import uploads

logger = logging.getLogger("kitchensathi.user_recipes")

# stored as JSON documents
JSON_FIELDS = ("diet_labels", "ingredients", "instructions", "tags")


class UserRecipeService:
    """Recipes written by users"""

    @staticmethod
    def _get_owned(db: Session, user_id: UUID, recipe_id: UUID) -> UserRecipe:
        recipe = UserRecipeRepository(db).get_owned(recipe_id, user_id)
        if not recipe:
            raise NotFoundError("Recipe not found")
        return recipe

    @staticmethod
    def list_recipes(
        db: Session,
        user_id: UUID,
        cuisine: Optional[str] = None,
        diet: Optional[str] = None,
        meal_type: Optional[RecipeMealType] = None,
        search: Optional[str] = None,
        favorite: Optional[bool] = None,
    ) -> List[UserRecipe]:
        return UserRecipeRepository(db).search(
            user_id,
            cuisine=cuisine,
            diet=diet,
            meal_type=meal_type,
            search=search,
            favorite=favorite,
        )

    @staticmethod
    def get_recipe(db: Session, user_id: UUID, recipe_id: UUID) -> UserRecipe:
        return UserRecipeService._get_owned(db, user_id, recipe_id)

    @staticmethod
    def create_recipe(db: Session, user_id: UUID, payload: UserRecipeCreate) -> UserRecipe:
        """
        Store a new recipe for ``user_id``.

        Args:
            db: Database session
            user_id: Author
            payload: Validated recipe (blank instruction steps already dropped)

        Returns:
            Created UserRecipe
        """
        data = payload.model_dump(mode="json")
        data["meal_type"] = payload.meal_type
        recipe = UserRecipe(user_id=user_id, **data)
        try:
            recipe = UserRecipeRepository(db).create(recipe)
        except Exception:
            db.rollback()
            logger.exception(f"user_recipe_create_failed user_id={user_id}")
            raise

        logger.info(
            f"user_recipe_created user_id={user_id} recipe_id={recipe.recipe_id} "
            f"name={recipe.name!r}"
        )
        return recipe

    @staticmethod
    def update_recipe(
        db: Session, user_id: UUID, recipe_id: UUID, payload: UserRecipeUpdate
    ) -> UserRecipe:
        recipe = UserRecipeService._get_owned(db, user_id, recipe_id)
        changes = payload.model_dump(mode="json", exclude_unset=True)

        for field, value in changes.items():
            if field == "meal_type":
                value = payload.meal_type
            elif value is None and field in JSON_FIELDS + ("name", "servings", "is_public"):
                raise ServiceValidationError(f"{field} cannot be null")
            elif field == "name":
                value = value.strip()
                if not value:
                    raise ServiceValidationError("name cannot be blank")
            setattr(recipe, field, value)

        recipe = UserRecipeRepository(db).update(recipe)
        logger.info(f"user_recipe_updated recipe_id={recipe_id} fields={sorted(changes)}")
        return recipe

    @staticmethod
    def delete_recipe(db: Session, user_id: UUID, recipe_id: UUID) -> None:
        """Delete a recipe together with its shares and hosted image"""
        recipe = UserRecipeService._get_owned(db, user_id, recipe_id)
        public_id = recipe.image_public_id
        UserRecipeRepository(db).delete_entity(recipe)
        uploads.discard_image(public_id)
        logger.info(f"user_recipe_deleted user_id={user_id} recipe_id={recipe_id}")

    @staticmethod
    def toggle_favorite(db: Session, user_id: UUID, recipe_id: UUID) -> UserRecipe:
        recipe = UserRecipeService._get_owned(db, user_id, recipe_id)
        recipe.is_favorite = not recipe.is_favorite
        recipe = UserRecipeRepository(db).update(recipe)
        logger.info(f"user_recipe_favorite recipe_id={recipe_id} is_favorite={recipe.is_favorite}")
        return recipe

    @staticmethod
    def set_rating(
        db: Session, user_id: UUID, recipe_id: UUID, rating: Optional[int]
    ) -> UserRecipe:
        recipe = UserRecipeService._get_owned(db, user_id, recipe_id)
        recipe.rating = rating
        return UserRecipeRepository(db).update(recipe)

    @staticmethod
    def upload_image(
        db: Session,
        user_id: UUID,
        recipe_id: UUID,
        content: Optional[bytes],
        filename: Optional[str],
        content_type: Optional[str],
    ) -> UserRecipe:
        """Host a photo for the recipe, replacing any previous one"""
        recipe = UserRecipeService._get_owned(db, user_id, recipe_id)
        url, public_id = uploads.store_image(
            content,
            filename,
            content_type,
            settings.recipe_image_folder,
            image_host.RECIPE_TRANSFORMATION,
        )
        previous = recipe.image_public_id
        recipe.image = url
        recipe.image_public_id = public_id
        recipe = UserRecipeRepository(db).update(recipe)
        if previous and previous != public_id:
            uploads.discard_image(previous)
        logger.info(f"user_recipe_image_uploaded recipe_id={recipe_id}")
        return recipe

    @staticmethod
    def delete_image(db: Session, user_id: UUID, recipe_id: UUID) -> UserRecipe:
        recipe = UserRecipeService._get_owned(db, user_id, recipe_id)
        if not recipe.image:
            raise NotFoundError("Recipe has no image")
        public_id = recipe.image_public_id
        recipe.image = None
        recipe.image_public_id = None
        recipe = UserRecipeRepository(db).update(recipe)
        uploads.discard_image(public_id)
        logger.info(f"user_recipe_image_deleted recipe_id={recipe_id}")
        return recipe
