"""
Recipe Repositories - Data access layer for user recipes and saved provider recipes
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from repositories.base import BaseRepository
from domain.models import UserRecipe, SavedRecipe
from domain.enums import RecipeMealType
from app.exceptions import ConflictError


class UserRecipeRepository(BaseRepository[UserRecipe]):
    """Repository for user-authored recipes"""

    id_field = "recipe_id"

    def __init__(self, db: Session):
        super().__init__(db, UserRecipe)

    def search(
        self,
        user_id: UUID,
        cuisine: Optional[str] = None,
        diet: Optional[str] = None,
        meal_type: Optional[RecipeMealType] = None,
        search: Optional[str] = None,
        favorite: Optional[bool] = None,
    ) -> List[UserRecipe]:
        """
        List a user's recipes, newest first.

        Args:
            user_id: Owner
            cuisine: Exact cuisine, case-insensitive
            diet: Diet label the recipe must carry
            meal_type: Meal category
            search: Case-insensitive substring of the name
            favorite: Only favorites when True

        Returns:
            Matching recipes
        """
        query = self.db.query(UserRecipe).filter(UserRecipe.user_id == user_id)
        if cuisine:
            query = query.filter(func.lower(UserRecipe.cuisine) == cuisine.lower())
        if meal_type:
            query = query.filter(UserRecipe.meal_type == meal_type)
        if search:
            query = query.filter(
                func.lower(UserRecipe.name).contains(search.strip().lower(), autoescape=True)
            )
        if favorite:
            query = query.filter(UserRecipe.is_favorite.is_(True))

        recipes = query.order_by(UserRecipe.created_at.desc()).all()
        if diet:
            # labels live in a JSON list; filter after loading
            recipes = [r for r in recipes if diet in (r.diet_labels or [])]
        return recipes


class SavedRecipeRepository(BaseRepository[SavedRecipe]):
    """Repository for bookmarked provider recipes"""

    id_field = "saved_recipe_id"

    def __init__(self, db: Session):
        super().__init__(db, SavedRecipe)

    def get_by_user_id(self, user_id: UUID) -> List[SavedRecipe]:
        return (
            self.db.query(SavedRecipe)
            .filter(SavedRecipe.user_id == user_id)
            .order_by(SavedRecipe.saved_at.desc())
            .all()
        )

    def get_by_recipe_id(self, user_id: UUID, recipe_id: str) -> Optional[SavedRecipe]:
        return (
            self.db.query(SavedRecipe)
            .filter(SavedRecipe.user_id == user_id, SavedRecipe.recipe_id == recipe_id)
            .first()
        )

    def create_saved(self, saved: SavedRecipe) -> SavedRecipe:
        try:
            return self.create(saved)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Recipe already saved", code="ALREADY_SAVED")

    def delete_legacy(self, user_id: UUID) -> int:
        """Remove bookmarks whose provider id is all digits (retired provider)"""
        legacy = [s for s in self.get_by_user_id(user_id) if s.recipe_id.isdigit()]
        for saved in legacy:
            self.db.delete(saved)
        self.db.commit()
        return len(legacy)
