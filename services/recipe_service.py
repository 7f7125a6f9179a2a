from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from domain.models import SavedRecipe
from domain.enums import GroceryStatus
from domain.schemas.recipe_schemas import (
    RecipeSummary,
    RecipeDetail,
    RecipeIngredient,
    Nutrient,
    RecipeSearchRequest,
    RecipeSearchResponse,
    RecipeSuggestionsResponse,
    SavedRecipeCreate,
    SavedRecipeUpdate,
)
from repositories import GroceryRepository, SavedRecipeRepository
from adapters import recipe_provider
from app.exceptions import (
    ExternalServiceError,
    GoneError,
    NotFoundError,
    ServiceUnavailableError,
)

logger = logging.getLogger("kitchensathi.recipes")

# provider nutrient code -> display name, in display order
NUTRIENT_LABELS = {
    "ENERC_KCAL": "Calories",
    "PROCNT": "Protein",
    "FAT": "Fat",
    "CHOCDF": "Carbohydrates",
    "FIBTG": "Fiber",
    "SUGAR": "Sugar",
    "NA": "Sodium",
    "CHOLE": "Cholesterol",
}

LEGACY_RECIPE_MESSAGE = (
    "This recipe was saved from our previous system and is no longer available. "
    "Please delete it and save new recipes."
)


def is_legacy_recipe_id(recipe_id: str) -> bool:
    """Ids from the retired provider were purely numeric"""
    return recipe_id.isdigit()


def _servings(recipe: Dict[str, Any]) -> int:
    try:
        return max(1, int(round(float(recipe.get("yield") or 1))))
    except (TypeError, ValueError):
        return 1


def _image(recipe: Dict[str, Any]) -> Optional[str]:
    if recipe.get("image"):
        return recipe["image"]
    images = recipe.get("images") or {}
    for size in ("REGULAR", "SMALL"):
        url = (images.get(size) or {}).get("url")
        if url:
            return url
    return None


def count_ingredient_matches(
    ingredient_lines: List[str], user_ingredients: Optional[List[str]]
) -> Dict[str, int]:
    """
    How many of the user's ingredients a recipe uses.

    An ingredient counts as used when its name occurs in any lower-cased
    ingredient line; the rest of the recipe's lines count as missed.
    """
    if not user_ingredients:
        return {"used": 0, "missed": 0}
    lines = [line.lower() for line in ingredient_lines]
    used = sum(
        1 for name in user_ingredients if any(name.lower() in line for line in lines)
    )
    return {"used": used, "missed": max(0, len(lines) - used)}


def to_summary(
    recipe: Dict[str, Any], user_ingredients: Optional[List[str]] = None
) -> RecipeSummary:
    """Map a provider recipe document onto RecipeSummary"""
    servings = _servings(recipe)
    calories = recipe.get("calories")
    matches = count_ingredient_matches(
        recipe.get("ingredientLines") or [], user_ingredients
    )
    return RecipeSummary(
        recipe_id=recipe_provider.extract_recipe_id(recipe.get("uri", "")),
        uri=recipe.get("uri"),
        title=recipe.get("label") or "Untitled recipe",
        image=_image(recipe),
        servings=servings,
        ready_in_minutes=int(recipe.get("totalTime") or 0),
        source_url=recipe.get("url"),
        cuisines=recipe.get("cuisineType") or [],
        dish_types=recipe.get("dishType") or [],
        diets=recipe.get("dietLabels") or [],
        health_labels=recipe.get("healthLabels") or [],
        meal_types=recipe.get("mealType") or [],
        calories=round(calories / servings) if calories else None,
        used_ingredient_count=matches["used"],
        missed_ingredient_count=matches["missed"],
    )


def extract_nutrients(recipe: Dict[str, Any]) -> List[Nutrient]:
    """Per-serving nutrients, rounded, in NUTRIENT_LABELS order"""
    totals = recipe.get("totalNutrients") or {}
    servings = _servings(recipe)
    nutrients = []
    for code, label in NUTRIENT_LABELS.items():
        entry = totals.get(code)
        if entry:
            nutrients.append(
                Nutrient(
                    name=label,
                    amount=round((entry.get("quantity") or 0) / servings),
                    unit=entry.get("unit") or "",
                )
            )
    return nutrients


def to_detail(recipe: Dict[str, Any]) -> RecipeDetail:
    summary = to_summary(recipe)
    meal_types = ", ".join(recipe.get("mealType") or []) or "tasty"
    source = recipe.get("source") or "the web"
    return RecipeDetail(
        **summary.model_dump(),
        summary=f"{summary.title} - A delicious {meal_types} recipe from {source}.",
        instructions=(
            "Visit the recipe source for detailed cooking instructions: "
            f"{summary.source_url}"
            if summary.source_url
            else None
        ),
        ingredient_lines=recipe.get("ingredientLines") or [],
        extended_ingredients=[
            RecipeIngredient(
                name=ing.get("food") or ing.get("text") or "",
                text=ing.get("text"),
                quantity=ing.get("quantity"),
                unit=ing.get("measure"),
                weight=ing.get("weight"),
            )
            for ing in recipe.get("ingredients") or []
        ],
        nutrients=extract_nutrients(recipe),
    )


def _provider_call(func, *args):
    """Run a provider call, translating its failures into service errors"""
    if not recipe_provider.is_configured():
        raise ServiceUnavailableError("Recipe provider is not configured")
    try:
        return func(*args)
    except recipe_provider.RecipeProviderError as exc:
        if exc.status_code == 404:
            raise NotFoundError(exc.message)
        raise ExternalServiceError(exc.message, details={"status_code": exc.status_code})


class RecipeService:
    """Provider search, ingredient-based suggestions and saved recipes"""

    @staticmethod
    def bought_ingredients(db: Session, user_id: UUID) -> List[str]:
        """Lower-cased names of the items the user has bought but not used"""
        names = GroceryRepository(db).get_names_by_status(
            user_id, GroceryStatus.COMPLETED
        )
        return [name.strip().lower() for name in names if name.strip()]

    @staticmethod
    def search(
        db: Session, user_id: UUID, payload: RecipeSearchRequest
    ) -> RecipeSearchResponse:
        ingredients = (
            RecipeService.bought_ingredients(db, user_id)
            if payload.use_my_ingredients
            else []
        )
        params = recipe_provider.build_search_params(
            query=payload.query,
            ingredients=ingredients,
            diet=payload.diet,
            cuisine=payload.cuisine,
            meal_type=payload.type,
            max_calories=payload.max_calories,
            max_ready_time=payload.max_ready_time,
            offset=payload.offset,
            number=payload.number,
        )
        result = _provider_call(recipe_provider.search, params)
        recipes = [
            to_summary(hit.get("recipe") or {}, ingredients)
            for hit in result.get("hits") or []
        ]
        logger.info(
            f"recipe_search user_id={user_id} results={len(recipes)} "
            f"my_ingredients={len(ingredients)}"
        )
        return RecipeSearchResponse(
            recipes=recipes,
            total_results=int(result.get("count") or len(recipes)),
            search_params={
                "query": payload.query,
                "diet": payload.diet,
                "cuisine": payload.cuisine,
                "type": payload.type,
                "use_my_ingredients": payload.use_my_ingredients,
            },
        )

    @staticmethod
    def suggestions(
        db: Session,
        user_id: UUID,
        diet: Optional[str] = None,
        max_calories: Optional[int] = None,
        cuisine: Optional[str] = None,
        meal_type: Optional[str] = None,
        max_ready_time: Optional[int] = None,
        limit: int = 20,
    ) -> RecipeSuggestionsResponse:
        """
        Suggest recipes for what the user has bought.

        Without bought items this falls back to a general search
        (``match_type="general"``). Otherwise the bought item names are sent
        as the query and the results are ranked by how many of them each
        recipe uses (``match_type="ingredient-based"``).
        """
        ingredients = RecipeService.bought_ingredients(db, user_id)
        params = recipe_provider.build_search_params(
            query=None if ingredients else "meal",
            ingredients=ingredients,
            diet=diet,
            cuisine=cuisine,
            meal_type=meal_type,
            max_calories=max_calories,
            max_ready_time=max_ready_time,
            number=limit,
        )
        result = _provider_call(recipe_provider.search, params)
        recipes = [
            to_summary(hit.get("recipe") or {}, ingredients)
            for hit in result.get("hits") or []
        ]

        if not ingredients:
            logger.info(f"recipe_suggestions user_id={user_id} match=general")
            return RecipeSuggestionsResponse(
                recipes=recipes, match_type="general", user_ingredients=[]
            )

        recipes.sort(key=lambda r: r.used_ingredient_count, reverse=True)
        logger.info(
            f"recipe_suggestions user_id={user_id} match=ingredient-based "
            f"ingredients={len(ingredients)} results={len(recipes)}"
        )
        return RecipeSuggestionsResponse(
            recipes=recipes,
            match_type="ingredient-based",
            user_ingredients=ingredients,
        )

    @staticmethod
    def get_details(recipe_id: str) -> RecipeDetail:
        """
        Full provider recipe with per-serving nutrients.

        Raises:
            GoneError: numeric id from the retired provider
            NotFoundError: the provider does not know the id
        """
        recipe_id = recipe_id.strip()
        if is_legacy_recipe_id(recipe_id):
            logger.info(f"legacy_recipe_requested recipe_id={recipe_id}")
            raise GoneError(
                LEGACY_RECIPE_MESSAGE,
                code="LEGACY_RECIPE_ID",
                details={"is_legacy": True, "recipe_id": recipe_id},
            )
        return to_detail(_provider_call(recipe_provider.get_recipe, recipe_id))

    # ------------------------------------------------------------------
    # Saved recipes
    # ------------------------------------------------------------------

    @staticmethod
    def _get_saved(db: Session, user_id: UUID, recipe_id: str) -> SavedRecipe:
        saved = SavedRecipeRepository(db).get_by_recipe_id(user_id, recipe_id)
        if not saved:
            raise NotFoundError("Saved recipe not found")
        return saved

    @staticmethod
    def list_saved(db: Session, user_id: UUID) -> List[SavedRecipe]:
        saved = SavedRecipeRepository(db).get_by_user_id(user_id)
        legacy = sum(1 for s in saved if is_legacy_recipe_id(s.recipe_id))
        if legacy:
            logger.info(f"legacy_saved_recipes user_id={user_id} count={legacy}")
        return saved

    @staticmethod
    def save_recipe(db: Session, user_id: UUID, payload: SavedRecipeCreate) -> SavedRecipe:
        saved = SavedRecipe(user_id=user_id, **payload.model_dump())
        saved = SavedRecipeRepository(db).create_saved(saved)
        logger.info(f"recipe_saved user_id={user_id} recipe_id={saved.recipe_id}")
        return saved

    @staticmethod
    def update_saved(
        db: Session, user_id: UUID, recipe_id: str, payload: SavedRecipeUpdate
    ) -> SavedRecipe:
        saved = RecipeService._get_saved(db, user_id, recipe_id)
        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(saved, field, value)
        saved = SavedRecipeRepository(db).update(saved)
        logger.info(f"saved_recipe_updated user_id={user_id} recipe_id={recipe_id}")
        return saved

    @staticmethod
    def delete_saved(db: Session, user_id: UUID, recipe_id: str) -> None:
        saved = RecipeService._get_saved(db, user_id, recipe_id)
        SavedRecipeRepository(db).delete_entity(saved)
        logger.info(f"saved_recipe_deleted user_id={user_id} recipe_id={recipe_id}")

    @staticmethod
    def cleanup_legacy(db: Session, user_id: UUID) -> int:
        removed = SavedRecipeRepository(db).delete_legacy(user_id)
        logger.info(f"legacy_saved_recipes_removed user_id={user_id} count={removed}")
        return removed
