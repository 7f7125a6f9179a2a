"""Edamam recipe search (v2) adapter.

Thin HTTP layer: builds query parameters, performs the request and maps
provider failures to ``RecipeProviderError``. Turning provider documents
into API models happens in ``services.recipe_service``.
"""

from typing import Any, Dict, List, Optional
import logging
import re

import httpx

from app.config import settings

logger = logging.getLogger("kitchensathi.recipe_provider")

RECIPE_ID_PATTERN = re.compile(r"recipe_([a-f0-9]+)")

_client: Optional[httpx.Client] = None


class RecipeProviderError(Exception):
    """The provider could not serve the request.

    Attributes:
        message: human-readable message safe to show to users
        status_code: HTTP status returned by the provider, if any
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


# ------------------ Connection ------------------
def connect(transport: Optional[httpx.BaseTransport] = None) -> None:
    """Create the shared HTTP client (``transport`` lets tests stub the network)."""
    global _client
    close()
    _client = httpx.Client(
        timeout=settings.recipe_provider_timeout_sec,
        headers={"Edamam-Account-User": settings.edamam_account_user},
        transport=transport,
    )
    logger.info("Recipe provider client ready base_url=%s", settings.edamam_base_url)


def close() -> None:
    global _client
    try:
        if _client is not None:
            _client.close()
    finally:
        _client = None


def _get_client() -> httpx.Client:
    if _client is None:
        connect()
    return _client


def is_configured() -> bool:
    return settings.recipe_provider_enabled()


# ------------------ Requests ------------------
def build_search_params(
    query: Optional[str] = None,
    ingredients: Optional[List[str]] = None,
    diet: Optional[str] = None,
    cuisine: Optional[str] = None,
    meal_type: Optional[str] = None,
    max_calories: Optional[int] = None,
    max_ready_time: Optional[int] = None,
    offset: int = 0,
    number: int = 20,
) -> Dict[str, Any]:
    """Query parameters for a recipe search; user ingredients extend the text query."""
    terms = [(query or "").strip()] + [i.strip() for i in ingredients or []]
    q = " ".join(t for t in terms if t) or "meal"

    params: Dict[str, Any] = {
        "type": "public",
        "app_id": settings.edamam_app_id,
        "app_key": settings.edamam_app_key,
        "q": q,
        "from": offset,
        "to": offset + number,
    }
    if diet:
        params["diet"] = diet.lower()
    if cuisine:
        params["cuisineType"] = cuisine
    if meal_type:
        params["mealType"] = meal_type
    if max_calories:
        params["calories"] = f"0-{max_calories}"
    if max_ready_time:
        params["time"] = f"0-{max_ready_time}"
    return params


def _raise_for_status(response: httpx.Response, not_found: str) -> None:
    code = response.status_code
    if code < 400:
        return
    if code == 402:
        raise RecipeProviderError("API quota exceeded. Please try again later.", code)
    if code in (401, 403):
        raise RecipeProviderError(
            "Invalid API credentials. Please check the recipe provider configuration.",
            code,
        )
    if code == 404:
        raise RecipeProviderError(not_found, code)
    raise RecipeProviderError(f"Recipe provider returned HTTP {code}", code)


def _request(url: str, params: Dict[str, Any], not_found: str) -> Dict[str, Any]:
    if not is_configured():
        raise RecipeProviderError("Recipe provider is not configured")
    try:
        response = _get_client().get(url, params=params)
    except httpx.TimeoutException:
        logger.warning("recipe_provider_timeout url=%s", url)
        raise RecipeProviderError("Recipe provider timed out. Please try again.")
    except httpx.HTTPError as exc:
        logger.warning("recipe_provider_unreachable url=%s error=%s", url, exc)
        raise RecipeProviderError("Recipe provider is unreachable")
    _raise_for_status(response, not_found)
    try:
        return response.json()
    except ValueError:
        logger.warning("recipe_provider_bad_payload url=%s", url)
        raise RecipeProviderError("Recipe provider returned an invalid response")


def search(params: Dict[str, Any]) -> Dict[str, Any]:
    """Run a search; returns the provider payload (``hits``, ``count``)."""
    logger.info(
        "recipe_search q=%r from=%s to=%s", params.get("q"), params.get("from"), params.get("to")
    )
    return _request(settings.edamam_base_url, params, "No recipes found")


def extract_recipe_id(uri: str) -> str:
    """Short id of a recipe URI (the hex after ``recipe_``); other values pass through."""
    match = RECIPE_ID_PATTERN.search(uri or "")
    return match.group(1) if match else uri


def get_recipe(recipe_id: str) -> Dict[str, Any]:
    """Fetch one recipe by its short id or full URI; returns the ``recipe`` document."""
    short_id = extract_recipe_id(recipe_id)
    params = {
        "type": "public",
        "app_id": settings.edamam_app_id,
        "app_key": settings.edamam_app_key,
    }
    logger.info("recipe_details recipe_id=%s", short_id)
    payload = _request(f"{settings.edamam_base_url}/{short_id}", params, "Recipe not found")
    recipe = payload.get("recipe")
    if not recipe:
        raise RecipeProviderError("Recipe not found", 404)
    return recipe
