"""
Tests for provider recipes: search, suggestions, details and saved recipes.

The Edamam API is replaced with an httpx MockTransport, so these tests check
the query parameters we send and how provider documents are mapped.
"""

import httpx
import pytest

from test_fixtures import API, client, create_user, auth_headers, make_grocery
from app.config import settings
from adapters import recipe_provider
from domain.enums import GroceryStatus
from services.recipe_service import (
    count_ingredient_matches,
    extract_nutrients,
    is_legacy_recipe_id,
    to_detail,
    to_summary,
)


def edamam_recipe(
    recipe_id="a1b2c3",
    label="Chicken Fried Rice",
    ingredient_lines=("2 cups cooked rice", "200g chicken breast", "1 onion"),
    calories=2000.0,
    servings=4,
    **extra,
):
    """A recipe document shaped like Edamam's v2 API returns it"""
    doc = {
        "uri": f"http://www.edamam.com/ontologies/edamam.owl#recipe_{recipe_id}",
        "label": label,
        "image": f"https://edamam-product-images.s3.amazonaws.com/{recipe_id}.jpg",
        "source": "Serious Eats",
        "url": f"https://www.seriouseats.com/{recipe_id}",
        "yield": servings,
        "dietLabels": ["Balanced"],
        "healthLabels": ["Dairy-Free"],
        "cuisineType": ["asian"],
        "mealType": ["lunch/dinner"],
        "dishType": ["main course"],
        "totalTime": 35.0,
        "calories": calories,
        "ingredientLines": list(ingredient_lines),
        "ingredients": [
            {"text": "2 cups cooked rice", "quantity": 2.0, "measure": "cup", "food": "rice", "weight": 316.0}
        ],
        "totalNutrients": {
            "ENERC_KCAL": {"label": "Energy", "quantity": calories, "unit": "kcal"},
            "PROCNT": {"label": "Protein", "quantity": 120.4, "unit": "g"},
            "FAT": {"label": "Fat", "quantity": 60.0, "unit": "g"},
        },
    }
    doc.update(extra)
    return doc


class FakeEdamam:
    """Answers search and lookup requests from canned documents"""

    def __init__(self):
        self.requests = []
        self.hits = []
        self.recipes = {}
        self.status_code = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"message": "error"})
        path = request.url.path.rstrip("/")
        if path.endswith("/api/recipes/v2"):
            return httpx.Response(
                200, json={"count": len(self.hits) * 10, "hits": [{"recipe": r} for r in self.hits]}
            )
        recipe_id = path.rsplit("/", 1)[-1]
        if recipe_id in self.recipes:
            return httpx.Response(200, json={"recipe": self.recipes[recipe_id]})
        return httpx.Response(404, json={"message": "not found"})

    @property
    def last_params(self):
        return self.requests[-1].url.params


@pytest.fixture
def edamam(monkeypatch):
    monkeypatch.setattr(settings, "edamam_app_id", "app-id")
    monkeypatch.setattr(settings, "edamam_app_key", "app-key")
    fake = FakeEdamam()
    recipe_provider.connect(transport=httpx.MockTransport(fake.handler))
    return fake


@pytest.fixture
def user():
    return create_user()


@pytest.fixture
def headers(user):
    return auth_headers(user)


# =============================================================================
# MAPPING
# =============================================================================


def test_summary_is_per_serving():
    summary = to_summary(edamam_recipe(calories=2001.0, servings=4))
    assert summary.recipe_id == "a1b2c3"
    assert summary.title == "Chicken Fried Rice"
    assert summary.servings == 4
    assert summary.calories == 500
    assert summary.ready_in_minutes == 35
    assert summary.cuisines == ["asian"]


def test_summary_falls_back_to_image_sizes():
    doc = edamam_recipe(image=None, images={"REGULAR": {"url": "https://img/regular.jpg"}})
    assert to_summary(doc).image == "https://img/regular.jpg"


def test_count_ingredient_matches():
    lines = ["2 cups cooked Rice", "200g chicken breast", "1 onion", "salt"]
    assert count_ingredient_matches(lines, ["rice", "chicken", "paneer"]) == {"used": 2, "missed": 2}
    assert count_ingredient_matches(lines, []) == {"used": 0, "missed": 0}


def test_nutrients_per_serving_in_display_order():
    nutrients = extract_nutrients(edamam_recipe(calories=2000.0, servings=4))
    assert [(n.name, n.amount, n.unit) for n in nutrients] == [
        ("Calories", 500, "kcal"),
        ("Protein", 30, "g"),
        ("Fat", 15, "g"),
    ]


def test_detail_summary_and_instructions():
    detail = to_detail(edamam_recipe())
    assert detail.summary == (
        "Chicken Fried Rice - A delicious lunch/dinner recipe from Serious Eats."
    )
    assert detail.instructions.endswith("https://www.seriouseats.com/a1b2c3")
    assert detail.extended_ingredients[0].name == "rice"
    assert detail.ingredient_lines[0] == "2 cups cooked rice"


def test_legacy_ids():
    assert is_legacy_recipe_id("715538")
    assert not is_legacy_recipe_id("a1b2c3")


def test_build_search_params():
    params = recipe_provider.build_search_params(
        query="curry",
        ingredients=["rice", " chicken "],
        diet="Balanced",
        max_calories=600,
        max_ready_time=30,
        offset=20,
        number=10,
    )
    assert params["q"] == "curry rice chicken"
    assert params["diet"] == "balanced"
    assert params["calories"] == "0-600"
    assert params["time"] == "0-30"
    assert (params["from"], params["to"]) == (20, 30)
    assert recipe_provider.build_search_params()["q"] == "meal"


def test_extract_recipe_id():
    uri = "http://www.edamam.com/ontologies/edamam.owl#recipe_9f8e7d"
    assert recipe_provider.extract_recipe_id(uri) == "9f8e7d"
    assert recipe_provider.extract_recipe_id("9f8e7d") == "9f8e7d"


# =============================================================================
# SEARCH AND SUGGESTIONS
# =============================================================================


def test_provider_not_configured(headers):
    r = client.get(f"{API}/recipes/suggestions", headers=headers)
    assert r.status_code == 503
    assert r.json()["error"]["code"] == "SERVICE_UNAVAILABLE"


def test_suggestions_without_groceries_are_general(edamam, headers):
    edamam.hits = [edamam_recipe()]
    r = client.get(f"{API}/recipes/suggestions", params={"limit": 5}, headers=headers)
    assert r.status_code == 200
    assert r.json()["match_type"] == "general"
    assert r.json()["user_ingredients"] == []
    assert edamam.last_params["q"] == "meal"
    assert edamam.last_params["to"] == "5"
    assert edamam.requests[-1].headers["Edamam-Account-User"] == settings.edamam_account_user


def test_suggestions_rank_by_bought_ingredients(edamam, user, headers):
    """
    Verifies:
    - Only completed (bought, unused) items feed the query
    - Recipes using more of them come first
    """
    make_grocery(user, "Rice", status=GroceryStatus.COMPLETED)
    make_grocery(user, "Chicken", status=GroceryStatus.COMPLETED)
    make_grocery(user, "Paneer", status=GroceryStatus.PENDING)
    make_grocery(user, "Tofu", status=GroceryStatus.USED)
    edamam.hits = [
        edamam_recipe("aaa", "Plain Onion Soup", ingredient_lines=("3 onions", "water")),
        edamam_recipe("bbb", "Chicken Fried Rice"),
    ]

    r = client.get(
        f"{API}/recipes/suggestions",
        params={"diet": "High-Protein", "max_calories": 700, "type": "dinner"},
        headers=headers,
    )
    assert r.status_code == 200
    body = r.json()
    assert body["match_type"] == "ingredient-based"
    assert sorted(body["user_ingredients"]) == ["chicken", "rice"]
    assert [rec["recipe_id"] for rec in body["recipes"]] == ["bbb", "aaa"]
    assert body["recipes"][0]["used_ingredient_count"] == 2

    params = edamam.last_params
    assert sorted(params["q"].split()) == ["chicken", "rice"]
    assert params["diet"] == "high-protein"
    assert params["calories"] == "0-700"
    assert params["mealType"] == "dinner"


def test_search(edamam, user, headers):
    make_grocery(user, "Rice", status=GroceryStatus.COMPLETED)
    edamam.hits = [edamam_recipe()]

    r = client.post(
        f"{API}/recipes/search",
        json={"query": "fried rice", "cuisine": "asian", "number": 10, "use_my_ingredients": True},
        headers=headers,
    )
    assert r.status_code == 200
    body = r.json()
    assert body["total_results"] == 10
    assert body["recipes"][0]["used_ingredient_count"] == 1
    assert body["search_params"] == {
        "query": "fried rice",
        "diet": None,
        "cuisine": "asian",
        "type": None,
        "use_my_ingredients": True,
    }
    assert edamam.last_params["q"] == "fried rice rice"
    assert edamam.last_params["cuisineType"] == "asian"


def test_search_validation(edamam, headers):
    r = client.post(f"{API}/recipes/search", json={"number": 0}, headers=headers)
    assert r.status_code == 422


@pytest.mark.parametrize("status_code", [402, 401, 500])
def test_provider_errors_are_bad_gateway(edamam, headers, status_code):
    edamam.status_code = status_code
    r = client.post(f"{API}/recipes/search", json={"query": "soup"}, headers=headers)
    assert r.status_code == 502
    assert r.json()["error"]["code"] == "EXTERNAL_SERVICE_ERROR"
    assert r.json()["error"]["details"] == {"status_code": status_code}


def test_provider_unreachable(monkeypatch, headers):
    monkeypatch.setattr(settings, "edamam_app_id", "app-id")
    monkeypatch.setattr(settings, "edamam_app_key", "app-key")

    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    recipe_provider.connect(transport=httpx.MockTransport(refuse))
    r = client.post(f"{API}/recipes/search", json={"query": "soup"}, headers=headers)
    assert r.status_code == 502
    assert r.json()["error"]["message"] == "Recipe provider is unreachable"


def test_provider_html_body_is_bad_gateway(monkeypatch, headers):
    monkeypatch.setattr(settings, "edamam_app_id", "app-id")
    monkeypatch.setattr(settings, "edamam_app_key", "app-key")

    def maintenance_page(request):
        return httpx.Response(200, text="<html>Down for maintenance</html>")

    recipe_provider.connect(transport=httpx.MockTransport(maintenance_page))
    r = client.post(f"{API}/recipes/search", json={"query": "soup"}, headers=headers)
    assert r.status_code == 502
    assert r.json()["error"]["message"] == "Recipe provider returned an invalid response"


# =============================================================================
# DETAILS
# =============================================================================


def test_recipe_details(edamam, headers):
    edamam.recipes["a1b2c3"] = edamam_recipe()
    r = client.get(f"{API}/recipes/a1b2c3", headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["recipe_id"] == "a1b2c3"
    assert body["nutrients"][0] == {"name": "Calories", "amount": 500, "unit": "kcal"}
    assert edamam.requests[-1].url.path.endswith("/a1b2c3")


def test_recipe_details_not_found(edamam, headers):
    r = client.get(f"{API}/recipes/ffff00", headers=headers)
    assert r.status_code == 404


def test_legacy_recipe_id_is_gone(edamam, headers):
    r = client.get(f"{API}/recipes/715538", headers=headers)
    assert r.status_code == 410
    error = r.json()["error"]
    assert error["code"] == "LEGACY_RECIPE_ID"
    assert error["details"] == {"is_legacy": True, "recipe_id": "715538"}
    assert edamam.requests == []


# =============================================================================
# SAVED RECIPES
# =============================================================================


def save(headers, recipe_id="a1b2c3", title="Chicken Fried Rice", **extra):
    return client.post(
        f"{API}/recipes/saved",
        json={"recipe_id": recipe_id, "title": title, **extra},
        headers=headers,
    )


def test_save_and_list(headers):
    r = save(headers, servings=4, cuisines=["asian"], rating=5)
    assert r.status_code == 201
    assert r.json()["recipe_id"] == "a1b2c3"
    assert r.json()["rating"] == 5

    listed = client.get(f"{API}/recipes/saved/list", headers=headers)
    assert listed.status_code == 200
    assert [s["recipe_id"] for s in listed.json()] == ["a1b2c3"]


def test_save_duplicate_conflicts(headers):
    assert save(headers).status_code == 201
    dup = save(headers)
    assert dup.status_code == 409
    assert dup.json()["error"]["code"] == "ALREADY_SAVED"


def test_same_recipe_saved_by_two_users(headers):
    other = auth_headers(create_user("athlete"))
    assert save(headers).status_code == 201
    assert save(other).status_code == 201


def test_update_saved_by_provider_id(headers):
    save(headers)
    r = client.patch(
        f"{API}/recipes/saved/a1b2c3",
        json={"notes": "Less soy sauce", "rating": 4},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["notes"] == "Less soy sauce"
    assert r.json()["rating"] == 4

    bad = client.patch(f"{API}/recipes/saved/a1b2c3", json={"rating": 6}, headers=headers)
    assert bad.status_code == 422

    missing = client.patch(f"{API}/recipes/saved/zzz", json={"rating": 3}, headers=headers)
    assert missing.status_code == 404


def test_delete_saved(headers):
    save(headers)
    assert client.delete(f"{API}/recipes/saved/a1b2c3", headers=headers).status_code == 204
    assert client.delete(f"{API}/recipes/saved/a1b2c3", headers=headers).status_code == 404


def test_cleanup_legacy_saved(headers):
    save(headers, recipe_id=715538, title="Old Pasta")
    save(headers, recipe_id="12", title="Old Salad")
    save(headers)

    r = client.delete(f"{API}/recipes/saved/cleanup-legacy", headers=headers)
    assert r.status_code == 200
    assert r.json()["removed"] == 2

    remaining = client.get(f"{API}/recipes/saved/list", headers=headers).json()
    assert [s["recipe_id"] for s in remaining] == ["a1b2c3"]
