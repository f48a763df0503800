import json
from datetime import datetime, timezone

import pytest

from coffie.recipe import (
    CoffeeBrief,
    CreateRecipe,
    CreateRecipeRequest,
    ListRecipes,
    ListRecipesRequest,
    Recipe,
    RecipeListEnvelope,
    RecipeListFilter,
    RecipeListItem,
    RecipeNotFoundError,
    RecipeResponse,
    RecipeSummary,
    RecipeWithDetails,
    UnauthorizedError,
    UpdateRecipe,
    UpdateRecipeRequest,
    UserBrief,
)
from coffie.response import json_response

CREATED_AT = datetime(2026, 4, 9, 13, 0, 0, tzinfo=timezone.utc)


def _response(avg_rating=None):
    return RecipeResponse(
        id="rec1",
        user=UserBrief("u1", "Lucas"),
        coffee=CoffeeBrief("c1", "Kenya", "Roastery"),
        method="v60",
        water_temp=93,
        dose=15.0,
        yield_=250.0,
        brew_time=180,
        description="bloom first",
        avg_rating=avg_rating,
        rating_count=0,
        created_at=CREATED_AT,
    )


def test_create_recipe_reads_fields_and_yield_key():
    payload = {
        "coffee_id": "c1",
        "method": "v60",
        "water_temp": 93,
        "dose": 15.5,
        "yield": 250.0,
        "brew_time": 180,
        "description": "bloom first",
    }
    recipe = CreateRecipe.from_payload(payload)
    assert recipe == CreateRecipe("c1", "v60", 93, 15.5, 250.0, 180, "bloom first")


def test_create_recipe_accepts_integer_for_float_fields():
    recipe = CreateRecipe.from_payload({"dose": 15, "yield": 250})
    assert recipe.dose == 15.0
    assert isinstance(recipe.yield_, float)


@pytest.mark.parametrize("key", ["water_temp", "brew_time"])
def test_create_recipe_rejects_fractional_integers(key):
    with pytest.raises(ValueError):
        CreateRecipe.from_payload({key: 93.5})


@pytest.mark.parametrize("value", ["15", True, None.__class__])
def test_create_recipe_rejects_wrong_dose_type(value):
    with pytest.raises(ValueError):
        CreateRecipe.from_payload({"dose": value})


def test_create_recipe_rejects_non_object():
    with pytest.raises(ValueError):
        CreateRecipe.from_payload("v60")


def test_update_recipe_keeps_absent_fields_unset():
    update = UpdateRecipe.from_payload({"method": "aeropress", "brew_time": None})
    assert update == UpdateRecipe(method="aeropress")
    assert update.to_dict() == {"method": "aeropress"}


def test_update_recipe_round_trips_through_wire_form():
    update = UpdateRecipe(method="v60", water_temp=92, dose=16.0, yield_=240.0, brew_time=150, description="")
    assert UpdateRecipe.from_payload(update.to_dict()) == update
    assert "yield" in update.to_dict()


def test_empty_update_has_empty_wire_form():
    assert UpdateRecipe.from_payload({}).to_dict() == {}
    assert UpdateRecipe.from_payload(None) == UpdateRecipe()


def test_recipe_summary_extends_recipe():
    summary = RecipeSummary("rec1", "u1", "c1", "v60", 93, 15.0, 250.0, 180, "", CREATED_AT, CREATED_AT)
    assert isinstance(summary, Recipe)
    assert summary.avg_rating is None
    assert summary.rating_count == 0


def test_recipe_response_wire_keys():
    data = _response().to_dict()
    assert list(data) == [
        "id", "user", "coffee", "method", "water_temp", "dose", "yield",
        "brew_time", "description", "avg_rating", "rating_count", "created_at",
    ]
    assert data["coffee"] == {"id": "c1", "name": "Kenya", "brand": "Roastery"}


def test_recipe_response_json_keeps_null_rating():
    body = json.loads(json_response(200, _response()).get_data(as_text=True))
    assert body["avg_rating"] is None
    assert body["yield"] == 250.0
    assert body["created_at"] == "2026-04-09T13:00:00Z"


def test_recipe_response_json_with_rating():
    body = json.loads(json_response(200, _response(avg_rating=4.5)).get_data(as_text=True))
    assert body["avg_rating"] == 4.5


def test_list_envelope_round_trips():
    item = RecipeListItem("rec1", UserBrief("u1", "Lucas"), CoffeeBrief("c1", "Kenya", "Roastery"), "v60", None, 0, CREATED_AT)
    envelope = RecipeListEnvelope(items=(item,), total=1, page=1)
    body = json.loads(json_response(200, envelope).get_data(as_text=True))
    assert body == json.loads(json.dumps(envelope.to_dict(), default=lambda value: body["items"][0]["created_at"]))
    assert list(body["items"][0]) == ["id", "user", "coffee", "method", "avg_rating", "rating_count", "created_at"]


def test_error_messages_match_domain():
    assert str(RecipeNotFoundError()) == "recipe not found"
    assert str(UnauthorizedError()) == "not authorized to modify this recipe"


def test_request_defaults():
    assert RecipeListFilter() == RecipeListFilter("", "", "", 0, 0)
    assert ListRecipesRequest().page == ListRecipes().page == 0
    assert CreateRecipeRequest().yield_ == 0.0
    assert UpdateRecipeRequest().method is None


def test_recipe_with_details_holds_join_values():
    details = RecipeWithDetails(
        "rec1", "u1", "Lucas", "c1", "Kenya", "Roastery", "v60", 93, 15.0, 250.0, 180, "", None, 0,
        CREATED_AT, CREATED_AT,
    )
    assert (details.user_name, details.coffee_brand) == ("Lucas", "Roastery")
    assert details.avg_rating is None