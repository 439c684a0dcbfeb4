"""
Tests for recipe output validation and repair.
"""

import json

import pytest
from conftest import SAMPLE_RECIPES

from recipe_search.errors import MalformedResponse
from recipe_search.services import ParseErr, ParseOk, parse_recipes, serialize_recipes, try_parse_recipes


def test_parses_strict_json_array():
    """A clean array parses without repair."""
    result = try_parse_recipes(json.dumps(SAMPLE_RECIPES))
    assert isinstance(result, ParseOk)
    assert [r.title for r in result.recipes] == ["Vegan Pasta Primavera", "Creamy Cashew Alfredo"]


def test_strips_markdown_fences():
    """Fenced output with a language tag is recovered."""
    raw = '```json\n[{"id":"1","title":"T","description":"D","ingredients":["a"],"instructions":["b"],"prepTime":"5 min","dietaryInfo":["vegan"]}]\n```'
    recipes = parse_recipes(raw)
    assert len(recipes) == 1
    assert recipes[0].title == "T"
    assert recipes[0].dietary_info == ["vegan"]


def test_strips_prose_and_trailing_commas():
    """Prose around the array and trailing commas are repaired."""
    raw = 'Here are your recipes:\n[{"title": "Soup", "ingredients": ["water", "salt",],},]\nEnjoy!'
    recipes = parse_recipes(raw)
    assert recipes[0].title == "Soup"
    assert recipes[0].ingredients == ["water", "salt"]


def test_unwraps_recipes_object():
    """An object holding a recipes array is accepted."""
    raw = json.dumps({"recipes": SAMPLE_RECIPES})
    assert len(parse_recipes(raw)) == 2


@pytest.mark.parametrize(
    "raw,kind",
    [
        ("[]", "empty"),
        ("{}", "not_an_array"),
        ('"just text"', "not_an_array"),
        ("not json at all", "invalid_json"),
        ("[1, 2, 3]", "empty"),
    ],
)
def test_rejects_unusable_output(raw, kind):
    """Output without at least one recipe object is an error."""
    result = try_parse_recipes(raw)
    assert isinstance(result, ParseErr)
    assert result.kind == kind

    with pytest.raises(MalformedResponse):
        parse_recipes(raw)


def test_fills_missing_fields():
    """Missing or wrongly typed fields get defaults."""
    recipes = parse_recipes('[{"ingredients": "not a list", "instructions": [1, null, "stir"]}]')
    recipe = recipes[0]
    assert recipe.id == "recipe-1"
    assert recipe.title == "Untitled Recipe"
    assert recipe.description == "No description available"
    assert recipe.prep_time == "Unknown"
    assert recipe.ingredients == []
    assert recipe.instructions == ["1", "stir"]
    assert recipe.dietary_info == []
    assert recipe.recipe_type is None


def test_ids_are_unique_within_batch():
    """Duplicate or missing ids are replaced by positional ids."""
    recipes = parse_recipes('[{"id": "x"}, {"id": "x"}, {}]')
    ids = [r.id for r in recipes]
    assert ids == ["x", "recipe-2", "recipe-3"]
    assert len(set(ids)) == len(ids)


def test_dietary_tags_are_deduplicated():
    """Duplicate tags are dropped, first occurrence wins."""
    recipes = parse_recipes('[{"dietaryInfo": ["vegan", "keto", "vegan"]}]')
    assert recipes[0].dietary_info == ["vegan", "keto"]


def test_serialized_output_parses_to_same_recipes():
    """Serialized recipes survive a second validation unchanged."""
    recipes = parse_recipes("```json\n" + json.dumps(SAMPLE_RECIPES) + "\n```")
    serialized = serialize_recipes(recipes)

    again = parse_recipes(serialized)
    assert again == recipes
    assert serialize_recipes(again) == serialized


def test_serialized_shape_is_camel_case():
    """The wire shape uses camelCase keys."""
    data = json.loads(serialize_recipes(parse_recipes(json.dumps(SAMPLE_RECIPES))))
    assert data[0]["prepTime"] == "25 min"
    assert data[0]["dietaryInfo"] == ["vegan"]
    assert data[0]["recipeType"] == "dinner"


def test_minimal_fenced_recipe():
    """A fenced single recipe with only a title gets every default."""
    recipes = parse_recipes('```json\n[{"title":"A"}]\n```')
    assert len(recipes) == 1
    assert recipes[0].title == "A"
    assert recipes[0].ingredients == []
    assert recipes[0].id == "recipe-1"


def test_deeply_nested_output_is_invalid_json():
    """Nesting too deep for the decoder is reported, not raised."""
    result = try_parse_recipes("[" * 100000)
    assert isinstance(result, ParseErr)
    assert result.kind == "invalid_json"

    with pytest.raises(MalformedResponse):
        parse_recipes("[" * 100000)
