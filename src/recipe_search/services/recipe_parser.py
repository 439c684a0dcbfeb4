"""Validation and repair of upstream recipe output.

The model is asked for a bare JSON array but regularly wraps it in Markdown
fences, prefixes it with prose, or leaves trailing commas behind. Parsing is
strict first; string repair is only the fallback path.
"""

import json
import re
from dataclasses import dataclass
from typing import Any

from recipe_search.entities import RecipeEntity
from recipe_search.errors import MalformedResponse

DEFAULT_TITLE = "Untitled Recipe"
DEFAULT_DESCRIPTION = "No description available"
DEFAULT_PREP_TIME = "Unknown"

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)
_TRAILING_COMMA = re.compile(r",\s*([\]}])")


@dataclass(frozen=True)
class ParseOk:
    """Successful parse: a non-empty recipe batch."""

    recipes: list[RecipeEntity]


@dataclass(frozen=True)
class ParseErr:
    """Failed parse.

    Attributes:
        kind: "invalid_json", "not_an_array" or "empty"
        message: Detail for logs
    """

    kind: str
    message: str


ParseResult = ParseOk | ParseErr


def repair_json(raw: str) -> str:
    """Apply the best-effort string repairs to a model response."""
    cleaned = _CODE_FENCE.sub("", raw).strip()
    if not cleaned.startswith("[") and "[" in cleaned and "]" in cleaned:
        cleaned = cleaned[cleaned.index("[") : cleaned.rindex("]") + 1]
    return _TRAILING_COMMA.sub(r"\1", cleaned)


def _load(raw: str) -> Any | ParseErr:
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        pass

    repaired = repair_json(raw)
    try:
        return json.loads(repaired)
    except (ValueError, RecursionError) as e:
        return ParseErr("invalid_json", f"Could not parse repaired response: {e}")


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    items = []
    for item in value:
        if isinstance(item, str):
            items.append(item)
        elif isinstance(item, (int, float)) and not isinstance(item, bool):
            items.append(str(item))
    return items


def _to_recipe(item: dict[str, Any], recipe_id: str) -> RecipeEntity:
    recipe_type = item.get("recipeType")
    return RecipeEntity(
        id=recipe_id,
        title=_text(item.get("title"), DEFAULT_TITLE),
        description=_text(item.get("description"), DEFAULT_DESCRIPTION),
        ingredients=_string_list(item.get("ingredients")),
        instructions=_string_list(item.get("instructions")),
        prep_time=_text(item.get("prepTime"), DEFAULT_PREP_TIME),
        # dict.fromkeys keeps first-seen order while dropping duplicates
        dietary_info=list(dict.fromkeys(_string_list(item.get("dietaryInfo")))),
        recipe_type=recipe_type if isinstance(recipe_type, str) and recipe_type else None,
    )


def _map_recipes(items: list[Any]) -> list[RecipeEntity]:
    recipes: list[RecipeEntity] = []
    seen: set[str] = set()
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            continue
        recipe_id = _text(item.get("id"), "")
        if not recipe_id or recipe_id in seen:
            recipe_id = f"recipe-{index + 1}"
            suffix = 1
            while recipe_id in seen:
                suffix += 1
                recipe_id = f"recipe-{index + 1}-{suffix}"
        seen.add(recipe_id)
        recipes.append(_to_recipe(item, recipe_id))
    return recipes


def try_parse_recipes(raw: str) -> ParseResult:
    """Parse model output into a recipe batch without raising.

    Args:
        raw: Message content returned by the upstream model

    Returns:
        ParseOk with at least one recipe, or ParseErr describing the failure
    """
    data = _load(raw)
    if isinstance(data, ParseErr):
        return data

    if isinstance(data, dict) and isinstance(data.get("recipes"), list):
        data = data["recipes"]

    if not isinstance(data, list):
        return ParseErr("not_an_array", f"Expected a JSON array, got {type(data).__name__}")

    recipes = _map_recipes(data)
    if not recipes:
        return ParseErr("empty", "Response contained no recipe objects")
    return ParseOk(recipes)


def parse_recipes(raw: str) -> list[RecipeEntity]:
    """Parse model output into a recipe batch.

    Raises:
        MalformedResponse: If no valid, non-empty array can be recovered
    """
    result = try_parse_recipes(raw)
    if isinstance(result, ParseErr):
        raise MalformedResponse(result.message)
    return result.recipes


def serialize_recipes(recipes: list[RecipeEntity]) -> str:
    """Serialize a recipe batch to the JSON string cached and returned to clients."""
    return json.dumps([recipe.to_dict() for recipe in recipes], ensure_ascii=False)
