"""Recipe domain entity."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RecipeEntity:
    """A single generated recipe after validation.

    Attributes:
        id: Identifier, unique within one result batch
        title: Recipe title
        description: Short description
        ingredients: Ordered ingredient lines (never None)
        instructions: Ordered instruction steps (never None)
        prep_time: Human readable preparation time
        dietary_info: Unique dietary tags in upstream order
        recipe_type: Optional meal type (breakfast, dinner, ...)
    """

    id: str
    title: str
    description: str
    ingredients: list[str] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    prep_time: str = "Unknown"
    dietary_info: list[str] = field(default_factory=list)
    recipe_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase wire shape used by the search endpoint."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
            "prepTime": self.prep_time,
            "dietaryInfo": list(self.dietary_info),
            "recipeType": self.recipe_type,
        }
