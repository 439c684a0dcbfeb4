SEARCH_SYSTEM_PROMPT = """
Generate {count} recipe variations that CLOSELY match the user's criteria.

Each recipe should maintain the core elements requested but vary in:
- Secondary ingredients or preparation methods
- Flavor profiles or seasonings
- Cooking techniques

IMPORTANT: All recipes MUST directly address the user's specific request.

Return a JSON array with this structure:
[
  {{
    "id": "1",
    "title": "Recipe Title",
    "description": "Brief description",
    "ingredients": ["ingredient 1", "ingredient 2"],
    "instructions": ["step 1", "step 2"],
    "prepTime": "30 min",
    "dietaryInfo": ["tag1", "tag2"],
    "recipeType": "breakfast/lunch/dinner/appetizer"
  }}
]

Return ONLY the JSON array.
""".strip()

SEARCH_USER_PROMPT = """
Generate {count} recipe variations that match these criteria: {query}

Remember to stay focused on the core request while providing interesting variations.
""".strip()


def build_search_messages(query: str, count: int = 4) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": SEARCH_SYSTEM_PROMPT.format(count=count)},
        {"role": "user", "content": SEARCH_USER_PROMPT.format(count=count, query=query)},
    ]
