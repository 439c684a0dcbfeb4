"""Shared fixtures for the recipe search tests."""

import json

import pytest

from recipe_search.config import Settings
from recipe_search.errors import UpstreamError

SAMPLE_RECIPES = [
    {
        "id": "1",
        "title": "Vegan Pasta Primavera",
        "description": "Spring vegetables tossed with penne",
        "ingredients": ["penne", "zucchini", "peas"],
        "instructions": ["Boil pasta", "Saute vegetables", "Combine"],
        "prepTime": "25 min",
        "dietaryInfo": ["vegan"],
        "recipeType": "dinner",
    },
    {
        "id": "2",
        "title": "Creamy Cashew Alfredo",
        "description": "Dairy-free alfredo sauce",
        "ingredients": ["fettuccine", "cashews"],
        "instructions": ["Blend cashews", "Toss with pasta"],
        "prepTime": "30 min",
        "dietaryInfo": ["vegan", "dairy-free"],
        "recipeType": "dinner",
    },
]


class FakeClock:
    """Manually advanced time source returning Unix seconds."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRecipeGenerator:
    """RecipeGenerator that returns canned content and counts calls."""

    def __init__(self, content: str | None = None, error: Exception | None = None) -> None:
        self.content = content if content is not None else json.dumps(SAMPLE_RECIPES)
        self.error = error
        self.calls: list[str] = []

    async def generate(self, query: str) -> str:
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return self.content


class FakeImageGenerator:
    """ImageGenerator that returns a fixed URL."""

    def __init__(self, url: str = "https://img.example.com/1.jpg", error: Exception | None = None) -> None:
        self.url = url
        self.error = error
        self.calls: list[str] = []

    async def generate_image(self, description: str) -> str:
        self.calls.append(description)
        if self.error is not None:
            raise self.error
        return self.url


@pytest.fixture
def clock():
    """Fake clock starting at a fixed timestamp."""
    return FakeClock()


@pytest.fixture
def settings():
    """Settings with credentials and default limits, independent of the environment."""
    return Settings(
        deepseek_api_key="test-key",
        getimg_api_key="test-image-key",
        cache_ttl=43200,
        cache_stale_ttl=43200,
        rate_limit_requests=5,
        rate_limit_window=60,
        rate_limit_max_clients=500,
        image_rate_limit=10,
        image_rate_window=60,
        log_level="WARNING",
    )


@pytest.fixture
def recipe_generator():
    """Fake upstream recipe generator."""
    return FakeRecipeGenerator()


@pytest.fixture
def image_generator():
    """Fake upstream image generator."""
    return FakeImageGenerator()


@pytest.fixture
def failing_generator():
    """Fake upstream recipe generator that always fails."""
    return FakeRecipeGenerator(error=UpstreamError("boom", status=503))
