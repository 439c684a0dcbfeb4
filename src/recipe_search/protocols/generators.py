"""Upstream generator protocols.

Define the interfaces for the external generation services fronted by
this gateway. Implementations raise the errors from recipe_search.errors.

Implementations can include:
- DeepSeek chat completions (default recipe generator)
- getimg.ai text-to-image (default image generator)
- Fakes for tests
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class RecipeGenerator(Protocol):
    """Protocol for recipe text generation services."""

    async def generate(self, query: str) -> str:
        """Generate raw recipe content for a search query.

        Args:
            query: The user query (dietary filters already appended)

        Returns:
            The raw text produced by the model, expected to hold a JSON array

        Raises:
            UpstreamUnavailable: If credentials are missing
            UpstreamTimeout: If the deadline is exceeded
            UpstreamError: On non-success status or malformed envelope
        """
        ...


@runtime_checkable
class ImageGenerator(Protocol):
    """Protocol for image generation services."""

    async def generate_image(self, description: str) -> str:
        """Generate an image and return its URL."""
        ...
