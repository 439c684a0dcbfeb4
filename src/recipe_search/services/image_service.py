"""Image generation service."""

import logging

from recipe_search.errors import (
    ConfigurationError,
    RateLimited,
    RecipeSearchError,
    SearchFailed,
    UpstreamError,
    ValidationError,
)
from recipe_search.protocols import ImageGenerator

from .rate_limit_service import FixedWindowLimiter

logger = logging.getLogger(__name__)


class ImageService:
    """Generate recipe images behind a global fixed-window quota."""

    def __init__(self, generator: ImageGenerator, limiter: FixedWindowLimiter) -> None:
        self._generator = generator
        self._limiter = limiter

    async def generate(self, description: str | None) -> str:
        """Resolve a generated image URL for a description.

        Raises:
            ValidationError: If the description is blank
            RateLimited: If the global quota for this window is used up
            ConfigurationError: If the image API key is missing
            UpstreamError: On upstream failure or timeout
            SearchFailed: On any other unexpected error
        """
        if not isinstance(description, str) or not description.strip():
            raise ValidationError("Image description is required")

        if not self._limiter.acquire():
            raise RateLimited(
                "Rate limit exceeded. Please wait a minute before trying again.",
                retry_after=self._limiter.seconds_until_reset(),
            )

        logger.info("Generating image for %r", description[:50])
        try:
            return await self._generator.generate_image(description.strip())
        except ConfigurationError as e:
            logger.error("Image generation is misconfigured: %s", e)
            raise
        except UpstreamError as e:
            logger.warning("Image generation failed: %s", e)
            raise
        except RecipeSearchError:
            raise
        except Exception as e:
            logger.exception("Unexpected error while generating an image")
            raise SearchFailed(str(e)) from e
