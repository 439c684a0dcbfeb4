"""HTTP handlers for image generation."""

from recipe_search.dto import ImageGenerationRequest, ImageGenerationResponse
from recipe_search.services import ImageService


class ImageHandler:
    """HTTP handlers for image generation."""

    def __init__(self, image_service: ImageService) -> None:
        self._images = image_service

    async def generate(self, request: ImageGenerationRequest) -> ImageGenerationResponse:
        """Handle POST /api/image-generation requests."""
        url = await self._images.generate(request.description)
        return ImageGenerationResponse(url=url)
