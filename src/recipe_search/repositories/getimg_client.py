"""getimg.ai image generator.

Turns a recipe description into a small JPEG via the flux-schnell
text-to-image endpoint and returns the hosted image URL.
"""

import asyncio
import logging

import httpx

from recipe_search.config import Settings, get_settings
from recipe_search.errors import ConfigurationError, UpstreamError, UpstreamTimeout

logger = logging.getLogger(__name__)


class GetImgClient:
    """getimg.ai implementation of the ImageGenerator protocol."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = 30.0,
        size: int = 256,
        steps: int = 3,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = (base_url or "https://api.getimg.ai/v1").rstrip("/")
        self._timeout = timeout
        self._size = size
        self._steps = steps
        self._client = http_client

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> "GetImgClient":
        """Factory method to create GetImgClient from settings."""
        settings = settings or get_settings()
        return cls(
            api_key=settings.getimg_api_key,
            base_url=settings.getimg_base_url,
            timeout=settings.upstream_timeout,
            http_client=http_client,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def generate_image(self, description: str) -> str:
        """Generate an image for a description.

        Args:
            description: Free-text image prompt

        Returns:
            URL of the generated image

        Raises:
            ConfigurationError: If no API key is configured
            UpstreamTimeout: If the call exceeds the deadline
            UpstreamError: On transport failure, non-2xx status or missing URL
        """
        if not self._api_key:
            raise ConfigurationError("GETIMG_API_KEY is not configured")

        url = f"{self._base_url}/flux-schnell/text-to-image"
        headers = {
            "accept": "application/json",
            "content-type": "application/json",
            "authorization": f"Bearer {self._api_key}",
        }
        payload = {
            "prompt": description,
            "width": self._size,
            "height": self._size,
            "steps": self._steps,
            "output_format": "jpeg",
            "response_format": "url",
        }

        try:
            response = await asyncio.wait_for(
                self.client.post(url, json=payload, headers=headers),
                timeout=self._timeout,
            )
            response.raise_for_status()
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise UpstreamTimeout(f"getimg.ai did not respond within {self._timeout}s") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("getimg.ai error %s: %s", status, e.response.text[:500])
            raise UpstreamError(f"getimg.ai returned status {status}", status=status) from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"getimg.ai request failed: {e}") from e

        try:
            image_url = response.json()["url"]
        except (ValueError, KeyError, TypeError) as e:
            raise UpstreamError("getimg.ai returned a malformed envelope") from e

        if not isinstance(image_url, str) or not image_url:
            raise UpstreamError("getimg.ai returned no image URL")
        return image_url

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
