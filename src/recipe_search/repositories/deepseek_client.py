"""DeepSeek chat-completions recipe generator.

Sends one instruction + query message pair to the DeepSeek API and returns
the generated text. Low temperature sampling favours schema compliance
over creative variance.

Requirements:
    - DEEPSEEK_API_KEY set in the environment (or .env)

Key features:
- Hard deadline per call (asyncio.wait_for on top of the httpx timeout)
- Exactly one attempt per call, no retry
- Uniform error mapping onto recipe_search.errors
"""

import asyncio
import logging

import httpx

from recipe_search.config import Settings, get_settings
from recipe_search.errors import UpstreamError, UpstreamTimeout, UpstreamUnavailable
from recipe_search.prompts import build_search_messages

logger = logging.getLogger(__name__)


class DeepSeekClient:
    """DeepSeek implementation of the RecipeGenerator protocol.

    This class satisfies the RecipeGenerator protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        client = DeepSeekClient.create()
        raw = await client.generate("vegan pasta")
        await client.close()
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        max_tokens: int | None = None,
        recipe_count: int | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the DeepSeek client.

        Args:
            api_key: Bearer credential. Missing keys fail on first call.
            base_url: API base URL, e.g. https://api.deepseek.com/v1
            model: Chat model name.
            timeout: Deadline in seconds for one call.
            max_tokens: Completion token budget.
            recipe_count: Number of recipes requested per search.
            http_client: Pre-built async client (tests inject a MockTransport).
        """
        self._api_key = api_key
        self._base_url = (base_url or "https://api.deepseek.com/v1").rstrip("/")
        self._model = model or "deepseek-chat"
        self._timeout = timeout or 25.0
        self._max_tokens = max_tokens or 1200
        self._recipe_count = recipe_count or 4
        self._client = http_client

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> "DeepSeekClient":
        """Factory method to create DeepSeekClient from settings.

        Args:
            settings: Application settings. If None, uses the cached settings.
            http_client: Optional pre-built async client.

        Returns:
            Configured DeepSeekClient
        """
        settings = settings or get_settings()
        return cls(
            api_key=settings.deepseek_api_key,
            base_url=settings.deepseek_base_url,
            model=settings.deepseek_model,
            timeout=settings.upstream_timeout,
            max_tokens=settings.upstream_max_tokens,
            recipe_count=settings.recipes_per_search,
            http_client=http_client,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    def build_payload(self, query: str) -> dict:
        """Build the chat-completions request body for a query."""
        return {
            "model": self._model,
            "messages": build_search_messages(query, count=self._recipe_count),
            "max_tokens": self._max_tokens,
            "temperature": 0.3,
            "presence_penalty": 0.0,
            "top_p": 0.8,
        }

    async def generate(self, query: str) -> str:
        """Generate raw recipe content for a query.

        Args:
            query: The user query (dietary filters already appended)

        Returns:
            The generated message content

        Raises:
            UpstreamUnavailable: If no API key is configured
            UpstreamTimeout: If the call exceeds the deadline
            UpstreamError: On transport failure, non-2xx status or malformed envelope
        """
        if not self._api_key:
            raise UpstreamUnavailable("DEEPSEEK_API_KEY is not configured")

        url = f"{self._base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = await asyncio.wait_for(
                self.client.post(url, json=self.build_payload(query), headers=headers),
                timeout=self._timeout,
            )
            response.raise_for_status()
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise UpstreamTimeout(f"DeepSeek API did not respond within {self._timeout}s") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("DeepSeek API error %s: %s", status, e.response.text[:500])
            raise UpstreamError(f"DeepSeek API returned status {status}", status=status) from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"DeepSeek API request failed: {e}") from e

        return self._extract_content(response)

    @staticmethod
    def _extract_content(response: httpx.Response) -> str:
        """Pull the generated text out of the completion envelope."""
        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamError("DeepSeek API returned a malformed envelope") from e

        if not isinstance(content, str):
            raise UpstreamError("DeepSeek API returned no message content")

        logger.debug("DeepSeek response: %s...", content[:100])
        return content

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
