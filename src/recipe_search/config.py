import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # DeepSeek (recipe generation)
    deepseek_api_key: str | None = os.getenv("DEEPSEEK_API_KEY")
    deepseek_base_url: str = os.getenv("DEEPSEEK_BASE_URL", "https://api.deepseek.com/v1")
    deepseek_model: str = os.getenv("DEEPSEEK_MODEL", "deepseek-chat")
    upstream_timeout: float = float(os.getenv("UPSTREAM_TIMEOUT", "25"))
    upstream_max_tokens: int = int(os.getenv("UPSTREAM_MAX_TOKENS", "1200"))
    recipes_per_search: int = int(os.getenv("RECIPES_PER_SEARCH", "4"))

    # Cache
    cache_ttl: int = int(os.getenv("CACHE_TTL", "43200"))  # 12 hours fresh
    cache_stale_ttl: int = int(os.getenv("CACHE_STALE_TTL", "43200"))  # revalidation window
    revalidation_max_pending: int = int(os.getenv("REVALIDATION_MAX_PENDING", "32"))

    # Rate limiting (per client)
    rate_limit_requests: int = int(os.getenv("RATE_LIMIT_REQUESTS", "5"))
    rate_limit_window: int = int(os.getenv("RATE_LIMIT_WINDOW", "60"))
    rate_limit_max_clients: int = int(os.getenv("RATE_LIMIT_MAX_CLIENTS", "500"))

    # getimg.ai (image generation)
    getimg_api_key: str | None = os.getenv("GETIMG_API_KEY")
    getimg_base_url: str = os.getenv("GETIMG_BASE_URL", "https://api.getimg.ai/v1")
    image_rate_limit: int = int(os.getenv("IMAGE_RATE_LIMIT", "10"))
    image_rate_window: int = int(os.getenv("IMAGE_RATE_WINDOW", "60"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def has_deepseek_credentials(self) -> bool:
        """Check whether an upstream API key is configured."""
        return bool(self.deepseek_api_key)

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.upstream_timeout <= 0:
            raise ValueError("UPSTREAM_TIMEOUT must be greater than 0")

        if self.cache_ttl <= 0 or self.cache_stale_ttl < 0:
            raise ValueError("CACHE_TTL must be positive and CACHE_STALE_TTL must not be negative")

        if self.rate_limit_requests < 1 or self.rate_limit_window <= 0:
            raise ValueError(
                f"Invalid rate limit: {self.rate_limit_requests} requests per "
                f"{self.rate_limit_window}s"
            )

        if self.rate_limit_max_clients < 1:
            raise ValueError("RATE_LIMIT_MAX_CLIENTS must be at least 1")

        if self.image_rate_limit < 1 or self.image_rate_window <= 0:
            raise ValueError("IMAGE_RATE_LIMIT and IMAGE_RATE_WINDOW must be positive")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
