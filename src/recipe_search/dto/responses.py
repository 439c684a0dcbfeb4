"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field


class SearchResponse(BaseModel):
    """Response DTO for a successful search."""

    result: str = Field(..., description="JSON array of recipes, serialized as a string")


class ImageGenerationResponse(BaseModel):
    """Response DTO for a generated image."""

    url: str = Field(..., description="URL of the generated image")


class ErrorResponse(BaseModel):
    """Response DTO for any failed request."""

    error: str = Field(..., description="Human-readable error message")


class StatsResponse(BaseModel):
    """Response DTO for service statistics."""

    cache: dict = Field(..., description="Cache store and revalidation statistics")
    search: dict = Field(..., description="Search counters and timings")
    rate_limit: dict = Field(..., description="Rate limiter configuration and usage")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'degraded'")
    upstream_configured: bool = Field(..., description="Whether the recipe API key is configured")
    image_configured: bool = Field(..., description="Whether the image API key is configured")
