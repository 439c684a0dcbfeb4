"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    """Request DTO for recipe search.

    The handler will convert this to internal calls to the service layer.
    A missing or blank query is rejected by the service after rate limiting,
    so it still counts against the client's quota.
    """

    query: str | None = Field(None, description="Free-text recipe search query")
    filters: list[str] = Field(
        default_factory=list,
        description="Optional dietary filter terms (appended as dietary preferences)",
    )


class ImageGenerationRequest(BaseModel):
    """Request DTO for image generation."""

    description: str | None = Field(None, description="Text description of the image to generate")
