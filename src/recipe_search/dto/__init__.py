"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import ImageGenerationRequest, SearchRequest
from .responses import (
    ErrorResponse,
    HealthCheckResponse,
    ImageGenerationResponse,
    SearchResponse,
    StatsResponse,
)

__all__ = [
    "SearchRequest",
    "ImageGenerationRequest",
    "SearchResponse",
    "ImageGenerationResponse",
    "ErrorResponse",
    "StatsResponse",
    "HealthCheckResponse",
]
