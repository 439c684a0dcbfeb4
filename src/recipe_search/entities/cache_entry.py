"""Cache entry domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a cached search payload.

    This is an internal representation used by services and repositories.
    For API contracts, use the DTO classes from the dto package.

    Attributes:
        payload: The validated, serialized recipe batch
        expires_at: Unix timestamp after which the entry is no longer fresh
        stored_at: Unix timestamp when the entry was written
    """

    payload: str
    expires_at: float
    stored_at: float
