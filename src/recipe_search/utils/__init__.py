"""Utility modules for the search gateway."""

from .network import client_identity
from .query import build_cache_key, compose_query, split_dietary_filters
from .timing import PhaseTimer

__all__ = [
    "PhaseTimer",
    "build_cache_key",
    "client_identity",
    "compose_query",
    "split_dietary_filters",
]
