"""Query composition and cache key normalization."""

import re
from collections.abc import Iterable

DIETARY_SUFFIX = "with dietary preferences:"

_DIETARY_PATTERN = re.compile(r"\s*with\s+dietary\s+preferences:\s*(.*)$", re.IGNORECASE | re.DOTALL)
_WHITESPACE = re.compile(r"\s+")


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _split_terms(terms: Iterable[str]) -> list[str]:
    # A single entry may hold several comma-separated terms
    return [_collapse(part) for term in terms for part in term.split(",") if _collapse(part)]


def _normalize_terms(terms: Iterable[str]) -> list[str]:
    normalized = {term.casefold() for term in _split_terms(terms)}
    return sorted(normalized)


def split_dietary_filters(query: str) -> tuple[str, list[str]]:
    """Split a query into its main text and any dietary filter terms.

    Args:
        query: Raw query, possibly ending in "with dietary preferences: a, b"

    Returns:
        Tuple of (main query, filter terms as written)
    """
    match = _DIETARY_PATTERN.search(query)
    if match is None:
        return query, []
    return query[: match.start()], match.group(1).split(",")


def compose_query(query: str, filters: Iterable[str] = ()) -> str:
    """Append dietary filters to a query the way the upstream prompt expects.

    Filters already present in the query text are kept and merged.
    """
    main, inline_terms = split_dietary_filters(query)
    terms = _split_terms([*inline_terms, *filters])
    if not terms:
        return _collapse(main)
    return f"{_collapse(main)} {DIETARY_SUFFIX} {', '.join(terms)}".strip()


def build_cache_key(query: str, filters: Iterable[str] = ()) -> str:
    """Normalize a query (and optional filters) into a cache key.

    Casing, runs of whitespace and filter order do not affect the key.

    Example:
        ```python
        build_cache_key("  Vegan   PASTA with dietary preferences: nut-free, Gluten-Free")
        # "vegan pasta with dietary preferences: gluten-free, nut-free"
        ```
    """
    main, inline_terms = split_dietary_filters(query)
    key = _collapse(main).casefold()
    terms = _normalize_terms([*inline_terms, *filters])
    if terms:
        key = f"{key} {DIETARY_SUFFIX} {', '.join(terms)}".strip()
    return key
