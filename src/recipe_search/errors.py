"""Error taxonomy for the search gateway.

Every error carries the HTTP status it maps to and a sanitized message that is
safe to return to clients. Internal details stay in the exception args and the
logs.
"""

from recipe_search.entities import RateLimitDecision


class RecipeSearchError(Exception):
    """Base class for all errors surfaced by the search gateway."""

    status_code: int = 500
    default_message: str = "Failed to process your request"

    def __init__(self, detail: str | None = None, public_message: str | None = None) -> None:
        super().__init__(detail or public_message or self.default_message)
        self.public_message = public_message or self.default_message

    @property
    def headers(self) -> dict[str, str]:
        """Extra response headers for this error."""
        return {}


class ValidationError(RecipeSearchError):
    """Bad client input."""

    status_code = 400
    default_message = "Invalid request"

    def __init__(self, reason: str) -> None:
        super().__init__(reason, public_message=reason)


class RateLimited(RecipeSearchError):
    """Client exceeded its request quota."""

    status_code = 429
    default_message = "Rate limit exceeded. Please try again later."

    def __init__(
        self,
        message: str,
        decision: RateLimitDecision | None = None,
        retry_after: int | None = None,
    ) -> None:
        super().__init__(message, public_message=message)
        self.decision = decision
        self.retry_after = retry_after

    @property
    def headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.decision is not None:
            headers.update(self.decision.to_headers())
        if self.retry_after is not None:
            headers["Retry-After"] = str(self.retry_after)
        return headers


class ConfigurationError(RecipeSearchError):
    """The service is missing required configuration."""

    default_message = "Search service is not properly configured"


class UpstreamUnavailable(ConfigurationError):
    """Upstream credentials are not configured."""


class UpstreamError(RecipeSearchError):
    """Upstream returned a non-success status or an unusable envelope."""

    default_message = "Failed to get response from the recipe service"

    def __init__(self, detail: str | None = None, status: int | None = None) -> None:
        super().__init__(detail)
        self.upstream_status = status


class UpstreamTimeout(UpstreamError):
    """Upstream did not answer before the deadline."""

    default_message = "The recipe service took too long to respond. Please try again."


class MalformedResponse(RecipeSearchError):
    """No valid recipe array could be recovered from the upstream output."""

    default_message = (
        "The API did not return valid recipe data. Please try a different search query."
    )


class SearchFailed(RecipeSearchError):
    """Unexpected failure while handling a search."""
