"""Client identity helpers."""

from fastapi import Request

DEFAULT_CLIENT_IDENTITY = "127.0.0.1"


def client_identity(request: Request) -> str:
    """Derive the rate-limit identity for a request.

    Uses the first X-Forwarded-For entry when the service runs behind a proxy,
    then the socket peer address.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client and request.client.host:
        return request.client.host
    return DEFAULT_CLIENT_IDENTITY
