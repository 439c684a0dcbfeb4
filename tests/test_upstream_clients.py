"""
Tests for the DeepSeek and getimg.ai clients against a mocked transport.
"""

import json

import httpx
import pytest

from recipe_search.errors import (
    ConfigurationError,
    UpstreamError,
    UpstreamTimeout,
    UpstreamUnavailable,
)
from recipe_search.repositories import DeepSeekClient, GetImgClient


def completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def deepseek_with(handler, api_key="test-key"):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return DeepSeekClient(
        api_key=api_key,
        base_url="https://api.deepseek.test/v1",
        http_client=http_client,
    )


def getimg_with(handler, api_key="test-image-key"):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GetImgClient(
        api_key=api_key,
        base_url="https://api.getimg.test/v1",
        http_client=http_client,
    )


@pytest.mark.asyncio
async def test_deepseek_sends_chat_completion_request():
    """The request carries the bearer key, model and prompt."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=completion("[]"))

    client = deepseek_with(handler)
    content = await client.generate("vegan pasta with dietary preferences: nut-free")
    await client.close()

    assert content == "[]"
    assert seen["url"] == "https://api.deepseek.test/v1/chat/completions"
    assert seen["auth"] == "Bearer test-key"
    body = seen["body"]
    assert body["model"] == "deepseek-chat"
    assert body["max_tokens"] == 1200
    assert body["temperature"] == 0.3
    assert body["messages"][0]["role"] == "system"
    assert "vegan pasta with dietary preferences: nut-free" in body["messages"][1]["content"]


@pytest.mark.asyncio
async def test_deepseek_without_key_fails_before_calling():
    """A missing key is a configuration error and nothing is sent."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=completion("[]"))

    client = deepseek_with(handler, api_key=None)
    with pytest.raises(UpstreamUnavailable) as exc_info:
        await client.generate("pasta")

    assert calls == []
    assert exc_info.value.public_message == "Search service is not properly configured"


@pytest.mark.asyncio
async def test_deepseek_non_success_status():
    """A non-2xx answer becomes an UpstreamError carrying the status."""
    client = deepseek_with(lambda request: httpx.Response(502, text="bad gateway"))
    with pytest.raises(UpstreamError) as exc_info:
        await client.generate("pasta")
    assert exc_info.value.upstream_status == 502
    assert exc_info.value.public_message == "Failed to get response from the recipe service"


@pytest.mark.asyncio
async def test_deepseek_timeout():
    """A transport timeout becomes an UpstreamTimeout."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = deepseek_with(handler)
    with pytest.raises(UpstreamTimeout) as exc_info:
        await client.generate("pasta")
    assert "took too long" in exc_info.value.public_message


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"choices": []},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": None}}]},
        {"unexpected": True},
    ],
)
async def test_deepseek_malformed_envelope(payload):
    """An envelope without message content is an UpstreamError."""
    client = deepseek_with(lambda request: httpx.Response(200, json=payload))
    with pytest.raises(UpstreamError):
        await client.generate("pasta")


@pytest.mark.asyncio
async def test_getimg_returns_url():
    """The image URL is taken from the response body."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"url": "https://img.example.com/a.jpg"})

    client = getimg_with(handler)
    url = await client.generate_image("a bowl of ramen")
    await client.close()

    assert url == "https://img.example.com/a.jpg"
    assert seen["url"] == "https://api.getimg.test/v1/flux-schnell/text-to-image"
    assert seen["body"]["prompt"] == "a bowl of ramen"
    assert seen["body"]["width"] == 256
    assert seen["body"]["response_format"] == "url"


@pytest.mark.asyncio
async def test_getimg_without_key():
    """A missing image key is a configuration error."""
    client = getimg_with(lambda request: httpx.Response(200, json={}), api_key=None)
    with pytest.raises(ConfigurationError):
        await client.generate_image("ramen")


@pytest.mark.asyncio
async def test_getimg_missing_url():
    """A body without a URL is an UpstreamError."""
    client = getimg_with(lambda request: httpx.Response(200, json={"seed": 1}))
    with pytest.raises(UpstreamError):
        await client.generate_image("ramen")
