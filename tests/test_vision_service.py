"""Tests for the vision model call and its input helpers."""

import json

import httpx
import pytest

from src.app.errors import UpstreamError
from src.app.services.prompt_service import BASIC_PROMPT, EXTENDED_PROMPT
from src.app.services.vision_service import (
    looks_like_snake_reply,
    request_completion,
    split_data_uri,
)


def completion(content: str | None) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


# ──────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────
def test_split_data_uri_strips_header() -> None:
    assert split_data_uri("data:image/png;base64,iVBORw0KGgo=") == ("image/png", "iVBORw0KGgo=")


def test_split_data_uri_bare_base64() -> None:
    assert split_data_uri("aGVsbG8=") == ("image/jpeg", "aGVsbG8=")


def test_split_data_uri_non_image_header_falls_back_to_jpeg() -> None:
    assert split_data_uri("data:application/octet-stream;base64,AAAA") == ("image/jpeg", "AAAA")


def test_snake_heuristic() -> None:
    assert looks_like_snake_reply('{"species":"Boa constrictor"}') is True
    assert looks_like_snake_reply("This does not appear to contain a snake.") is False
    assert looks_like_snake_reply("only an opening {") is False
    assert looks_like_snake_reply("") is False


# ──────────────────────────────────────────────
# request_completion
# ──────────────────────────────────────────────
@pytest.mark.asyncio
async def test_request_completion_builds_single_multimodal_request(api_key: str) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=completion('{"species": "Boa constrictor"}'))

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        content = await request_completion("data:image/png;base64,iVBORw0KGgo=", "extended", client=http)

    assert content == '{"species": "Boa constrictor"}'
    assert len(seen) == 1
    request = seen[0]
    assert request.url == "https://api.openai.com/v1/chat/completions"
    assert request.headers["Authorization"] == f"Bearer {api_key}"

    body = json.loads(request.content)
    assert body["model"] == "gpt-4o"
    assert body["max_tokens"] == 500
    assert body["temperature"] == 0.7
    text_part, image_part = body["messages"][0]["content"]
    assert text_part == {"type": "text", "text": EXTENDED_PROMPT}
    assert image_part["image_url"]["url"] == "data:image/png;base64,iVBORw0KGgo="


@pytest.mark.asyncio
async def test_request_completion_uses_basic_prompt(api_key: str) -> None:
    prompts: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        prompts.append(json.loads(request.content)["messages"][0]["content"][0]["text"])
        return httpx.Response(200, json=completion("No snake here."))

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        await request_completion("aGVsbG8=", "basic", client=http)

    assert prompts == [BASIC_PROMPT]
    assert "interesting_facts" not in BASIC_PROMPT


@pytest.mark.asyncio
async def test_request_completion_null_content(api_key: str) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=completion(None)))
    async with httpx.AsyncClient(transport=transport) as http:
        assert await request_completion("aGVsbG8=", client=http) == ""


@pytest.mark.asyncio
async def test_request_completion_upstream_error_is_not_retried(api_key: str) -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(503, json={"error": {"message": "overloaded"}})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        with pytest.raises(httpx.HTTPStatusError):
            await request_completion("aGVsbG8=", client=http)

    assert calls == 1


@pytest.mark.asyncio
async def test_request_completion_malformed_payload(api_key: str) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"choices": []}))
    async with httpx.AsyncClient(transport=transport) as http:
        with pytest.raises(UpstreamError, match="Unexpected completion payload"):
            await request_completion("aGVsbG8=", client=http)


@pytest.mark.asyncio
async def test_request_completion_requires_api_key() -> None:
    from src.app.config import settings

    original = settings.openai_api_key
    settings.openai_api_key = None
    try:
        with pytest.raises(UpstreamError, match="OPENAI_API_KEY"):
            await request_completion("aGVsbG8=")
    finally:
        settings.openai_api_key = original
