"""Service layer – one call to the external vision-capable completion model.

The request is sent to an OpenAI-compatible ``/chat/completions`` endpoint
with the instruction text and the image inlined as base64.  Exactly one
call is made per analysis; failures propagate to the router, which turns
them into HTTP 500.
"""

from __future__ import annotations

import logging
import time

import httpx

from src.app.config import DEFAULT_IMAGE_MIME, SchemaVersion, settings
from src.app.errors import UpstreamError
from src.app.services.prompt_service import build_messages

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Input helpers
# ──────────────────────────────────────────────
def split_data_uri(image: str) -> tuple[str, str]:
    """Return ``(mime_type, base64_payload)`` for a data URI or bare base64.

    Everything up to the first comma is treated as the header.  When the
    header declares no image type the default MIME type is used.
    """
    header, sep, payload = image.partition(",")
    if not sep or not payload:
        return DEFAULT_IMAGE_MIME, image

    mime_type = DEFAULT_IMAGE_MIME
    if header.startswith("data:"):
        declared = header[len("data:"):].split(";", 1)[0].strip()
        if declared.startswith("image/"):
            mime_type = declared
    return mime_type, payload


def looks_like_snake_reply(content: str) -> bool:
    """Brace-presence heuristic: a JSON-ish reply means a snake was described."""
    return "{" in content and "}" in content


# ──────────────────────────────────────────────
# Completion call
# ──────────────────────────────────────────────
async def request_completion(
    image: str,
    schema_version: SchemaVersion | None = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Send *image* with the instruction text and return the raw reply text."""
    if not settings.openai_api_key:
        raise UpstreamError("OPENAI_API_KEY is not configured")

    schema_version = schema_version or settings.schema_version
    mime_type, image_b64 = split_data_uri(image)

    payload = {
        "model": settings.vision_model,
        "messages": build_messages(schema_version, image_b64, mime_type),
        "max_tokens": settings.max_tokens,
        "temperature": settings.temperature,
    }
    headers = {
        "Authorization": f"Bearer {settings.openai_api_key}",
        "Content-Type": "application/json",
    }
    url = f"{settings.openai_base_url.rstrip('/')}/chat/completions"

    t0 = time.monotonic()
    if client is None:
        async with httpx.AsyncClient(timeout=settings.request_timeout) as own_client:
            response = await own_client.post(url, headers=headers, json=payload)
    else:
        response = await client.post(
            url, headers=headers, json=payload, timeout=settings.request_timeout,
        )
    response.raise_for_status()
    data = response.json()
    elapsed = (time.monotonic() - t0) * 1000

    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise UpstreamError(f"Unexpected completion payload: missing {exc}") from exc

    logger.info(
        "Vision model %s answered in %.0f ms (schema=%s)",
        settings.vision_model, elapsed, schema_version,
    )
    logger.debug("Raw vision reply: %s", content)
    return content or ""
