"""Service layer – turn the endpoint's raw reply into a message or a result."""

from __future__ import annotations

import json
import logging
import re

from src.app.config import SchemaVersion, settings
from src.app.errors import ParseError
from src.app.schemas.result import RESULT_MODELS, AnalysisResult

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^\s*```(?:json)?[ \t]*\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```\s*$")


def strip_code_fence(content: str) -> str:
    """Remove a leading ```` ```json ```` and a trailing ```` ``` ```` marker."""
    content = _LEADING_FENCE.sub("", content, count=1)
    return _TRAILING_FENCE.sub("", content, count=1)


def parse_response(
    content: str,
    is_snake_image: bool,
    schema_version: SchemaVersion | None = None,
) -> str | AnalysisResult:
    """Return *content* verbatim for non-snake replies, else a typed result.

    Only JSON syntax is checked.  Field values are kept as they arrived and
    absent fields stay unset, so the card renders what the model actually
    sent.
    """
    if not is_snake_image:
        return content

    schema_version = schema_version or settings.schema_version
    try:
        payload = json.loads(strip_code_fence(content))
    except json.JSONDecodeError as exc:
        raise ParseError(f"Malformed analysis JSON: {exc.msg}") from exc

    if not isinstance(payload, dict):
        raise ParseError(f"Expected a JSON object, got {type(payload).__name__}")

    result = RESULT_MODELS[schema_version].model_validate(payload)
    for warning in result.expectation_warnings():
        logger.warning("Analysis for %r: %s", result.species, warning)
    return result
