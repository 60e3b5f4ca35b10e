"""Client – view model for the result card.

Results carry the model's values untouched, so every field is rendered
from whatever shape actually arrived.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.app.config import CONFIDENCE_TIERS
from src.app.schemas.result import AnalysisResult


@dataclass(frozen=True)
class ResultCard:
    species: str | None
    confidence: float | None
    confidence_tier: str | None
    venom_label: str
    features: str | None
    safety_concerns: str | None
    habitat: str | None = None
    first_aid_steps: list[str] = field(default_factory=list)
    interesting_facts: list[str] = field(default_factory=list)
    sources: list[tuple[str | None, str | None]] = field(default_factory=list)


def confidence_tier(confidence: float) -> str:
    """Map a 0–100 confidence to ``low`` / ``medium`` / ``high``."""
    for lower_bound, label in CONFIDENCE_TIERS:
        if confidence >= lower_bound:
            return label
    return CONFIDENCE_TIERS[-1][1]


def venom_label(venomous: Any) -> str:
    if venomous is None:
        return "Unknown"
    if isinstance(venomous, bool):
        return "Poisonous" if venomous else "Not Poisonous"
    return str(venomous)


def _number(value: Any) -> float | None:
    """Read a confidence given as a number or a string such as ``"85%"``."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip().rstrip("%"))
        except ValueError:
            return None
    return None


def _text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, list):
        return "; ".join(str(item) for item in value)
    if isinstance(value, dict):
        return "; ".join(f"{key}: {item}" for key, item in value.items())
    return str(value)


def _items(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [str(item) for item in value]
    return [str(value)]


def _sources(value: Any) -> list[tuple[str | None, str | None]]:
    if value is None:
        return []
    entries = value if isinstance(value, list) else [value]
    sources = []
    for entry in entries:
        if isinstance(entry, dict):
            sources.append((entry.get("name"), entry.get("url")))
        else:
            sources.append((str(entry), None))
    return sources


def build_card(result: AnalysisResult) -> ResultCard:
    """Build the card for *result*, leaving absent fields empty."""
    confidence = _number(result.confidence)
    return ResultCard(
        species=_text(result.species),
        confidence=confidence,
        confidence_tier=confidence_tier(confidence) if confidence is not None else None,
        venom_label=venom_label(result.venomous),
        features=_text(result.features),
        safety_concerns=_text(result.safety_concerns),
        habitat=_text(getattr(result, "habitat", None)),
        first_aid_steps=_items(getattr(result, "first_aid_steps", None)),
        interesting_facts=_items(getattr(result, "interesting_facts", None)),
        sources=_sources(getattr(result, "sources", None)),
    )
