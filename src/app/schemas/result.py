from typing import Any, Union

from pydantic import BaseModel, ConfigDict

from src.app.config import EXPECTED_FACT_COUNT, EXPECTED_SOURCE_COUNT, SchemaVersion


class BasicAnalysisResult(BaseModel):
    """Four-field result: species, venom status, features, safety concerns.

    Values are kept exactly as the model sent them.  Nothing here is
    required or type-checked; the card renders whatever arrived.
    """
    model_config = ConfigDict(extra="allow")

    species: Any = None
    venomous: Any = None
    features: Any = None
    safety_concerns: Any = None
    confidence: Any = None

    def expectation_warnings(self) -> list[str]:
        """List deviations from what the prompt asks for."""
        confidence = self.confidence
        if confidence is None:
            return []
        if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
            return [f"confidence is not a number: {confidence!r}"]
        if not 0 <= confidence <= 100:
            return [f"confidence {confidence} outside 0-100"]
        return []


class ExtendedAnalysisResult(BasicAnalysisResult):
    """Eight-field result adding habitat, first aid, facts and sources."""

    habitat: Any = None
    first_aid_steps: Any = None
    interesting_facts: Any = None
    sources: Any = None

    def expectation_warnings(self) -> list[str]:
        warnings = super().expectation_warnings()
        for name, expected in (
            ("interesting_facts", EXPECTED_FACT_COUNT),
            ("sources", EXPECTED_SOURCE_COUNT),
        ):
            value = getattr(self, name)
            if value is None:
                continue
            if not isinstance(value, list):
                warnings.append(f"expected {name} to be a list, got {type(value).__name__}")
            elif len(value) != expected:
                warnings.append(f"expected {expected} {name}, got {len(value)}")
        return warnings


AnalysisResult = Union[BasicAnalysisResult, ExtendedAnalysisResult]

RESULT_MODELS: dict[SchemaVersion, type[BasicAnalysisResult]] = {
    "basic": BasicAnalysisResult,
    "extended": ExtendedAnalysisResult,
}
