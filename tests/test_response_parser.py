"""Tests for turning raw replies into messages or typed results."""

import json
import logging

import pytest

from src.app.errors import ParseError
from src.app.schemas.result import BasicAnalysisResult, ExtendedAnalysisResult
from src.app.services.response_parser import parse_response, strip_code_fence
from tests.payloads import NOT_SNAKE_REPLY, SNAKE_REPLY, fenced


def test_not_snake_content_is_returned_verbatim() -> None:
    assert parse_response(NOT_SNAKE_REPLY, False) == NOT_SNAKE_REPLY


def test_not_snake_flag_skips_parsing_even_for_json() -> None:
    assert parse_response('{"species": "x"}', False) == '{"species": "x"}'


def test_fenced_json_round_trip() -> None:
    result = parse_response(fenced(SNAKE_REPLY), True)

    assert isinstance(result, ExtendedAnalysisResult)
    assert result.model_dump(exclude_unset=True) == SNAKE_REPLY
    assert result.sources[0]["name"] == "Wikipedia"


def test_unfenced_json() -> None:
    result = parse_response('{"species":"Boa constrictor"}', True)
    assert result.species == "Boa constrictor"


def test_basic_schema() -> None:
    payload = {"species": "Coral snake", "venomous": True, "features": "Red, yellow, black bands",
               "safety_concerns": "Highly venomous"}
    result = parse_response(json.dumps(payload), True, "basic")

    assert type(result) is BasicAnalysisResult
    assert result.venomous is True
    assert result.confidence is None


def test_missing_fields_stay_unset() -> None:
    result = parse_response('{"species": "Unknown colubrid"}', True)

    assert result.venomous is None
    assert result.first_aid_steps is None
    assert result.model_dump(exclude_unset=True) == {"species": "Unknown colubrid"}


def test_malformed_json_raises() -> None:
    with pytest.raises(ParseError):
        parse_response("{oops", True)


def test_non_object_json_raises() -> None:
    with pytest.raises(ParseError, match="JSON object"):
        parse_response("[1, 2, 3]", True)


@pytest.mark.parametrize(
    "payload",
    [
        {"species": "Western diamondback", "venomous": "Highly venomous"},
        {"species": "Boa", "features": {"pattern": "saddles", "color": "tan"}},
        {"species": "Boa", "confidence": "85%"},
        {"species": "Boa", "first_aid_steps": "Keep calm and seek medical help"},
        {"species": "Boa", "sources": "Wikipedia"},
    ],
)
def test_wrong_typed_fields_are_kept_as_sent(payload: dict) -> None:
    result = parse_response(json.dumps(payload), True)

    assert isinstance(result, ExtendedAnalysisResult)
    assert result.model_dump(exclude_unset=True) == payload


def test_string_confidence_is_not_coerced() -> None:
    result = parse_response('{"species": "Boa", "confidence": "92"}', True)
    assert result.model_dump(exclude_unset=True) == {"species": "Boa", "confidence": "92"}


@pytest.mark.parametrize(
    ("confidence", "warning"),
    [(-1, "confidence -1 outside 0-100"), (250, "confidence 250 outside 0-100"),
     ("85%", "confidence is not a number: '85%'")],
)
def test_confidence_outside_expectations_is_a_warning(confidence, warning: str) -> None:
    result = parse_response(json.dumps({"species": "Boa", "confidence": confidence}), True, "basic")

    assert result.confidence == confidence
    assert result.expectation_warnings() == [warning]


@pytest.mark.parametrize("confidence", [0, 100])
def test_confidence_bounds_accepted(confidence: float) -> None:
    result = parse_response(json.dumps({"confidence": confidence}), True)
    assert result.confidence == confidence
    assert result.expectation_warnings() == []


def test_cardinality_is_a_soft_expectation(caplog: pytest.LogCaptureFixture) -> None:
    payload = dict(SNAKE_REPLY, interesting_facts=["Only one fact"], sources=[])

    with caplog.at_level(logging.WARNING):
        result = parse_response(json.dumps(payload), True)

    assert result.expectation_warnings() == [
        "expected 5 interesting_facts, got 1",
        "expected 3 sources, got 0",
    ]
    assert "expected 5 interesting_facts" in caplog.text


def test_strip_code_fence_variants() -> None:
    assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fence('{"a": 1}') == '{"a": 1}'
