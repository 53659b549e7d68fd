from __future__ import annotations

import json
from typing import Any

import pytest

from hb_cli.core.models import Action
from hb_cli.core.sanitize import extract_json_object, first_sentences, sanitize_classification


def _envelope(**overrides: Any) -> str:
    payload = {"isHandball": True, "tags": []}
    payload.update(overrides)
    return json.dumps(payload)


def test_extracts_object_surrounded_by_prose(raw_handball_response: str) -> None:
    result = sanitize_classification(raw_handball_response)
    assert result is not None
    assert result.is_handball is True
    assert result.level == "intermediate"
    assert result.confidence == pytest.approx(0.92)
    assert result.tags == ("passing", "footwork")
    assert result.actions == (Action("passing", 0.9), Action("footwork", 0.6))


def test_extract_json_object_respects_braces_in_strings() -> None:
    text = 'note {"isHandball": true, "tags": ["a}b", "{c"]} trailing {"other": 1}'
    assert extract_json_object(text) == '{"isHandball": true, "tags": ["a}b", "{c"]}'


def test_extract_json_object_unbalanced_returns_none() -> None:
    assert extract_json_object('{"isHandball": true, "tags": [') is None
    assert extract_json_object("no braces here") is None


@pytest.mark.parametrize(
    "raw",
    [
        "I could not analyze these frames.",
        "{not json at all}",
        '{"isHandball": "yes", "tags": []}',
        '{"isHandball": true, "tags": "passing"}',
        '{"tags": ["passing"]}',
        None,
        42,
        ["isHandball"],
    ],
)
def test_unusable_envelope_returns_none(raw) -> None:
    assert sanitize_classification(raw) is None


def test_missing_tags_field_reads_as_empty() -> None:
    result = sanitize_classification('{"isHandball": false, "confidence": 0.95}')
    assert result is not None
    assert result.tags == ()
    assert result.is_handball is False


def test_accepts_dict_and_bytes_input() -> None:
    assert sanitize_classification({"isHandball": True, "tags": ["feint"]}).tags == ("feint",)
    assert sanitize_classification(b'{"isHandball": false, "tags": []}').is_handball is False


def test_tags_are_non_empty_strings_capped_at_three() -> None:
    raw = _envelope(tags=["passing", "", "   ", 5, None, "shooting", "defense", "feint"])
    result = sanitize_classification(raw)
    assert result.tags == ("passing", "shooting", "defense")


def test_actions_are_filtered_defaulted_clamped_and_capped() -> None:
    raw = _envelope(
        actions=[
            {"label": "passing", "confidence": 0.9},
            {"label": "dribble", "confidence": 0.9},
            "shooting",
            {"label": "goalkeeper", "confidence": "high"},
            {"label": "drill", "confidence": 1.7},
            {"label": "feint"},
        ]
    )
    result = sanitize_classification(raw)
    assert result.actions == (
        Action("passing", 0.9),
        Action("goalkeeper", 0.5),
        Action("drill", 1.0),
    )


def test_actions_not_a_list_is_lenient() -> None:
    result = sanitize_classification(_envelope(actions={"label": "passing"}))
    assert result is not None
    assert result.actions == ()


def test_sentences_take_first_clause_and_terminate() -> None:
    raw = _envelope(
        positives=[
            "Good balance. Also nice arms.",
            "Quick release",
            "",
            None,
            "Strong finish!",
            "Extra one.",
        ]
    )
    result = sanitize_classification(raw)
    assert result.positives == ("Good balance.", "Quick release.", "Strong finish!")


def test_max_sentences_is_configurable() -> None:
    raw = _envelope(improvements=["One.", "Two?", "Three."])
    result = sanitize_classification(raw, max_sentences=2)
    assert result.improvements == ("One.", "Two?")


def test_sentence_fields_with_wrong_type_become_empty() -> None:
    result = sanitize_classification(_envelope(positives="Nice pass.", improvements=7))
    assert result.positives == ()
    assert result.improvements == ()


@pytest.mark.parametrize(
    "level, expected",
    [("advanced", "advanced"), ("expert", None), (3, None), (None, None)],
)
def test_level_only_kept_when_known(level, expected) -> None:
    assert sanitize_classification(_envelope(level=level)).level == expected


@pytest.mark.parametrize(
    "confidence, expected",
    [(0.85, 0.85), (1, 1.0), ("0.9", None), (True, None), (None, None)],
)
def test_confidence_only_kept_when_numeric(confidence, expected) -> None:
    assert sanitize_classification(_envelope(confidence=confidence)).confidence == expected


def test_nan_confidence_is_dropped() -> None:
    result = sanitize_classification('{"isHandball": true, "tags": [], "confidence": NaN}')
    assert result is not None
    assert result.confidence is None


def test_sanitized_output_respects_caps_for_noisy_input() -> None:
    raw = _envelope(
        tags=[f"tag{i}" for i in range(10)],
        actions=[{"label": "passing"} for _ in range(10)],
        positives=[f"Sentence {i}" for i in range(10)],
        improvements=[f"Fix {i}. More text" for i in range(10)],
    )
    result = sanitize_classification(raw, max_sentences=3)
    assert len(result.tags) <= 3
    assert len(result.actions) <= 3
    assert len(result.positives) <= 3
    assert len(result.improvements) <= 3
    for sentence in result.positives + result.improvements:
        assert sentence.endswith((".", "!", "?"))


def test_first_sentences_handles_non_list() -> None:
    assert first_sentences("Just text.") == ()
    assert first_sentences(["A. B."], limit=0) == ()


def test_to_dict_round_trips_public_fields() -> None:
    result = sanitize_classification(_envelope(tags=["passing"], confidence=0.4, level="beginner"))
    payload = result.to_dict()
    assert payload["isHandball"] is True
    assert payload["tags"] == ["passing"]
    assert payload["confidence"] == 0.4
    assert payload["level"] == "beginner"


def test_confidence_beyond_float_range_is_dropped() -> None:
    huge = "1" + "0" * 400
    raw = '{"isHandball": true, "tags": [], "confidence": %s, "actions": [{"label": "passing", "confidence": %s}]}' % (
        huge,
        huge,
    )
    result = sanitize_classification(raw)
    assert result is not None
    assert result.confidence is None
    assert result.actions == (Action("passing", 0.5),)


@pytest.mark.parametrize(
    "raw",
    [
        '{"isHandball": true, "tags": [], "confidence": 1' + "0" * 5000 + "}",
        '{"a": ' * 5000 + "1" + "}" * 5000,
    ],
)
def test_pathological_json_is_discarded(raw: str) -> None:
    assert sanitize_classification(raw) is None


def test_tags_are_lower_cased() -> None:
    result = sanitize_classification(_envelope(tags=[" Passing ", "FEINT"]))
    assert result.tags == ("passing", "feint")


def test_non_string_sentences_are_skipped() -> None:
    result = sanitize_classification({"isHandball": True, "tags": [], "positives": [3, {"x": 1}, "Nice pass"]})
    assert result.positives == ("Nice pass.",)
