"""Validation of untrusted classifier output.

The classifier answers with free text that should contain one JSON object.
Everything in it is untrusted: the envelope either validates as a whole or the
result is discarded, while individual fields degrade to empty/absent values.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from hb_cli.core.constants import (
    ACTION_LABELS,
    DEFAULT_ACTION_CONFIDENCE,
    DEFAULT_SENTENCES,
    MAX_ACTIONS,
    MAX_TAGS,
    SKILL_LEVELS,
)
from hb_cli.core.models import Action, SanitizedClassification
from hb_cli.utils.text import ensure_terminated, split_sentences

logger = logging.getLogger(__name__)


def extract_json_object(text: str) -> Optional[str]:
    """Return the first balanced ``{...}`` substring of text, if any."""
    start = text.find("{")
    if start < 0:
        return None

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : index + 1]
    return None


def _parse_envelope(raw: Any) -> Optional[Dict[str, Any]]:
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    if not isinstance(raw, str):
        return None

    candidate = extract_json_object(raw)
    if candidate is None:
        return None
    try:
        parsed = json.loads(candidate)
    except (ValueError, RecursionError):
        # JSONDecodeError, over-long integer literals and deep nesting.
        return None
    return parsed if isinstance(parsed, dict) else None


def _is_number(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # Integers beyond float range.
        return False


def _clean_tags(raw_tags: List[Any]) -> Tuple[str, ...]:
    tags = [item.strip().lower() for item in raw_tags if isinstance(item, str) and item.strip()]
    return tuple(tags[:MAX_TAGS])


def _clean_actions(raw_actions: Any) -> Tuple[Action, ...]:
    if not isinstance(raw_actions, list):
        return ()

    actions: List[Action] = []
    for entry in raw_actions:
        if not isinstance(entry, dict):
            continue
        label = str(entry.get("label") or "").strip()
        if label not in ACTION_LABELS:
            continue
        confidence = entry.get("confidence")
        value = float(confidence) if _is_number(confidence) else DEFAULT_ACTION_CONFIDENCE
        actions.append(Action(label=label, confidence=min(max(value, 0.0), 1.0)))
        if len(actions) >= MAX_ACTIONS:
            break
    return tuple(actions)


def first_sentences(raw: Any, limit: int = DEFAULT_SENTENCES) -> Tuple[str, ...]:
    """Take the first clause of each entry as a terminated sentence, up to limit."""
    if not isinstance(raw, list) or limit <= 0:
        return ()

    sentences: List[str] = []
    for item in raw:
        if len(sentences) >= limit:
            break
        if not isinstance(item, str):
            continue
        parts = split_sentences(item)
        if parts:
            sentences.append(ensure_terminated(parts[0]))
    return tuple(sentences)


def sanitize_classification(
    raw: Any,
    max_sentences: int = DEFAULT_SENTENCES,
) -> Optional[SanitizedClassification]:
    """Validate a raw classifier result; ``None`` when the envelope is unusable."""
    envelope = _parse_envelope(raw)
    if envelope is None:
        logger.debug("Classifier output contains no JSON object")
        return None

    is_handball = envelope.get("isHandball")
    # A missing tags field reads as no tags; any other non-list is malformed.
    raw_tags = envelope.get("tags", [])
    if not isinstance(is_handball, bool) or not isinstance(raw_tags, list):
        logger.debug("Classifier output rejected: isHandball/tags have the wrong type")
        return None

    level = envelope.get("level")
    confidence = envelope.get("confidence")
    return SanitizedClassification(
        is_handball=is_handball,
        tags=_clean_tags(raw_tags),
        positives=first_sentences(envelope.get("positives"), max_sentences),
        improvements=first_sentences(envelope.get("improvements"), max_sentences),
        actions=_clean_actions(envelope.get("actions")),
        confidence=float(confidence) if _is_number(confidence) else None,
        level=level if isinstance(level, str) and level in SKILL_LEVELS else None,
    )
