"""Feedback text composition."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from hb_cli.core.constants import FEEDBACK_PHRASES, FUNDAMENTALS
from hb_cli.core.models import Feedback
from hb_cli.utils.text import ensure_terminated, labelize

TITLE_SEPARATOR = " · "


def _phrases(tag: str) -> Dict[str, Tuple[str, str]]:
    return FEEDBACK_PHRASES.get(tag, FEEDBACK_PHRASES[FUNDAMENTALS])


def join_two_sentences(sentences: Sequence[str], fallback_second: Optional[str] = None) -> str:
    """Join the first two sentences, padding a missing second one."""
    first = ensure_terminated(sentences[0]) if sentences else ""
    second_raw = sentences[1] if len(sentences) > 1 else fallback_second or ""
    second = ensure_terminated(second_raw) if second_raw else ""
    return f"{first} {second}".strip()


def _section(canned: Tuple[str, str], overrides: Sequence[str]) -> str:
    if overrides:
        return join_two_sentences(list(overrides[:2]), canned[1])
    return join_two_sentences(canned)


def primary_and_secondary(tags: Sequence[str]) -> Tuple[str, Optional[str]]:
    primary = tags[0] if tags and tags[0] else FUNDAMENTALS
    secondary = next((tag for tag in tags if tag and tag != primary), None)
    return primary, secondary


def compose_feedback(
    tags: Sequence[str],
    positives: Sequence[str] = (),
    improvements: Sequence[str] = (),
) -> Feedback:
    """Build feedback for the primary and optional secondary tag.

    Classifier sentences replace the primary tag's canned text; a single
    sentence is completed with the second canned sentence.
    """
    primary, secondary = primary_and_secondary(tags)
    primary_base = _phrases(primary)

    good = _section(primary_base["good"], positives)
    improve = _section(primary_base["improve"], improvements)

    if secondary is None:
        return Feedback(title=labelize(primary), good=(good,), improve=(improve,))

    secondary_base = _phrases(secondary)
    good_parts: List[str] = [
        f"{labelize(primary)}: {good}",
        f"{labelize(secondary)}: {join_two_sentences(secondary_base['good'])}",
    ]
    improve_parts: List[str] = [
        f"{labelize(primary)}: {improve}",
        f"{labelize(secondary)}: {join_two_sentences(secondary_base['improve'])}",
    ]
    return Feedback(
        title=f"{labelize(primary)}{TITLE_SEPARATOR}{labelize(secondary)}",
        good=tuple(good_parts),
        improve=tuple(improve_parts),
    )


def feedback_to_markdown(feedback: Feedback) -> str:
    good_bullets = "\n".join(f"  - {line}" for line in feedback.good)
    improve_bullets = "\n".join(f"  - {line}" for line in feedback.improve)
    return (
        f"## {feedback.title}\n\n"
        f"### Technical Feedback\n"
        f"- **What's good**:\n{good_bullets}\n"
        f"- **What to improve**:\n{improve_bullets}"
    )
