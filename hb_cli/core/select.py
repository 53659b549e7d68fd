"""Exercise scoring and selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set

from hb_cli.core.constants import FUNDAMENTALS_TAGS, LEVEL_ORDER, MAX_EXERCISES
from hb_cli.core.models import Exercise

logger = logging.getLogger(__name__)

TAG_WEIGHT = 10
FOCUS_WEIGHT = 5
FOCUS_BONUS = 2
ALL_LEVELS_BONUS = 1


@dataclass(frozen=True)
class ScoredExercise:
    exercise: Exercise
    tag_overlap: int
    focus_bonus: int
    closeness: int
    score: int


def level_closeness(exercise_level: str, desired: Optional[str]) -> int:
    """2 for the same level, 1 for a neighbouring level, 0 otherwise."""
    if not desired or desired not in LEVEL_ORDER or exercise_level not in LEVEL_ORDER:
        return 0
    diff = abs(LEVEL_ORDER[exercise_level] - LEVEL_ORDER[desired])
    return 2 if diff == 0 else 1 if diff == 1 else 0


def score_exercise(
    exercise: Exercise,
    tags: Sequence[str],
    level: Optional[str] = None,
    focus_area: Optional[str] = None,
) -> ScoredExercise:
    """Score one exercise against lower-cased tags, level and focus label."""
    tag_overlap = sum(1 for tag in exercise.tags if tag.lower() in tags)

    focus_bonus = 0
    if focus_area and exercise.focus_area and focus_area.lower() in exercise.focus_area.lower():
        focus_bonus = FOCUS_BONUS

    closeness = level_closeness(exercise.level, level)
    if exercise.all_levels:
        closeness += ALL_LEVELS_BONUS

    return ScoredExercise(
        exercise=exercise,
        tag_overlap=tag_overlap,
        focus_bonus=focus_bonus,
        closeness=closeness,
        score=tag_overlap * TAG_WEIGHT + focus_bonus * FOCUS_WEIGHT + closeness,
    )


def rank_exercises(
    corpus: Sequence[Exercise],
    tags: Sequence[str],
    level: Optional[str] = None,
    focus_area: Optional[str] = None,
) -> List[ScoredExercise]:
    """Score the whole corpus; best first, ties broken by title."""
    scored = [score_exercise(exercise, tags, level, focus_area) for exercise in corpus]
    scored.sort(
        key=lambda item: (-item.score, -item.tag_overlap, -item.closeness, item.exercise.title)
    )
    return scored


def _diversify(picked: Sequence[Exercise], limit: int) -> List[Exercise]:
    # Repeat a primary tag only while fewer than two exercises are kept.
    seen_tags: Set[str] = set()
    diverse: List[Exercise] = []
    for exercise in picked:
        primary = exercise.primary_tag
        if primary is None or primary not in seen_tags or len(diverse) < 2:
            diverse.append(exercise)
            if primary:
                seen_tags.add(primary)
        if len(diverse) >= limit:
            break
    return diverse


def select_exercises(
    corpus: Sequence[Exercise],
    tags: Sequence[str],
    level: Optional[str] = None,
    count: int = MAX_EXERCISES,
    focus_area: Optional[str] = None,
) -> List[Exercise]:
    """Pick up to ``min(3, count)`` diverse exercises for the resolved tags."""
    limit = min(MAX_EXERCISES, count)
    if limit <= 0:
        return []

    effective_tags = [tag.lower() for tag in tags] if tags else list(FUNDAMENTALS_TAGS)
    scored = rank_exercises(corpus, effective_tags, level, focus_area)
    logger.debug(
        "Top candidates: %s",
        [(item.exercise.id, item.score, item.tag_overlap, item.focus_bonus, item.closeness) for item in scored[:5]],
    )

    picked = [
        item.exercise
        for item in scored
        if item.tag_overlap > 0 or item.focus_bonus > 0
    ][:limit]
    logger.debug("Initial picks: %s", [exercise.id for exercise in picked])

    if len(picked) < min(2, limit) and tags:
        logger.debug("Too few matches, topping up with fundamentals")
        seen_ids = {exercise.id for exercise in picked}
        for item in rank_exercises(corpus, FUNDAMENTALS_TAGS, level):
            if len(picked) >= limit:
                break
            if item.exercise.id not in seen_ids:
                picked.append(item.exercise)
                seen_ids.add(item.exercise.id)

    if not picked:
        logger.debug("No matches at all, picking by level closeness")
        by_level = sorted(scored, key=lambda item: (-item.closeness, item.exercise.title))
        picked = [item.exercise for item in by_level[:limit]]

    selection = _diversify(picked, limit)
    logger.debug(
        "Final selection: %s",
        [(exercise.id, exercise.primary_tag) for exercise in selection],
    )
    return selection


def build_rationale(exercise: Exercise, tags: Sequence[str], level: Optional[str] = None) -> Optional[str]:
    """Short explanation of why an exercise was picked."""
    wanted = [tag.lower() for tag in tags]
    matched = [tag for tag in exercise.tags if tag.lower() in wanted]
    parts: List[str] = []
    if matched:
        parts.append(f"Targets {', '.join(matched)}")
    if exercise.all_levels:
        parts.append("suitable for all levels")
    elif level and exercise.level == level:
        parts.append(f"matches {level} level")
    if not parts:
        return None
    text = "; ".join(parts)
    return text[:1].upper() + text[1:]
