"""Skill tag and level resolution."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from hb_cli.core.constants import (
    ACTION_TO_TAG,
    FILENAME_LEVEL_PATTERNS,
    FILENAME_TAG_CANDIDATES,
    FOCUS_AREA_LABELS,
    MAX_TAGS,
)
from hb_cli.core.models import Action, SanitizedClassification, TagResolution

logger = logging.getLogger(__name__)

_LEVEL_RULES = [(level, re.compile(pattern)) for level, pattern in FILENAME_LEVEL_PATTERNS]


def tags_from_actions(actions: Iterable[Action]) -> List[str]:
    """Map action labels to skill tags, deduplicated in first-seen order."""
    tags: List[str] = []
    for action in actions:
        tag = ACTION_TO_TAG.get(action.label)
        if tag and tag not in tags:
            tags.append(tag)
    return tags[:MAX_TAGS]


def infer_tags_from_filename(file_name: str) -> List[str]:
    """Guess tags from words in the file name.

    When no known word is present, one candidate is picked by
    ``len(file_name) % len(candidates)``. That pick carries no meaning; it only
    keeps the result non-empty and stable for a given name.
    """
    name = file_name.lower()
    hits = [tag for tag in FILENAME_TAG_CANDIDATES if tag in name]
    if hits:
        return hits
    index = len(file_name) % len(FILENAME_TAG_CANDIDATES)
    return [FILENAME_TAG_CANDIDATES[index]]


def infer_level_from_filename(file_name: str) -> Optional[str]:
    """Recognize age-group or skill tokens such as ``u12`` or ``adv``."""
    name = file_name.lower()
    for level, pattern in _LEVEL_RULES:
        if pattern.search(name):
            return level
    return None


def resolve_tags(
    sanitized: Optional[SanitizedClassification],
    file_name: str,
) -> Tuple[List[str], str]:
    """Return (tags, source) using actions, then AI tags, then the file name."""
    if sanitized is not None:
        action_tags = tags_from_actions(sanitized.actions)
        if action_tags:
            return action_tags, "actions"
        if sanitized.tags:
            return list(sanitized.tags), "tags"
    return infer_tags_from_filename(file_name), "filename"


def resolve_level(
    sanitized: Optional[SanitizedClassification],
    file_name: str,
    default: Optional[str] = None,
) -> Optional[str]:
    """Classifier level, then file-name hint, then caller default."""
    if sanitized is not None and sanitized.level:
        return sanitized.level
    return infer_level_from_filename(file_name) or default


def focus_area_for(tags: Sequence[str]) -> Optional[str]:
    if not tags:
        return None
    return FOCUS_AREA_LABELS.get(tags[0])


def resolve(
    sanitized: Optional[SanitizedClassification],
    file_name: str,
    default_level: Optional[str] = None,
) -> TagResolution:
    tags, source = resolve_tags(sanitized, file_name)
    level = resolve_level(sanitized, file_name, default_level)
    logger.debug("Resolved tags %s from %s (level=%s)", tags, source, level)
    return TagResolution(
        tags=tuple(tags),
        level=level,
        focus_area=focus_area_for(tags),
        source=source,
    )
