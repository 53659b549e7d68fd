"""Exercise corpus loading and validation."""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from hb_cli.core.constants import SKILL_LEVELS
from hb_cli.core.models import Exercise

BUNDLED_CORPUS = "exercises.yaml"


class CorpusError(RuntimeError):
    """Raised when the exercise corpus is missing or malformed."""


def _first(record: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def exercise_from_dict(record: Dict[str, Any], index: int = 0) -> Exercise:
    """Validate one corpus record (camelCase or snake_case keys)."""
    for key in ("id", "title", "url"):
        value = record.get(key)
        if not isinstance(value, (str, int)) or not str(value).strip():
            raise CorpusError(f"Exercise #{index} is missing '{key}'")

    level = str(record.get("level") or "").strip().lower()
    if level not in SKILL_LEVELS:
        raise CorpusError(f"Exercise #{index} has invalid level {record.get('level')!r}")

    tags = record.get("tags") or []
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        raise CorpusError(f"Exercise #{index} must have a list of string tags")

    duration = _first(record, "durationMinutes", "duration_minutes")
    try:
        duration_minutes = float(duration) if duration is not None else None
    except (TypeError, ValueError) as exc:
        raise CorpusError(f"Exercise #{index} has invalid duration {duration!r}") from exc

    return Exercise(
        id=str(record["id"]).strip(),
        title=str(record["title"]).strip(),
        tags=tuple(tag.strip().lower() for tag in tags if tag.strip()),
        level=level,
        url=str(record["url"]).strip(),
        description=_optional_str(record.get("description")),
        focus_area=_optional_str(_first(record, "focusArea", "focus_area")),
        duration_minutes=duration_minutes,
        thumbnail=_optional_str(record.get("thumbnail")),
        all_levels=bool(_first(record, "allLevels", "all_levels") or False),
    )


def parse_corpus(raw_data: Any) -> List[Exercise]:
    """Build exercises from a list of records or ``{"exercises": [...]}``."""
    if isinstance(raw_data, dict):
        raw_data = raw_data.get("exercises")
    if not isinstance(raw_data, list):
        raise CorpusError("Exercise corpus must be a list of records")

    exercises: List[Exercise] = []
    seen_ids = set()
    for index, record in enumerate(raw_data):
        if not isinstance(record, dict):
            raise CorpusError(f"Exercise #{index} must be an object")
        exercise = exercise_from_dict(record, index)
        if exercise.id in seen_ids:
            raise CorpusError(f"Duplicate exercise id {exercise.id!r}")
        seen_ids.add(exercise.id)
        exercises.append(exercise)
    return exercises


def _read_text(path: Optional[Path]) -> str:
    if path is None:
        return resources.files("hb_cli.data").joinpath(BUNDLED_CORPUS).read_text(encoding="utf-8")
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CorpusError(f"Cannot read exercise corpus {path}: {exc}") from exc


def load_corpus(path: Optional[Path] = None) -> List[Exercise]:
    """Load the exercise corpus from JSON/YAML, defaulting to the bundled one."""
    text = _read_text(path)
    try:
        if path is not None and path.suffix.lower() == ".json":
            raw_data = json.loads(text)
        else:
            raw_data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise CorpusError(f"Failed to parse exercise corpus {path or BUNDLED_CORPUS}: {exc}") from exc
    return parse_corpus(raw_data)
