"""Clip analysis pipeline: classify, sanitize, resolve, select, compose."""

from __future__ import annotations

import logging
import random
import time
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Sequence

from hb_cli.core.constants import (
    DEFAULT_CLASSIFIER_CONFIDENCE,
    REJECTION_MESSAGE,
    REJECTION_THRESHOLD,
)
from hb_cli.core.feedback import compose_feedback, feedback_to_markdown
from hb_cli.core.frames import load_frames
from hb_cli.core.models import (
    Accepted,
    AnalysisResult,
    AnalysisSettings,
    AnalyzeOptions,
    Exercise,
    ExerciseRef,
    Rejected,
    SanitizedClassification,
    VideoFile,
)
from hb_cli.core.sanitize import sanitize_classification
from hb_cli.core.select import build_rationale, select_exercises
from hb_cli.core.tags import resolve

logger = logging.getLogger(__name__)

Classify = Callable[[VideoFile], Any]


class AnalysisError(RuntimeError):
    """Raised when a clip cannot be analyzed at all."""


def open_video(path: Path, frame_specs: Iterable[str] = ()) -> VideoFile:
    """Build the clip handle, failing if the file or a frame is unreadable."""
    if not path.is_file():
        raise AnalysisError(f"Cannot read video file {path}")
    try:
        with path.open("rb") as handle:
            handle.read(1)
        frames = load_frames(frame_specs)
    except (OSError, ValueError) as exc:
        raise AnalysisError(f"Cannot read input for {path.name}: {exc}") from exc
    return VideoFile(name=path.name, path=path, frames=tuple(frames))


def is_rejection(sanitized: Optional[SanitizedClassification]) -> bool:
    """True for a confident "not handball" verdict."""
    if sanitized is None or sanitized.is_handball:
        return False
    confidence = (
        sanitized.confidence
        if sanitized.confidence is not None
        else DEFAULT_CLASSIFIER_CONFIDENCE
    )
    return confidence >= REJECTION_THRESHOLD


def pacing_delay_ms(min_delay_ms: int, max_delay_ms: int, rng: Any = random) -> int:
    spread = max(0, max_delay_ms - min_delay_ms)
    return int(max(0, min_delay_ms) + rng.random() * spread)


def _classify(classify: Optional[Classify], video: VideoFile, settings: AnalysisSettings) -> Any:
    if not settings.classifier_enabled or classify is None:
        return None
    try:
        return classify(video)
    except Exception as exc:
        logger.warning("Classifier failed for %s: %s", video.name, exc)
        return None


def analyze_video(
    video: VideoFile,
    corpus: Sequence[Exercise],
    classify: Optional[Classify] = None,
    options: Optional[AnalyzeOptions] = None,
    settings: Optional[AnalysisSettings] = None,
    sleep: Callable[[float], None] = time.sleep,
    rng: Any = random,
) -> AnalysisResult:
    """Analyze one clip and return either a rejection or feedback with exercises."""
    options = options or AnalyzeOptions()
    settings = settings or AnalysisSettings()
    logger.debug("Analysis started for %s", video.name)

    sanitized = sanitize_classification(
        _classify(classify, video, settings),
        max_sentences=settings.max_sentences,
    )
    if sanitized is None:
        logger.info("No usable classifier signal for %s; using file-name heuristics", video.name)

    if is_rejection(sanitized):
        logger.info("Rejected %s: not a handball clip", video.name)
        return Rejected(message=REJECTION_MESSAGE)

    resolution = resolve(sanitized, video.name, options.level or settings.default_level)
    exercises = select_exercises(
        corpus,
        list(resolution.tags),
        level=resolution.level,
        count=settings.exercise_count,
        focus_area=resolution.focus_area,
    )
    feedback = compose_feedback(
        resolution.tags,
        positives=sanitized.positives if sanitized else (),
        improvements=sanitized.improvements if sanitized else (),
    )
    refs = tuple(
        ExerciseRef.from_exercise(exercise, build_rationale(exercise, resolution.tags, resolution.level))
        for exercise in exercises
    )

    min_delay = options.min_delay_ms if options.min_delay_ms is not None else settings.min_delay_ms
    max_delay = options.max_delay_ms if options.max_delay_ms is not None else settings.max_delay_ms
    delay = pacing_delay_ms(min_delay, max_delay, rng)
    if delay > 0:
        sleep(delay / 1000.0)

    logger.info("Accepted %s with tags %s", video.name, list(resolution.tags))
    return Accepted(
        markdown=feedback_to_markdown(feedback),
        exercises=refs,
        tags=resolution.tags,
    )
