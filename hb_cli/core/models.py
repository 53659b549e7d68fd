"""Lightweight data models used across the analysis pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from hb_cli.core.constants import DEFAULT_DELAY_MS, DEFAULT_SENTENCES, MAX_EXERCISES


@dataclass(frozen=True)
class Action:
    """One observed technique with the classifier's confidence."""

    label: str
    confidence: float = 0.5


@dataclass(frozen=True)
class SanitizedClassification:
    """Classifier verdict after validation and clamping."""

    is_handball: bool
    tags: Tuple[str, ...] = ()
    positives: Tuple[str, ...] = ()
    improvements: Tuple[str, ...] = ()
    actions: Tuple[Action, ...] = ()
    confidence: Optional[float] = None
    level: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "isHandball": self.is_handball,
            "tags": list(self.tags),
            "positives": list(self.positives),
            "improvements": list(self.improvements),
            "actions": [
                {"label": action.label, "confidence": action.confidence}
                for action in self.actions
            ],
        }
        if self.confidence is not None:
            payload["confidence"] = self.confidence
        if self.level is not None:
            payload["level"] = self.level
        return payload


@dataclass(frozen=True)
class Exercise:
    """Training exercise from the read-only corpus."""

    id: str
    title: str
    tags: Tuple[str, ...]
    level: str
    url: str
    description: Optional[str] = None
    focus_area: Optional[str] = None
    duration_minutes: Optional[float] = None
    thumbnail: Optional[str] = None
    all_levels: bool = False

    @property
    def primary_tag(self) -> Optional[str]:
        return self.tags[0] if self.tags else None


@dataclass(frozen=True)
class ExerciseRef:
    """Display-ready projection of a selected exercise."""

    title: str
    url: str
    thumbnail: Optional[str] = None
    description: Optional[str] = None
    duration_minutes: Optional[float] = None
    rationale: Optional[str] = None

    @classmethod
    def from_exercise(cls, exercise: Exercise, rationale: Optional[str] = None) -> "ExerciseRef":
        return cls(
            title=exercise.title,
            url=exercise.url,
            thumbnail=exercise.thumbnail,
            description=exercise.description,
            duration_minutes=exercise.duration_minutes,
            rationale=rationale,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"title": self.title, "url": self.url}
        if self.thumbnail:
            payload["thumbnail"] = self.thumbnail
        if self.description:
            payload["description"] = self.description
        if self.duration_minutes is not None:
            payload["durationMinutes"] = self.duration_minutes
        if self.rationale:
            payload["rationale"] = self.rationale
        return payload


@dataclass(frozen=True)
class Rejected:
    """The clip was confidently judged not to show handball."""

    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"notHandball": True, "message": self.message}


@dataclass(frozen=True)
class Accepted:
    """Feedback and exercise recommendations for a handball clip."""

    markdown: str
    exercises: Tuple[ExerciseRef, ...]
    tags: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "markdown": self.markdown,
            "exercises": [exercise.to_dict() for exercise in self.exercises],
            "tags": list(self.tags),
        }


AnalysisResult = Union[Rejected, Accepted]


@dataclass(frozen=True)
class Frame:
    """Still image sent to the classifier as base64 data."""

    mime_type: str
    data: str


@dataclass(frozen=True)
class VideoFile:
    """Caller-supplied clip: its name plus optional path and preview frames."""

    name: str
    path: Optional[Path] = None
    frames: Tuple[Frame, ...] = ()


@dataclass(frozen=True)
class AnalyzeOptions:
    """Per-call options."""

    level: Optional[str] = None
    min_delay_ms: Optional[int] = None
    max_delay_ms: Optional[int] = None


@dataclass(frozen=True)
class AnalysisSettings:
    """Process-wide analysis settings resolved from configuration."""

    classifier_enabled: bool = False
    exercise_count: int = MAX_EXERCISES
    max_sentences: int = DEFAULT_SENTENCES
    min_delay_ms: int = DEFAULT_DELAY_MS[0]
    max_delay_ms: int = DEFAULT_DELAY_MS[1]
    default_level: Optional[str] = None


@dataclass(frozen=True)
class TagResolution:
    """Working tag set, level and focus label for one analysis."""

    tags: Tuple[str, ...]
    level: Optional[str] = None
    focus_area: Optional[str] = None
    source: str = "filename"


@dataclass(frozen=True)
class Feedback:
    """Structured feedback sections before rendering."""

    title: str
    good: Tuple[str, ...] = ()
    improve: Tuple[str, ...] = ()
