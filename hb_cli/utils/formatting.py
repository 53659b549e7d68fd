"""Formatting helpers used by exports and console output."""

from __future__ import annotations

from typing import Optional

from hb_cli.core.models import Exercise, ExerciseRef


def format_minutes(minutes: Optional[float]) -> str:
    """Format a duration in minutes as ``15 min`` or ``1h05``."""
    if not minutes:
        return "N/A"
    total = int(round(float(minutes)))
    hours, rem = divmod(total, 60)
    if hours:
        return f"{hours}h{rem:02d}"
    return f"{rem} min"


def format_exercise_line(exercise: ExerciseRef) -> str:
    """One markdown bullet linking an exercise with duration and rationale."""
    line = f"- [{exercise.title}]({exercise.url})"
    if exercise.duration_minutes:
        line += f" ({format_minutes(exercise.duration_minutes)})"
    if exercise.description:
        line += f": {exercise.description}"
    if exercise.rationale:
        line += f"\n  - _{exercise.rationale}_"
    return line


def format_exercise_row(exercise: Exercise) -> str:
    """Tab-separated corpus row for plain output."""
    level = "all" if exercise.all_levels else exercise.level
    return "\t".join(
        [
            exercise.id,
            level,
            ",".join(exercise.tags),
            format_minutes(exercise.duration_minutes),
            exercise.title,
        ]
    )
