"""Markdown report export."""

from __future__ import annotations

from pathlib import Path
from typing import List

from hb_cli.core.models import Accepted, AnalysisResult, Rejected
from hb_cli.utils.formatting import format_exercise_line


def result_to_markdown(result: AnalysisResult, video_name: str = "") -> str:
    """Render an analysis result as a standalone markdown report."""
    if isinstance(result, Rejected):
        return f"> {result.message}\n"

    lines: List[str] = []
    if video_name:
        lines.extend([f"_Clip: {video_name}_", ""])
    lines.append(result.markdown)
    lines.extend(["", "### Recommended Exercises"])
    if result.exercises:
        lines.extend(format_exercise_line(exercise) for exercise in result.exercises)
    else:
        lines.append("No matching exercises found.")
    if result.tags:
        lines.extend(["", f"_Tags: {', '.join(result.tags)}_"])
    return "\n".join(lines) + "\n"


def write_markdown_report(path: Path, result: AnalysisResult, video_name: str = "") -> Path:
    """Write the markdown report and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(result_to_markdown(result, video_name))
    return path


def accepted_summary(result: Accepted) -> str:
    """One-line summary for plain console output."""
    return f"tags\t{','.join(result.tags)}\texercises\t{len(result.exercises)}"
