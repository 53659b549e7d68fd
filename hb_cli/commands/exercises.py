"""Exercise corpus commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.table import Table

from hb_cli.commands.common import get_state, load_corpus_for, print_json_payload, validate_level
from hb_cli.core.models import Exercise, ExerciseRef
from hb_cli.core.select import build_rationale, select_exercises
from hb_cli.core.state import CLIState
from hb_cli.utils.formatting import format_exercise_line, format_exercise_row, format_minutes

app = typer.Typer(help="Browse and query the exercise corpus")


def _exercise_dict(exercise: Exercise) -> Dict[str, Any]:
    return {
        "id": exercise.id,
        "title": exercise.title,
        "tags": list(exercise.tags),
        "level": exercise.level,
        "allLevels": exercise.all_levels,
        "focusArea": exercise.focus_area,
        "durationMinutes": exercise.duration_minutes,
        "url": exercise.url,
    }


def _print_exercises(state: CLIState, exercises: List[Exercise], title: str) -> None:
    if state.json_output:
        print_json_payload(state, {"exercises": [_exercise_dict(ex) for ex in exercises]})
        return

    if state.plain_output:
        for exercise in exercises:
            typer.echo(format_exercise_row(exercise))
        return

    table = Table(title=title)
    for column in ("ID", "Title", "Level", "Tags", "Duration"):
        table.add_column(column)
    for exercise in exercises:
        table.add_row(
            exercise.id,
            exercise.title,
            "all" if exercise.all_levels else exercise.level,
            ", ".join(exercise.tags),
            format_minutes(exercise.duration_minutes),
        )
    state.console.print(table)


@app.command("list")
def list_command(
    ctx: typer.Context,
    tag: Optional[str] = typer.Option(None, help="Only exercises carrying this tag"),
    level: Optional[str] = typer.Option(None, help="Only exercises at this level", callback=validate_level),
    corpus: Optional[Path] = typer.Option(None, help="Exercise corpus file (JSON/YAML)"),
) -> None:
    """List corpus exercises."""
    state = get_state(ctx)
    exercises = load_corpus_for(state, explicit=corpus)

    if tag:
        exercises = [ex for ex in exercises if tag.lower() in ex.tags]
    if level:
        exercises = [ex for ex in exercises if ex.level == level or ex.all_levels]

    _print_exercises(state, exercises, f"{len(exercises)} exercises")


@app.command("recommend")
def recommend_command(
    ctx: typer.Context,
    tag: Optional[List[str]] = typer.Option(None, "--tag", help="Skill tag, primary first"),
    level: Optional[str] = typer.Option(None, help="Desired level", callback=validate_level),
    focus: Optional[str] = typer.Option(None, help="Focus area label, e.g. Passing"),
    count: int = typer.Option(3, min=0, help="Number of exercises (at most 3)"),
    corpus: Optional[Path] = typer.Option(None, help="Exercise corpus file (JSON/YAML)"),
) -> None:
    """Run exercise selection for explicit tags."""
    state = get_state(ctx)
    exercises = load_corpus_for(state, explicit=corpus)
    tags = list(tag or [])

    picked = select_exercises(exercises, tags, level=level, count=count, focus_area=focus)
    refs = [ExerciseRef.from_exercise(ex, build_rationale(ex, tags, level)) for ex in picked]

    if state.json_output:
        print_json_payload(state, {"tags": tags, "exercises": [ref.to_dict() for ref in refs]})
        return

    if state.plain_output:
        for exercise in picked:
            typer.echo(format_exercise_row(exercise))
        return

    if not refs:
        state.console.print("No exercises available")
        return
    for ref in refs:
        state.console.print(format_exercise_line(ref), markup=False)
