"""Clip analysis command."""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markdown import Markdown

from hb_cli.commands.common import get_state, load_corpus_for, print_json_payload, validate_level
from hb_cli.core.classifier import build_classifier
from hb_cli.core.models import Accepted, AnalyzeOptions, Rejected
from hb_cli.core.pipeline import AnalysisError, analyze_video, open_video
from hb_cli.exporters.json_export import result_payload, write_json
from hb_cli.exporters.markdown import accepted_summary, result_to_markdown, write_markdown_report
from hb_cli.utils.formatting import format_exercise_line

REJECTED_EXIT_CODE = 3


def analyze_command(
    ctx: typer.Context,
    video: Path = typer.Argument(..., help="Video clip to analyze"),
    frame: Optional[List[str]] = typer.Option(
        None,
        "--frame",
        help="Preview frame for the classifier (image path or data: URL, up to 3)",
    ),
    level: Optional[str] = typer.Option(
        None, help="Fallback skill level: beginner|intermediate|advanced", callback=validate_level
    ),
    min_delay_ms: Optional[int] = typer.Option(None, help="Minimum pacing delay in milliseconds"),
    max_delay_ms: Optional[int] = typer.Option(None, help="Maximum pacing delay in milliseconds"),
    no_delay: bool = typer.Option(False, "--no-delay", help="Skip the pacing delay"),
    corpus: Optional[Path] = typer.Option(None, help="Exercise corpus file (JSON/YAML)"),
    output_format: str = typer.Option("markdown", "--format", help="Output format: markdown|json"),
    output_file: Optional[Path] = typer.Option(None, help="Write result to file"),
) -> None:
    """Analyze a handball clip and recommend exercises."""
    state = get_state(ctx)
    if output_format not in {"markdown", "json"}:
        raise typer.BadParameter("--format must be one of: markdown, json")

    exercises = load_corpus_for(state, explicit=corpus)
    classifier = build_classifier(state.config)
    settings = state.settings
    if classifier is None and settings.classifier_enabled:
        settings = replace(settings, classifier_enabled=False)

    options = AnalyzeOptions(
        level=level,
        min_delay_ms=0 if no_delay else min_delay_ms,
        max_delay_ms=0 if no_delay else max_delay_ms,
    )

    try:
        clip = open_video(video.expanduser(), frame or [])
        status_ctx = (
            state.console.status(f"Analyzing {clip.name}...")
            if not (state.plain_output or state.json_output)
            else nullcontext()
        )
        with status_ctx:
            result = analyze_video(
                clip,
                exercises,
                classify=classifier.classify if classifier else None,
                options=options,
                settings=settings,
            )
    except AnalysisError as exc:
        if state.json_output:
            print_json_payload(state, {"status": "error", "message": str(exc)})
        else:
            typer.echo(f"Analysis failed: {exc}")
        raise typer.Exit(code=1)

    if output_file:
        if output_format == "json":
            write_json(output_file, result_payload(result, clip.name))
        else:
            write_markdown_report(output_file, result, clip.name)

    if state.json_output or output_format == "json":
        print_json_payload(state, result_payload(result, clip.name))
    elif isinstance(result, Rejected):
        typer.echo(result.message)
    elif state.plain_output:
        typer.echo(accepted_summary(result))
        typer.echo(result.markdown)
        for exercise in result.exercises:
            typer.echo(format_exercise_line(exercise))
    else:
        _print_rich(state.console, result, clip.name)

    if isinstance(result, Rejected):
        raise typer.Exit(code=REJECTED_EXIT_CODE)


def _print_rich(console: Console, result: Accepted, video_name: str) -> None:
    console.print(Markdown(result_to_markdown(result, video_name)))
