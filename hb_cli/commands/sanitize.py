"""Inspect stored classifier responses."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from hb_cli.commands.common import get_state, print_json_payload
from hb_cli.core.constants import DEFAULT_SENTENCES
from hb_cli.core.sanitize import sanitize_classification
from hb_cli.core.tags import resolve


def sanitize_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(None, help="File holding a raw classifier response"),
    stdin: bool = typer.Option(False, "--stdin", help="Read the response from stdin"),
    max_sentences: int = typer.Option(DEFAULT_SENTENCES, min=1, help="Sentences kept per section"),
    name: str = typer.Option("", help="Clip file name used for tag/level fallbacks"),
) -> None:
    """Validate a raw classifier response and show the resolved tags."""
    state = get_state(ctx)

    if file is not None:
        try:
            text = file.read_text()
        except OSError as exc:
            typer.echo(f"Cannot read {file}: {exc}", err=True)
            raise typer.Exit(code=2)
    elif stdin:
        text = sys.stdin.read()
    else:
        raise typer.BadParameter("Provide --file or --stdin")

    sanitized = sanitize_classification(text, max_sentences=max_sentences)
    resolution = resolve(sanitized, name, state.settings.default_level)
    payload = {
        "valid": sanitized is not None,
        "classification": sanitized.to_dict() if sanitized else None,
        "resolved": {
            "tags": list(resolution.tags),
            "source": resolution.source,
            "level": resolution.level,
            "focusArea": resolution.focus_area,
        },
    }

    if state.json_output:
        print_json_payload(state, payload)
    elif state.plain_output:
        typer.echo(f"valid\t{str(payload['valid']).lower()}")
        typer.echo(f"tags\t{','.join(resolution.tags)}")
        typer.echo(f"source\t{resolution.source}")
        typer.echo(f"level\t{resolution.level or ''}")
    else:
        if sanitized is None:
            state.console.print("[yellow]No usable classification in input; using fallbacks[/yellow]")
        print_json_payload(state, payload)

    if sanitized is None:
        raise typer.Exit(code=1)
