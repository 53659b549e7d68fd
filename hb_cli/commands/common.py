"""Shared command helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

import typer

from hb_cli.core.config import resolve_corpus_path
from hb_cli.core.constants import SKILL_LEVELS
from hb_cli.core.corpus import CorpusError, load_corpus
from hb_cli.core.models import Exercise
from hb_cli.core.state import CLIState


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":"), ensure_ascii=False))
        return
    state.console.print_json(data=payload)


def validate_level(value: Optional[str]) -> Optional[str]:
    """Typer callback that accepts only known skill levels."""
    if value is None:
        return value
    normalized = value.strip().lower()
    if normalized not in SKILL_LEVELS:
        raise typer.BadParameter(
            f"Invalid level '{value}'. Expected one of: {', '.join(SKILL_LEVELS)}"
        )
    return normalized


def load_corpus_for(state: CLIState, explicit: Optional[Path] = None) -> List[Exercise]:
    """Load the configured corpus, exiting with code 2 when it is unusable."""
    path = resolve_corpus_path(state.config, explicit=explicit)
    try:
        return load_corpus(path)
    except CorpusError as exc:
        typer.echo(f"Corpus error: {exc}", err=True)
        raise typer.Exit(code=2)
