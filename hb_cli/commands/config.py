"""Configuration commands."""

from __future__ import annotations

import typer

from hb_cli.commands.common import get_state, print_json_payload
from hb_cli.core.config import DEFAULT_CONFIG, save_config

app = typer.Typer(help="Inspect and create the configuration file")


@app.command("show")
def show_command(ctx: typer.Context) -> None:
    """Print the effective configuration (defaults merged with the file)."""
    state = get_state(ctx)
    print_json_payload(state, state.config)


@app.command("path")
def path_command(ctx: typer.Context) -> None:
    """Print the configuration file path."""
    state = get_state(ctx)
    if state.json_output:
        print_json_payload(
            state,
            {"path": str(state.config_path), "exists": state.config_path.exists()},
        )
        return
    typer.echo(str(state.config_path))


@app.command("init")
def init_command(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a configuration file populated with defaults."""
    state = get_state(ctx)
    if state.config_path.exists() and not force:
        typer.echo(f"Config already exists: {state.config_path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    path = save_config(DEFAULT_CONFIG, state.config_path)
    if state.json_output:
        print_json_payload(state, {"status": "created", "path": str(path)})
        return
    typer.echo(f"Wrote {path}")
