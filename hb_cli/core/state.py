"""Per-invocation CLI state."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from rich.console import Console

from hb_cli.core.models import AnalysisSettings


@dataclass
class CLIState:
    """Output flags, loaded config and the analysis settings derived from it."""

    json_output: bool
    plain_output: bool
    verbose: bool
    quiet: bool
    config_path: Path
    config: Dict[str, Any]
    settings: AnalysisSettings
    console: Console
