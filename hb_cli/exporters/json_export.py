"""JSON export helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from hb_cli.core.models import AnalysisResult


def result_payload(result: AnalysisResult, video_name: str = "") -> Dict[str, Any]:
    """JSON-ready dict for an analysis result, tagged with the clip name."""
    payload = result.to_dict()
    if video_name:
        payload["file"] = video_name
    return payload


def write_json(path: Path, payload: Any) -> Path:
    """Write payload as pretty JSON and return path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")
    return path
