from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pytest
from typer.testing import CliRunner

from hb_cli.core.models import Exercise


def make_exercise(
    exercise_id: str,
    title: str,
    tags: Sequence[str],
    level: str = "beginner",
    focus_area: Optional[str] = None,
    all_levels: bool = False,
) -> Exercise:
    return Exercise(
        id=exercise_id,
        title=title,
        tags=tuple(tags),
        level=level,
        url=f"https://example.com/{exercise_id}",
        description=f"{title} description",
        focus_area=focus_area,
        duration_minutes=10,
        all_levels=all_levels,
    )


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def exercise_factory():
    return make_exercise


@pytest.fixture()
def sample_corpus() -> List[Exercise]:
    return [
        make_exercise("p1", "Passing Basics", ["passing"], "beginner", "Passing"),
        make_exercise("p2", "Passing on the Move", ["passing", "footwork"], "intermediate", "Passing"),
        make_exercise(
            "f1",
            "Ball Handling Circuit",
            ["ball-handling", "drill"],
            "beginner",
            "Fundamentals",
            all_levels=True,
        ),
        make_exercise("s1", "Jump Shot", ["shooting"], "advanced", "Shooting"),
        make_exercise("d1", "Shuffle Mirror", ["defense", "footwork"], "beginner", "Defense"),
    ]


@pytest.fixture()
def raw_handball_response() -> str:
    payload = {
        "isHandball": True,
        "confidence": 0.92,
        "level": "intermediate",
        "actions": [
            {"label": "passing", "confidence": 0.9},
            {"label": "footwork", "confidence": 0.6},
        ],
        "tags": ["passing", "footwork"],
        "positives": [
            "Quick release. The wrist snaps well.",
            "Good balance on landing",
            "Eyes up before the pass.",
        ],
        "improvements": [
            "Step into the pass more.",
            "Keep the elbow high",
            "Follow through to the target.",
        ],
    }
    return "Here is my analysis:\n```json\n" + json.dumps(payload, indent=2) + "\n```\nGood luck!"


@pytest.fixture()
def corpus_records() -> List[Dict[str, Any]]:
    return [
        {
            "id": "pass-1",
            "title": "Partner Passing",
            "description": "Two-hand chest passes",
            "focusArea": "Passing",
            "tags": ["Passing", "ball-handling"],
            "level": "beginner",
            "url": "https://example.com/pass-1",
            "durationMinutes": 12,
            "allLevels": True,
        },
        {
            "id": "shoot-1",
            "title": "Hip Shot",
            "focus_area": "Shooting",
            "tags": ["shooting"],
            "level": "advanced",
            "url": "https://example.com/shoot-1",
            "duration_minutes": "20",
        },
    ]


@pytest.fixture()
def write_temp_json(tmp_path: Path):
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, indent=2) + "\n")
        return path

    return _write


@pytest.fixture()
def write_temp_toml(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write


@pytest.fixture()
def video_file(tmp_path: Path):
    def _write(name: str = "u12_passing.mp4") -> Path:
        path = tmp_path / name
        path.write_bytes(b"\x00\x00\x00\x18ftypmp42")
        return path

    return _write
