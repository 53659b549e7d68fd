"""Configuration loading and persistence."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]

from hb_cli.core.constants import (
    DEFAULT_DELAY_MS,
    DEFAULT_MODEL,
    DEFAULT_SENTENCES,
    GEMINI_API_BASE,
    MAX_EXERCISES,
    MAX_FRAMES,
    SKILL_LEVELS,
)
from hb_cli.core.models import AnalysisSettings


class ConfigError(RuntimeError):
    """Raised when config file parsing fails."""


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("HB_CONFIG_FILE", "~/.config/hb/config.toml")
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    return {
        "classifier": {
            "enabled": False,
            "model": DEFAULT_MODEL,
            "api_key_env": "GEMINI_API_KEY",
            "base_url": GEMINI_API_BASE,
            "timeout_seconds": 30,
            "max_retries": 2,
            "max_frames": MAX_FRAMES,
        },
        "analysis": {
            "default_level": None,
            "min_delay_ms": DEFAULT_DELAY_MS[0],
            "max_delay_ms": DEFAULT_DELAY_MS[1],
            "exercise_count": MAX_EXERCISES,
            "max_sentences": DEFAULT_SENTENCES,
        },
        "corpus": {
            "path": None,
        },
    }


DEFAULT_CONFIG: Dict[str, Any] = _default_config()


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text()
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()
    if cfg_path.exists():
        cfg = _deep_merge(cfg, _read_config(cfg_path))
    return cfg


def _toml_literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, list):
        items = ", ".join(_toml_literal(item) for item in value if item is not None)
        return f"[{items}]"
    raise TypeError(f"Unsupported TOML value type: {type(value)!r}")


def _dict_to_toml(data: Dict[str, Any], prefix: Optional[str] = None) -> str:
    lines = []
    plain_keys = []
    nested_keys = []

    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            nested_keys.append((key, value))
        else:
            plain_keys.append((key, value))

    if prefix is not None:
        lines.append(f"[{prefix}]")

    for key, value in plain_keys:
        lines.append(f"{key} = {_toml_literal(value)}")

    if plain_keys and nested_keys:
        lines.append("")

    for index, (key, value) in enumerate(nested_keys):
        table_name = key if prefix is None else f"{prefix}.{key}"
        lines.append(_dict_to_toml(value, prefix=table_name))
        if index != len(nested_keys) - 1:
            lines.append("")

    return "\n".join(lines)


def save_config(config: Dict[str, Any], path: Optional[Path] = None) -> Path:
    """Save configuration to disk as TOML (default) or JSON."""
    cfg_path = path or default_config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)

    if cfg_path.suffix.lower() == ".json":
        cfg_path.write_text(json.dumps(config, indent=2) + "\n")
        return cfg_path

    cfg_path.write_text(_dict_to_toml(config).strip() + "\n")
    return cfg_path


def resolve_corpus_path(config: Dict[str, Any], explicit: Optional[Path] = None) -> Optional[Path]:
    """Resolve corpus file with CLI override first; ``None`` means bundled."""
    if explicit is not None:
        return explicit.expanduser().resolve()
    raw = os.getenv("HB_CORPUS_FILE") or config.get("corpus", {}).get("path")
    return expand_path(raw) if raw else None


def _int_setting(section: Dict[str, Any], key: str, default: int) -> int:
    value = section.get(key, default)
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"analysis.{key} must be an integer, got {value!r}") from exc


def settings_from_config(config: Dict[str, Any]) -> AnalysisSettings:
    """Build the process-wide analysis settings from a loaded config."""
    analysis = config.get("analysis", {})
    level = analysis.get("default_level")
    if level is not None and level not in SKILL_LEVELS:
        raise ConfigError(f"analysis.default_level must be one of {', '.join(SKILL_LEVELS)}")

    return AnalysisSettings(
        classifier_enabled=bool(config.get("classifier", {}).get("enabled", False)),
        exercise_count=_int_setting(analysis, "exercise_count", MAX_EXERCISES),
        max_sentences=_int_setting(analysis, "max_sentences", DEFAULT_SENTENCES),
        min_delay_ms=_int_setting(analysis, "min_delay_ms", DEFAULT_DELAY_MS[0]),
        max_delay_ms=_int_setting(analysis, "max_delay_ms", DEFAULT_DELAY_MS[1]),
        default_level=level,
    )
