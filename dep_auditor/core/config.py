"""Configuration loading."""

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

from dep_auditor.core.constants import CLASSIFY_MODES, OUTPUT_FORMATS


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
    raw = os.getenv("DEP_AUDITOR_CONFIG_FILE", "~/.config/dep-auditor/config.toml")
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    return {
        "classification": {
            "mode": "auto",
            "families": {
                "essential": [],
                "large_utility": [],
                "framework": [],
            },
            "sizes": {},
        },
        "report": {
            "show_all": True,
            "output_format": "table",
        },
        "evidence": {
            "file": "",
        },
    }


DEFAULT_CONFIG: Dict[str, Any] = _default_config()


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Unable to read config file {path}: {exc}") from exc
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except Exception as exc:
        if suffix in {".toml", ""}:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
        raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def _validate(cfg: Dict[str, Any], source: Path) -> None:
    for section in DEFAULT_CONFIG:
        if not isinstance(cfg.get(section), dict):
            raise ConfigError(f"'{section}' in {source} must be a table")
    for section in ("families", "sizes"):
        if not isinstance(cfg["classification"].get(section), dict):
            raise ConfigError(f"'classification.{section}' in {source} must be a table")

    mode = cfg["classification"].get("mode")
    if mode not in CLASSIFY_MODES:
        raise ConfigError(
            f"classification.mode in {source} must be one of {', '.join(CLASSIFY_MODES)}, got {mode!r}"
        )
    output_format = cfg["report"].get("output_format")
    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"report.output_format in {source} must be one of {', '.join(OUTPUT_FORMATS)}, "
            f"got {output_format!r}"
        )


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()

    if cfg_path.exists():
        loaded = _read_config(cfg_path)
        cfg = _deep_merge(cfg, loaded)
        _validate(cfg, cfg_path)

    return cfg


def resolve_evidence_path(config: Dict[str, Any], explicit: Optional[Path] = None) -> Optional[Path]:
    """Resolve evidence file with CLI override first."""
    if explicit is not None:
        return explicit.expanduser().resolve()
    raw = os.getenv("DEP_AUDITOR_EVIDENCE_FILE") or config.get("evidence", {}).get("file")
    if not raw:
        return None
    return expand_path(raw)
