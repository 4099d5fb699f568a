from __future__ import annotations

import json
from pathlib import Path

import pytest

from dep_auditor.core.config import (
    ConfigError,
    _deep_merge,
    default_config_path,
    expand_path,
    load_config,
    resolve_evidence_path,
)


def test_deep_merge_nested_dicts() -> None:
    base = {"a": {"b": 1, "c": 2}, "x": 3}
    override = {"a": {"b": 9}, "y": 4}
    merged = _deep_merge(base, override)
    assert merged == {"a": {"b": 9, "c": 2}, "x": 3, "y": 4}
    assert base["a"]["b"] == 1


def test_expand_path_expands_home_and_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DEP_AUDITOR_TMP_PATH", str(tmp_path))
    expanded = expand_path("$DEP_AUDITOR_TMP_PATH/config.toml")
    assert expanded == (tmp_path / "config.toml").resolve()


def test_default_config_path_uses_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "custom.toml"
    monkeypatch.setenv("DEP_AUDITOR_CONFIG_FILE", str(path))
    assert default_config_path() == path.resolve()


def test_load_config_missing_file_returns_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "missing.toml")
    assert cfg["classification"]["mode"] == "auto"
    assert cfg["report"]["output_format"] == "table"
    assert cfg["report"]["show_all"] is True
    assert cfg["evidence"]["file"] == ""


def test_load_config_from_toml(write_temp_text) -> None:
    path = write_temp_text(
        "config.toml",
        """
[classification]
mode = "heuristic"

[classification.families]
large_utility = ["fastutil"]

[classification.sizes]
fastutil = 17.5

[report]
show_all = false
""",
    )
    cfg = load_config(path)
    assert cfg["classification"]["mode"] == "heuristic"
    assert cfg["classification"]["families"]["large_utility"] == ["fastutil"]
    assert cfg["classification"]["families"]["framework"] == []
    assert cfg["classification"]["sizes"] == {"fastutil": 17.5}
    assert cfg["report"]["show_all"] is False
    assert cfg["report"]["output_format"] == "table"


def test_load_config_from_json(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"report": {"output_format": "markdown"}}))
    cfg = load_config(path)
    assert cfg["report"]["output_format"] == "markdown"


def test_load_config_invalid_toml_raises(write_temp_text) -> None:
    path = write_temp_text("config.toml", "[classification\nmode = ")
    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(path)


def test_load_config_invalid_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{broken")
    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_config(path)


def test_load_config_root_must_be_object(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigError, match="object/table"):
        load_config(path)


def test_load_config_rejects_unknown_mode(write_temp_text) -> None:
    path = write_temp_text("config.toml", '[classification]\nmode = "bytecode"')
    with pytest.raises(ConfigError, match="classification.mode"):
        load_config(path)


def test_load_config_rejects_unknown_output_format(write_temp_text) -> None:
    path = write_temp_text("config.toml", '[report]\noutput_format = "html"')
    with pytest.raises(ConfigError, match="report.output_format"):
        load_config(path)


def test_resolve_evidence_path_precedence(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    explicit = tmp_path / "explicit.txt"
    from_env = tmp_path / "env.txt"
    from_cfg = tmp_path / "cfg.txt"
    config = {"evidence": {"file": str(from_cfg)}}

    assert resolve_evidence_path(config, explicit=explicit) == explicit.resolve()
    assert resolve_evidence_path(config) == from_cfg.resolve()

    monkeypatch.setenv("DEP_AUDITOR_EVIDENCE_FILE", str(from_env))
    assert resolve_evidence_path(config) == from_env.resolve()


def test_resolve_evidence_path_none_when_unset() -> None:
    assert resolve_evidence_path({"evidence": {"file": ""}}) is None
    assert resolve_evidence_path({}) is None


def test_load_config_rejects_scalar_section(write_temp_text) -> None:
    path = write_temp_text("config.toml", 'classification = "heuristic"')
    with pytest.raises(ConfigError, match="'classification' .* must be a table"):
        load_config(path)


def test_load_config_rejects_scalar_families(write_temp_text) -> None:
    path = write_temp_text("config.toml", '[classification]\nfamilies = ["guava"]')
    with pytest.raises(ConfigError, match="classification.families"):
        load_config(path)


def test_load_config_non_utf8_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_bytes('[report]\nshow_all = false\n'.encode("utf-16"))
    with pytest.raises(ConfigError, match="Unable to read"):
        load_config(path)
