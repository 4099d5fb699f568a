"""Shared command helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, FrozenSet, List, Optional, Tuple

import typer

from dep_auditor.core.config import resolve_evidence_path
from dep_auditor.core.constants import CLASSIFY_MODES
from dep_auditor.core.evidence import EvidenceError, load_evidence
from dep_auditor.core.state import CLIState

logger = logging.getLogger(__name__)


class ManifestError(RuntimeError):
    """Raised when the manifest file cannot be read."""


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":")))
        return
    state.console.print_json(data=payload)


def read_manifest_lines(path: Path) -> List[str]:
    """Read manifest text as a list of lines."""
    if not path.is_file():
        raise ManifestError(f"Manifest not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Unable to read manifest {path}: {exc}") from exc
    lines = text.splitlines()
    logger.debug("read %d lines from %s", len(lines), path)
    return lines


def load_manifest_or_exit(path: Path) -> List[str]:
    try:
        return read_manifest_lines(path)
    except ManifestError as exc:
        typer.echo(f"Manifest error: {exc}")
        raise typer.Exit(code=1)


def resolve_mode(
    state: CLIState,
    mode: Optional[str],
    evidence_file: Optional[Path],
) -> Tuple[str, Optional[FrozenSet[str]], Optional[Path]]:
    """Pick the classification mode and load evidence when it applies.

    Returns (mode, evidence, evidence_path). Explicit flags win over config.
    """
    chosen = mode or state.config.get("classification", {}).get("mode", "auto")
    if chosen not in CLASSIFY_MODES:
        raise typer.BadParameter(f"--mode must be one of: {', '.join(CLASSIFY_MODES)}")

    if chosen == "heuristic":
        return "heuristic", None, None

    evidence_path = resolve_evidence_path(state.config, explicit=evidence_file)
    if evidence_path is None:
        if chosen == "evidence":
            raise typer.BadParameter("evidence mode requires --evidence or [evidence].file in config")
        return "heuristic", None, None

    try:
        evidence = load_evidence(evidence_path)
    except EvidenceError as exc:
        typer.echo(f"Evidence error: {exc}")
        raise typer.Exit(code=1)
    return "evidence", evidence, evidence_path
