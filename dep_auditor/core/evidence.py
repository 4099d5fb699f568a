"""Loading of resolved-dependency evidence produced by the build tool."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, FrozenSet, Iterable, Set

import yaml

logger = logging.getLogger(__name__)

_COORDINATE_RE = re.compile(r"([\w.\-]+):([\w.\-]+):([\w.\-+]+)")
# "g:a:1.0 -> 1.2" in a `gradle dependencies` tree
_CONFLICT_RE = re.compile(r"([\w.\-]+):([\w.\-]+):([\w.\-+]+)\s*->\s*([\w.\-+]+)")


class EvidenceError(RuntimeError):
    """Raised when an evidence file cannot be read or understood."""


def coordinates_from_text(text: str) -> FrozenSet[str]:
    """Collect every group:artifact:version token in free-form text."""
    found: Set[str] = set()
    for line in text.splitlines():
        for match in _COORDINATE_RE.finditer(line):
            found.add(match.group(0))
        for match in _CONFLICT_RE.finditer(line):
            group, artifact, _, selected = match.groups()
            found.add(f"{group}:{artifact}:{selected}")
    return frozenset(found)


def _from_structured(payload: Any, path: Path) -> FrozenSet[str]:
    if isinstance(payload, dict):
        payload = payload.get("resolved")
    if payload is None:
        return frozenset()
    if not isinstance(payload, list):
        raise EvidenceError(f"Evidence file {path} must hold a list of coordinates or a 'resolved' list")
    return frozenset(_clean(payload))


def _clean(items: Iterable[Any]) -> Iterable[str]:
    for item in items:
        text = str(item).strip()
        if text:
            yield text


def load_evidence(path: Path) -> FrozenSet[str]:
    """Read resolved coordinates from a JSON, YAML or plain-text file."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise EvidenceError(f"Unable to read evidence file {path}: {exc}") from exc

    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            evidence = _from_structured(json.loads(text), path)
        elif suffix in {".yaml", ".yml"}:
            evidence = _from_structured(yaml.safe_load(text), path)
        else:
            evidence = coordinates_from_text(text)
    except json.JSONDecodeError as exc:
        raise EvidenceError(f"Invalid JSON in evidence file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise EvidenceError(f"Invalid YAML in evidence file {path}: {exc}") from exc

    logger.debug("loaded %d resolved coordinates from %s", len(evidence), path)
    return evidence
