"""JSON export helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from dep_auditor.core.models import ClassificationResult
from dep_auditor.core.report import removal_edits, summarize


def report_payload(
    manifest: str,
    results: Sequence[ClassificationResult],
    mode: str,
    evidence_file: Optional[str] = None,
) -> Dict[str, Any]:
    """Build the JSON-ready audit report."""
    return {
        "manifest": manifest,
        "mode": mode,
        "evidence_file": evidence_file,
        "summary": summarize(results),
        "results": [result.to_dict() for result in results],
        "removal_edits": removal_edits(results),
    }


def write_json(path: Path, payload: Any) -> Path:
    """Write payload as pretty JSON and return path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2) + "\n")
    return path
