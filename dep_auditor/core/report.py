"""Summary totals and removal suggestions for classification results."""

from __future__ import annotations

import difflib
from collections import Counter
from typing import Any, Dict, List, Sequence

from dep_auditor.core.models import ClassificationResult


def summarize(results: Sequence[ClassificationResult]) -> Dict[str, Any]:
    """Aggregate counts and estimated sizes."""
    by_category: Counter = Counter()
    by_recommendation: Counter = Counter()
    flagged = 0
    flagged_mb = 0.0
    total_mb = 0.0

    for result in results:
        by_category[result.usage_category.value] += 1
        if result.recommendation is not None:
            by_recommendation[result.recommendation.value] += 1
        total_mb += result.estimated_size_mb
        if result.is_flagged_for_removal:
            flagged += 1
            flagged_mb += result.estimated_size_mb

    return {
        "total": len(results),
        "flagged": flagged,
        "by_category": dict(by_category),
        "by_recommendation": dict(by_recommendation),
        "estimated_total_mb": round(total_mb, 2),
        "estimated_savings_mb": round(flagged_mb, 2),
    }


def removal_edits(results: Sequence[ClassificationResult]) -> List[Dict[str, Any]]:
    """List single-line deletions for flagged declarations, one per line."""
    edits: List[Dict[str, Any]] = []
    seen_lines = set()
    for result in results:
        if not result.is_flagged_for_removal or result.line_number in seen_lines:
            continue
        seen_lines.add(result.line_number)
        edits.append(
            {
                "line": result.line_number,
                "text": result.raw_line,
                "coordinate": result.coordinate,
                "estimated_size_mb": result.estimated_size_mb,
            }
        )
    return edits


def removal_patch(
    lines: Sequence[str],
    results: Sequence[ClassificationResult],
    path: str = "build.gradle.kts",
) -> str:
    """Render a unified diff that would delete every flagged line.

    Only the diff text is produced; the manifest itself is left untouched.
    """
    drop = {edit["line"] for edit in removal_edits(results)}
    if not drop:
        return ""

    original = [line.rstrip("\r\n") + "\n" for line in lines]
    kept = [line for number, line in enumerate(original, 1) if number not in drop]
    diff = difflib.unified_diff(original, kept, fromfile=f"a/{path}", tofile=f"b/{path}")
    return "".join(diff)
