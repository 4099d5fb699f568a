"""Markdown audit report rendering."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from dep_auditor.core.models import ClassificationResult, UsageCategory
from dep_auditor.core.report import removal_edits, summarize
from dep_auditor.utils.formatting import format_confidence, format_recommendation, format_size


def _escape_cell(value: str) -> str:
    return value.replace("|", "\\|")


def _summary_lines(summary: Dict[str, Any]) -> List[str]:
    lines = [
        f"- **Declarations:** {summary['total']}",
        f"- **Flagged for removal:** {summary['flagged']}",
        f"- **Estimated size:** {format_size(summary['estimated_total_mb'])}",
        f"- **Estimated savings:** {format_size(summary['estimated_savings_mb'])}",
    ]
    for category in UsageCategory:
        count = summary["by_category"].get(category.value)
        if count:
            lines.append(f"- {category.label}: {count}")
    return lines


def report_to_markdown(
    manifest: str,
    results: Sequence[ClassificationResult],
    mode: str,
    evidence_file: Optional[str] = None,
    flagged_only: bool = False,
) -> str:
    """Render classification results as a markdown report.

    Summary totals always cover every result; `flagged_only` narrows the table.
    """
    summary = summarize(results)
    shown = [item for item in results if item.is_flagged_for_removal] if flagged_only else list(results)
    show_recommendation = mode == "evidence"

    header = ["Line", "Dependency", "Kind", "Usage", "Confidence", "Size"]
    if show_recommendation:
        header.append("Recommendation")

    rows: List[str] = [
        "| " + " | ".join(header) + " |",
        "|" + "|".join(["---"] * len(header)) + "|",
    ]
    for result in shown:
        cells = [
            str(result.line_number),
            f"`{_escape_cell(result.coordinate)}`",
            result.config_kind.value,
            result.usage_category.label,
            format_confidence(result.confidence),
            format_size(result.estimated_size_mb),
        ]
        if show_recommendation:
            cells.append(format_recommendation(result.recommendation))
        rows.append("| " + " | ".join(cells) + " |")

    edits = removal_edits(results)
    edit_lines = [f"- line {edit['line']}: `{edit['text']}`" for edit in edits]

    source = f"\n_Resolved evidence: {evidence_file}_\n" if evidence_file else ""
    if not results:
        table = "No dependency declarations found."
    elif not shown:
        table = "No declarations flagged for removal."
    else:
        table = "\n".join(rows)
    suggestions = "\n".join(edit_lines) if edit_lines else "Nothing to remove."
    summary_text = "\n".join(_summary_lines(summary))

    return f"""# Dependency audit: {manifest}

_Mode: {mode}_
{source}
## Summary

{summary_text}

## Declarations

{table}

## Suggested removals

{suggestions}
"""


def write_report_markdown(path: Path, markdown: str) -> Path:
    """Write a rendered report to disk and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(markdown)
    return path
