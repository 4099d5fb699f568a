"""Formatting helpers used by reports and console output."""

from __future__ import annotations

from typing import Optional

from dep_auditor.core.models import ClassificationResult, Recommendation, UsageCategory

_CATEGORY_STYLES = {
    UsageCategory.ESSENTIAL: "green",
    UsageCategory.FRAMEWORK: "cyan",
    UsageCategory.TEST: "blue",
    UsageCategory.LIKELY_UNUSED: "bold red",
    UsageCategory.UNKNOWN: "yellow",
}


def format_size(size_mb: Optional[float]) -> str:
    """Format an estimated size in megabytes."""
    if size_mb is None:
        return "N/A"
    if size_mb < 1:
        return f"{size_mb * 1024:.0f} KB"
    return f"{size_mb:.1f} MB"


def format_confidence(confidence: Optional[int]) -> str:
    """Format a 0-100 confidence score."""
    if confidence is None:
        return "N/A"
    return f"{int(confidence)}%"


def format_recommendation(recommendation: Optional[Recommendation]) -> str:
    if recommendation is None:
        return "-"
    return recommendation.label


def category_markup(category: UsageCategory) -> str:
    """Rich markup for a usage category label."""
    style = _CATEGORY_STYLES.get(category, "white")
    return f"[{style}]{category.label}[/{style}]"


def format_verdict(result: ClassificationResult) -> str:
    """One-line human verdict for a classification result."""
    action = "remove?" if result.is_flagged_for_removal else "keep"
    return (
        f"line {result.line_number}: {result.coordinate} -> {result.usage_category.label} "
        f"({format_confidence(result.confidence)}, ~{format_size(result.estimated_size_mb)}) {action}"
    )
