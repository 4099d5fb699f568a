"""Dependency usage classification utilities."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet, Any, Dict, Iterable, List, Optional, Sequence, Tuple

from dep_auditor.core.constants import (
    ARTIFACT_SIZE_TABLE,
    DEFAULT_SIZE_MB,
    ESSENTIAL_FAMILIES,
    EVIDENCE_ABSENT_CONFIDENCE,
    FRAMEWORK_FAMILIES,
    HEURISTIC_RULES,
    HIGH_IMPACT_SIZE_MB,
    LARGE_UTILITY_FAMILIES,
    REVIEW_SIZE_MB,
)
from dep_auditor.core.models import (
    ClassificationResult,
    ConfigKind,
    Declaration,
    Recommendation,
    UsageCategory,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArtifactFamilies:
    """Name fragments used by the heuristic rule cascade."""

    essential: Tuple[str, ...] = tuple(ESSENTIAL_FAMILIES)
    large_utility: Tuple[str, ...] = tuple(LARGE_UTILITY_FAMILIES)
    framework: Tuple[str, ...] = tuple(FRAMEWORK_FAMILIES)


DEFAULT_FAMILIES = ArtifactFamilies()
DEFAULT_SIZE_TABLE: Tuple[Tuple[str, float], ...] = tuple(ARTIFACT_SIZE_TABLE)


def _matches(text: str, fragments: Sequence[str]) -> bool:
    lowered = text.lower()
    return any(fragment.lower() in lowered for fragment in fragments)


def _heuristic_verdict(
    declaration: Declaration,
    families: ArtifactFamilies,
) -> Tuple[UsageCategory, str]:
    if _matches(f"{declaration.group}:{declaration.artifact}", families.essential):
        return UsageCategory.ESSENTIAL, "essential"
    if declaration.config_kind == ConfigKind.TEST:
        return UsageCategory.TEST, "test"
    if _matches(declaration.artifact, families.large_utility):
        return UsageCategory.LIKELY_UNUSED, "large_utility"
    if _matches(declaration.artifact, families.framework):
        return UsageCategory.FRAMEWORK, "framework"
    return UsageCategory.UNKNOWN, "unknown"


def estimate_size_mb(
    artifact: str,
    size_table: Sequence[Tuple[str, float]] = DEFAULT_SIZE_TABLE,
) -> float:
    """Look up a characteristic size for an artifact family."""
    lowered = artifact.lower()
    for fragment, size_mb in size_table:
        if fragment.lower() in lowered:
            return float(size_mb)
    return DEFAULT_SIZE_MB


def recommend(size_mb: float, config_kind: ConfigKind) -> Recommendation:
    """Map an estimated size onto an action."""
    if size_mb > HIGH_IMPACT_SIZE_MB:
        return Recommendation.REMOVE_HIGH_IMPACT
    if size_mb > REVIEW_SIZE_MB:
        return Recommendation.REVIEW_LARGE
    if config_kind == ConfigKind.TEST:
        return Recommendation.TEST_ONLY
    return Recommendation.KEEP


def classify_heuristic(
    declaration: Declaration,
    families: ArtifactFamilies = DEFAULT_FAMILIES,
) -> ClassificationResult:
    """Score a declaration with name heuristics only."""
    category, rule = _heuristic_verdict(declaration, families)
    settings = HEURISTIC_RULES[rule]
    return ClassificationResult(
        declaration=declaration,
        usage_category=category,
        confidence=int(settings["confidence"]),
        estimated_size_mb=float(settings["size_mb"]),
        is_flagged_for_removal=category == UsageCategory.LIKELY_UNUSED,
        mode="heuristic",
    )


def classify_with_evidence(
    declaration: Declaration,
    evidence: AbstractSet[str],
    families: ArtifactFamilies = DEFAULT_FAMILIES,
    size_table: Sequence[Tuple[str, float]] = DEFAULT_SIZE_TABLE,
) -> ClassificationResult:
    """Score a declaration against the set of resolved coordinates."""
    flagged = declaration.coordinate not in evidence
    size_mb = estimate_size_mb(declaration.artifact, size_table)

    if flagged:
        category = UsageCategory.LIKELY_UNUSED
        confidence = EVIDENCE_ABSENT_CONFIDENCE
    else:
        category, rule = _heuristic_verdict(declaration, families)
        confidence = int(HEURISTIC_RULES[rule]["confidence"])
        if category == UsageCategory.LIKELY_UNUSED:
            # resolved by the build, so the name heuristic is overruled
            category = UsageCategory.UNKNOWN
            confidence = int(HEURISTIC_RULES["unknown"]["confidence"])

    return ClassificationResult(
        declaration=declaration,
        usage_category=category,
        confidence=confidence,
        estimated_size_mb=size_mb,
        is_flagged_for_removal=flagged,
        recommendation=recommend(size_mb, declaration.config_kind),
        mode="evidence",
    )


def classify(
    declaration: Declaration,
    evidence: Optional[AbstractSet[str]] = None,
    families: ArtifactFamilies = DEFAULT_FAMILIES,
    size_table: Sequence[Tuple[str, float]] = DEFAULT_SIZE_TABLE,
) -> ClassificationResult:
    """Classify with evidence when supplied, heuristics otherwise."""
    if evidence is None:
        return classify_heuristic(declaration, families)
    return classify_with_evidence(declaration, evidence, families, size_table)


def classify_all(
    declarations: Iterable[Declaration],
    evidence: Optional[AbstractSet[str]] = None,
    families: ArtifactFamilies = DEFAULT_FAMILIES,
    size_table: Sequence[Tuple[str, float]] = DEFAULT_SIZE_TABLE,
) -> List[ClassificationResult]:
    """Classify declarations one-to-one, preserving order."""
    results = [classify(item, evidence, families, size_table) for item in declarations]
    logger.debug(
        "classified %d declarations (%s mode)",
        len(results),
        "evidence" if evidence is not None else "heuristic",
    )
    return results


def _fragments(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value.lower()]
    if isinstance(value, Iterable):
        return [str(item).lower() for item in value if str(item).strip()]
    return []


def families_from_config(config: Dict[str, Any]) -> ArtifactFamilies:
    """Build family tables from config if provided, otherwise defaults."""
    configured = config.get("classification", {}).get("families", {})
    if not isinstance(configured, dict) or not configured:
        return DEFAULT_FAMILIES

    return ArtifactFamilies(
        essential=DEFAULT_FAMILIES.essential + tuple(_fragments(configured.get("essential"))),
        large_utility=DEFAULT_FAMILIES.large_utility
        + tuple(_fragments(configured.get("large_utility"))),
        framework=DEFAULT_FAMILIES.framework + tuple(_fragments(configured.get("framework"))),
    )


def size_table_from_config(config: Dict[str, Any]) -> Tuple[Tuple[str, float], ...]:
    """Prepend configured size estimates to the built-in table."""
    configured = config.get("classification", {}).get("sizes", {})
    if not isinstance(configured, dict) or not configured:
        return DEFAULT_SIZE_TABLE

    extra: List[Tuple[str, float]] = []
    for fragment, size_mb in configured.items():
        try:
            value = float(size_mb)
        except (TypeError, ValueError):
            continue
        if value >= 0:
            extra.append((str(fragment).lower(), value))
    return tuple(extra) + DEFAULT_SIZE_TABLE
