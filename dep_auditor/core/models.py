"""Lightweight data models shared by the parser, classifier and reports."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from dep_auditor.core.constants import CATEGORY_LABELS, RECOMMENDATION_LABELS


class ConfigKind(str, Enum):
    """Declared usage scope of a dependency."""

    IMPLEMENTATION = "implementation"
    API = "api"
    TEST = "test"
    DEBUG = "debug"
    ANNOTATION_PROCESSOR = "annotationProcessor"


class UsageCategory(str, Enum):
    """Heuristic verdict on how essential a dependency is."""

    ESSENTIAL = "ESSENTIAL"
    FRAMEWORK = "FRAMEWORK"
    TEST = "TEST"
    LIKELY_UNUSED = "LIKELY_UNUSED"
    UNKNOWN = "UNKNOWN"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self.value]


class Recommendation(str, Enum):
    """Size-driven action suggested in evidence mode."""

    REMOVE_HIGH_IMPACT = "REMOVE_HIGH_IMPACT"
    REVIEW_LARGE = "REVIEW_LARGE"
    TEST_ONLY = "TEST_ONLY"
    KEEP = "KEEP"

    @property
    def label(self) -> str:
        return RECOMMENDATION_LABELS[self.value]


@dataclass(frozen=True)
class Declaration:
    """One parsed dependency statement with its source position."""

    group: str
    artifact: str
    version: str
    line_number: int
    raw_line: str
    config_kind: ConfigKind

    @property
    def coordinate(self) -> str:
        return f"{self.group}:{self.artifact}:{self.version}"


@dataclass(frozen=True)
class ClassificationResult:
    """Scored recommendation for a single declaration."""

    declaration: Declaration
    usage_category: UsageCategory
    confidence: int
    estimated_size_mb: float
    is_flagged_for_removal: bool
    recommendation: Optional[Recommendation] = None
    mode: str = "heuristic"

    @property
    def group(self) -> str:
        return self.declaration.group

    @property
    def artifact(self) -> str:
        return self.declaration.artifact

    @property
    def version(self) -> str:
        return self.declaration.version

    @property
    def line_number(self) -> int:
        return self.declaration.line_number

    @property
    def raw_line(self) -> str:
        return self.declaration.raw_line

    @property
    def config_kind(self) -> ConfigKind:
        return self.declaration.config_kind

    @property
    def coordinate(self) -> str:
        return self.declaration.coordinate

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group": self.group,
            "artifact": self.artifact,
            "version": self.version,
            "coordinate": self.coordinate,
            "line_number": self.line_number,
            "raw_line": self.raw_line,
            "config_kind": self.config_kind.value,
            "usage_category": self.usage_category.value,
            "confidence": self.confidence,
            "estimated_size_mb": self.estimated_size_mb,
            "is_flagged_for_removal": self.is_flagged_for_removal,
            "recommendation": self.recommendation.value if self.recommendation else None,
            "mode": self.mode,
        }


def declaration_to_dict(declaration: Declaration) -> Dict[str, Any]:
    """Serialize a declaration for JSON output."""
    return {
        "group": declaration.group,
        "artifact": declaration.artifact,
        "version": declaration.version,
        "coordinate": declaration.coordinate,
        "line_number": declaration.line_number,
        "raw_line": declaration.raw_line,
        "config_kind": declaration.config_kind.value,
    }
