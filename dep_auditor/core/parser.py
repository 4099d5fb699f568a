"""Dependency declaration parsing for Gradle build scripts."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Pattern, Tuple

from dep_auditor.core.constants import (
    ANNOTATION_PROCESSOR_MARKERS,
    API_MARKERS,
    DEBUG_MARKERS,
    TEST_MARKERS,
)
from dep_auditor.core.models import ConfigKind, Declaration

logger = logging.getLogger(__name__)

# keyword, optional "(", quoted "group:artifact:version" literal
_COORDINATE = r"""\s*\(?\s*(['"])([^'":\s]+):([^'":\s]+):([^'"\s]+)\1"""


def _pattern(keywords: str) -> Pattern[str]:
    return re.compile(r"(?<![\w.])(?:" + keywords + r")" + _COORDINATE)


_PATTERNS: List[Tuple[ConfigKind, Pattern[str]]] = [
    (ConfigKind.IMPLEMENTATION, _pattern(r"implementation")),
    (ConfigKind.API, _pattern(r"api")),
    (
        ConfigKind.TEST,
        _pattern(r"(?:android)?[tT]est(?:Fixtures)?(?:Implementation|Api|CompileOnly|RuntimeOnly)"),
    ),
    (ConfigKind.DEBUG, _pattern(r"debug(?:Implementation|Api|CompileOnly|RuntimeOnly)")),
    (ConfigKind.ANNOTATION_PROCESSOR, _pattern(r"annotationProcessor|kapt|ksp")),
]


def detect_config_kind(line: str) -> ConfigKind:
    """Resolve the configuration kind from line content.

    Markers are checked test, debug, annotation processor, api, in that
    order; anything else is a plain implementation dependency.
    """
    lowered = line.lower()
    if any(marker in lowered for marker in TEST_MARKERS):
        return ConfigKind.TEST
    if any(marker in lowered for marker in DEBUG_MARKERS):
        return ConfigKind.DEBUG
    if any(marker.lower() in lowered for marker in ANNOTATION_PROCESSOR_MARKERS):
        return ConfigKind.ANNOTATION_PROCESSOR
    if any(marker in lowered for marker in API_MARKERS):
        return ConfigKind.API
    return ConfigKind.IMPLEMENTATION


def _parse_line(line: str, line_number: int) -> List[Declaration]:
    found: List[Declaration] = []
    config_kind = detect_config_kind(line)
    for pattern_kind, pattern in _PATTERNS:
        for match in pattern.finditer(line):
            if pattern_kind != config_kind:
                logger.debug(
                    "line %d matched the %s pattern but reads as %s",
                    line_number,
                    pattern_kind.value,
                    config_kind.value,
                )
            found.append(
                Declaration(
                    group=match.group(2),
                    artifact=match.group(3),
                    version=match.group(4),
                    line_number=line_number,
                    raw_line=line.strip(),
                    config_kind=config_kind,
                )
            )
    return found


def parse_declarations(lines: Iterable[str]) -> List[Declaration]:
    """Extract dependency declarations from manifest lines.

    Lines that hold no recognizable declaration are skipped. A line matched by
    more than one pattern yields one declaration per match.
    """
    declarations: List[Declaration] = []
    for line_number, line in enumerate(lines, 1):
        parsed = _parse_line(line, line_number)
        if len(parsed) > 1:
            logger.debug("line %d produced %d declarations", line_number, len(parsed))
        declarations.extend(parsed)

    declarations.sort(key=lambda item: item.line_number)
    logger.debug("parsed %d declarations", len(declarations))
    return declarations


def parse_manifest(text: str) -> List[Declaration]:
    """Parse raw manifest text."""
    return parse_declarations(text.splitlines())
