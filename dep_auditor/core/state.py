"""Runtime state shared by CLI commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple

from rich.console import Console

from dep_auditor.core.classify import ArtifactFamilies, families_from_config, size_table_from_config


@dataclass
class CLIState:
    """Global options, loaded configuration and the lookup tables built from it."""

    json_output: bool
    plain_output: bool
    verbose: bool
    quiet: bool
    config_path: Path
    config: Dict[str, Any]
    console: Console
    families: ArtifactFamilies = field(init=False)
    size_table: Tuple[Tuple[str, float], ...] = field(init=False)

    def __post_init__(self) -> None:
        self.families = families_from_config(self.config)
        self.size_table = size_table_from_config(self.config)
