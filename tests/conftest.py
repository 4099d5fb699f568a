from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

import pytest
from typer.testing import CliRunner

SAMPLE_MANIFEST = """plugins {
    id("java-library")
}

repositories { mavenCentral() }

dependencies {
    implementation("org.apache.commons:commons-lang3:3.12.0")
    implementation("com.google.guava:guava:33.0.0-jre")
    implementation("org.jetbrains.kotlin:kotlin-stdlib:1.9.22")
    testImplementation("junit:junit:4.13.2")
}
"""

GRADLE_DEPENDENCIES_DUMP = """
runtimeClasspath - Runtime classpath of source set 'main'.
+--- com.google.guava:guava:33.0.0-jre
|    +--- com.google.guava:failureaccess:1.0.2
|    \\--- com.google.guava:listenablefuture:9999.0-empty-to-avoid-conflict-with-guava
+--- org.jetbrains.kotlin:kotlin-stdlib:1.9.0 -> 1.9.22
\\--- junit:junit:4.13.2
"""


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    path = tmp_path / "no-config.toml"
    monkeypatch.setenv("DEP_AUDITOR_CONFIG_FILE", str(path))
    monkeypatch.delenv("DEP_AUDITOR_EVIDENCE_FILE", raising=False)
    return path


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner(env={"COLUMNS": "200"})


@pytest.fixture()
def sample_manifest_text() -> str:
    return SAMPLE_MANIFEST


@pytest.fixture()
def sample_manifest_lines() -> List[str]:
    return SAMPLE_MANIFEST.splitlines()


@pytest.fixture()
def sample_manifest(tmp_path: Path) -> Path:
    path = tmp_path / "build.gradle.kts"
    path.write_text(SAMPLE_MANIFEST)
    return path


@pytest.fixture()
def sample_evidence() -> frozenset:
    return frozenset(
        {
            "com.google.guava:guava:33.0.0-jre",
            "org.jetbrains.kotlin:kotlin-stdlib:1.9.22",
            "junit:junit:4.13.2",
        }
    )


@pytest.fixture()
def gradle_dump_text() -> str:
    return GRADLE_DEPENDENCIES_DUMP


@pytest.fixture()
def write_temp_json(tmp_path: Path):
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, indent=2) + "\n")
        return path

    return _write


@pytest.fixture()
def write_temp_text(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write
