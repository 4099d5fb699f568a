from __future__ import annotations

from pathlib import Path

import pytest

from dep_auditor.core.evidence import EvidenceError, coordinates_from_text, load_evidence


def test_coordinates_from_gradle_dump(gradle_dump_text: str) -> None:
    evidence = coordinates_from_text(gradle_dump_text)
    assert "com.google.guava:guava:33.0.0-jre" in evidence
    assert "com.google.guava:failureaccess:1.0.2" in evidence
    assert "junit:junit:4.13.2" in evidence


def test_conflict_lines_record_requested_and_selected(gradle_dump_text: str) -> None:
    evidence = coordinates_from_text(gradle_dump_text)
    assert "org.jetbrains.kotlin:kotlin-stdlib:1.9.0" in evidence
    assert "org.jetbrains.kotlin:kotlin-stdlib:1.9.22" in evidence


def test_coordinates_from_text_empty() -> None:
    assert coordinates_from_text("") == frozenset()
    assert coordinates_from_text("BUILD SUCCESSFUL in 2s") == frozenset()


def test_load_evidence_from_text_file(write_temp_text, gradle_dump_text: str) -> None:
    path = write_temp_text("deps.txt", gradle_dump_text)
    assert "junit:junit:4.13.2" in load_evidence(path)


def test_load_evidence_from_json_list(write_temp_json) -> None:
    path = write_temp_json("resolved.json", ["a:b:1", " c:d:2 ", ""])
    assert load_evidence(path) == frozenset({"a:b:1", "c:d:2"})


def test_load_evidence_from_json_object(write_temp_json) -> None:
    path = write_temp_json("resolved.json", {"resolved": ["a:b:1"]})
    assert load_evidence(path) == frozenset({"a:b:1"})


def test_load_evidence_from_yaml(write_temp_text) -> None:
    path = write_temp_text(
        "resolved.yaml",
        """
resolved:
  - com.google.guava:guava:33.0.0-jre
  - junit:junit:4.13.2
""",
    )
    assert load_evidence(path) == frozenset(
        {"com.google.guava:guava:33.0.0-jre", "junit:junit:4.13.2"}
    )


def test_load_evidence_empty_yaml_is_empty_set(write_temp_text) -> None:
    path = write_temp_text("resolved.yml", "# nothing resolved")
    assert load_evidence(path) == frozenset()


def test_load_evidence_rejects_non_list_json(write_temp_json) -> None:
    path = write_temp_json("resolved.json", {"resolved": "a:b:1"})
    with pytest.raises(EvidenceError, match="list of coordinates"):
        load_evidence(path)


def test_load_evidence_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "resolved.json"
    path.write_text("{not json")
    with pytest.raises(EvidenceError, match="Invalid JSON"):
        load_evidence(path)


def test_load_evidence_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "resolved.yaml"
    path.write_text("resolved: [unclosed")
    with pytest.raises(EvidenceError, match="Invalid YAML"):
        load_evidence(path)


def test_load_evidence_missing_file(tmp_path: Path) -> None:
    with pytest.raises(EvidenceError, match="Unable to read"):
        load_evidence(tmp_path / "missing.txt")


def test_load_evidence_rejects_non_utf8_file(tmp_path: Path) -> None:
    path = tmp_path / "deps.txt"
    path.write_bytes("+--- com.google.guava:guava:33.0.0-jre\n".encode("utf-16"))
    with pytest.raises(EvidenceError, match="Unable to read"):
        load_evidence(path)
