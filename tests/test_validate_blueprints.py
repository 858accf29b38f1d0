"""Tests for the validate_blueprints CLI."""
from __future__ import annotations

from pathlib import Path

import validate_blueprints

BLUEPRINTS_DIR = Path(__file__).resolve().parent.parent / "blueprints"


def test_shipped_blueprints_pass(capsys) -> None:
    assert validate_blueprints.main([str(BLUEPRINTS_DIR)]) == 0
    out = capsys.readouterr().out
    assert "SUMMARY: 5/5 files are valid" in out


def test_missing_directory(tmp_path: Path, capsys) -> None:
    assert validate_blueprints.main([str(tmp_path / "missing")]) == 1
    assert "not found" in capsys.readouterr().out


def test_reports_coverage_gaps(tmp_path: Path, capsys) -> None:
    (tmp_path / "other.yml").write_text(
        'type: OTHER\ndisplay_name: "Custom"\nsections: ["Parties"]\n', encoding="utf-8"
    )
    assert validate_blueprints.main([str(tmp_path)]) == 1
    out = capsys.readouterr().out
    assert "VALID: other.yml" in out
    assert "No blueprint for contract type WEDDING" in out
