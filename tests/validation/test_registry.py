"""Unit tests for the row check registry and file runner."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from budget_validator.validation import run_validation
from budget_validator.validation.config import ValidationConfig
from budget_validator.validation.engine import ValidationEngine
from budget_validator.validation.registry import ALL_ROW_CHECKS, print_report

HEADER = "Date,Category,Amount"


def test_structural_checks_run_first():
    check_ids = [check.check_id for check in ALL_ROW_CHECKS]
    assert check_ids[:2] == ["column_count", "required_fields"]
    assert all(check.halts_row for check in ALL_ROW_CHECKS[:2])
    assert not any(check.halts_row for check in ALL_ROW_CHECKS[2:])


def test_halting_check_stops_later_checks():
    halting = MagicMock(check_id="stop", halts_row=True)
    halting.validate.return_value = False
    later = MagicMock(check_id="later", halts_row=False)
    later.validate.return_value = True

    engine = ValidationEngine(row_checks=[halting, later])
    engine.validate_csv_lines([HEADER, "01/15/2024,Food,-5"])

    assert halting.validate.call_count == 1
    later.validate.assert_not_called()


def test_non_halting_failure_continues():
    failing = MagicMock(check_id="soft", halts_row=False)
    failing.validate.return_value = False
    later = MagicMock(check_id="later", halts_row=False)
    later.validate.return_value = True

    engine = ValidationEngine(row_checks=[failing, later])
    engine.validate_csv_lines([HEADER, "01/15/2024,Food,-5", "01/16/2024,Food,-5"])

    assert later.validate.call_count == 2


def test_run_validation_valid_file(write_csv):
    path = write_csv([HEADER, "01/15/2024,Food,-50", "01/20/2024,Savings,100"])
    result = run_validation(path)
    assert result.has_errors() is False
    assert result.get_valid_row_count() == 2


def test_run_validation_accepts_str_path(write_csv):
    path = write_csv([HEADER, "01/15/2024,Food,-50"])
    assert run_validation(str(path)).has_errors() is False


def test_run_validation_strips_bom(tmp_path: Path):
    path = tmp_path / "bom.csv"
    path.write_text("\ufeff" + HEADER + "\n01/15/2024,Food,-50\n", encoding="utf-8")
    assert run_validation(path).has_errors() is False


def test_run_validation_rejects_year_mismatch(write_csv):
    path = write_csv([HEADER, "01/15/2024,Food,-50", "02/01/2025,Food,-10"])
    result = run_validation(path)
    assert result.has_errors() is True


def test_run_validation_uses_config(write_csv):
    path = write_csv([HEADER, "01/15/2024,Rent,-50"])
    assert run_validation(path).has_errors() is True
    config = ValidationConfig(allowed_categories=("Rent",))
    assert run_validation(path, config).has_errors() is False


def test_run_validation_file_name_year(write_csv):
    path = write_csv([HEADER, "01/15/2024,Food,-50"], name="export_2023.csv")
    result = run_validation(path)
    assert result.has_errors() is False
    assert [m.check_id for m in result.warnings] == ["file_name_year"]


def test_run_validation_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError, match="CSV file not found"):
        run_validation(tmp_path / "missing.csv")


def test_run_validation_undecodable_file(tmp_path: Path):
    path = tmp_path / "binary.csv"
    path.write_bytes(b"\xff\xfe\x00\x81")
    with pytest.raises(ValueError, match="Failed to read CSV file"):
        run_validation(path)


def test_print_report(write_csv, capsys):
    path = write_csv([HEADER, "01/15/2024,Food,abc", "01/16/2024,Food,xyz"])
    print_report(run_validation(path), max_examples=1)
    out = capsys.readouterr().out
    assert "ValidationResult Summary: errors=2" in out
    assert "❌ Line 2: Amount 'abc'" in out
    assert "xyz" not in out
    assert "... and 1 more" in out


def test_print_report_all_passed(write_csv, capsys):
    print_report(run_validation(write_csv([HEADER, "01/15/2024,Food,-5"])))
    assert "All validation checks passed" in capsys.readouterr().out
