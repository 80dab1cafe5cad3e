"""Tests for cmd_validate CLI function."""

from __future__ import annotations

import argparse
import json

import pytest

from budget_validator.interfaces.cli.main import build_parser, cmd_validate, main

HEADER = "Date,Category,Amount"


def _args(**overrides) -> argparse.Namespace:
    values = {
        "csv_files": [],
        "config": None,
        "categories": None,
        "max_examples": None,
        "report": False,
        "report_json": False,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


class TestCmdValidate:
    """Tests for cmd_validate function."""

    def test_valid_file_returns_zero(self, write_csv):
        path = write_csv([HEADER, "01/15/2024,Food,-50"])
        assert cmd_validate(_args(csv_files=[str(path)])) == 0

    def test_rejected_file_returns_two(self, write_csv):
        path = write_csv([HEADER, "01/15/2024,Food,-50", "02/01/2025,Food,-10"])
        assert cmd_validate(_args(csv_files=[str(path)])) == 2

    def test_missing_file_returns_one(self, tmp_path):
        assert cmd_validate(_args(csv_files=[str(tmp_path / "missing.csv")])) == 1

    def test_missing_file_among_valid_ones(self, write_csv, tmp_path):
        path = write_csv([HEADER, "01/15/2024,Food,-50"])
        args = _args(csv_files=[str(path), str(tmp_path / "missing.csv")])
        assert cmd_validate(args) == 0

    def test_categories_override(self, write_csv):
        path = write_csv([HEADER, "01/15/2024,Rent,-50"])
        assert cmd_validate(_args(csv_files=[str(path)])) == 2
        assert cmd_validate(_args(csv_files=[str(path)], categories="Rent, Food")) == 0

    def test_config_file(self, write_csv, tmp_path):
        path = write_csv([HEADER, "01/15/2024,Rent,-50"])
        config_path = tmp_path / "validation.yaml"
        config_path.write_text("allowed_categories: [Rent]\n", encoding="utf-8")
        assert cmd_validate(_args(csv_files=[str(path)], config=str(config_path))) == 0

    def test_invalid_config_returns_two(self, write_csv, tmp_path):
        path = write_csv([HEADER, "01/15/2024,Food,-50"])
        config_path = tmp_path / "validation.yaml"
        config_path.write_text("unknown_key: 1\n", encoding="utf-8")
        assert cmd_validate(_args(csv_files=[str(path)], config=str(config_path))) == 2

    def test_report_next_to_csv(self, write_csv):
        path = write_csv([HEADER, "01/15/2024,Food,abc"])
        cmd_validate(_args(csv_files=[str(path)], report=True, report_json=True))

        markdown = path.parent / "2024_budget_validation.md"
        report_json = path.parent / "2024_budget_validation.json"
        assert markdown.exists()
        assert "# Validation Report: 2024_budget.csv" in markdown.read_text(encoding="utf-8")
        data = json.loads(report_json.read_text(encoding="utf-8"))
        assert data["summary"]["accepted"] is False

    def test_report_custom_directory(self, write_csv, tmp_path):
        path = write_csv([HEADER, "01/15/2024,Food,-5"])
        report_dir = tmp_path / "reports"
        cmd_validate(_args(csv_files=[str(path)], report=str(report_dir)))
        assert (report_dir / "2024_budget_validation.md").exists()

    def test_partial_namespace(self, write_csv):
        """Optional arguments may be absent from the namespace."""
        path = write_csv([HEADER, "01/15/2024,Food,-5"])
        assert cmd_validate(argparse.Namespace(csv_files=[str(path)])) == 0


class TestParser:
    def test_validate_arguments(self):
        args = build_parser().parse_args(
            ["--verbose", "validate", "a.csv", "b.csv", "--categories", "Food", "--report"]
        )
        assert args.csv_files == ["a.csv", "b.csv"]
        assert args.categories == "Food"
        assert args.report is True
        assert args.report_json is False
        assert args.func is cmd_validate

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_main_exit_code(self, write_csv):
        path = write_csv([HEADER, "01/15/2024,Food,abc"])
        assert main(["--errors-only", "validate", str(path)]) == 2
