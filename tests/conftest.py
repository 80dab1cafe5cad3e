"""Shared pytest configuration and fixtures for budget CSV validation tests."""

from pathlib import Path
from typing import Callable, List

import pytest

from budget_validator.validation.engine import ValidationEngine

HEADER = "Date,Category,Amount"


@pytest.fixture
def engine() -> ValidationEngine:
    """A ValidationEngine with default configuration."""
    return ValidationEngine()


@pytest.fixture
def valid_lines() -> List[str]:
    """A small, fully valid CSV file as lines."""
    return [
        HEADER,
        "01/15/2024,Food,-50",
        "01/20/2024,Savings,100",
        "02/01/2024,Compensation,2500",
        "02/03/2024,Transportation,-35",
    ]


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Write lines to a CSV file under tmp_path and return its path."""

    def _write(lines: List[str], name: str = "2024_budget.csv") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
