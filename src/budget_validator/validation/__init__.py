"""Validation system for budget CSV data.

This module provides a layered validation framework:

- **Fields**: is_numeric(), is_valid_date()... - predicates on one cell value
- **Cross-field**: CrossFieldValidator - rules spanning fields and records
- **Models**: ValidationMessage, ValidationResult - severity-tagged findings
- **Checks**: Per-row rules run by the file validator (see validation/checks/)
- **Engine**: ValidationEngine, aggregate_results() - file validation and rollups
- **Config**: Tolerances, category sets, ValidationConfig, load_config()

Public API:
    ValidationEngine: Validate CSV lines, transactions, budgets and free text
    ValidationResult: Accumulated findings with has_errors() and reports
    aggregate_results: Merge several results into a new one
    run_validation: Validate a CSV file on disk
    print_report: Display a result on the console

Usage:
    >>> from budget_validator.validation import ValidationEngine
    >>> engine = ValidationEngine()
    >>> result = engine.validate_csv_lines(["Date,Category,Amount", "01/15/2024,Food,-50"])
    >>> result.has_errors()
    False
"""

from __future__ import annotations

from .config import DEFAULT_CONFIG, ValidationConfig, load_config
from .cross_field import CrossFieldValidator
from .engine import ValidationEngine, aggregate_results
from .models import ValidationMessage, ValidationResult
from .registry import print_report, run_validation

__all__ = [
    # Data models
    "ValidationMessage",
    "ValidationResult",
    # Validators
    "CrossFieldValidator",
    "ValidationEngine",
    "aggregate_results",
    # Config
    "DEFAULT_CONFIG",
    "ValidationConfig",
    "load_config",
    # Runner functions
    "run_validation",
    "print_report",
]
