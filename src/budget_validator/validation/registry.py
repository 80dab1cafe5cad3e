"""Row check registry and file runner.

This module orchestrates file validation:
- ALL_ROW_CHECKS: Ordered list of row check instances run on every data row
- run_validation(): Reads a CSV file from disk and returns its ValidationResult
- print_report(): Displays validation results to console
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from .checks.allowed_category import AllowedCategoryCheck
from .checks.column_count import ColumnCountCheck
from .checks.date_consistency import DateConsistencyCheck
from .checks.duplicate_rows import DuplicateRowsCheck
from .checks.numeric_amount import NumericAmountCheck
from .checks.required_fields import RequiredFieldsCheck
from .config import ValidationConfig
from .models import ValidationResult

logger = logging.getLogger(__name__)


# Order matters: structural checks halt the row before field checks run
ALL_ROW_CHECKS = [
    # Structure
    ColumnCountCheck(),
    RequiredFieldsCheck(),
    # Fields and cross-row state
    DateConsistencyCheck(),
    AllowedCategoryCheck(),
    NumericAmountCheck(),
    # Advisories
    DuplicateRowsCheck(),
]


def run_validation(
    csv_path: Union[str, Path], config: Optional[ValidationConfig] = None
) -> ValidationResult:
    """Validate a CSV file on disk.

    Args:
        csv_path: Path to a Date,Category,Amount CSV file.
        config: Validation settings; defaults to DEFAULT_CONFIG.

    Returns:
        ValidationResult for the whole file.

    Raises:
        FileNotFoundError: If the CSV file does not exist.
        ValueError: If the file cannot be read or decoded.

    Examples:
        >>> result = run_validation(Path("data/2024_budget.csv"))
        >>> print(result.summary())
    """
    from .engine import ValidationEngine

    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(f"CSV file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ValueError(f"Failed to read CSV file {path}: {e}") from e

    lines = text.splitlines()
    logger.debug("Read %d lines from %s", len(lines), path)

    result = ValidationEngine(config).validate_csv_lines(lines, file_name=path.name)
    if result.has_errors():
        logger.info(
            "Rejected %s: %d errors, %d warnings",
            path.name,
            result.get_error_count(),
            result.get_warning_count(),
        )
    else:
        logger.info("Accepted %s (%d warnings)", path.name, result.get_warning_count())
    return result


def print_report(result: ValidationResult, max_examples: Optional[int] = None) -> None:
    """Print a validation result to the console.

    Displays the summary followed by every finding (or the first
    `max_examples` of them).

    Examples:
        >>> print_report(result)
        ValidationResult Summary: errors=1, warnings=0, invalid rows=1, valid rows=3

        Findings:
        ❌ Line 4: Amount 'abc' is not a valid integer number.
    """
    print(result.summary())
    print()

    messages = result.messages
    if not messages:
        print("✅ All validation checks passed!")
        return

    print("Findings:")
    shown = messages if max_examples is None else messages[:max_examples]
    for message in shown:
        icon = "❌" if message.is_error else "⚠️"
        print(f"{icon} {message.text}")
    if len(shown) < len(messages):
        print(f"   ... and {len(messages) - len(shown)} more")
