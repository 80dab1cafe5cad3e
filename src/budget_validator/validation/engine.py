"""File-level validation engine.

Coordinates the row checks over a whole CSV input and composes the
cross-field rules for transactions, budgets and report criteria.

Severity policy:
    - ERRORS reject the file: empty file, bad header, and any row-level
      problem (wrong column count, missing field, bad date, year mismatch,
      unknown category, non-numeric amount).
    - WARNINGS are advisory: duplicate rows, file name year mismatch,
      header-only files, overly long free text.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Sequence

from budget_validator.core.enums import IssueKind
from budget_validator.core.schemas import EXPECTED_HEADER, CsvRow
from .checks import FileState, RowCheck
from .config import DEFAULT_CONFIG, ValidationConfig
from .cross_field import CrossFieldValidator
from .fields import is_non_empty, is_valid_date
from .models import ValidationResult
from .registry import ALL_ROW_CHECKS

logger = logging.getLogger(__name__)

_FILE_NAME_YEAR_RE = re.compile(r"20\d{2}")
_MAX_LISTED_ROWS = 10
_MAX_EXAMPLES = 5


def aggregate_results(*results: Optional[ValidationResult]) -> ValidationResult:
    """Combine several results into a new rollup.

    None entries are skipped. Each message keeps the severity it was created
    with; the source results are left untouched.

    Examples:
        >>> aggregate_results().has_errors()
        False
        >>> aggregate_results(None, ValidationResult.error("bad")).get_error_count()
        1
    """
    combined = ValidationResult()
    for result in results:
        combined.merge(result)
    return combined


def _is_blank(line: Optional[str]) -> bool:
    return line is None or not line.strip()


class ValidationEngine:
    """Top-level validation entry points.

    Args:
        config: Validation settings; defaults to DEFAULT_CONFIG.
        row_checks: Row checks to run, in order; defaults to ALL_ROW_CHECKS.

    Examples:
        >>> engine = ValidationEngine()
        >>> result = engine.validate_csv_lines(
        ...     ["Date,Category,Amount", "01/15/2024,Food,-50"]
        ... )
        >>> result.has_errors()
        False
    """

    def __init__(
        self,
        config: Optional[ValidationConfig] = None,
        row_checks: Optional[Sequence[RowCheck]] = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.row_checks: List[RowCheck] = list(ALL_ROW_CHECKS if row_checks is None else row_checks)
        self.cross_field = CrossFieldValidator(self.config)

    # ------------------------------------------------------------------
    # CSV files
    # ------------------------------------------------------------------

    def validate_csv_lines(
        self,
        lines: Optional[Sequence[Optional[str]]],
        file_name: Optional[str] = None,
        allowed_categories: Optional[Iterable[str]] = None,
    ) -> ValidationResult:
        """Validate a CSV file given as a list of lines (header included).

        All rows are checked in one pass so every problem is reported at once;
        the file should be accepted only if the result has no errors.

        Args:
            lines: All lines of the file, header first.
            file_name: Optional file name; a 20xx year in it is compared with
                the year of the data rows.
            allowed_categories: Overrides the configured category list for
                this call.

        Returns:
            ValidationResult with per-row tracking.
        """
        config = self.config
        if allowed_categories is not None:
            config = config.with_categories(allowed_categories)

        result = ValidationResult()
        if not lines:
            result.add_error("CSV file is empty.", kind=IssueKind.STRUCTURAL, check_id="header")
            return result

        header = (lines[0] or "").strip()
        if header != EXPECTED_HEADER:
            result.add_error(
                f"Invalid CSV header. Expected exactly: '{EXPECTED_HEADER}' but found: "
                f"'{header}'.",
                kind=IssueKind.STRUCTURAL,
                check_id="header",
            )

        state = FileState()
        data_rows = 0
        for index, line in enumerate(lines[1:], start=2):
            if _is_blank(line):
                continue
            data_rows += 1
            row = CsvRow.from_line(line.rstrip("\r\n"), index)
            self._run_row_checks(row, state, config, result)

        if data_rows == 0:
            result.add_warning(
                "CSV file has a header but no data rows.",
                kind=IssueKind.ADVISORY,
                check_id="header",
            )
        elif file_name:
            self._check_file_name_year(file_name, state, result)

        logger.debug("Validated %d data rows: %s", data_rows, result.summary())
        return result

    def _run_row_checks(
        self,
        row: CsvRow,
        state: FileState,
        config: ValidationConfig,
        result: ValidationResult,
    ) -> None:
        for check in self.row_checks:
            passed = check.validate(row, state, config, result)
            if not passed and check.halts_row:
                break
        if not result.has_row_errors(row.line_number):
            result.mark_row_valid(row.line_number)

    def _check_file_name_year(
        self, file_name: str, state: FileState, result: ValidationResult
    ) -> None:
        if result.has_errors() or state.file_year is None:
            return
        match = _FILE_NAME_YEAR_RE.search(file_name)
        if match is None:
            return
        name_year = int(match.group())
        if name_year != state.file_year:
            result.add_warning(
                f"File name year ({name_year}) does not match CSV date year "
                f"({state.file_year}).",
                kind=IssueKind.ADVISORY,
                check_id="file_name_year",
            )

    def filter_valid_rows(
        self, lines: Optional[Sequence[str]], result: Optional[ValidationResult]
    ) -> List[str]:
        """Return the data lines whose rows passed validation, in file order."""
        if not lines or result is None:
            return []
        return [
            lines[row_number - 1]
            for row_number in result.get_valid_row_numbers()
            if 1 < row_number <= len(lines)
        ]

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def validate_user_input(self, field_name: Optional[str], value: Optional[str]) -> ValidationResult:
        """Validate a free-text value: required, and warned when very long."""
        result = ValidationResult()
        if field_name is None:
            result.add_error("Field name cannot be None.", kind=IssueKind.PRECONDITION)
            return result
        if not is_non_empty(value):
            result.add_error(f"{field_name} cannot be empty.", kind=IssueKind.FIELD)
            return result
        if len(value.strip()) > self.config.max_text_length:
            result.add_warning(
                f"{field_name} is very long (over {self.config.max_text_length} characters).",
                kind=IssueKind.ADVISORY,
            )
        return result

    def validate_transaction(self, transaction) -> ValidationResult:
        """Validate a transaction's date, category syntax and amount sign."""
        if transaction is None:
            return ValidationResult.error(
                "Transaction cannot be None.", kind=IssueKind.PRECONDITION
            )
        date_result = ValidationResult()
        if not is_valid_date(transaction.date):
            date_result.add_error(
                f"Transaction date '{transaction.date}' is not a valid MM/DD/YYYY date.",
                kind=IssueKind.FIELD,
                check_id="transaction_date",
            )
        return aggregate_results(
            date_result,
            self.cross_field.validate_category_hierarchy(transaction.category),
            self.cross_field.validate_income_vs_expense(transaction),
        )

    def validate_budget(self, budget) -> ValidationResult:
        """Validate a budget's balance and the syntax of its category names."""
        if budget is None:
            return ValidationResult.error("Budget cannot be None.", kind=IssueKind.PRECONDITION)
        results = [self.cross_field.validate_budget_balance(budget)]
        for name in (budget.categories or {}):
            results.append(self.cross_field.validate_category_hierarchy(name))
        return aggregate_results(*results)

    def validate_report_criteria(self, criteria) -> ValidationResult:
        """Validate a report's date range and category filters."""
        if criteria is None:
            return ValidationResult.error(
                "Report criteria cannot be None.", kind=IssueKind.PRECONDITION
            )
        results = [self.cross_field.validate_period(criteria)]
        for name in criteria.categories or ():
            results.append(self.cross_field.validate_category_hierarchy(name))
        return aggregate_results(*results)

    def aggregate_results(self, *results: Optional[ValidationResult]) -> ValidationResult:
        return aggregate_results(*results)

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def generate_validation_summary(self, result: Optional[ValidationResult]) -> str:
        """Build a user-facing explanation of a file validation outcome."""
        if result is None:
            return "No validation results available."

        lines: List[str] = []
        if result.has_errors():
            lines.append("❌ Critical errors found - upload blocked:")
            lines.append("")
            lines.extend(f"  {m.text}" for m in result.errors)
            return "\n".join(lines) + "\n"

        warnings = result.warnings
        if not warnings:
            lines.append("✓ All rows are valid! Ready to import.")
            lines.append(f"Total valid rows: {result.get_valid_row_count()}")
            return "\n".join(lines)

        lines.append("⚠ Validation found advisories:")
        lines.append(f"- Valid rows: {result.get_valid_row_count()}")
        flagged = sorted({m.row_number for m in warnings if m.row_number is not None})
        if flagged:
            shown = ", ".join(str(n) for n in flagged[:_MAX_LISTED_ROWS])
            more = len(flagged) - _MAX_LISTED_ROWS
            suffix = f" ... and {more} more" if more > 0 else ""
            lines.append(f"- Rows with warnings: {shown}{suffix}")
        lines.append("")
        lines.append("Example issues:")
        lines.extend(f"  {m.text}" for m in warnings[:_MAX_EXAMPLES])
        if len(warnings) > _MAX_EXAMPLES:
            lines.append(f"  ... and {len(warnings) - _MAX_EXAMPLES} more issues")
        return "\n".join(lines) + "\n"
