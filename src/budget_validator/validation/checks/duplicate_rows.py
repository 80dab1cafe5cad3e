"""Duplicate rows check.

A row repeating the date, category and amount of an earlier row is usually a
double entry. Repeats may be legitimate (two identical purchases on one day),
so they are reported as warnings and do not reject the file.
"""

from __future__ import annotations

from budget_validator.core.enums import IssueKind
from budget_validator.core.schemas import CsvRow
from ..config import ValidationConfig, get_severity
from ..models import ValidationResult
from . import FileState


class DuplicateRowsCheck:
    """Flag rows identical to an earlier row of the same file."""

    check_id = "duplicate_rows"
    halts_row = False

    def validate(
        self,
        row: CsvRow,
        state: FileState,
        config: ValidationConfig,
        result: ValidationResult,
    ) -> bool:
        if not config.flag_duplicate_rows:
            return True

        key = (row.date, row.category.lower(), row.amount)
        first_line = state.seen_rows.get(key)
        if first_line is None:
            state.seen_rows[key] = row.line_number
            return True

        result.record(
            get_severity(self.check_id),
            f"Line {row.line_number}: Duplicate of line {first_line} "
            f"({row.date}, {row.category}, {row.amount}).",
            row_number=row.line_number,
            kind=IssueKind.SEMANTIC,
            check_id=self.check_id,
        )
        return False
