"""Column count check.

Every data row must have exactly three comma-separated fields. Rows with the
wrong shape cannot be interpreted, so no further checks run on them.
"""

from __future__ import annotations

from budget_validator.core.enums import IssueKind
from budget_validator.core.schemas import HEADER_COLUMNS, CsvRow
from ..config import ValidationConfig, get_severity
from ..models import ValidationResult
from . import FileState


class ColumnCountCheck:
    """Validate that a row has exactly Date, Category and Amount columns."""

    check_id = "column_count"
    halts_row = True

    def validate(
        self,
        row: CsvRow,
        state: FileState,
        config: ValidationConfig,
        result: ValidationResult,
    ) -> bool:
        if row.has_expected_width:
            return True

        found = len(row.fields)
        issue = "extra columns" if found > len(HEADER_COLUMNS) else "missing columns"
        result.record(
            get_severity(self.check_id),
            f"Line {row.line_number}: Expected exactly {len(HEADER_COLUMNS)} columns "
            f"({','.join(HEADER_COLUMNS)}) but found {found} columns ({issue}).",
            row_number=row.line_number,
            kind=IssueKind.STRUCTURAL,
            check_id=self.check_id,
        )
        return False
