"""Date validity and year consistency check.

Dates must be real calendar dates in MM/DD/YYYY form. The first valid date
of a file fixes the file year; every later row must fall in the same year.
"""

from __future__ import annotations

from budget_validator.core.enums import IssueKind
from budget_validator.core.schemas import DATE_FORMAT, CsvRow
from ..config import ValidationConfig, get_severity
from ..fields import extract_year, is_valid_date
from ..models import ValidationResult
from . import FileState


class DateConsistencyCheck:
    """Validate the row date and keep all rows within one year."""

    check_id = "date_consistency"
    halts_row = False

    def validate(
        self,
        row: CsvRow,
        state: FileState,
        config: ValidationConfig,
        result: ValidationResult,
    ) -> bool:
        severity = get_severity(self.check_id)

        if not is_valid_date(row.date):
            result.record(
                severity,
                f"Line {row.line_number}: Invalid date '{row.date}'. Date must be in "
                f"{DATE_FORMAT} format with a valid month (01-12), day and year.",
                row_number=row.line_number,
                kind=IssueKind.FIELD,
                check_id=self.check_id,
            )
            return False

        year = extract_year(row.date)
        if state.file_year is None:
            state.file_year = year
            return True

        if year != state.file_year:
            result.record(
                severity,
                f"Line {row.line_number}: Year {year} does not match file year "
                f"{state.file_year}.",
                row_number=row.line_number,
                kind=IssueKind.SEMANTIC,
                check_id=self.check_id,
            )
            return False
        return True
