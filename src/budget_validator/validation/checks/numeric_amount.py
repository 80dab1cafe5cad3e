"""Numeric amount check."""

from __future__ import annotations

from budget_validator.core.enums import IssueKind
from budget_validator.core.schemas import CsvRow
from ..config import ValidationConfig, get_severity
from ..fields import is_numeric
from ..models import ValidationResult
from . import FileState


class NumericAmountCheck:
    """Validate that the amount is an integer with an optional leading '-'."""

    check_id = "numeric_amount"
    halts_row = False

    def validate(
        self,
        row: CsvRow,
        state: FileState,
        config: ValidationConfig,
        result: ValidationResult,
    ) -> bool:
        if is_numeric(row.amount):
            return True

        result.record(
            get_severity(self.check_id),
            f"Line {row.line_number}: Amount '{row.amount}' is not a valid integer number.",
            row_number=row.line_number,
            kind=IssueKind.FIELD,
            check_id=self.check_id,
        )
        return False
