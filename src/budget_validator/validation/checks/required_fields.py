"""Required fields check.

Date, Category and Amount must all be present. A row with an empty field is
reported once per missing field and skipped by the remaining checks.
"""

from __future__ import annotations

from budget_validator.core.enums import IssueKind
from budget_validator.core.schemas import CsvRow
from ..config import ValidationConfig, get_severity
from ..fields import is_non_empty
from ..models import ValidationResult
from . import FileState


class RequiredFieldsCheck:
    """Validate that no field of the row is blank."""

    check_id = "required_fields"
    halts_row = True

    def validate(
        self,
        row: CsvRow,
        state: FileState,
        config: ValidationConfig,
        result: ValidationResult,
    ) -> bool:
        passed = True
        for name, value in row.named_fields():
            if is_non_empty(value):
                continue
            result.record(
                get_severity(self.check_id),
                f"Line {row.line_number}: {name} field is required and cannot be empty.",
                row_number=row.line_number,
                kind=IssueKind.FIELD,
                check_id=self.check_id,
            )
            passed = False
        return passed
