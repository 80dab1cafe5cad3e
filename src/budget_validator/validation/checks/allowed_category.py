"""Allowed category check.

The Category column must name one of the configured categories. Matching is
case-insensitive; the list comes from ValidationConfig, never global state.
"""

from __future__ import annotations

from budget_validator.core.enums import IssueKind
from budget_validator.core.schemas import CsvRow
from ..config import ValidationConfig, get_severity
from ..models import ValidationResult
from . import FileState


class AllowedCategoryCheck:
    """Validate that the category is in the allowed set."""

    check_id = "allowed_category"
    halts_row = False

    def validate(
        self,
        row: CsvRow,
        state: FileState,
        config: ValidationConfig,
        result: ValidationResult,
    ) -> bool:
        if config.is_allowed_category(row.category):
            return True

        result.record(
            get_severity(self.check_id),
            f"Line {row.line_number}: Invalid category '{row.category}'. Category must be "
            f"one of: {', '.join(config.allowed_categories)}.",
            row_number=row.line_number,
            kind=IssueKind.SEMANTIC,
            check_id=self.check_id,
        )
        return False
