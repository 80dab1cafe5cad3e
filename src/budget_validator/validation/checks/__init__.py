"""Row checks base interface.

This module defines the protocol that every per-row check run by the file
validator implements, and the per-pass state shared between them. Each check
validates one aspect of a CSV data row (column count, required fields, date
and year consistency, category, amount, duplicates).

To implement a new row check:

1. Create a new file in this directory (e.g., `my_check.py`)
2. Define a class with a `check_id` and a `validate()` method
3. Set `halts_row = True` if later checks cannot run when it fails
4. Add the check to the ALL_ROW_CHECKS list in registry.py

Example:
    ```python
    # checks/my_check.py
    from budget_validator.core.schemas import CsvRow
    from ..config import ValidationConfig
    from ..models import ValidationResult
    from . import FileState

    class MyCheck:
        check_id = "my_check"
        halts_row = False

        def validate(
            self,
            row: CsvRow,
            state: FileState,
            config: ValidationConfig,
            result: ValidationResult,
        ) -> bool:
            # Record findings on result; return False if the row failed
            return True
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol, Tuple

from budget_validator.core.schemas import CsvRow
from ..config import ValidationConfig
from ..models import ValidationResult


@dataclass
class FileState:
    """Cross-row state for a single file validation pass.

    Attributes:
        file_year: Year of the first validly-dated row; None until one is seen.
        seen_rows: First line number for each (date, amount, category) key.
    """

    file_year: Optional[int] = None
    seen_rows: Dict[Tuple[str, str, str], int] = field(default_factory=dict)


class RowCheck(Protocol):
    """Protocol defining the interface for row checks.

    Attributes:
        check_id: Unique identifier used in reports and severity config.
        halts_row: When True and the check fails, later checks skip the row.
    """

    check_id: str
    halts_row: bool

    def validate(
        self,
        row: CsvRow,
        state: FileState,
        config: ValidationConfig,
        result: ValidationResult,
    ) -> bool:
        """Run the check on one data row.

        Args:
            row: The data row, with its 1-based line number.
            state: Cross-row state for the current pass; checks may update it.
            config: Validation settings (allowed categories and so on).
            result: Result to record findings on.

        Returns:
            True if the row passed this check, False otherwise.
        """
        ...


__all__ = ["FileState", "RowCheck"]
