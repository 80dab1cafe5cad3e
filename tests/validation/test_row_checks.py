"""Tests for the individual row checks."""

import pytest

from budget_validator.core.enums import IssueKind, Severity
from budget_validator.core.schemas import CsvRow
from budget_validator.validation.checks import FileState
from budget_validator.validation.checks.allowed_category import AllowedCategoryCheck
from budget_validator.validation.checks.column_count import ColumnCountCheck
from budget_validator.validation.checks.date_consistency import DateConsistencyCheck
from budget_validator.validation.checks.duplicate_rows import DuplicateRowsCheck
from budget_validator.validation.checks.numeric_amount import NumericAmountCheck
from budget_validator.validation.checks.required_fields import RequiredFieldsCheck
from budget_validator.validation.config import DEFAULT_CONFIG
from budget_validator.validation.models import ValidationResult


def _run(check, line, line_number=2, state=None):
    state = state or FileState()
    result = ValidationResult()
    passed = check.validate(CsvRow.from_line(line, line_number), state, DEFAULT_CONFIG, result)
    return passed, result, state


def test_csv_row_keeps_trailing_empty_fields():
    row = CsvRow.from_line("01/15/2024,Food,", 2)
    assert row.fields == ("01/15/2024", "Food", "")
    assert row.amount == ""
    assert row.has_expected_width


def test_csv_row_trims_fields():
    row = CsvRow.from_line(" 01/15/2024 , Food , -5 ", 7)
    assert (row.date, row.category, row.amount) == ("01/15/2024", "Food", "-5")
    assert row.line_number == 7


def test_column_count_check():
    passed, result, _ = _run(ColumnCountCheck(), "a,b,c")
    assert passed and len(result) == 0

    passed, result, _ = _run(ColumnCountCheck(), "a,b,c,d", line_number=5)
    assert passed is False
    message = result.messages[0]
    assert message.severity is Severity.ERROR
    assert message.row_number == 5
    assert "extra columns" in message.text


def test_required_fields_check():
    passed, result, _ = _run(RequiredFieldsCheck(), ",,")
    assert passed is False
    assert result.get_error_count() == 3
    assert {m.kind for m in result.messages} == {IssueKind.FIELD}


def test_date_consistency_seeds_and_compares_year():
    check = DateConsistencyCheck()
    passed, _, state = _run(check, "01/15/2024,Food,-5")
    assert passed and state.file_year == 2024

    passed, result, state = _run(check, "01/15/2025,Food,-5", line_number=3, state=state)
    assert passed is False
    assert state.file_year == 2024
    assert result.messages[0].text == "Line 3: Year 2025 does not match file year 2024."


def test_date_consistency_invalid_date_does_not_seed():
    passed, result, state = _run(DateConsistencyCheck(), "02/29/2023,Food,-5")
    assert passed is False
    assert state.file_year is None
    assert result.messages[0].kind is IssueKind.FIELD


@pytest.mark.parametrize("category, ok", [("Food", True), ("savings", True), ("Rent", False)])
def test_allowed_category_check(category, ok):
    passed, result, _ = _run(AllowedCategoryCheck(), f"01/15/2024,{category},-5")
    assert passed is ok
    assert result.has_errors() is (not ok)


def test_numeric_amount_check():
    assert _run(NumericAmountCheck(), "01/15/2024,Food,-5")[0] is True
    passed, result, _ = _run(NumericAmountCheck(), "01/15/2024,Food,-5.5")
    assert passed is False
    assert "'-5.5'" in result.messages[0].text


def test_duplicate_rows_check_warns():
    check = DuplicateRowsCheck()
    _, _, state = _run(check, "01/15/2024,Food,-5")
    passed, result, _ = _run(check, "01/15/2024, FOOD ,-5", line_number=3, state=state)
    assert passed is False
    assert result.has_errors() is False
    assert result.warnings[0].severity is Severity.WARNING
