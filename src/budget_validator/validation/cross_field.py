"""Cross-field validation rules.

Rules here span two or more fields or records: date ranges, budget balance,
income/expense signs, duplicate transactions and category hierarchy syntax.
Each rule returns a ValidationResult and never raises for bad data; a None
where a record is required is reported as a PRECONDITION error.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, Optional, Union

import pandas as pd

from budget_validator.core.enums import IssueKind, TransactionType
from budget_validator.core.schemas import (
    DATE_FORMAT,
    HIERARCHY_SEPARATOR,
    DuplicateKey,
    HasAmountAndType,
    HasCategoryAmounts,
    HasDateRange,
    HasDuplicateKey,
    duplicate_key,
)
from .config import DEFAULT_CONFIG, ValidationConfig
from .fields import is_non_empty, parse_date
from .models import ValidationResult

_KEY_COLUMNS = ["date", "amount", "merchant", "category"]


class CrossFieldValidator:
    """Higher-level rules that depend on multiple fields or records.

    Args:
        config: Settings for tolerance and income/expense category sets.
    """

    def __init__(self, config: Optional[ValidationConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG

    # ------------------------------------------------------------------
    # Dates
    # ------------------------------------------------------------------

    def validate_date_range(
        self, start_date: Optional[str], end_date: Optional[str]
    ) -> ValidationResult:
        """Check both dates are valid and start_date <= end_date.

        Equal dates are a valid one-day range.

        Examples:
            >>> v = CrossFieldValidator()
            >>> v.validate_date_range("01/01/2024", "01/31/2024").has_errors()
            False
            >>> v.validate_date_range("02/01/2024", "01/31/2024").has_errors()
            True
        """
        result = ValidationResult()
        start = parse_date(start_date)
        end = parse_date(end_date)

        for label, raw, parsed in (("Start", start_date, start), ("End", end_date, end)):
            if parsed is None:
                result.add_error(
                    f"{label} date '{raw}' is not a valid {DATE_FORMAT} date.",
                    kind=IssueKind.FIELD,
                    check_id="date_range",
                )
        if start is None or end is None:
            return result

        if start > end:
            result.add_error(
                f"Start date {start_date.strip()} is after end date {end_date.strip()}.",
                kind=IssueKind.SEMANTIC,
                check_id="date_range",
            )
        return result

    def validate_period(self, period: Optional[HasDateRange]) -> ValidationResult:
        """Date range check for any object with start_date and end_date."""
        if period is None:
            return _precondition("Date range cannot be None.", "date_range")
        return self.validate_date_range(period.start_date, period.end_date)

    # ------------------------------------------------------------------
    # Budgets
    # ------------------------------------------------------------------

    def validate_budget_balance(self, budget: Optional[HasCategoryAmounts]) -> ValidationResult:
        """Check that category planned amounts add up to the declared total.

        A difference at or below the configured tolerance (0.01 by default)
        passes.
        """
        if budget is None:
            return _precondition("Budget cannot be None.", "budget_balance")
        if budget.categories is None:
            return _precondition("Budget categories cannot be None.", "budget_balance")

        result = ValidationResult()
        amounts = []
        for name, planned in budget.categories.items():
            amount = _as_finite(planned)
            if amount is None:
                result.add_error(
                    f"Planned amount for category '{name}' is not a finite number: {planned!r}.",
                    kind=IssueKind.FIELD,
                    check_id="budget_balance",
                )
            else:
                amounts.append(amount)
        total = _as_finite(budget.total)
        if total is None:
            result.add_error(
                f"Budget total is not a finite number: {budget.total!r}.",
                kind=IssueKind.FIELD,
                check_id="budget_balance",
            )
        if result.has_errors():
            return result

        try:
            planned_sum = math.fsum(amounts)
        except OverflowError:
            return ValidationResult.error(
                "Planned amounts are too large to add up.",
                kind=IssueKind.FIELD,
                check_id="budget_balance",
            )
        # Rounded so float noise does not push an exact 0.01 over the tolerance
        difference = round(abs(planned_sum - total), 10)
        if difference > self.config.budget_tolerance:
            result.add_error(
                f"Budget is unbalanced: categories sum to {planned_sum:.2f} but the "
                f"declared total is {total:.2f} (difference {difference:.2f}, "
                f"tolerance {self.config.budget_tolerance}).",
                kind=IssueKind.SEMANTIC,
                check_id="budget_balance",
            )
        return result

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def resolve_type(
        self, kind: Optional[str], category: Optional[str] = None
    ) -> Optional[TransactionType]:
        """Resolve a transaction's direction from its tag, else its category.

        Returns None when the direction cannot be determined or the category
        is flexible (either sign allowed).
        """
        parsed = TransactionType.parse(kind)
        if parsed is not None or not category:
            return parsed
        if self.config.is_flexible_category(category):
            return None
        if self.config.is_income_category(category):
            return TransactionType.INCOME
        if self.config.is_allowed_category(category):
            return TransactionType.EXPENSE
        return None

    def validate_income_vs_expense(
        self, transaction: Optional[HasAmountAndType]
    ) -> ValidationResult:
        """Income amounts must be >= 0 and expense amounts <= 0.

        Transactions without an income/expense tag are classified by category
        using the configured income and flexible category sets.
        """
        if transaction is None:
            return _precondition("Transaction cannot be None.", "income_vs_expense")

        category = getattr(transaction, "category", None)
        kind = getattr(transaction, "kind", None)
        direction = self.resolve_type(kind, category)
        if direction is None:
            if kind is None and category and self.config.is_flexible_category(category):
                return ValidationResult()
            return _unclassified(kind, category)

        result = ValidationResult()
        amount = _as_finite(transaction.amount)
        if amount is None:
            result.add_error(
                f"Transaction amount is not a finite number: {transaction.amount!r}.",
                kind=IssueKind.FIELD,
                check_id="income_vs_expense",
            )
            return result

        if direction is TransactionType.INCOME and amount < 0:
            result.add_error(
                f"Income must not be negative, but found {amount:g}.",
                kind=IssueKind.SEMANTIC,
                check_id="income_vs_expense",
            )
        elif direction is TransactionType.EXPENSE and amount > 0:
            result.add_error(
                f"Expense must not be positive, but found {amount:g}.",
                kind=IssueKind.SEMANTIC,
                check_id="income_vs_expense",
            )
        return result

    def find_duplicate_groups(
        self, transactions: Optional[Iterable[Optional[HasDuplicateKey]]]
    ) -> Dict[DuplicateKey, int]:
        """Map each duplicated (date, amount, merchant, category) key to its size.

        Keys are returned in sorted order, so permuting the input gives the
        same mapping. None entries and records with a missing date or category
        or a non-finite amount are left out.
        """
        keys = [
            duplicate_key(t)
            for t in transactions or ()
            if t is not None and _key_problem(t) is None
        ]
        if not keys:
            return {}

        df = pd.DataFrame.from_records(keys, columns=_KEY_COLUMNS)
        df["merchant"] = df["merchant"].fillna("")
        sizes = df.groupby(_KEY_COLUMNS, sort=True).size()
        duplicated = sizes[sizes > 1]
        return {
            (date, float(amount), merchant or None, category): int(count)
            for (date, amount, merchant, category), count in duplicated.items()
        }

    def detect_duplicate_transactions(
        self, transactions: Optional[Iterable[Optional[HasDuplicateKey]]]
    ) -> ValidationResult:
        """Report every group of transactions sharing date, amount, merchant and category.

        An absent or empty list is not an error and yields no findings. A
        malformed record is reported by position and left out of the grouping.
        """
        result = ValidationResult()
        records = list(transactions or ())
        for position, record in enumerate(records):
            if record is None:
                result.add_error(
                    f"Transaction at position {position} cannot be None.",
                    kind=IssueKind.PRECONDITION,
                    check_id="duplicate_transactions",
                )
                continue
            problem = _key_problem(record)
            if problem is not None:
                result.add_error(
                    f"Transaction at position {position} cannot be compared: {problem}.",
                    kind=IssueKind.FIELD,
                    check_id="duplicate_transactions",
                )

        for (date, amount, merchant, category), count in self.find_duplicate_groups(
            records
        ).items():
            result.add_error(
                f"Duplicate transactions: {count} entries share date {date}, amount "
                f"{amount:g}, merchant {merchant or '(none)'}, category {category}.",
                kind=IssueKind.SEMANTIC,
                check_id="duplicate_transactions",
            )
        return result

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def validate_category_hierarchy(self, category: Union[str, object, None]) -> ValidationResult:
        """Check "Parent" or "Parent:Child" category syntax.

        Accepts a string or any object with a `category` attribute.

        Examples:
            >>> v = CrossFieldValidator()
            >>> v.validate_category_hierarchy("Food:Groceries").has_errors()
            False
            >>> v.validate_category_hierarchy("Food:").has_errors()
            True
        """
        if category is not None and not isinstance(category, str):
            category = getattr(category, "category", None)
        if category is None:
            return _precondition("Category cannot be None.", "category_hierarchy")

        result = ValidationResult()
        if not is_non_empty(category):
            result.add_error(
                "Category cannot be empty.", kind=IssueKind.FIELD, check_id="category_hierarchy"
            )
            return result

        separators = category.count(HIERARCHY_SEPARATOR)
        if separators == 0:
            return result
        if separators > 1:
            result.add_error(
                f"Category '{category.strip()}' has {separators + 1} levels; only "
                f"'Parent{HIERARCHY_SEPARATOR}Child' is supported.",
                kind=IssueKind.SEMANTIC,
                check_id="category_hierarchy",
            )
            return result

        parent, child = category.split(HIERARCHY_SEPARATOR)
        if not parent.strip() or not child.strip():
            result.add_error(
                f"Category '{category.strip()}' must have a non-blank parent and child "
                f"around '{HIERARCHY_SEPARATOR}'.",
                kind=IssueKind.SEMANTIC,
                check_id="category_hierarchy",
            )
        return result


def _precondition(text: str, check_id: str) -> ValidationResult:
    return ValidationResult.error(text, kind=IssueKind.PRECONDITION, check_id=check_id)


def _unclassified(kind: Optional[str], category: Optional[str]) -> ValidationResult:
    result = ValidationResult()
    result.add_warning(
        f"Cannot tell whether transaction is income or expense (type {kind!r}, "
        f"category {category!r}); sign not checked.",
        kind=IssueKind.ADVISORY,
        check_id="income_vs_expense",
    )
    return result


def _as_finite(value) -> Optional[float]:
    """The value as a float, or None if it is not a finite number."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _key_problem(record: HasDuplicateKey) -> Optional[str]:
    """Why a record cannot take part in duplicate grouping, or None."""
    for name in ("date", "category"):
        value = getattr(record, name, None)
        if not isinstance(value, str) or not value.strip():
            return f"{name} is missing"
    merchant = getattr(record, "merchant", None)
    if merchant is not None and not isinstance(merchant, str):
        return f"merchant {merchant!r} is not text"
    amount = getattr(record, "amount", None)
    if _as_finite(amount) is None:
        return f"amount {amount!r} is not a finite number"
    return None
