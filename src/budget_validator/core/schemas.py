"""Record schemas and field definitions for budget CSV data.

This module defines the expected CSV layout and the record types that
validation rules operate on. Cross-field rules accept the narrow protocols
below rather than concrete classes, so any object exposing the required
attributes can be validated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

EXPECTED_HEADER = "Date,Category,Amount"
HEADER_COLUMNS: Tuple[str, ...] = ("Date", "Category", "Amount")
DATE_FORMAT = "MM/DD/YYYY"
FIELD_SEPARATOR = ","
HIERARCHY_SEPARATOR = ":"

# (date, amount, merchant, category)
DuplicateKey = Tuple[str, float, Optional[str], str]


class HasDateRange(Protocol):
    """Anything with a start and end date string."""

    start_date: Optional[str]
    end_date: Optional[str]


class HasAmountAndType(Protocol):
    """Anything with a signed amount and an income/expense tag."""

    amount: float
    kind: Optional[str]


class HasCategoryAmounts(Protocol):
    """Anything with per-category planned amounts and a declared total."""

    total: float
    categories: Mapping[str, float]


class HasDuplicateKey(Protocol):
    """Anything that can be compared for duplicate detection."""

    date: str
    amount: float
    merchant: Optional[str]
    category: str


@dataclass(frozen=True)
class CsvRow:
    """One data line of a budget CSV file.

    Attributes:
        line_number: 1-based line number (the header is line 1).
        raw: The original line text.
        fields: Raw comma-separated fields, trailing empty fields kept.
    """

    line_number: int
    raw: str
    fields: Tuple[str, ...]

    @classmethod
    def from_line(cls, line: str, line_number: int) -> "CsvRow":
        # str.split keeps trailing empty fields
        return cls(line_number=line_number, raw=line, fields=tuple(line.split(FIELD_SEPARATOR)))

    @property
    def has_expected_width(self) -> bool:
        return len(self.fields) == len(HEADER_COLUMNS)

    def _field(self, index: int) -> str:
        return self.fields[index].strip() if index < len(self.fields) else ""

    @property
    def date(self) -> str:
        return self._field(0)

    @property
    def category(self) -> str:
        return self._field(1)

    @property
    def amount(self) -> str:
        return self._field(2)

    def named_fields(self) -> List[Tuple[str, str]]:
        """Return (column name, trimmed value) pairs in header order."""
        return list(zip(HEADER_COLUMNS, (self.date, self.category, self.amount)))


@dataclass(frozen=True)
class Transaction:
    """A single transaction record.

    Attributes:
        date: Date string in MM/DD/YYYY format.
        amount: Signed amount; income is non-negative, expenses non-positive.
        category: Category name, optionally hierarchical ("Food:Groceries").
        merchant: Merchant name, if known.
        kind: "income" or "expense" (case-insensitive), if known.
    """

    date: str
    amount: float
    category: str
    merchant: Optional[str] = None
    kind: Optional[str] = None

    def duplicate_key(self) -> DuplicateKey:
        return duplicate_key(self)


@dataclass(frozen=True)
class Budget:
    """A budget with a declared total and per-category planned amounts."""

    total: float
    categories: Dict[str, float] = field(default_factory=dict)
    name: Optional[str] = None


@dataclass(frozen=True)
class DateRange:
    start_date: Optional[str]
    end_date: Optional[str]


@dataclass(frozen=True)
class ReportCriteria:
    """Filters a report is generated for."""

    start_date: Optional[str]
    end_date: Optional[str]
    categories: Sequence[str] = ()


def duplicate_key(record: HasDuplicateKey) -> DuplicateKey:
    """Build the composite key used to group duplicate transactions.

    Text parts are compared after trimming; category is case-insensitive.
    """
    merchant = record.merchant.strip() if record.merchant else None
    return (
        record.date.strip(),
        float(record.amount),
        merchant or None,
        record.category.strip().lower(),
    )


__all__ = [
    "EXPECTED_HEADER",
    "HEADER_COLUMNS",
    "DATE_FORMAT",
    "FIELD_SEPARATOR",
    "HIERARCHY_SEPARATOR",
    "DuplicateKey",
    "HasDateRange",
    "HasAmountAndType",
    "HasCategoryAmounts",
    "HasDuplicateKey",
    "CsvRow",
    "Transaction",
    "Budget",
    "DateRange",
    "ReportCriteria",
    "duplicate_key",
]
