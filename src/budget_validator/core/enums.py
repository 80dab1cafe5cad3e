"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Severity(str, Enum):
    """Severity of a validation message.

    ERROR rejects the whole file; WARNING is advisory only.
    """

    ERROR = "ERROR"
    WARNING = "WARNING"


class IssueKind(str, Enum):
    """Taxonomy of validation findings.

    Values are strings to ease serialization in JSON reports.
    """

    STRUCTURAL = "STRUCTURAL"  # missing file, bad header, wrong column count
    FIELD = "FIELD"  # empty required field, non-date, non-numeric
    SEMANTIC = "SEMANTIC"  # year mismatch, bad category, imbalance, duplicates
    PRECONDITION = "PRECONDITION"  # required collaborator object was None
    ADVISORY = "ADVISORY"  # non-fatal notes such as overly long text


class TransactionType(str, Enum):
    """Direction of a transaction for sign checks."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def parse(cls, value: object) -> Optional["TransactionType"]:
        """Case-insensitive lookup; returns None for unknown values."""
        if isinstance(value, TransactionType):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


__all__ = ["Severity", "IssueKind", "TransactionType"]
