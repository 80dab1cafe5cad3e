"""Validation data models.

This module defines core data structures for validation results:
- ValidationMessage: One immutable, severity-tagged finding
- ValidationResult: Append-only accumulator of findings with per-row tracking
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from budget_validator.core.enums import IssueKind, Severity


@dataclass(frozen=True)
class ValidationMessage:
    """A single validation finding.

    Attributes:
        severity: Severity.ERROR rejects the file, Severity.WARNING is advisory.
        text: Human-readable description of the finding.
        kind: Taxonomy bucket (structural, field, semantic, precondition, advisory).
        row_number: 1-based CSV line number the finding applies to, if any.
        check_id: Identifier of the rule that produced the finding, if any.
        created_at: When the finding was recorded.

    Examples:
        >>> msg = ValidationMessage(Severity.ERROR, "Line 3: Amount 'x' is not a valid integer.")
        >>> str(msg).startswith("[")
        True
    """

    severity: Severity
    text: str
    kind: IssueKind = IssueKind.SEMANTIC
    row_number: Optional[int] = None
    check_id: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if not isinstance(self.severity, Severity):
            raise ValueError(f"Invalid severity: {self.severity}. Must be ERROR or WARNING.")
        if not isinstance(self.kind, IssueKind):
            raise ValueError(f"Invalid kind: {self.kind}.")

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def render(self) -> str:
        return f"[{self.created_at.isoformat()}][{self.severity.value}] {self.text}"

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["severity"] = self.severity.value
        data["kind"] = self.kind.value
        data["created_at"] = self.created_at.isoformat()
        return data


class ValidationResult:
    """Append-only accumulator of validation findings.

    Messages are kept in one ordered list; the error and warning views are
    projections of it. Rows can be tracked individually: a row that received
    an error is invalid for good, `mark_row_valid` only records rows that
    have no errors yet.

    Not safe for concurrent mutation; use one result per validation pass.

    Examples:
        >>> result = ValidationResult()
        >>> result.add_error("CSV file is empty.", kind=IssueKind.STRUCTURAL)
        >>> result.has_errors()
        True
        >>> result.summary()
        'ValidationResult Summary: errors=1, warnings=0'
    """

    def __init__(self) -> None:
        self._messages: List[ValidationMessage] = []
        self._error_count = 0
        self._row_status: Dict[int, bool] = {}
        self._row_errors: Dict[int, List[str]] = {}

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def ok(cls) -> "ValidationResult":
        """A result with no findings."""
        return cls()

    @classmethod
    def error(
        cls, text: str, kind: IssueKind = IssueKind.SEMANTIC, check_id: Optional[str] = None
    ) -> "ValidationResult":
        """A result holding a single error."""
        result = cls()
        result.add_error(text, kind=kind, check_id=check_id)
        return result

    @classmethod
    def with_details(
        cls, ok: bool, summary: str, details: Optional[Iterable[str]] = None
    ) -> "ValidationResult":
        """A result with a summary line followed by "Detail: ..." lines.

        Args:
            ok: True records everything as warnings, False as errors.
            summary: Main message.
            details: Extra lines, each prefixed with "Detail: ".
        """
        result = cls()
        add = result.add_warning if ok else result.add_error
        add(summary)
        for detail in details or ():
            add(f"Detail: {detail}")
        return result

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, message: ValidationMessage) -> None:
        """Append an already-built message, keeping its severity tag."""
        self._messages.append(message)
        if message.is_error:
            self._error_count += 1
            if message.row_number is not None:
                self._row_status[message.row_number] = False
                self._row_errors.setdefault(message.row_number, []).append(message.text)

    def record(
        self,
        severity: Severity,
        text: str,
        row_number: Optional[int] = None,
        kind: IssueKind = IssueKind.SEMANTIC,
        check_id: Optional[str] = None,
    ) -> None:
        """Append a finding whose severity is decided by configuration."""
        self.add(ValidationMessage(severity, text, kind, row_number, check_id))

    def add_error(
        self,
        text: Optional[str],
        row_number: Optional[int] = None,
        kind: IssueKind = IssueKind.SEMANTIC,
        check_id: Optional[str] = None,
    ) -> None:
        if text is None:
            text = "(null error)"
        self.add(ValidationMessage(Severity.ERROR, text, kind, row_number, check_id))

    def add_warning(
        self,
        text: Optional[str],
        row_number: Optional[int] = None,
        kind: IssueKind = IssueKind.ADVISORY,
        check_id: Optional[str] = None,
    ) -> None:
        if text is None:
            text = "(null warning)"
        self.add(ValidationMessage(Severity.WARNING, text, kind, row_number, check_id))

    def mark_row_valid(self, row_number: Optional[int]) -> None:
        """Record a row as valid unless it has already been seen."""
        if row_number is not None and row_number not in self._row_status:
            self._row_status[row_number] = True

    def merge(self, other: Optional["ValidationResult"]) -> "ValidationResult":
        """Append another result's findings into this one.

        Severity tags are copied as recorded; a row invalid in either result
        stays invalid.

        Returns:
            self, for chaining.
        """
        if other is None:
            return self
        for message in other.messages:
            self._messages.append(message)
            if message.is_error:
                self._error_count += 1
        for row_number, is_valid in other._row_status.items():
            if self._row_status.get(row_number) is False:
                continue
            self._row_status[row_number] = is_valid
        for row_number, texts in other._row_errors.items():
            self._row_errors.setdefault(row_number, []).extend(texts)
        return self

    def clear(self) -> None:
        self._messages.clear()
        self._row_status.clear()
        self._row_errors.clear()
        self._error_count = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def messages(self) -> Tuple[ValidationMessage, ...]:
        return tuple(self._messages)

    @property
    def errors(self) -> Tuple[ValidationMessage, ...]:
        return tuple(m for m in self._messages if m.is_error)

    @property
    def warnings(self) -> Tuple[ValidationMessage, ...]:
        return tuple(m for m in self._messages if not m.is_error)

    def has_errors(self) -> bool:
        return self._error_count > 0

    def has_warnings(self) -> bool:
        return len(self._messages) > self._error_count

    def get_error_count(self) -> int:
        return self._error_count

    def get_warning_count(self) -> int:
        return len(self._messages) - self._error_count

    def get_messages(self) -> List[str]:
        """All findings as rendered strings, in insertion order."""
        return [m.render() for m in self._messages]

    def get_error_messages(self) -> List[str]:
        return [m.render() for m in self.errors]

    def get_warning_messages(self) -> List[str]:
        return [m.render() for m in self.warnings]

    def get_messages_by_severity(self, severity: Severity) -> List[str]:
        return [m.render() for m in self._messages if m.severity is severity]

    def get_messages_by_kind(self, kind: IssueKind) -> List[ValidationMessage]:
        return [m for m in self._messages if m.kind is kind]

    def is_row_valid(self, row_number: int) -> bool:
        return self._row_status.get(row_number) is True

    def has_row_errors(self, row_number: int) -> bool:
        return self._row_status.get(row_number) is False

    def get_row_errors(self, row_number: int) -> List[str]:
        return list(self._row_errors.get(row_number, []))

    def get_valid_row_numbers(self) -> List[int]:
        return sorted(n for n, ok in self._row_status.items() if ok)

    def get_invalid_row_numbers(self) -> List[int]:
        return sorted(n for n, ok in self._row_status.items() if not ok)

    def get_valid_row_count(self) -> int:
        return len(self.get_valid_row_numbers())

    def get_invalid_row_count(self) -> int:
        return len(self.get_invalid_row_numbers())

    def has_row_level_validation(self) -> bool:
        return bool(self._row_status)

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return (
            f"ValidationResult(errors={self._error_count}, "
            f"warnings={self.get_warning_count()}, rows={len(self._row_status)})"
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def summary(self) -> str:
        """Concise counts, without message contents.

        Examples:
            >>> print(result.summary())
            ValidationResult Summary: errors=2, warnings=1, invalid rows=2, valid rows=5
        """
        text = (
            f"ValidationResult Summary: errors={self._error_count}, "
            f"warnings={self.get_warning_count()}"
        )
        if self.has_row_level_validation():
            text += (
                f", invalid rows={self.get_invalid_row_count()}, "
                f"valid rows={self.get_valid_row_count()}"
            )
        return text

    def to_dataframe(self) -> pd.DataFrame:
        """Findings as a DataFrame, one row per message."""
        columns = ["severity", "kind", "row_number", "check_id", "text", "created_at"]
        records = [m.to_dict() for m in self._messages]
        return pd.DataFrame.from_records(records, columns=columns)

    def to_markdown(self, title: str = "Validation Report") -> str:
        """Generate a detailed Markdown report.

        Returns:
            Formatted Markdown with a summary section, then errors and warnings
            grouped by the rule that produced them.
        """
        errors = self.errors
        warnings = self.warnings

        lines = [
            f"# {title}",
            "",
            f"**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            "",
            "## Summary",
            "",
            f"- **Errors:** {len(errors)} ❌" if errors else f"- **Errors:** {len(errors)}",
            f"- **Warnings:** {len(warnings)} ⚠️" if warnings else f"- **Warnings:** {len(warnings)}",
        ]
        if self.has_row_level_validation():
            lines.append(f"- **Valid rows:** {self.get_valid_row_count()}")
            lines.append(f"- **Invalid rows:** {self.get_invalid_row_count()}")
        lines.append("")

        if not errors and not warnings:
            lines.append("## ✅ All Checks Passed")
            lines.append("")
            lines.append("No validation issues found.")
            lines.append("")
            return "\n".join(lines)

        for heading, icon, group in (("Errors", "❌", errors), ("Warnings", "⚠️", warnings)):
            if not group:
                continue
            lines.append(f"## {icon} {heading}")
            lines.append("")
            for check_id, texts in _group_by_check(group):
                lines.append(f"### {icon} {check_id} ({len(texts)})")
                lines.append("")
                for text in texts:
                    lines.append(f"- {text}")
                lines.append("")

        return "\n".join(lines)

    def to_json(self) -> str:
        """Generate a detailed JSON report."""
        report_data = {
            "metadata": {
                "generated_at": datetime.now().isoformat(),
            },
            "summary": {
                "errors": self._error_count,
                "warnings": self.get_warning_count(),
                "valid_rows": self.get_valid_row_count(),
                "invalid_rows": self.get_invalid_row_count(),
                "accepted": not self.has_errors(),
            },
            "messages": [m.to_dict() for m in self._messages],
        }
        return json.dumps(report_data, indent=2, ensure_ascii=False)

    def to_console_summary(self, max_examples: int = 5) -> str:
        """Generate a concise summary for console output."""
        lines = [self.summary(), ""]

        if not self._messages:
            lines.append("✅ All validation checks passed!")
            return "\n".join(lines)

        lines.append("Issues:")
        for message in self._messages[:max_examples]:
            icon = "❌" if message.is_error else "⚠️"
            lines.append(f"{icon} {message.text}")
        remaining = len(self._messages) - max_examples
        if remaining > 0:
            lines.append(f"   ... and {remaining} more")
        return "\n".join(lines)


def _group_by_check(messages: Iterable[ValidationMessage]) -> List[Tuple[str, List[str]]]:
    groups: Dict[str, List[str]] = {}
    for message in messages:
        groups.setdefault(message.check_id or "general", []).append(message.text)
    return sorted(groups.items())
