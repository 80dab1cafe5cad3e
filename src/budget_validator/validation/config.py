"""Validation configuration constants.

This module centralizes validation tolerances, category sets and severity
rules. Adjust these constants to tune validation behavior; callers that need
different values per run pass a `ValidationConfig` instead of mutating them.

Severity Levels:
    - "error": Findings that reject the whole file
    - "warning": Advisory findings that do not block an import
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple, Union

import yaml

from budget_validator.core.enums import Severity

# ============================================================================
# TOLERANCE CONSTANTS
# ============================================================================

# Budget balance tolerance (absolute, in currency units)
BUDGET_ABS_TOL = 0.01

# Free-text fields longer than this produce a warning
MAX_TEXT_LENGTH = 500

# Sentinel returned by extract_year() for invalid dates
INVALID_YEAR = -1


# ============================================================================
# CATEGORY SETS
# ============================================================================

DEFAULT_ALLOWED_CATEGORIES: Tuple[str, ...] = (
    "Compensation",
    "Food",
    "Home",
    "Transportation",
    "Entertainment",
    "Health",
    "Savings",
    "Other",
)

# Amounts in these categories are income and should be non-negative
DEFAULT_INCOME_CATEGORIES: Tuple[str, ...] = ("Compensation",)

# Either sign is acceptable
DEFAULT_FLEXIBLE_CATEGORIES: Tuple[str, ...] = ("Other", "Savings")


# ============================================================================
# SEVERITY RULES
# ============================================================================
# Format: {check_id: severity}

ROW_CHECK_SEVERITY = {
    "column_count": "error",
    "required_fields": "error",
    "date_consistency": "error",
    "allowed_category": "error",
    "numeric_amount": "error",
    "duplicate_rows": "warning",
}


def get_severity(check_id: str) -> Severity:
    """Get the severity a row check reports its findings with.

    Args:
        check_id: Row check identifier (e.g., "numeric_amount").

    Returns:
        Severity.ERROR or Severity.WARNING.

    Raises:
        ValueError: If check_id is unknown.

    Examples:
        >>> get_severity("numeric_amount")
        <Severity.ERROR: 'ERROR'>
        >>> get_severity("duplicate_rows")
        <Severity.WARNING: 'WARNING'>
    """
    if check_id not in ROW_CHECK_SEVERITY:
        raise ValueError(f"Unknown check_id: {check_id}")
    return Severity(ROW_CHECK_SEVERITY[check_id].upper())


# ============================================================================
# RUNTIME CONFIGURATION
# ============================================================================


def _normalize(names: Iterable[str]) -> FrozenSet[str]:
    return frozenset(n.strip().lower() for n in names if n and n.strip())


@dataclass(frozen=True)
class ValidationConfig:
    """Per-run validation settings.

    Attributes:
        allowed_categories: Category names accepted in the Category column.
        income_categories: Categories whose amounts must be non-negative.
        flexible_categories: Categories where either sign is acceptable.
        max_text_length: Free-text length above which a warning is recorded.
        budget_tolerance: Absolute tolerance for budget balance checks.
        flag_duplicate_rows: Record a warning for repeated CSV rows.

    Examples:
        >>> config = ValidationConfig(allowed_categories=("Food", "Rent"))
        >>> config.is_allowed_category("food")
        True
    """

    allowed_categories: Tuple[str, ...] = DEFAULT_ALLOWED_CATEGORIES
    income_categories: Tuple[str, ...] = DEFAULT_INCOME_CATEGORIES
    flexible_categories: Tuple[str, ...] = DEFAULT_FLEXIBLE_CATEGORIES
    max_text_length: int = MAX_TEXT_LENGTH
    budget_tolerance: float = BUDGET_ABS_TOL
    flag_duplicate_rows: bool = True
    _allowed_lookup: FrozenSet[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate field constraints."""
        for name in ("allowed_categories", "income_categories", "flexible_categories"):
            value = getattr(self, name)
            if isinstance(value, str):
                raise ValueError(f"{name} must be a list of names, not a string")
            object.__setattr__(self, name, tuple(value))
        if self.max_text_length <= 0:
            raise ValueError("max_text_length must be positive")
        if self.budget_tolerance < 0:
            raise ValueError("budget_tolerance must not be negative")
        object.__setattr__(self, "_allowed_lookup", _normalize(self.allowed_categories))

    def is_allowed_category(self, category: str) -> bool:
        return category.strip().lower() in self._allowed_lookup

    def is_income_category(self, category: str) -> bool:
        return category.strip().lower() in _normalize(self.income_categories)

    def is_flexible_category(self, category: str) -> bool:
        return category.strip().lower() in _normalize(self.flexible_categories)

    def with_categories(self, allowed_categories: Iterable[str]) -> "ValidationConfig":
        """Return a copy with a different allowed-category list."""
        return ValidationConfig(
            allowed_categories=tuple(allowed_categories),
            income_categories=self.income_categories,
            flexible_categories=self.flexible_categories,
            max_text_length=self.max_text_length,
            budget_tolerance=self.budget_tolerance,
            flag_duplicate_rows=self.flag_duplicate_rows,
        )


DEFAULT_CONFIG = ValidationConfig()


def _config_keys() -> FrozenSet[str]:
    return frozenset(f.name for f in fields(ValidationConfig) if f.init)


def config_from_mapping(data: Optional[Dict[str, Any]]) -> ValidationConfig:
    """Build a ValidationConfig from a plain mapping (e.g. parsed YAML).

    Raises:
        ValueError: If the mapping has unknown keys or invalid values.
    """
    if not data:
        return DEFAULT_CONFIG
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping, got {type(data).__name__}")
    unknown = sorted(set(data) - _config_keys())
    if unknown:
        raise ValueError(
            f"Unknown config keys: {', '.join(unknown)}. "
            f"Valid keys: {', '.join(sorted(_config_keys()))}"
        )
    try:
        return ValidationConfig(**data)
    except TypeError as e:
        raise ValueError(f"Invalid config values: {e}") from e


def load_config(path: Union[str, Path]) -> ValidationConfig:
    """Load validation settings from a YAML file.

    Args:
        path: Path to a YAML file with keys matching ValidationConfig fields.

    Returns:
        ValidationConfig with defaults for any keys the file omits.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file cannot be parsed or has invalid content.

    Examples:
        >>> config = load_config("validation.yaml")  # doctest: +SKIP
        >>> config.allowed_categories
        ('Food', 'Rent')
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ValueError(f"Failed to read config file {config_path}: {e}") from e
    return config_from_mapping(data)
