"""Tests for the validation configuration functions and constants."""

import pytest

from budget_validator.core.enums import Severity
from budget_validator.validation.config import (
    BUDGET_ABS_TOL,
    DEFAULT_ALLOWED_CATEGORIES,
    DEFAULT_CONFIG,
    ROW_CHECK_SEVERITY,
    ValidationConfig,
    config_from_mapping,
    get_severity,
    load_config,
)
from budget_validator.validation.registry import ALL_ROW_CHECKS


def test_defaults():
    assert BUDGET_ABS_TOL == 0.01
    assert DEFAULT_ALLOWED_CATEGORIES == (
        "Compensation",
        "Food",
        "Home",
        "Transportation",
        "Entertainment",
        "Health",
        "Savings",
        "Other",
    )
    assert DEFAULT_CONFIG.max_text_length == 500


def test_get_severity_valid():
    assert get_severity("numeric_amount") is Severity.ERROR
    assert get_severity("duplicate_rows") is Severity.WARNING


def test_get_severity_invalid_check_id():
    with pytest.raises(ValueError, match="Unknown check_id: non_existent_check"):
        get_severity("non_existent_check")


def test_all_row_checks_have_severity_configured():
    """Every registered row check has a severity entry."""
    for check in ALL_ROW_CHECKS:
        assert check.check_id in ROW_CHECK_SEVERITY


def test_category_lookups_case_insensitive():
    config = ValidationConfig(allowed_categories=["Food", " Rent "])
    assert config.allowed_categories == ("Food", " Rent ")
    assert config.is_allowed_category("FOOD")
    assert config.is_allowed_category("rent")
    assert not config.is_allowed_category("Travel")
    assert DEFAULT_CONFIG.is_income_category("compensation")
    assert DEFAULT_CONFIG.is_flexible_category("other")


def test_with_categories_returns_copy():
    changed = DEFAULT_CONFIG.with_categories(["Rent"])
    assert changed.allowed_categories == ("Rent",)
    assert DEFAULT_CONFIG.is_allowed_category("Food")
    assert changed.max_text_length == DEFAULT_CONFIG.max_text_length


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"allowed_categories": "Food"}, "must be a list"),
        ({"max_text_length": 0}, "max_text_length"),
        ({"budget_tolerance": -1}, "budget_tolerance"),
    ],
)
def test_invalid_config_values(kwargs, message):
    with pytest.raises(ValueError, match=message):
        ValidationConfig(**kwargs)


def test_config_from_mapping():
    assert config_from_mapping(None) is DEFAULT_CONFIG
    config = config_from_mapping({"allowed_categories": ["Rent"], "max_text_length": 20})
    assert config.allowed_categories == ("Rent",)
    assert config.max_text_length == 20


def test_config_from_mapping_unknown_keys():
    with pytest.raises(ValueError, match="Unknown config keys: colour"):
        config_from_mapping({"colour": "blue"})


def test_config_from_mapping_not_a_mapping():
    with pytest.raises(ValueError, match="must be a mapping"):
        config_from_mapping(["Food"])  # type: ignore[arg-type]


def test_load_config(tmp_path):
    path = tmp_path / "validation.yaml"
    path.write_text(
        "allowed_categories:\n  - Food\n  - Rent\nbudget_tolerance: 0.5\n", encoding="utf-8"
    )
    config = load_config(path)
    assert config.allowed_categories == ("Food", "Rent")
    assert config.budget_tolerance == 0.5
    assert config.income_categories == DEFAULT_CONFIG.income_categories


def test_load_config_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) is DEFAULT_CONFIG


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_load_config_malformed_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("allowed_categories: [Food\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Failed to read config file"):
        load_config(path)
