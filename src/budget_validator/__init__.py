"""Budget CSV Validator: validation engine for Date,Category,Amount files.

The package validates raw CSV lines before they are imported by budgeting
and reporting tools. Use `budget_validator.validation` for the public API
or the `budget-validator` console script for file-based validation.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
