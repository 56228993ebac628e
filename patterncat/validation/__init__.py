"""
Validation module for catalog content integrity.
"""

from patterncat.validation.catalog_validator import (
    CatalogValidationResult,
    CatalogValidator,
    ValidationIssue,
    ValidationSeverity,
    get_validation_summary,
    is_title_case,
    raise_on_errors,
    to_title_case,
    validate_catalog,
)
from patterncat.validation.catalog_fixer import (
    CatalogAutoFixer,
    FixResult,
    auto_fix_catalog,
    validate_and_fix_catalog,
)

__all__ = [
    "CatalogValidationResult",
    "CatalogValidator",
    "ValidationIssue",
    "ValidationSeverity",
    "get_validation_summary",
    "is_title_case",
    "raise_on_errors",
    "to_title_case",
    "validate_catalog",
    "CatalogAutoFixer",
    "FixResult",
    "auto_fix_catalog",
    "validate_and_fix_catalog",
]
