"""
Content schema of the catalog: the index, pattern entries and their sections.
"""

from patterncat.ir.errors import (
    CatalogError,
    CatalogIntegrityError,
    CatalogLoadError,
    ValidationError,
)
from patterncat.ir.validation import ValidationResult
from patterncat.ir.index import (
    CatalogIndex,
    Category,
    PatternCategory,
    PatternLink,
    sort_key,
)
from patterncat.ir.entry import (
    REQUIRED_SECTIONS,
    SECTION_TITLES,
    CodeBlock,
    MistakePair,
    PatternEntry,
    Section,
    SectionKind,
    WhenToUse,
)

__all__ = [
    "CatalogError",
    "CatalogIntegrityError",
    "CatalogLoadError",
    "ValidationError",
    "ValidationResult",
    "CatalogIndex",
    "Category",
    "PatternCategory",
    "PatternLink",
    "sort_key",
    "REQUIRED_SECTIONS",
    "SECTION_TITLES",
    "CodeBlock",
    "MistakePair",
    "PatternEntry",
    "Section",
    "SectionKind",
    "WhenToUse",
]
