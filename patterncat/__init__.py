"""
Design Patterns Catalog tooling

Models, parses and checks the markdown catalog: a Catalog Index grouping
Pattern Entries into Creational, Structural and Behavioral categories.
"""

from patterncat.catalog import (
    CatalogSnapshot,
    get_pattern_registry,
    load_catalog,
    scaffold_entry,
    write_index,
)
from patterncat.ir import CatalogIndex, PatternCategory, PatternEntry, SectionKind
from patterncat.validation import (
    CatalogValidator,
    auto_fix_catalog,
    raise_on_errors,
    validate_and_fix_catalog,
    validate_catalog,
)

__version__ = "0.1.0"

__all__ = [
    "CatalogSnapshot",
    "get_pattern_registry",
    "load_catalog",
    "scaffold_entry",
    "write_index",
    "CatalogIndex",
    "PatternCategory",
    "PatternEntry",
    "SectionKind",
    "CatalogValidator",
    "auto_fix_catalog",
    "raise_on_errors",
    "validate_and_fix_catalog",
    "validate_catalog",
]
