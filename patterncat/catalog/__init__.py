"""
Pattern Catalog

- Classification of the classic patterns (Creational / Structural / Behavioral)
- Loading the catalog tree (index + entries) from disk
- Scaffolding new entries and writing the index back
"""

from patterncat.catalog.registry import (
    PatternInfo,
    PatternRegistry,
    get_pattern_registry,
    slugify,
)
from patterncat.catalog.classifications import (
    PATTERN_CATALOG,
    load_classifications,
    register_all_patterns,
)
from patterncat.catalog.loader import (
    CatalogSnapshot,
    load_catalog,
    scaffold_entry,
    write_index,
)

__all__ = [
    "PatternInfo",
    "PatternRegistry",
    "get_pattern_registry",
    "slugify",
    "PATTERN_CATALOG",
    "load_classifications",
    "register_all_patterns",
    "CatalogSnapshot",
    "load_catalog",
    "scaffold_entry",
    "write_index",
]
