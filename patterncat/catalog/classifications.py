"""
Pattern Classifications - Known patterns and their categories

Loaded from classifications.yaml next to this module, or from any YAML file
with the same layout:

    patterns:
      - name: Builder
        category: Creational
        aliases: [...]
        tags: [...]
        applicable_when: [...]
"""

import logging
import os
from typing import List, Optional

import yaml

from patterncat.catalog.registry import PatternInfo, PatternRegistry
from patterncat.ir.index import PatternCategory

logger = logging.getLogger(__name__)

DEFAULT_CLASSIFICATIONS_PATH = os.path.join(os.path.dirname(__file__), "classifications.yaml")


def load_classifications(path: Optional[str] = None) -> List[PatternInfo]:
    """Load pattern classifications from a YAML file."""
    path = path or DEFAULT_CLASSIFICATIONS_PATH

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    patterns = []
    for item in data.get("patterns", []):
        name = (item.get("name") or "").strip()
        if not name:
            logger.warning("[CLASSIFICATIONS] Skipping entry without a name in %s", path)
            continue
        patterns.append(
            PatternInfo(
                name=name,
                category=PatternCategory.from_name(item.get("category", "")),
                description=item.get("description", ""),
                aliases=list(item.get("aliases", [])),
                tags=list(item.get("tags", [])),
                applicable_when=list(item.get("applicable_when", [])),
            )
        )

    logger.debug("[CLASSIFICATIONS] Loaded %d patterns from %s", len(patterns), path)
    return patterns


PATTERN_CATALOG = load_classifications()


def register_all_patterns(registry: PatternRegistry, path: Optional[str] = None) -> None:
    """Register every known classification in the given registry"""
    patterns = PATTERN_CATALOG if path is None else load_classifications(path)
    for pattern in patterns:
        registry.register(pattern)
