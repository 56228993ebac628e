"""
Pattern Registry - Central store for the conceptual classification of patterns
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from patterncat.ir.index import PatternCategory, sort_key

logger = logging.getLogger(__name__)


@dataclass
class PatternInfo:
    """
    What the catalog knows about a pattern independently of its entry

    The category here is the pattern's conceptual classification; the
    Catalog Index is expected to agree with it.
    """
    name: str
    category: PatternCategory
    description: str = ""
    aliases: List[str] = field(default_factory=list)

    # Metadata
    tags: List[str] = field(default_factory=list)
    applicable_when: List[str] = field(default_factory=list)  # Trigger phrases

    @property
    def slug(self) -> str:
        return slugify(self.name)


def slugify(title: str) -> str:
    """Directory name of a pattern entry: "Factory Method" -> "factory-method" """
    words = "".join(c if c.isalnum() else " " for c in title.lower()).split()
    return "-".join(words)


class PatternRegistry:
    """
    Central registry for pattern classifications

    Provides lookup by slug, title or alias, category filtering, and
    keyword matching of a problem description against known patterns.
    """

    def __init__(self):
        self.patterns: Dict[str, PatternInfo] = {}
        self._category_index: Dict[PatternCategory, List[str]] = {cat: [] for cat in PatternCategory}
        self._tag_index: Dict[str, List[str]] = {}
        self._name_index: Dict[str, str] = {}

    def register(self, pattern: PatternInfo) -> None:
        """Register a pattern; re-registering a slug replaces the old record"""
        slug = pattern.slug
        previous = self.patterns.get(slug)
        if previous is not None:
            self._category_index[previous.category].remove(slug)
            for tag in previous.tags:
                self._tag_index[tag].remove(slug)
            logger.debug("[REGISTRY] Replacing pattern '%s'", slug)

        self.patterns[slug] = pattern

        # Update category index
        self._category_index[pattern.category].append(slug)

        # Update tag index
        for tag in pattern.tags:
            if tag not in self._tag_index:
                self._tag_index[tag] = []
            self._tag_index[tag].append(slug)

        # Update name/alias index
        for name in [pattern.name] + pattern.aliases:
            self._name_index[sort_key(name)] = slug

    def get(self, slug: str) -> Optional[PatternInfo]:
        """Get a pattern by slug"""
        return self.patterns.get(slug)

    def get_by_title(self, title: str) -> Optional[PatternInfo]:
        """Get a pattern by its name or one of its aliases"""
        slug = self._name_index.get(sort_key(title))
        if slug is None:
            slug = slugify(title)
        return self.patterns.get(slug)

    def classify(self, title: str) -> Optional[PatternCategory]:
        """Conceptual category of a pattern title, None when unknown"""
        pattern = self.get_by_title(title)
        return pattern.category if pattern else None

    def find_applicable(self, context: str, max_results: int = 5) -> List[PatternInfo]:
        """Find patterns applicable to a problem description"""
        context_lower = context.lower()
        scored_patterns = []

        for pattern in self.patterns.values():
            score = 0

            # Check applicable_when phrases
            for keyword in pattern.applicable_when:
                if keyword.lower() in context_lower:
                    score += 2

            # Check tags
            for tag in pattern.tags:
                if tag.lower() in context_lower:
                    score += 1

            # Check name and aliases
            if any(name.lower() in context_lower for name in [pattern.name] + pattern.aliases):
                score += 3

            if score > 0:
                scored_patterns.append((score, pattern))

        # Highest score first, ties alphabetical
        scored_patterns.sort(key=lambda x: (-x[0], x[1].name))
        results = [p for _, p in scored_patterns[:max_results]]

        logger.debug("[REGISTRY] find_applicable('%s...') -> %s", context[:40], [p.slug for p in results])
        return results

    def get_by_category(self, category: PatternCategory) -> List[PatternInfo]:
        """Get all patterns in a category, alphabetically"""
        slugs = self._category_index.get(category, [])
        patterns = [self.patterns[s] for s in slugs if s in self.patterns]
        return sorted(patterns, key=lambda p: sort_key(p.name))

    def get_by_tag(self, tag: str) -> List[PatternInfo]:
        """Get all patterns with a specific tag"""
        slugs = self._tag_index.get(tag, [])
        return [self.patterns[s] for s in slugs if s in self.patterns]

    def list_all(self) -> List[PatternInfo]:
        """List all registered patterns"""
        return list(self.patterns.values())

    def __len__(self) -> int:
        return len(self.patterns)

    def __contains__(self, title: str) -> bool:
        return self.get_by_title(title) is not None


# Global registry instance
_global_registry: Optional[PatternRegistry] = None


def get_pattern_registry() -> PatternRegistry:
    """Get or create the global pattern registry"""
    global _global_registry
    if _global_registry is None:
        _global_registry = PatternRegistry()
        # Import and register the shipped classifications
        from patterncat.catalog.classifications import register_all_patterns
        register_all_patterns(_global_registry)
    return _global_registry
