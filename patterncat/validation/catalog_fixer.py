"""
Catalog Auto-Fixer - Rule-based repair of the Catalog Index.

Only the index is ever rewritten; pattern entries are human-authored and
issues inside them are reported, never fixed.

Fixable:
- unsorted categories            -> sort alphabetically
- broken links                   -> drop the link
- duplicate titles               -> keep the classified (or first) occurrence
- links in the wrong category    -> move under the classification
- orphaned entries               -> link under the classification
- missing one-line descriptions  -> first sentence of the entry's intent
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from patterncat.catalog.loader import CatalogSnapshot, write_index
from patterncat.catalog.registry import PatternRegistry, get_pattern_registry
from patterncat.ir.index import CatalogIndex, PatternCategory, PatternLink, sort_key
from patterncat.validation.catalog_validator import (
    CatalogValidationResult,
    CatalogValidator,
    ValidationIssue,
    ValidationSeverity,
)

logger = logging.getLogger(__name__)


@dataclass
class FixResult:
    """Result of a fix operation"""
    success: bool
    fix_type: str = "auto"  # "auto" | "none"
    issues_fixed: List[str] = field(default_factory=list)
    issues_remaining: List[str] = field(default_factory=list)
    changes_made: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "fix_type": self.fix_type,
            "issues_fixed": self.issues_fixed,
            "issues_remaining": self.issues_remaining,
            "changes_made": self.changes_made,
        }


class CatalogAutoFixer:
    """
    Rule-based auto-fixer for Catalog Index issues.

    Usage:
        fixer = CatalogAutoFixer()
        fixed_index, result = fixer.fix(snapshot)
    """

    # Order matters: drop and dedupe before moving, add links before sorting
    AUTO_FIXABLE = (
        "BROKEN_LINK",
        "DUPLICATE_TITLE",
        "CATEGORY_MISMATCH",
        "ORPHANED_ENTRY",
        "MISSING_DESCRIPTION",
        "UNSORTED_CATEGORY",
    )

    def __init__(self, max_iterations: int = 3, registry: Optional[PatternRegistry] = None):
        """
        Args:
            max_iterations: Maximum fix iterations to prevent infinite loops
            registry: Classification source, defaults to the global registry
        """
        self.max_iterations = max_iterations
        self.registry = registry or get_pattern_registry()
        self.validator = CatalogValidator(registry=self.registry)

    def fix(
        self,
        snapshot: CatalogSnapshot,
        validation_result: Optional[CatalogValidationResult] = None,
    ) -> Tuple[CatalogIndex, FixResult]:
        """
        Fix index issues on a copy of the snapshot's index.

        Returns:
            Tuple of (fixed_index, fix_result)
        """
        working = self._with_index(snapshot, snapshot.index.model_copy(deep=True))

        all_changes: List[str] = []
        all_fixed: List[str] = []

        for iteration in range(self.max_iterations):
            if validation_result is None or iteration > 0:
                validation_result = self.validator.validate(working)

            fixable = [i for i in validation_result.issues if i.code in self.AUTO_FIXABLE]
            if not fixable:
                break

            logger.info("[FIXER] Iteration %d: %d fixable issues", iteration + 1, len(fixable))
            changes, fixed = self._apply_auto_fixes(working, fixable)
            all_changes.extend(changes)
            all_fixed.extend(fixed)
            if not changes:
                break

        # Final validation
        final_validation = self.validator.validate(working)
        remaining = [
            i.code for i in final_validation.issues
            if i.severity == ValidationSeverity.ERROR
        ]

        result = FixResult(
            success=final_validation.is_valid,
            fix_type="auto" if all_changes else "none",
            issues_fixed=sorted(set(all_fixed)),
            issues_remaining=remaining,
            changes_made=all_changes,
        )
        logger.info("[FIXER] Fix complete: %s", result.to_dict())
        return working.index, result

    # ============================================================
    # AUTO-FIX METHODS
    # ============================================================

    def _apply_auto_fixes(
        self,
        snapshot: CatalogSnapshot,
        issues: List[ValidationIssue],
    ) -> Tuple[List[str], List[str]]:
        """Apply deterministic fixes, grouped by code in AUTO_FIXABLE order"""
        changes: List[str] = []
        fixed: List[str] = []

        for code in self.AUTO_FIXABLE:
            batch = [i for i in issues if i.code == code]
            if not batch:
                continue
            handler = getattr(self, f"_fix_{code.lower()}")
            made = handler(snapshot, batch)
            if made:
                changes.extend(made)
                fixed.append(code)

        return changes, fixed

    def _fix_broken_link(self, snapshot: CatalogSnapshot, issues: List[ValidationIssue]) -> List[str]:
        """Drop links whose target entry does not exist"""
        broken: Set[str] = {i.path for i in issues if i.path}
        changes = []
        for category in snapshot.index.categories:
            kept = []
            for link in category.links:
                if snapshot.resolve_link(link) in broken:
                    changes.append(f"Removed broken link: {link.title} -> {link.path}")
                else:
                    kept.append(link)
            category.links = kept
        return changes

    def _fix_duplicate_title(self, snapshot: CatalogSnapshot, issues: List[ValidationIssue]) -> List[str]:
        """Keep one link per title: the one under its classification, else the first"""
        changes = []
        for issue in issues:
            key = sort_key(issue.title or "")
            expected = self.registry.classify(issue.title or "")
            occurrences = [
                (category, link)
                for category in snapshot.index.categories
                for link in category.links
                if sort_key(link.title) == key
            ]
            if len(occurrences) < 2:
                continue
            keep = next((l for c, l in occurrences if c.name == expected), occurrences[0][1])
            for category, link in occurrences:
                if link is keep:
                    continue
                category.links = [l for l in category.links if l is not link]
                changes.append(f"Removed duplicate '{link.title}' from {category.name.value}")
        return changes

    def _fix_category_mismatch(self, snapshot: CatalogSnapshot, issues: List[ValidationIssue]) -> List[str]:
        """Move links under the category the registry classifies them in"""
        changes = []
        for issue in issues:
            expected = self.registry.classify(issue.title or "")
            if expected is None or issue.category is None:
                continue
            source = snapshot.index.get_category(PatternCategory.from_name(issue.category))
            link = next((l for l in source.links if sort_key(l.title) == sort_key(issue.title)), None)
            if link is None:
                continue
            source.links = [l for l in source.links if l is not link]
            snapshot.index.ensure_category(expected).links.append(link)
            changes.append(f"Moved '{link.title}' from {source.name.value} to {expected.value}")
        return changes

    def _fix_orphaned_entry(self, snapshot: CatalogSnapshot, issues: List[ValidationIssue]) -> List[str]:
        """Link orphaned entries under their classification"""
        changes = []
        for issue in issues:
            entry = snapshot.entries.get(issue.path or "")
            if entry is None or issue.category is None:
                logger.info("[FIXER] Cannot place unclassified orphan %s", issue.path)
                continue
            if snapshot.index.find(entry.title or issue.title or "") is not None:
                logger.info("[FIXER] Orphan %s shares a title already in the index", issue.path)
                continue
            category = snapshot.index.ensure_category(PatternCategory.from_name(issue.category))
            category.links.append(
                PatternLink(
                    title=entry.title or issue.title,
                    path=snapshot.link_path_for(entry.path),
                    description=entry.one_line_intent(),
                )
            )
            changes.append(f"Linked orphaned entry '{entry.title}' under {category.name.value}")
        return changes

    def _fix_missing_description(self, snapshot: CatalogSnapshot, issues: List[ValidationIssue]) -> List[str]:
        """Fill empty descriptions from the entry's intent"""
        changes = []
        titles = {sort_key(i.title or "") for i in issues}
        for link in snapshot.index.all_links():
            if link.description or sort_key(link.title) not in titles:
                continue
            entry = snapshot.entry_for(link)
            description = entry.one_line_intent() if entry else ""
            if not description:
                continue
            link.description = description
            changes.append(f"Set description for '{link.title}'")
        return changes

    def _fix_unsorted_category(self, snapshot: CatalogSnapshot, issues: List[ValidationIssue]) -> List[str]:
        """Sort every category alphabetically"""
        changes = []
        for category in snapshot.index.categories:
            if category.is_sorted():
                continue
            category.links.sort(key=lambda l: sort_key(l.title))
            changes.append(f"Sorted {category.name.value}: {category.titles()}")
        return changes

    @staticmethod
    def _with_index(snapshot: CatalogSnapshot, index: CatalogIndex) -> CatalogSnapshot:
        return CatalogSnapshot(
            root=snapshot.root,
            index_path=snapshot.index_path,
            index=index,
            entries=snapshot.entries,
            pattern_dirs=snapshot.pattern_dirs,
            patterns_dir=snapshot.patterns_dir,
        )


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def auto_fix_catalog(
    snapshot: CatalogSnapshot,
    max_iterations: int = 3,
) -> Tuple[CatalogIndex, FixResult]:
    """Convenience function to fix a catalog index."""
    fixer = CatalogAutoFixer(max_iterations=max_iterations)
    return fixer.fix(snapshot)


def validate_and_fix_catalog(
    snapshot: CatalogSnapshot,
    write: bool = False,
) -> Tuple[CatalogIndex, CatalogValidationResult, FixResult]:
    """
    Validate, fix, and re-validate a catalog.

    With write=True the fixed index is rendered back to the index file.

    Returns:
        Tuple of (fixed_index, final_validation, fix_result)
    """
    fixer = CatalogAutoFixer()
    initial = fixer.validator.validate(snapshot)
    if initial.is_valid and initial.is_complete and not any(
        i.code in CatalogAutoFixer.AUTO_FIXABLE for i in initial.issues
    ):
        return snapshot.index, initial, FixResult(success=True, fix_type="none")

    fixed_index, fix_result = fixer.fix(snapshot, initial)
    final = fixer.validator.validate(CatalogAutoFixer._with_index(snapshot, fixed_index))

    if write and fix_result.changes_made:
        write_index(snapshot, fixed_index)

    return fixed_index, final, fix_result
