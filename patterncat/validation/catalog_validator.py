"""
Catalog Validator - Content-integrity checks for the catalog.

Catches issues like:
- Index links that do not resolve to an entry
- Entries missing Intent, Example or Summary
- Pattern directories the index never links to (orphans)
- Titles listed twice or under two categories
- Categories not sorted alphabetically
- Links filed under a category other than the pattern's classification
"""

import logging
import posixpath
import re
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

from patterncat import config
from patterncat.catalog.loader import CatalogSnapshot, load_catalog
from patterncat.catalog.registry import PatternRegistry, get_pattern_registry
from patterncat.ir.entry import REQUIRED_SECTIONS, SECTION_TITLES, PatternEntry, SectionKind
from patterncat.ir.errors import CatalogIntegrityError
from patterncat.ir.index import PatternCategory, sort_key

logger = logging.getLogger(__name__)

SMALL_WORDS = {"a", "an", "and", "as", "at", "by", "for", "in", "of", "on", "or", "the", "to", "with"}


class ValidationSeverity(Enum):
    ERROR = "error"      # Catalog contract broken
    WARNING = "warning"  # Editorial convention broken
    INFO = "info"        # Suggestions for improvement


@dataclass
class ValidationIssue:
    """A single content issue found in the catalog"""
    severity: ValidationSeverity
    code: str           # Machine-readable issue code
    message: str        # Human-readable description
    path: Optional[str] = None       # Root-relative file the issue is about
    title: Optional[str] = None      # Pattern title the issue is about
    category: Optional[str] = None
    suggestion: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "path": self.path,
            "title": self.title,
            "category": self.category,
            "suggestion": self.suggestion,
        }


@dataclass
class CatalogValidationResult:
    """Result of catalog validation"""
    is_valid: bool
    is_complete: bool
    issues: List[ValidationIssue] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.WARNING)

    @property
    def info_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.INFO)

    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def by_code(self, code: str) -> List[ValidationIssue]:
        return [i for i in self.issues if i.code == code]

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "is_complete": self.is_complete,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "info_count": self.info_count,
            "issues": [i.to_dict() for i in self.issues],
            "stats": self.stats,
        }

    def get_summary(self) -> str:
        """Get human-readable summary"""
        status = "Valid" if self.is_valid else "Invalid"
        completeness = "Complete" if self.is_complete else "Incomplete"
        return (
            f"{status} | {completeness} | "
            f"Errors: {self.error_count}, Warnings: {self.warning_count}, Info: {self.info_count}"
        )


class CatalogValidator:
    """
    Validates a loaded catalog for completeness and editorial consistency.

    Usage:
        validator = CatalogValidator()
        result = validator.validate(load_catalog("path/to/catalog"))

        if not result.is_valid:
            for issue in result.issues:
                print(f"[{issue.severity.value}] {issue.message}")
    """

    def __init__(self, strict_mode: bool = False, registry: Optional[PatternRegistry] = None):
        self.strict_mode = strict_mode
        self.registry = registry or get_pattern_registry()

    def validate(self, snapshot: CatalogSnapshot) -> CatalogValidationResult:
        """Validate the entire catalog."""
        issues: List[ValidationIssue] = []

        # Index-level checks
        issues.extend(self._check_empty_index(snapshot))
        issues.extend(self._check_missing_categories(snapshot))
        issues.extend(self._check_broken_links(snapshot))
        issues.extend(self._check_duplicate_titles(snapshot))
        issues.extend(self._check_sort_order(snapshot))
        issues.extend(self._check_classification(snapshot))
        issues.extend(self._check_title_case(snapshot))
        issues.extend(self._check_descriptions(snapshot))
        issues.extend(self._check_orphaned_entries(snapshot))

        # Entry-level checks
        for link in snapshot.index.all_links():
            entry = snapshot.entry_for(link)
            if entry is None:
                continue
            issues.extend(self._check_title_mismatch(link.title, entry))
            issues.extend(self._check_entry(entry))

        issues.extend(self._check_code_languages(snapshot))

        stats = self._calculate_stats(snapshot, issues)

        has_errors = any(i.severity == ValidationSeverity.ERROR for i in issues)
        has_warnings = any(i.severity == ValidationSeverity.WARNING for i in issues)

        is_valid = not has_errors
        if self.strict_mode:
            is_valid = not has_errors and not has_warnings

        is_complete = not has_errors and stats.get("orphaned_entries", 0) == 0

        result = CatalogValidationResult(
            is_valid=is_valid,
            is_complete=is_complete,
            issues=issues,
            stats=stats,
        )
        logger.info("[VALIDATOR] %s", result.get_summary())
        return result

    # ============================================================
    # INDEX CHECKS
    # ============================================================

    def _check_empty_index(self, snapshot: CatalogSnapshot) -> List[ValidationIssue]:
        if snapshot.index.all_links():
            return []
        return [ValidationIssue(
            severity=ValidationSeverity.ERROR,
            code="EMPTY_INDEX",
            message="Catalog Index lists no pattern entries",
            path=snapshot.index_path,
            suggestion="Add '## <Category>' headings with '- [Title](path) - description' bullets",
        )]

    def _check_missing_categories(self, snapshot: CatalogSnapshot) -> List[ValidationIssue]:
        issues = []
        for category in PatternCategory:
            if snapshot.index.get_category(category) is None:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.INFO,
                    code="MISSING_CATEGORY",
                    message=f"Catalog Index has no '{category.value}' section",
                    path=snapshot.index_path,
                    category=category.value,
                ))
        return issues

    def _check_broken_links(self, snapshot: CatalogSnapshot) -> List[ValidationIssue]:
        issues = []
        for category in snapshot.index.categories:
            for link in category.links:
                target = snapshot.resolve_link(link)
                if target in snapshot.entries:
                    continue
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="BROKEN_LINK",
                    message=f"Link '{link.title}' points to missing file '{target}'",
                    path=target,
                    title=link.title,
                    category=category.name.value,
                    suggestion="Create the entry or fix the link path",
                ))
        return issues

    def _check_duplicate_titles(self, snapshot: CatalogSnapshot) -> List[ValidationIssue]:
        issues = []
        seen: Dict[str, List[str]] = defaultdict(list)
        display: Dict[str, str] = {}
        for category in snapshot.index.categories:
            for link in category.links:
                key = sort_key(link.title)
                seen[key].append(category.name.value)
                display.setdefault(key, link.title)

        for key, categories in seen.items():
            if len(categories) < 2:
                continue
            where = ", ".join(categories)
            issues.append(ValidationIssue(
                severity=ValidationSeverity.ERROR,
                code="DUPLICATE_TITLE",
                message=f"Title '{display[key]}' is listed {len(categories)} times ({where})",
                title=display[key],
                suggestion="List each pattern exactly once, under its classification",
            ))
        return issues

    def _check_sort_order(self, snapshot: CatalogSnapshot) -> List[ValidationIssue]:
        issues = []
        for category in snapshot.index.categories:
            if category.is_sorted():
                continue
            expected = sorted(category.titles(), key=sort_key)
            issues.append(ValidationIssue(
                severity=ValidationSeverity.WARNING,
                code="UNSORTED_CATEGORY",
                message=f"Category '{category.name.value}' is not alphabetical: {category.titles()}",
                category=category.name.value,
                suggestion=f"Order as {expected}",
            ))
        return issues

    def _check_classification(self, snapshot: CatalogSnapshot) -> List[ValidationIssue]:
        issues = []
        for category in snapshot.index.categories:
            for link in category.links:
                expected = self.registry.classify(link.title)
                if expected is None:
                    issues.append(ValidationIssue(
                        severity=ValidationSeverity.INFO,
                        code="UNCLASSIFIED_PATTERN",
                        message=f"'{link.title}' has no known classification",
                        title=link.title,
                        category=category.name.value,
                        suggestion="Add the pattern to classifications.yaml",
                    ))
                elif expected != category.name:
                    issues.append(ValidationIssue(
                        severity=ValidationSeverity.WARNING,
                        code="CATEGORY_MISMATCH",
                        message=(
                            f"'{link.title}' is listed under {category.name.value} "
                            f"but is a {expected.value} pattern"
                        ),
                        title=link.title,
                        category=category.name.value,
                        suggestion=f"Move the link to the {expected.value} section",
                    ))
        return issues

    def _check_title_case(self, snapshot: CatalogSnapshot) -> List[ValidationIssue]:
        issues = []
        for link in snapshot.index.all_links():
            if is_title_case(link.title):
                continue
            issues.append(ValidationIssue(
                severity=ValidationSeverity.INFO,
                code="TITLE_CASE",
                message=f"Title '{link.title}' is not in Title Case",
                title=link.title,
                suggestion=f"Use '{to_title_case(link.title)}'",
            ))
        return issues

    def _check_descriptions(self, snapshot: CatalogSnapshot) -> List[ValidationIssue]:
        issues = []
        for link in snapshot.index.all_links():
            if link.description.strip():
                continue
            issues.append(ValidationIssue(
                severity=ValidationSeverity.INFO,
                code="MISSING_DESCRIPTION",
                message=f"Link '{link.title}' has no one-line description",
                title=link.title,
                suggestion="Append ' - <one-line description>' to the bullet",
            ))
        return issues

    def _check_orphaned_entries(self, snapshot: CatalogSnapshot) -> List[ValidationIssue]:
        issues = []
        linked = set(snapshot.linked_paths())

        for pattern_dir in snapshot.pattern_dirs:
            entry_path = snapshot.entry_path(pattern_dir)
            entry = snapshot.entries.get(entry_path)
            if entry is None:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    code="MISSING_ENTRY_FILE",
                    message=f"Pattern directory '{pattern_dir}' has no {config.ENTRY_FILE}",
                    path=pattern_dir,
                    suggestion="Add the entry document or remove the directory",
                ))
                continue
            if entry_path in linked:
                continue

            title = entry.title or posixpath.basename(pattern_dir)
            expected = self.registry.classify(title)
            where = f" under {expected.value}" if expected else ""
            issues.append(ValidationIssue(
                severity=ValidationSeverity.ERROR,
                code="ORPHANED_ENTRY",
                message=f"Entry '{title}' ({entry_path}) is not linked from the Catalog Index",
                path=entry_path,
                title=title,
                category=expected.value if expected else None,
                suggestion=f"Add a link to the Catalog Index{where}",
            ))

        logger.debug("[VALIDATOR] Orphan check: %d pattern directories, %d linked", len(snapshot.pattern_dirs), len(linked))
        return issues

    # ============================================================
    # ENTRY CHECKS
    # ============================================================

    def _check_title_mismatch(self, link_title: str, entry: PatternEntry) -> List[ValidationIssue]:
        if sort_key(entry.title) == sort_key(link_title):
            return []
        return [ValidationIssue(
            severity=ValidationSeverity.WARNING,
            code="TITLE_MISMATCH",
            message=f"Link text '{link_title}' differs from entry title '{entry.title}'",
            path=entry.path,
            title=link_title,
            suggestion="Use the same title in the index and the entry heading",
        )]

    def _check_entry(self, entry: PatternEntry) -> List[ValidationIssue]:
        issues = []

        for kind in REQUIRED_SECTIONS:
            if entry.has_section(kind):
                continue
            issues.append(ValidationIssue(
                severity=ValidationSeverity.ERROR,
                code="MISSING_SECTION",
                message=f"Entry '{entry.title}' has no '{SECTION_TITLES[kind]}' section",
                path=entry.path,
                title=entry.title,
                suggestion=f"Add a '## {SECTION_TITLES[kind]}' section",
            ))

        counts: Dict[SectionKind, int] = defaultdict(int)
        for section in entry.sections:
            counts[section.kind] += 1
            if section.kind == SectionKind.OTHER:
                continue
            if section.kind == SectionKind.COMMON_MISTAKES and entry.mistakes:
                continue
            if section.is_empty():
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    code="EMPTY_SECTION",
                    message=f"Section '{section.heading}' of '{entry.title}' is empty",
                    path=entry.path,
                    title=entry.title,
                ))

        for kind, count in counts.items():
            if kind != SectionKind.OTHER and count > 1:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    code="DUPLICATE_SECTION",
                    message=f"Entry '{entry.title}' has {count} '{SECTION_TITLES[kind]}' sections",
                    path=entry.path,
                    title=entry.title,
                    suggestion="Merge the repeated sections",
                ))

        example = entry.section(SectionKind.EXAMPLE)
        if example is not None and not example.code_blocks:
            issues.append(ValidationIssue(
                severity=ValidationSeverity.WARNING,
                code="EMPTY_EXAMPLE",
                message=f"Example section of '{entry.title}' has no code block",
                path=entry.path,
                title=entry.title,
                suggestion="Add a minimal fenced code example",
            ))

        order = list(SectionKind)
        known = [s.kind for s in entry.sections if s.kind != SectionKind.OTHER]
        if known != sorted(known, key=order.index):
            issues.append(ValidationIssue(
                severity=ValidationSeverity.INFO,
                code="SECTION_ORDER",
                message=f"Sections of '{entry.title}' are out of the usual order",
                path=entry.path,
                title=entry.title,
                suggestion="Order: " + ", ".join(SECTION_TITLES[k] for k in order if k in SECTION_TITLES),
            ))

        for mistake in entry.mistakes:
            if mistake.has_solution:
                continue
            issues.append(ValidationIssue(
                severity=ValidationSeverity.WARNING,
                code="INCOMPLETE_MISTAKE",
                message=f"Common mistake '{mistake.title}' in '{entry.title}' has no solution",
                path=entry.path,
                title=entry.title,
                suggestion="Follow the problem with a '**Solution:**' part",
            ))

        for block in entry.code_blocks():
            if not block.language:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.INFO,
                    code="UNTAGGED_CODE_BLOCK",
                    message=f"'{entry.title}' has a code block without a language tag",
                    path=entry.path,
                    title=entry.title,
                ))
                break

        return issues

    def _check_code_languages(self, snapshot: CatalogSnapshot) -> List[ValidationIssue]:
        languages: Dict[str, List[str]] = defaultdict(list)
        for path, entry in sorted(snapshot.entries.items()):
            for block in entry.code_blocks():
                if block.language and path not in languages[block.language]:
                    languages[block.language].append(path)

        if len(languages) < 2:
            return []
        dominant = max(languages, key=lambda lang: len(languages[lang]))
        others = sorted(lang for lang in languages if lang != dominant)
        return [ValidationIssue(
            severity=ValidationSeverity.INFO,
            code="MIXED_CODE_LANGUAGE",
            message=f"Examples mix languages: mostly '{dominant}', also {others}",
            suggestion=f"Use '{dominant}' for every illustrative snippet",
        )]

    def _calculate_stats(self, snapshot: CatalogSnapshot, issues: List[ValidationIssue]) -> Dict[str, int]:
        codes: Dict[str, int] = defaultdict(int)
        for issue in issues:
            codes[issue.code] += 1

        return {
            "categories": len(snapshot.index.categories),
            "links": len(snapshot.index.all_links()),
            "entries": len(snapshot.entries),
            "pattern_dirs": len(snapshot.pattern_dirs),
            "orphaned_entries": codes.get("ORPHANED_ENTRY", 0),
            "broken_links": codes.get("BROKEN_LINK", 0),
            "code_blocks": sum(len(e.code_blocks()) for e in snapshot.entries.values()),
        }


# ============================================================
# TITLE CASE
# ============================================================

def to_title_case(title: str) -> str:
    words = title.split()
    result = []
    for i, word in enumerate(words):
        if 0 < i < len(words) - 1 and word.lower() in SMALL_WORDS:
            result.append(word.lower())
        else:
            result.append(re.sub(r"^[a-z]", lambda m: m.group(0).upper(), word))
    return " ".join(result)


def is_title_case(title: str) -> bool:
    return title.strip() == to_title_case(title.strip())


# ============================================================
# CONVENIENCE
# ============================================================

def validate_catalog(
    catalog: Union[CatalogSnapshot, str, Path, None] = None,
    strict: Optional[bool] = None,
) -> CatalogValidationResult:
    """Convenience function to validate a catalog root or loaded snapshot."""
    snapshot = catalog if isinstance(catalog, CatalogSnapshot) else load_catalog(catalog)
    validator = CatalogValidator(strict_mode=config.STRICT_MODE if strict is None else strict)
    return validator.validate(snapshot)


def get_validation_summary(catalog: Union[CatalogSnapshot, str, Path, None] = None) -> str:
    """Get a quick validation summary string."""
    result = validate_catalog(catalog)
    return result.get_summary()


def raise_on_errors(catalog: Union[CatalogSnapshot, str, Path, None] = None) -> None:
    """Validate the catalog strictly and raise if it does not pass."""
    result = validate_catalog(catalog, strict=True)
    if not result.is_valid:
        problems = [
            f"[{i.code}] {i.message}"
            for i in result.issues
            if i.severity in (ValidationSeverity.ERROR, ValidationSeverity.WARNING)
        ]
        raise CatalogIntegrityError(
            f"Catalog validation failed with {result.error_count} errors "
            f"and {result.warning_count} warnings:\n" + "\n".join(problems)
        )
