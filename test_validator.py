"""Content-integrity checks of the CatalogValidator"""

import pytest

from patterncat.catalog import load_catalog
from patterncat.ir import CatalogIntegrityError
from patterncat.validation import (
    CatalogValidator,
    ValidationSeverity,
    get_validation_summary,
    is_title_case,
    raise_on_errors,
    to_title_case,
    validate_catalog,
)

from conftest import entry_markdown, index_markdown


BEHAVIORAL = ["Observer", "Strategy", "Template Method"]


def validate(root, strict=False):
    return CatalogValidator(strict_mode=strict).validate(load_catalog(root))


def test_clean_catalog_has_no_errors_or_warnings(make_catalog):
    root = make_catalog(
        index={
            "Creational": ["Builder", "Singleton"],
            "Structural": ["Adapter"],
            "Behavioral": BEHAVIORAL,
        },
        entries=["Builder", "Singleton", "Adapter"] + BEHAVIORAL,
    )
    result = validate(root, strict=True)

    assert result.is_valid, result.to_dict()
    assert result.is_complete
    assert result.error_count == 0
    assert result.warning_count == 0
    assert result.stats["links"] == 6
    assert result.stats["entries"] == 6
    assert result.stats["orphaned_entries"] == 0


def test_visitor_without_link_is_orphaned(make_catalog):
    root = make_catalog(index={"Behavioral": BEHAVIORAL}, entries=BEHAVIORAL + ["Visitor"])
    result = validate(root)

    assert not result.is_valid
    assert not result.is_complete
    orphans = result.by_code("ORPHANED_ENTRY")
    assert len(orphans) == 1
    assert orphans[0].path == "patterns/visitor/README.md"
    assert orphans[0].title == "Visitor"
    assert orphans[0].category == "Behavioral"
    assert orphans[0].severity == ValidationSeverity.ERROR


def test_visitor_linked_at_end_of_behavioral_is_clean(make_catalog):
    root = make_catalog(
        index={"Behavioral": BEHAVIORAL + ["Visitor"]},
        entries=BEHAVIORAL + ["Visitor"],
    )
    result = validate(root, strict=True)

    assert result.is_valid
    assert "ORPHANED_ENTRY" not in result.codes()
    assert "UNSORTED_CATEGORY" not in result.codes()


def test_broken_link(make_catalog):
    root = make_catalog(index={"Creational": ["Builder", "Singleton"]}, entries=["Builder"])
    result = validate(root)

    broken = result.by_code("BROKEN_LINK")
    assert [i.title for i in broken] == ["Singleton"]
    assert broken[0].path == "patterns/singleton/README.md"
    assert result.stats["broken_links"] == 1
    assert not result.is_valid


def test_missing_required_sections(make_catalog):
    root = make_catalog(
        index={"Creational": ["Builder"]},
        entries={"Builder": entry_markdown("Builder", drop=("Intent", "Summary"))},
    )
    result = validate(root)

    missing = result.by_code("MISSING_SECTION")
    assert len(missing) == 2
    assert {i.message.split("'")[3] for i in missing} == {"Intent", "Summary"}


def test_title_in_two_categories(make_catalog):
    root = make_catalog(
        index={"Creational": ["Adapter", "Builder"], "Structural": ["Adapter"]},
        entries=["Adapter", "Builder"],
    )
    result = validate(root)

    duplicates = result.by_code("DUPLICATE_TITLE")
    assert len(duplicates) == 1
    assert duplicates[0].title == "Adapter"
    assert "Creational" in duplicates[0].message and "Structural" in duplicates[0].message
    assert [i.title for i in result.by_code("CATEGORY_MISMATCH")] == ["Adapter"]


def test_unsorted_category(make_catalog):
    root = make_catalog(index={"Behavioral": ["Strategy", "Observer"]}, entries=["Strategy", "Observer"])

    lenient = validate(root)
    assert lenient.is_valid
    assert [i.category for i in lenient.by_code("UNSORTED_CATEGORY")] == ["Behavioral"]

    strict = validate(root, strict=True)
    assert not strict.is_valid


def test_sorting_is_case_insensitive(make_catalog):
    text = index_markdown({"Behavioral": [
        ("observer", "patterns/observer/README.md", "o"),
        ("Strategy", "patterns/strategy/README.md", "s"),
    ]})
    root = make_catalog(index=None, entries=["Observer", "Strategy"], index_text=text)
    result = validate(root)

    assert "UNSORTED_CATEGORY" not in result.codes()
    assert [i.title for i in result.by_code("TITLE_CASE")] == ["observer"]


def test_category_mismatch_is_a_warning(make_catalog):
    root = make_catalog(index={"Creational": ["Observer"]}, entries=["Observer"])
    result = validate(root)

    issue = result.by_code("CATEGORY_MISMATCH")[0]
    assert issue.severity == ValidationSeverity.WARNING
    assert "Behavioral" in issue.message
    assert result.is_valid


def test_unclassified_pattern_is_info(make_catalog):
    root = make_catalog(index={"Structural": ["Repository"]}, entries=["Repository"])
    result = validate(root, strict=True)

    assert [i.title for i in result.by_code("UNCLASSIFIED_PATTERN")] == ["Repository"]
    assert result.is_valid


def test_title_mismatch(make_catalog):
    text = index_markdown({"Creational": [("Builder", "patterns/builder/README.md", "b")]})
    root = make_catalog(
        index=None,
        entries={"Builder": entry_markdown("Builder Pattern")},
        index_text=text,
    )
    result = validate(root)
    assert [i.title for i in result.by_code("TITLE_MISMATCH")] == ["Builder"]


def test_missing_entry_file_and_description(make_catalog):
    text = index_markdown({"Creational": [("Builder", "patterns/builder/README.md", "")]})
    root = make_catalog(index=None, entries=["Builder"], index_text=text)
    (root / "patterns" / "drafts").mkdir()
    result = validate(root)

    assert [i.path for i in result.by_code("MISSING_ENTRY_FILE")] == ["patterns/drafts"]
    assert [i.title for i in result.by_code("MISSING_DESCRIPTION")] == ["Builder"]
    assert result.is_valid


def test_entry_quality_checks(make_catalog):
    text = """# Builder

## Summary

Done.

## Intent

## Example

No code here.

## Example

```
x = 1
```

## Common Mistakes

### Forgetting build()

Nothing happens.
"""
    root = make_catalog(index={"Creational": ["Builder"]}, entries={"Builder": text})
    result = validate(root)
    codes = result.codes()

    assert "EMPTY_SECTION" in codes
    assert "DUPLICATE_SECTION" in codes
    assert "EMPTY_EXAMPLE" in codes
    assert "SECTION_ORDER" in codes
    assert "INCOMPLETE_MISTAKE" in codes
    assert "UNTAGGED_CODE_BLOCK" in codes
    assert "MISSING_SECTION" not in codes


def test_mixed_code_languages(make_catalog):
    root = make_catalog(
        index={"Creational": ["Builder", "Singleton"]},
        entries={
            "Builder": entry_markdown("Builder"),
            "Singleton": entry_markdown("Singleton", language="java"),
        },
    )
    result = validate(root)
    assert len(result.by_code("MIXED_CODE_LANGUAGE")) == 1


def test_empty_index(make_catalog):
    root = make_catalog(index={})
    result = validate(root)

    assert "EMPTY_INDEX" in result.codes()
    assert len(result.by_code("MISSING_CATEGORY")) == 3
    assert not result.is_valid


def test_result_serialization_and_summary(make_catalog):
    root = make_catalog(index={"Creational": ["Builder", "Singleton"]}, entries=["Builder"])
    result = validate_catalog(root, strict=False)

    data = result.to_dict()
    assert data["is_valid"] is False
    assert data["error_count"] == result.error_count
    assert data["issues"][0]["severity"] in {"error", "warning", "info"}
    assert "Invalid" in result.get_summary()
    assert get_validation_summary(root).startswith("Invalid")


def test_raise_on_errors(make_catalog):
    root = make_catalog(index={"Creational": ["Builder", "Singleton"]}, entries=["Builder"])
    with pytest.raises(CatalogIntegrityError) as excinfo:
        raise_on_errors(root)
    assert "BROKEN_LINK" in str(excinfo.value)


def test_title_case_helpers():
    assert is_title_case("Chain of Responsibility")
    assert is_title_case("Factory Method")
    assert not is_title_case("factory method")
    assert to_title_case("template method") == "Template Method"
    assert to_title_case("chain of responsibility") == "Chain of Responsibility"


def test_directory_links_are_not_broken(make_catalog):
    text = index_markdown({"Creational": [
        ("Builder", "patterns/builder/", "B."),
        ("Singleton", "./patterns/singleton", "S."),
    ]})
    root = make_catalog(index=None, entries=["Builder", "Singleton"], index_text=text)
    result = validate(root)

    assert "BROKEN_LINK" not in result.codes()
    assert "ORPHANED_ENTRY" not in result.codes()
    assert result.is_valid
    assert result.is_complete


def test_category_headings_with_patterns_suffix(make_catalog):
    text = (
        "# X\n\n## Creational Patterns\n\n- [Builder](patterns/builder/README.md) - B.\n\n"
        "### Behavioral\n\n- [Observer](patterns/observer/README.md) - O.\n"
    )
    root = make_catalog(index=None, entries=["Builder", "Observer"], index_text=text)
    result = validate(root)

    assert "EMPTY_INDEX" not in result.codes()
    assert "ORPHANED_ENTRY" not in result.codes()
    assert len(result.by_code("MISSING_CATEGORY")) == 1
    assert result.is_complete
