"""Tests for markdown rendering"""

from patterncat.ir import CatalogIndex, Category, PatternCategory, PatternLink, SectionKind
from patterncat.parser import parse_entry, parse_index
from patterncat.renderer import render_entry_skeleton, render_index, render_link


def test_render_link():
    link = PatternLink(title="Builder", path="patterns/builder/README.md", description="Step by step.")
    assert render_link(link) == "- [Builder](patterns/builder/README.md) - Step by step."
    assert render_link(PatternLink(title="X", path="x.md")) == "- [X](x.md)"


def test_render_index_orders_categories_and_keeps_extra_text():
    index = CatalogIndex(
        title="Patterns",
        preamble="Read me first.",
        categories=[
            Category(name=PatternCategory.BEHAVIORAL, links=[
                PatternLink(title="Observer", path="patterns/observer/README.md", description="Notify."),
            ]),
            Category(name=PatternCategory.CREATIONAL, links=[
                PatternLink(title="Builder", path="patterns/builder/README.md", description="Build."),
            ]),
        ],
        trailing="## License\n\nMIT",
    )
    text = render_index(index)

    assert text.startswith("# Patterns\n\nRead me first.\n\n## Creational\n")
    assert text.index("## Creational") < text.index("## Behavioral") < text.index("## License")
    assert text.endswith("MIT\n")

    reread = parse_index(text)
    assert reread.preamble == "Read me first."
    assert reread.trailing == "## License\n\nMIT"
    assert [c.name for c in reread.categories] == [PatternCategory.CREATIONAL, PatternCategory.BEHAVIORAL]
    assert reread.all_links() == [index.categories[1].links[0], index.categories[0].links[0]]


def test_render_entry_skeleton_parses_as_complete_entry():
    text = render_entry_skeleton("Visitor", PatternCategory.BEHAVIORAL)
    entry = parse_entry(text)

    assert entry.title == "Visitor"
    assert "behavioral" in entry.intent
    assert entry.check().is_valid
    assert entry.section(SectionKind.EXAMPLE).code_blocks[0].language == "python"
    assert entry.when_to_use.use == ["TODO"]
    assert entry.when_to_use.avoid == ["TODO"]
