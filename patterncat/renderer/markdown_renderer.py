# patterncat/renderer/markdown_renderer.py

from patterncat.ir.entry import SECTION_TITLES, SectionKind
from patterncat.ir.index import CatalogIndex, PatternCategory, PatternLink


def render_link(link: PatternLink) -> str:
    line = f"- [{link.title}]({link.path})"
    if link.description:
        line += f" - {link.description}"
    return line


def render_index(index: CatalogIndex) -> str:
    lines = [f"# {index.title}", ""]

    if index.preamble:
        lines += [index.preamble, ""]

    # -------------------------
    # Categories in catalog order
    # -------------------------
    order = list(PatternCategory)
    for category in sorted(index.categories, key=lambda c: order.index(c.name)):
        heading = category.heading or category.name.value
        lines += [f"{'#' * category.level} {heading}", ""]
        if category.notes:
            lines += [category.notes, ""]
        for link in category.links:
            lines.append(render_link(link))
        lines.append("")

    if index.trailing:
        lines += [index.trailing, ""]

    return "\n".join(lines).rstrip() + "\n"


def render_entry_skeleton(title: str, category: PatternCategory) -> str:
    """Markdown template for a new Pattern Entry with every section in order"""
    fence = "```"
    s = SECTION_TITLES
    return "\n".join([
        f"# {title}",
        "",
        f"## {s[SectionKind.INTENT]}",
        "",
        f"TODO: one or two sentences on what {title} ({category.value.lower()}) achieves.",
        "",
        f"## {s[SectionKind.WHEN_TO_USE]}",
        "",
        "### Use when",
        "",
        "- TODO",
        "",
        "### Avoid when",
        "",
        "- TODO",
        "",
        f"## {s[SectionKind.EXAMPLE]}",
        "",
        f"{fence}python",
        "# TODO: minimal illustrative example",
        fence,
        "",
        "### Explanation",
        "",
        "TODO",
        "",
        f"## {s[SectionKind.USAGE]}",
        "",
        f"{fence}python",
        "# TODO: usage demonstration",
        fence,
        "",
        f"## {s[SectionKind.REAL_WORLD_EXAMPLE]}",
        "",
        f"{fence}python",
        "# TODO: real-world flavored example",
        fence,
        "",
        f"## {s[SectionKind.COMMON_MISTAKES]}",
        "",
        "### TODO: mistake title",
        "",
        "TODO: describe the problem.",
        "",
        "**Solution:** TODO",
        "",
        f"## {s[SectionKind.SUMMARY]}",
        "",
        "TODO",
        "",
    ])
