import textwrap
from pathlib import Path

import pytest

from patterncat.catalog.registry import slugify


def entry_markdown(title: str, intent: str = None, drop=(), language: str = "python") -> str:
    """A complete pattern entry; section names in `drop` are left out."""
    intent = intent or f"{title} solves a recurring design problem. It does so neatly."
    fence = "```"
    parts = {
        "Intent": f"## Intent\n\n{intent}\n",
        "When to Use": "## When to Use\n\n### Use when\n\n- it fits\n\n### Avoid when\n\n- it does not\n",
        "Example": (
            f"## Example\n\n{fence}{language}\nclass {title.replace(' ', '')}:\n    pass\n{fence}\n\n"
            "### Explanation\n\nThe class is the whole example.\n"
        ),
        "Usage": f"## Usage\n\n{fence}{language}\nobj = object()\n{fence}\n",
        "Real-World Example": f"## Real-World Example\n\n{fence}{language}\nprint('real')\n{fence}\n",
        "Common Mistakes": (
            "## Common Mistakes\n\n### 1. Doing it wrong\n\nIt breaks.\n\n"
            "**Solution:** Do it right.\n"
        ),
        "Summary": f"## Summary\n\n{title} in one line.\n",
    }
    body = "\n".join(text for name, text in parts.items() if name not in drop)
    return f"# {title}\n\n{body}"


def index_markdown(categories: dict, title: str = "Design Patterns") -> str:
    """categories: {"Creational": ["Builder", ...]} or [(title, path, desc), ...]"""
    lines = [f"# {title}", "", "Intro text.", ""]
    for name, links in categories.items():
        lines += [f"## {name}", ""]
        for link in links:
            if isinstance(link, str):
                link = (link, f"patterns/{slugify(link)}/README.md", f"About {link}.")
            link_title, path, desc = link
            line = f"- [{link_title}]({path})"
            if desc:
                line += f" - {desc}"
            lines.append(line)
        lines.append("")
    return "\n".join(lines)


@pytest.fixture
def make_catalog(tmp_path):
    """
    Build a catalog tree under tmp_path.

    make_catalog(index={"Creational": ["Builder"]}, entries=["Builder"])
    entries may also be a dict of {title: markdown}.
    """

    def _make(index, entries=(), index_text: str = None) -> Path:
        (tmp_path / "README.md").write_text(index_text or index_markdown(index), encoding="utf-8")
        if not isinstance(entries, dict):
            entries = {title: entry_markdown(title) for title in entries}
        for title, text in entries.items():
            directory = tmp_path / "patterns" / slugify(title)
            directory.mkdir(parents=True, exist_ok=True)
            (directory / "README.md").write_text(textwrap.dedent(text), encoding="utf-8")
        return tmp_path

    return _make


@pytest.fixture
def repo_root() -> Path:
    return Path(__file__).resolve().parent


def pytest_configure(config):
    from patterncat.config import configure_logging
    configure_logging()
