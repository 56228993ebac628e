"""
Markdown parsing for the catalog.

The catalog is plain GitHub-flavored markdown. Only the structure the tooling
cares about is extracted:

- the Catalog Index: category headings, their link bullets and notes
- a Pattern Entry: the `#` title, `##` sections, the When-to-Use lists,
  the Example explanation and the Common Mistakes problem/solution pairs

Headings and bullets inside fenced code blocks are never interpreted.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from patterncat.ir.entry import (
    CodeBlock,
    MistakePair,
    PatternEntry,
    Section,
    SectionKind,
)
from patterncat.ir.index import CatalogIndex, Category, PatternCategory, PatternLink


FENCE_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})\s*(?P<info>[^`\s]*)")
HEADING_RE = re.compile(r"^ {0,3}(?P<level>#{1,6})\s+(?P<text>.*?)\s*#*\s*$")
BULLET_RE = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s+(?P<text>.+?)\s*$")
LINK_RE = re.compile(
    r"^\s*[-*+]\s+\[(?P<title>[^\]]+)\]\((?P<path>[^)\s]+)(?:\s+\"[^\"]*\")?\)"
    r"\s*(?:[-–—:]\s*(?P<desc>.*?))?\s*$"
)
LABEL_RE = re.compile(
    r"^\s*(?:\*\*|__)?\s*(?P<label>[A-Za-z' ]+?)\s*"
    r"(?::\s*(?:\*\*|__)|(?:\*\*|__)\s*:|:)\s*(?P<rest>.*)$"
)
MISTAKE_PREFIX_RE = re.compile(
    r"^\s*(?:(?:mistake|problem)\s*#?\d*\s*[:.)-]|\d+[.)]|[❌✗]\s*)\s*", re.IGNORECASE
)


SECTION_ALIASES = {
    SectionKind.INTENT: ("intent", "purpose", "overview", "definition", "what is it"),
    SectionKind.WHEN_TO_USE: ("when to use", "when to use it", "applicability", "use cases"),
    SectionKind.EXAMPLE: (
        "example", "implementation", "basic example", "minimal example",
        "code example", "structure",
    ),
    SectionKind.USAGE: ("usage", "how to use", "usage example", "using it"),
    SectionKind.REAL_WORLD_EXAMPLE: (
        "real-world example", "real world example", "real-world usage",
        "real world usage", "in practice", "practical example",
    ),
    SectionKind.COMMON_MISTAKES: (
        "common mistakes", "mistakes", "pitfalls", "common pitfalls", "anti-patterns",
    ),
    SectionKind.SUMMARY: ("summary", "conclusion", "key takeaways", "takeaways"),
}

USE_LABELS = ("use when", "when to use", "use it when", "good fit", "use")
AVOID_LABELS = ("avoid when", "when not to use", "avoid", "dont use when", "do not use when")
PROBLEM_LABELS = ("problem", "mistake", "wrong", "bad")
SOLUTION_LABELS = ("solution", "fix", "correct", "better", "good")
EXPLANATION_LABELS = ("explanation", "how it works", "breakdown")


def normalize_heading(text: str) -> str:
    text = (text or "").lower().replace("’", "").replace("'", "")
    text = re.sub(r"[^a-z0-9\s-]", " ", text)
    return " ".join(text.split()).strip("- ")


def _matches(normalized: str, aliases) -> Optional[str]:
    best = None
    for alias in aliases:
        if normalized == alias or normalized.startswith(alias + " "):
            if best is None or len(alias) > len(best):
                best = alias
    return best


def classify_heading(text: str) -> SectionKind:
    """Map a `##` heading onto a section kind; unknown headings are OTHER."""
    normalized = normalize_heading(text)
    best_kind, best_len = SectionKind.OTHER, 0
    for kind, aliases in SECTION_ALIASES.items():
        alias = _matches(normalized, aliases)
        if alias and len(alias) > best_len:
            best_kind, best_len = kind, len(alias)
    return best_kind


def _classify_label(text: str) -> Optional[str]:
    normalized = normalize_heading(text)
    if _matches(normalized, AVOID_LABELS):
        return "avoid"
    if _matches(normalized, USE_LABELS):
        return "use"
    if _matches(normalized, SOLUTION_LABELS):
        return "solution"
    if _matches(normalized, PROBLEM_LABELS):
        return "problem"
    if _matches(normalized, EXPLANATION_LABELS):
        return "explanation"
    return None


def clean_mistake_title(text: str) -> str:
    return MISTAKE_PREFIX_RE.sub("", text.strip().strip("*_")).strip() or text.strip()


# ============================================================
# LINE SCANNER
# ============================================================

@dataclass
class Line:
    kind: str  # "heading" | "code" | "text"
    text: str = ""
    level: int = 0
    code: Optional[CodeBlock] = None


def _closes(fence: str, raw: str) -> bool:
    stripped = raw.strip()
    return bool(stripped) and set(stripped) == {fence[0]} and len(stripped) >= len(fence)


def scan(text: str) -> Iterator[Line]:
    """Yield headings, whole code blocks and plain text lines."""
    fence = None
    info = ""
    body: List[str] = []

    for raw in (text or "").splitlines():
        if fence is not None:
            if _closes(fence, raw):
                yield Line(kind="code", code=CodeBlock(language=info, code="\n".join(body)))
                fence, info, body = None, "", []
            else:
                body.append(raw)
            continue

        match = FENCE_RE.match(raw)
        if match:
            fence = match.group("fence")
            info = match.group("info").lower()
            continue

        match = HEADING_RE.match(raw)
        if match:
            yield Line(kind="heading", text=match.group("text"), level=len(match.group("level")))
            continue

        yield Line(kind="text", text=raw)

    if fence is not None:
        # Unterminated fence runs to the end of the document
        yield Line(kind="code", code=CodeBlock(language=info, code="\n".join(body)))


# ============================================================
# INDEX PARSER
# ============================================================

def parse_index(text: str) -> CatalogIndex:
    """
    Parse the Catalog Index.

    Text before the first category heading is kept as the preamble, any
    non-category `##` section after it as trailing content. Category
    headings may be `##` or `###` and may carry a "Patterns" suffix.
    Inside a category link bullets become links and everything else is
    kept as the category's notes.
    """
    index = CatalogIndex()
    title = None
    preamble: List[str] = []
    trailing: List[str] = []
    notes: Dict[PatternCategory, List[str]] = {}
    current: Optional[Category] = None
    seen_category = False
    fence = None

    for raw in (text or "").splitlines():
        if current is not None:
            sink = notes[current.name]
        else:
            sink = trailing if seen_category else preamble

        if fence is not None:
            if _closes(fence, raw):
                fence = None
            sink.append(raw)
            continue

        match = FENCE_RE.match(raw)
        if match:
            fence = match.group("fence")
            sink.append(raw)
            continue

        heading = HEADING_RE.match(raw)
        if heading:
            level = len(heading.group("level"))
            heading_text = _strip_emphasis(heading.group("text"))
            if level == 1 and title is None:
                title = heading_text
                continue
            if level in (2, 3):
                category = PatternCategory.match(heading_text)
                if category is not None:
                    current = index.ensure_category(category)
                    if not current.heading:
                        current.heading = heading_text
                        current.level = level
                    notes.setdefault(category, [])
                    seen_category = True
                    continue
            if level <= 2:
                current = None
                sink = trailing if seen_category else preamble

        if current is not None:
            link = LINK_RE.match(raw)
            if link:
                current.links.append(
                    PatternLink(
                        title=link.group("title").strip(),
                        path=link.group("path").strip(),
                        description=(link.group("desc") or "").strip(),
                    )
                )
                continue

        sink.append(raw)

    for category in index.categories:
        category.notes = "\n".join(notes.get(category.name, [])).strip()
    if title:
        index.title = title
    index.preamble = "\n".join(preamble).strip()
    index.trailing = "\n".join(trailing).strip()
    return index


def _strip_emphasis(text: str) -> str:
    return text.strip().strip("*_").strip()


# ============================================================
# ENTRY PARSER
# ============================================================

@dataclass
class _SectionState:
    section: Section
    lines: List[str] = field(default_factory=list)
    mode: Optional[str] = None  # use | avoid | explanation | problem | solution
    mistake: Optional[MistakePair] = None
    problem_lines: List[str] = field(default_factory=list)
    solution_lines: List[str] = field(default_factory=list)


class _EntryBuilder:
    def __init__(self, path: str):
        self.entry = PatternEntry(title="", path=path)
        self.state: Optional[_SectionState] = None
        self.explanation: List[str] = []

    # ---- sections ----

    def open_section(self, heading: str):
        self.close_section()
        section = Section(kind=classify_heading(heading), heading=heading.strip())
        self.state = _SectionState(section=section)

    def close_section(self):
        state = self.state
        if state is None:
            return
        self._close_mistake()
        state.section.text = "\n".join(state.lines).strip()
        self.entry.sections.append(state.section)
        self.state = None

    # ---- mistakes ----

    def _open_mistake(self, title: str):
        self._close_mistake()
        self.state.mistake = MistakePair(title=clean_mistake_title(title))
        self.state.mode = "problem"

    def _close_mistake(self):
        state = self.state
        if state is None or state.mistake is None:
            return
        state.mistake.problem = "\n".join(state.problem_lines).strip()
        state.mistake.solution = "\n".join(state.solution_lines).strip()
        self.entry.mistakes.append(state.mistake)
        state.mistake = None
        state.problem_lines, state.solution_lines = [], []
        state.mode = None

    # ---- events ----

    def heading(self, level: int, text: str):
        if level == 1:
            if not self.entry.title:
                self.entry.title = _strip_emphasis(text)
            return
        if level == 2:
            self.open_section(text)
            return
        if self.state is None:
            return

        kind = self.state.section.kind
        label = _classify_label(text)

        if kind == SectionKind.COMMON_MISTAKES:
            bare = normalize_heading(text) in PROBLEM_LABELS + SOLUTION_LABELS
            if self.state.mistake is not None and bare and label in ("problem", "solution"):
                self.state.mode = label
            else:
                self._open_mistake(text)
            return

        if kind == SectionKind.WHEN_TO_USE and label in ("use", "avoid"):
            self.state.mode = label
            return

        if kind == SectionKind.EXAMPLE and label == "explanation":
            self.state.mode = "explanation"
            return

        self.state.mode = None
        self.state.lines.append(text.strip())

    def code(self, block: CodeBlock):
        state = self.state
        if state is None:
            return
        if state.mistake is not None:
            if state.mode == "solution":
                state.mistake.solution_code.append(block)
            else:
                state.mistake.problem_code.append(block)
            return
        state.section.code_blocks.append(block)

    def text(self, raw: str):
        state = self.state
        if state is None:
            return

        label_match = LABEL_RE.match(raw)
        if label_match:
            label = _classify_label(label_match.group("label"))
            kind = state.section.kind
            if kind == SectionKind.COMMON_MISTAKES and state.mistake is not None and label in ("problem", "solution"):
                state.mode = label
                raw = label_match.group("rest")
                if not raw.strip():
                    return
            elif kind == SectionKind.WHEN_TO_USE and label in ("use", "avoid"):
                state.mode = label
                raw = label_match.group("rest")
                if not raw.strip():
                    return

        if state.mistake is not None:
            target = state.solution_lines if state.mode == "solution" else state.problem_lines
            target.append(raw)
            return

        if state.mode == "explanation":
            self.explanation.append(raw)
            return

        bullet = BULLET_RE.match(raw)
        if bullet:
            item = bullet.group("text")
            state.section.items.append(item)
            if state.section.kind == SectionKind.WHEN_TO_USE:
                if state.mode == "avoid":
                    self.entry.when_to_use.avoid.append(item)
                elif state.mode == "use":
                    self.entry.when_to_use.use.append(item)
            return

        state.lines.append(raw)

    def finish(self) -> PatternEntry:
        self.close_section()
        self.entry.explanation = "\n".join(self.explanation).strip()
        return self.entry


def parse_entry(text: str, path: str = "") -> PatternEntry:
    builder = _EntryBuilder(path)
    for line in scan(text):
        if line.kind == "heading":
            builder.heading(line.level, line.text)
        elif line.kind == "code":
            builder.code(line.code)
        else:
            builder.text(line.text)
    return builder.finish()
