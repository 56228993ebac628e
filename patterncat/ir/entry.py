from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .errors import ValidationError
from .validation import ValidationResult


class SectionKind(str, Enum):
    """Fixed section kinds of a pattern entry, in canonical order"""
    INTENT = "intent"
    WHEN_TO_USE = "when_to_use"
    EXAMPLE = "example"
    USAGE = "usage"
    REAL_WORLD_EXAMPLE = "real_world_example"
    COMMON_MISTAKES = "common_mistakes"
    SUMMARY = "summary"
    OTHER = "other"


REQUIRED_SECTIONS = (SectionKind.INTENT, SectionKind.EXAMPLE, SectionKind.SUMMARY)

SECTION_TITLES = {
    SectionKind.INTENT: "Intent",
    SectionKind.WHEN_TO_USE: "When to Use",
    SectionKind.EXAMPLE: "Example",
    SectionKind.USAGE: "Usage",
    SectionKind.REAL_WORLD_EXAMPLE: "Real-World Example",
    SectionKind.COMMON_MISTAKES: "Common Mistakes",
    SectionKind.SUMMARY: "Summary",
}


# ---- Section Content ----

class CodeBlock(BaseModel):
    language: str = ""
    code: str = ""


class Section(BaseModel):
    kind: SectionKind
    heading: str
    text: str = ""  # prose outside code fences, including sub-headed prose
    code_blocks: List[CodeBlock] = Field(default_factory=list)
    items: List[str] = Field(default_factory=list)  # bullet items

    def is_empty(self) -> bool:
        return not self.text.strip() and not self.code_blocks and not self.items


class WhenToUse(BaseModel):
    use: List[str] = Field(default_factory=list)
    avoid: List[str] = Field(default_factory=list)


class MistakePair(BaseModel):
    title: str
    problem: str = ""
    solution: str = ""
    problem_code: List[CodeBlock] = Field(default_factory=list)
    solution_code: List[CodeBlock] = Field(default_factory=list)

    @property
    def has_solution(self) -> bool:
        return bool(self.solution.strip() or self.solution_code)


# ---- Root Entry ----

class PatternEntry(BaseModel):
    title: str
    path: str = ""  # relative to the catalog root
    sections: List[Section] = Field(default_factory=list)
    when_to_use: WhenToUse = Field(default_factory=WhenToUse)
    mistakes: List[MistakePair] = Field(default_factory=list)
    explanation: str = ""  # "Explanation" part of the Example section

    def section(self, kind: SectionKind) -> Optional[Section]:
        for section in self.sections:
            if section.kind == kind:
                return section
        return None

    def has_section(self, kind: SectionKind) -> bool:
        return self.section(kind) is not None

    @property
    def intent(self) -> str:
        section = self.section(SectionKind.INTENT)
        return section.text.strip() if section else ""

    @property
    def summary(self) -> str:
        section = self.section(SectionKind.SUMMARY)
        return section.text.strip() if section else ""

    @property
    def examples(self) -> List[CodeBlock]:
        section = self.section(SectionKind.EXAMPLE)
        return list(section.code_blocks) if section else []

    def code_blocks(self) -> List[CodeBlock]:
        blocks = [b for s in self.sections for b in s.code_blocks]
        for mistake in self.mistakes:
            blocks.extend(mistake.problem_code)
            blocks.extend(mistake.solution_code)
        return blocks

    def missing_sections(self) -> List[SectionKind]:
        return [kind for kind in REQUIRED_SECTIONS if not self.has_section(kind)]

    def one_line_intent(self) -> str:
        """First sentence of the intent, suitable for an index description"""
        text = " ".join(self.intent.split())
        if not text:
            return ""
        end = text.find(". ")
        return text if end == -1 else text[: end + 1]

    def check(self) -> ValidationResult:
        errors = []
        if not self.title.strip():
            errors.append(
                ValidationError(
                    level="entry",
                    message="title must not be empty",
                    object_id=self.path,
                )
            )

        for kind in self.missing_sections():
            errors.append(
                ValidationError(
                    level="entry",
                    message=f"missing required section '{SECTION_TITLES[kind]}'",
                    object_id=self.path or self.title,
                )
            )

        if errors:
            return ValidationResult.failure(errors)

        return ValidationResult.success()
