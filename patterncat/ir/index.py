import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


# "Creational Patterns" names the Creational category
CATEGORY_SUFFIX_RE = re.compile(r"\s+patterns?$")


class PatternCategory(str, Enum):
    """Classification axis of the catalog, in index order"""
    CREATIONAL = "Creational"
    STRUCTURAL = "Structural"
    BEHAVIORAL = "Behavioral"

    @classmethod
    def from_name(cls, name: str) -> "PatternCategory":
        key = CATEGORY_SUFFIX_RE.sub("", (name or "").strip().lower())
        for category in cls:
            if category.value.lower() == key:
                return category
        raise ValueError(f"Unknown pattern category: {name!r}")

    @classmethod
    def match(cls, name: str) -> Optional["PatternCategory"]:
        try:
            return cls.from_name(name)
        except ValueError:
            return None


# ---- Index Content ----

class PatternLink(BaseModel):
    title: str
    path: str  # relative to the index file
    description: str = ""

    @property
    def target(self) -> str:
        """Link path without fragment or leading './'"""
        target = self.path.split("#", 1)[0].strip()
        while target.startswith("./"):
            target = target[2:]
        return target


class Category(BaseModel):
    name: PatternCategory
    links: List[PatternLink] = Field(default_factory=list)
    heading: str = ""   # heading text as written in the index
    level: int = 2
    notes: str = ""     # non-link text inside the category

    def titles(self) -> List[str]:
        return [link.title for link in self.links]

    def is_sorted(self) -> bool:
        keys = [sort_key(t) for t in self.titles()]
        return keys == sorted(keys)


# ---- Root Index ----

class CatalogIndex(BaseModel):
    title: str = "Design Patterns"
    preamble: str = ""   # text between the title and the first category
    categories: List[Category] = Field(default_factory=list)
    trailing: str = ""   # non-category sections after the categories

    def get_category(self, name: PatternCategory) -> Optional[Category]:
        for category in self.categories:
            if category.name == name:
                return category
        return None

    def ensure_category(self, name: PatternCategory) -> Category:
        category = self.get_category(name)
        if category is None:
            level = self.categories[0].level if self.categories else 2
            category = Category(name=name, level=level)
            self.categories.append(category)
            order = list(PatternCategory)
            self.categories.sort(key=lambda c: order.index(c.name))
        return category

    def all_links(self) -> List[PatternLink]:
        return [link for category in self.categories for link in category.links]

    def titles(self) -> List[str]:
        return [link.title for link in self.all_links()]

    def find(self, title: str) -> Optional[PatternLink]:
        key = sort_key(title)
        for link in self.all_links():
            if sort_key(link.title) == key:
                return link
        return None

    def category_of(self, title: str) -> Optional[PatternCategory]:
        key = sort_key(title)
        for category in self.categories:
            if any(sort_key(t) == key for t in category.titles()):
                return category.name
        return None


def sort_key(title: str) -> str:
    return " ".join((title or "").split()).casefold()
