"""
Catalog Loader - Reads the catalog tree from disk.

Directory structure:
<root>/
    README.md              Catalog Index
    patterns/
        builder/
            README.md      Pattern Entry
        factory-method/
            README.md
        ...
"""

import logging
import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from patterncat import config
from patterncat.catalog.registry import slugify
from patterncat.ir.entry import PatternEntry
from patterncat.ir.errors import CatalogLoadError
from patterncat.ir.index import CatalogIndex, PatternCategory, PatternLink
from patterncat.parser.markdown import parse_entry, parse_index
from patterncat.renderer.markdown_renderer import render_entry_skeleton, render_index

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class CatalogSnapshot:
    """Everything read from one catalog root"""
    root: Path
    index_path: str                 # relative to root
    index: CatalogIndex
    entries: Dict[str, PatternEntry] = field(default_factory=dict)  # by relative path
    pattern_dirs: List[str] = field(default_factory=list)           # relative, sorted
    patterns_dir: str = config.PATTERNS_DIR

    def resolve_link(self, link: PatternLink) -> str:
        """
        Root-relative path a link points at.

        A link to a directory (`patterns/builder/`) means that directory's
        entry file, as it does when the index is browsed on GitHub.
        """
        base = posixpath.dirname(self.index_path)
        target = posixpath.normpath(posixpath.join(base, link.target))
        if target in self.pattern_dirs or not posixpath.splitext(target)[1]:
            target = posixpath.join(target, config.ENTRY_FILE)
        return target

    def entry_for(self, link: PatternLink) -> Optional[PatternEntry]:
        return self.entries.get(self.resolve_link(link))

    def linked_paths(self) -> List[str]:
        return [self.resolve_link(link) for link in self.index.all_links()]

    def entry_path(self, pattern_dir: str) -> str:
        return posixpath.join(pattern_dir, config.ENTRY_FILE)

    def link_path_for(self, entry_path: str) -> str:
        """Index-relative link target for a root-relative entry path"""
        base = posixpath.dirname(self.index_path) or "."
        return posixpath.relpath(entry_path, base)


def load_catalog(
    root: Optional[PathLike] = None,
    index_file: Optional[str] = None,
    patterns_dir: Optional[str] = None,
) -> CatalogSnapshot:
    """Read the index and every pattern entry under the catalog root."""
    root = Path(root) if root is not None else config.CATALOG_ROOT
    index_file = index_file or config.INDEX_FILE
    patterns_dir = patterns_dir or config.PATTERNS_DIR

    if not root.is_dir():
        raise CatalogLoadError(f"Catalog root does not exist: {root}")

    index_path = root / index_file
    if not index_path.is_file():
        raise CatalogLoadError(f"Catalog index not found: {index_path}")

    index = parse_index(index_path.read_text(encoding="utf-8"))
    snapshot = CatalogSnapshot(
        root=root,
        index_path=Path(index_file).as_posix(),
        index=index,
        patterns_dir=patterns_dir,
    )

    patterns_root = root / patterns_dir
    if patterns_root.is_dir():
        for directory in sorted(p for p in patterns_root.iterdir() if p.is_dir()):
            snapshot.pattern_dirs.append(directory.relative_to(root).as_posix())

    # Entries: every pattern directory plus anything the index links to
    candidates = [snapshot.entry_path(d) for d in snapshot.pattern_dirs]
    candidates += [p for p in snapshot.linked_paths() if p not in candidates]

    for relative in candidates:
        path = root / relative
        if not path.is_file():
            continue
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("[LOADER] Skipping unreadable entry %s: %s", relative, e)
            continue
        snapshot.entries[relative] = parse_entry(text, path=relative)

    logger.info(
        "[LOADER] Loaded catalog %s: %d links, %d entries, %d pattern directories",
        root, len(index.all_links()), len(snapshot.entries), len(snapshot.pattern_dirs),
    )
    return snapshot


def write_index(snapshot: CatalogSnapshot, index: Optional[CatalogIndex] = None) -> Path:
    """Render an index back into the catalog's index file."""
    index = index or snapshot.index
    path = snapshot.root / snapshot.index_path
    path.write_text(render_index(index), encoding="utf-8")
    snapshot.index = index
    logger.info("[LOADER] Wrote index %s", path)
    return path


def scaffold_entry(
    root: Optional[PathLike],
    title: str,
    category: Union[PatternCategory, str],
    patterns_dir: Optional[str] = None,
) -> str:
    """
    Create patterns/<slug>/README.md with every section stubbed out.

    Returns the root-relative path of the new entry. Raises FileExistsError
    rather than overwrite an existing entry.
    """
    root = Path(root) if root is not None else config.CATALOG_ROOT
    if not isinstance(category, PatternCategory):
        category = PatternCategory.from_name(category)

    relative = posixpath.join(patterns_dir or config.PATTERNS_DIR, slugify(title), config.ENTRY_FILE)
    path = root / relative
    if path.exists():
        raise FileExistsError(f"Pattern entry already exists: {relative}")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_entry_skeleton(title, category), encoding="utf-8")
    logger.info("[LOADER] Scaffolded %s entry %s", category.value, relative)
    return relative
