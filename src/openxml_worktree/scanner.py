"""Enumeration of the parts of an unpacked package."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from openxml_worktree.errors import WorkTreeError
from openxml_worktree.layout import DEFAULT_LAYOUT, RELS_SUFFIX, PackageLayout

logger = logging.getLogger(__name__)

XML_SUFFIX = ".xml"


@dataclass(frozen=True)
class ScannedTree:
    """Snapshot of the part paths found under a work tree root.

    Paths are root-relative POSIX strings in traversal order.
    """

    root: Path
    xml_parts: tuple[str, ...]
    rels_parts: tuple[str, ...]

    def path(self, relative: str) -> Path:
        """Absolute filesystem path for a root-relative part path."""
        return self.root.joinpath(*PurePosixPath(relative).parts)

    def exists(self, relative: str) -> bool:
        return self.path(relative).exists()


def _sort_key(relative: PurePosixPath) -> tuple[str, ...]:
    # Component-wise ordering gives lexicographic order per directory level.
    return relative.parts


class PackageScanner:
    """Finds XML parts and relationship parts under a work tree."""

    def __init__(self, layout: PackageLayout = DEFAULT_LAYOUT):
        self._layout = layout

    def scan(self, root: str | Path) -> ScannedTree:
        """Scan a work tree.

        Raises:
            WorkTreeError: If the root does not exist or is not a directory.
        """
        root = Path(root)
        if not root.exists():
            raise WorkTreeError(f"Work tree not found: {root}", root)
        if not root.is_dir():
            raise WorkTreeError(f"Work tree is not a directory: {root}", root)

        found: list[PurePosixPath] = []
        for path in root.rglob("*"):
            relative = PurePosixPath(path.relative_to(root).as_posix())
            if self._is_ignored(relative):
                continue
            if not path.is_file():
                continue
            if relative.name.endswith((XML_SUFFIX, RELS_SUFFIX)):
                found.append(relative)

        found.sort(key=_sort_key)
        # Match on the name: "_rels/.rels" has no suffix in pathlib terms.
        xml_parts = tuple(str(p) for p in found if p.name.endswith(XML_SUFFIX))
        rels_parts = tuple(str(p) for p in found if p.name.endswith(RELS_SUFFIX))

        logger.debug(
            "Scanned %s: %d XML parts, %d relationship parts",
            root,
            len(xml_parts),
            len(rels_parts),
        )
        return ScannedTree(root=root, xml_parts=xml_parts, rels_parts=rels_parts)

    def _is_ignored(self, relative: PurePosixPath) -> bool:
        return any(part in self._layout.ignored_dirs for part in relative.parent.parts)
