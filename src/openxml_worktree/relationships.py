"""Relationship entries read from .rels parts."""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import TYPE_CHECKING
from urllib.parse import unquote

if TYPE_CHECKING:
    from collections.abc import Iterator

EXTERNAL_PREFIXES = ("http://", "https://")

# Inside a start tag: quoted values may contain ">".
TAG_BODY = r"""(?:[^>"']|"[^"]*"|'[^']*')*"""


def empty_element_pattern(name: str) -> re.Pattern[str]:
    """Pattern for an empty element, self-closing or with an end tag.

    "\\b" keeps e.g. the enclosing <Relationships> element from matching.
    """
    return re.compile(
        rf"<{name}\b{TAG_BODY}/>|<{name}\b{TAG_BODY}(?<!/)>\s*</{name}\s*>"
    )


_RELATIONSHIP_RE = empty_element_pattern("Relationship")
_ATTRIBUTE_RE = re.compile(r"""([\w:.-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")


def parse_attributes(fragment: str) -> dict[str, str]:
    """Read the attributes of a single start tag into a dict."""
    attributes: dict[str, str] = {}
    for match in _ATTRIBUTE_RE.finditer(fragment):
        value = match.group(2) if match.group(2) is not None else match.group(3)
        attributes[match.group(1)] = html.unescape(value)
    return attributes


def normalize_part_path(path: str) -> str | None:
    """Collapse "." and ".." segments of a root-relative path.

    Returns None when the path climbs above the package root.
    """
    parts: list[str] = []
    for part in PurePosixPath(path).parts:
        if part in ("", ".", "/"):
            continue
        if part == "..":
            if not parts:
                return None
            parts.pop()
        else:
            parts.append(part)
    return "/".join(parts)


def owner_directory(rels_path: str) -> str:
    """Directory that relative targets of a .rels part resolve against.

    ``X/_rels/Y.rels`` describes the part ``X/Y``, so its targets are
    relative to ``X``. The package relationships (``_rels/.rels``) resolve
    against the root, returned as "".
    """
    rels_dir = PurePosixPath(rels_path).parent
    owner = rels_dir.parent
    return "" if str(owner) == "." else str(owner)


@dataclass(frozen=True)
class Relationship:
    """A relationship entry and the exact text it was read from."""

    id: str  # e.g. "rId1"
    type: str  # Relationship type URI
    target: str  # As written in the Target attribute
    source: str  # Root-relative path of the owning .rels part
    fragment: str  # Exact element text in the .rels part
    target_mode: str = "Internal"

    @property
    def is_external(self) -> bool:
        """External targets are URIs, never parts in the tree."""
        return self.target_mode == "External" or self.target.startswith(EXTERNAL_PREFIXES)

    def resolve_target(self) -> str | None:
        """Resolve the target to a root-relative part path.

        Absolute targets ("/ppt/slides/slide1.xml") resolve against the root,
        relative ones against the owner directory of the .rels part.

        Returns:
            The normalized path, or None if the target is external or
            escapes the package root.
        """
        if self.is_external:
            return None

        target = unquote(self.target.split("#", 1)[0])
        if target.startswith("/"):
            return normalize_part_path(target)

        base = owner_directory(self.source)
        return normalize_part_path(f"{base}/{target}" if base else target)


def iter_relationships(text: str, source: str) -> Iterator[Relationship]:
    """Yield the relationship entries of a .rels part in document order.

    Args:
        text: The raw text of the .rels part.
        source: Root-relative path of the .rels part.
    """
    for match in _RELATIONSHIP_RE.finditer(text):
        fragment = match.group(0)
        attributes = parse_attributes(fragment)
        target = attributes.get("Target")
        if not target:
            continue
        yield Relationship(
            id=attributes.get("Id", ""),
            type=attributes.get("Type", ""),
            target=target,
            source=source,
            fragment=fragment,
            target_mode=attributes.get("TargetMode", "Internal"),
        )
