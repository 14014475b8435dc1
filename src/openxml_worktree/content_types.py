"""Override entries of the [Content_Types].xml registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import unquote

from openxml_worktree.relationships import (
    empty_element_pattern,
    normalize_part_path,
    parse_attributes,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

_OVERRIDE_RE = empty_element_pattern("Override")


@dataclass(frozen=True)
class ContentTypeOverride:
    """An Override element binding one part to a content type."""

    part_name: str  # As written, normally slash-prefixed: "/ppt/slides/slide1.xml"
    content_type: str
    fragment: str  # Exact element text in the registry

    @property
    def part_path(self) -> str | None:
        """Root-relative path of the overridden part, or None if it escapes the root."""
        name = self.part_name[1:] if self.part_name.startswith("/") else self.part_name
        return normalize_part_path(unquote(name))


def iter_overrides(text: str) -> Iterator[ContentTypeOverride]:
    """Yield the Override entries of a content-type registry in document order."""
    for match in _OVERRIDE_RE.finditer(text):
        fragment = match.group(0)
        attributes = parse_attributes(fragment)
        part_name = attributes.get("PartName")
        if not part_name:
            continue
        yield ContentTypeOverride(
            part_name=part_name,
            content_type=attributes.get("ContentType", ""),
            fragment=fragment,
        )
