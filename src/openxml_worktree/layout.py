"""Conventional on-disk layout of an unpacked package."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

CONTENT_TYPES_PART = "[Content_Types].xml"
PACKAGE_RELS_PART = "_rels/.rels"
PRESENTATION_PART = "ppt/presentation.xml"
PRESENTATION_RELS_PART = "ppt/_rels/presentation.xml.rels"

RELS_DIR = "_rels"
RELS_SUFFIX = ".rels"


@dataclass(frozen=True)
class PackageLayout:
    """Where the mandatory parts of a work tree live.

    The defaults describe an unpacked PPTX.
    """

    required_parts: tuple[str, ...] = (
        CONTENT_TYPES_PART,
        PACKAGE_RELS_PART,
        PRESENTATION_PART,
        PRESENTATION_RELS_PART,
    )
    content_types_part: str = CONTENT_TYPES_PART
    main_document_rels: str = PRESENTATION_RELS_PART
    slides_dir: str = "ppt/slides"
    slide_pattern: str = r"^slide(\d+)\.xml$"
    ignored_dirs: frozenset[str] = field(
        default_factory=lambda: frozenset({"node_modules", ".git", "__pycache__"})
    )

    @property
    def slide_regex(self) -> re.Pattern[str]:
        return re.compile(self.slide_pattern)

    def slide_reference(self, slide_name: str) -> str:
        """Reference string a slide is expected to appear under in the main rels.

        Targets in ``ppt/_rels/presentation.xml.rels`` are relative to ``ppt/``,
        so ``ppt/slides/slide3.xml`` is referenced as ``slides/slide3.xml``.
        """
        return f"{self.slides_dir.rsplit('/', 1)[-1]}/{slide_name}"


DEFAULT_LAYOUT = PackageLayout()


def sidecar_rels_path(part_path: str) -> str:
    """Get the root-relative path of the .rels file describing a part.

    For "ppt/slides/slide1.xml" returns "ppt/slides/_rels/slide1.xml.rels".
    """
    head, _, name = part_path.rpartition("/")
    if head:
        return f"{head}/{RELS_DIR}/{name}{RELS_SUFFIX}"
    return f"{RELS_DIR}/{name}{RELS_SUFFIX}"
