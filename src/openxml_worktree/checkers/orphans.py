"""Orphan slide detection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from openxml_worktree.checkers.base import Checker, read_error, read_text
from openxml_worktree.errors import Finding, FindingCode, Severity
from openxml_worktree.fixes import DeleteFiles
from openxml_worktree.layout import sidecar_rels_path

if TYPE_CHECKING:
    from openxml_worktree.scanner import ScannedTree

logger = logging.getLogger(__name__)


class OrphanPartDetector(Checker):
    """Reports numbered slides the main document never references.

    The check is textual: a slide counts as referenced when its
    ``slides/slideN.xml`` string appears anywhere in the main document's
    relationship part.
    """

    name = "orphan-slides"

    def list_slides(self, tree: ScannedTree) -> list[str]:
        """Slide file names in the slides directory, ordered by slide number."""
        slides_dir = tree.path(self.layout.slides_dir)
        if not slides_dir.is_dir():
            return []

        pattern = self.layout.slide_regex
        numbered: list[tuple[int, str]] = []
        for entry in slides_dir.iterdir():
            match = pattern.match(entry.name)
            if match and entry.is_file():
                numbered.append((int(match.group(1)), entry.name))
        return [name for _, name in sorted(numbered)]

    def check(self, tree: ScannedTree) -> list[Finding]:
        findings: list[Finding] = []
        main_rels = self.layout.main_document_rels

        try:
            slides = self.list_slides(tree)
        except OSError as exc:
            return [read_error(self.layout.slides_dir, exc)]

        # A missing main relationship part is reported by the required part check.
        if not slides or not tree.path(main_rels).is_file():
            return findings

        rels_text = read_text(tree, main_rels, findings)
        if rels_text is None:
            return findings

        for slide in slides:
            if self.layout.slide_reference(slide) in rels_text:
                continue

            slide_path = f"{self.layout.slides_dir}/{slide}"
            findings.append(
                Finding(
                    severity=Severity.WARNING,
                    code=FindingCode.ORPHAN_SLIDE,
                    message=f"Slide not referenced in presentation: {slide}",
                    file=slide_path,
                    suggestion=(
                        f"Add a relationship in {main_rels} or delete the orphan slide"
                    ),
                    fix=DeleteFiles(paths=(slide_path, sidecar_rels_path(slide_path))),
                )
            )

        logger.debug("%s: %d finding(s)", self.name, len(findings))
        return findings
