"""Content-type registry consistency check."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from openxml_worktree.checkers.base import Checker, read_text
from openxml_worktree.content_types import iter_overrides
from openxml_worktree.errors import Finding, FindingCode, Severity
from openxml_worktree.fixes import RemoveXmlFragment

if TYPE_CHECKING:
    from openxml_worktree.scanner import ScannedTree

logger = logging.getLogger(__name__)


class ContentTypeChecker(Checker):
    """Reports Override entries whose part is missing.

    Office tolerates stray overrides, so these are warnings only.
    """

    name = "content-types"

    def check(self, tree: ScannedTree) -> list[Finding]:
        findings: list[Finding] = []
        registry = self.layout.content_types_part

        # A missing registry is reported by the required part check.
        if not tree.path(registry).is_file():
            return findings

        text = read_text(tree, registry, findings)
        if text is None:
            return findings

        for override in iter_overrides(text):
            part_path = override.part_path
            if part_path is not None and tree.exists(part_path):
                continue

            findings.append(
                Finding(
                    severity=Severity.WARNING,
                    code=FindingCode.MISSING_CONTENT_TYPE_TARGET,
                    message=f"Content-Types references missing file: {override.part_name}",
                    file=registry,
                    suggestion=(
                        f"Remove the Override entry or add the file: "
                        f"{part_path or override.part_name}"
                    ),
                    fix=RemoveXmlFragment(file=registry, fragment=override.fragment),
                )
            )

        logger.debug("%s: %d finding(s)", self.name, len(findings))
        return findings
