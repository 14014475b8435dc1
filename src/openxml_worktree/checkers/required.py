"""Mandatory part presence check."""

from __future__ import annotations

from typing import TYPE_CHECKING

from openxml_worktree.checkers.base import Checker
from openxml_worktree.errors import Finding, FindingCode, Severity

if TYPE_CHECKING:
    from openxml_worktree.scanner import ScannedTree


class RequiredPartChecker(Checker):
    """Reports mandatory parts missing from the work tree."""

    name = "required-parts"

    def check(self, tree: ScannedTree) -> list[Finding]:
        return [
            Finding(
                severity=Severity.ERROR,
                code=FindingCode.MISSING_REQUIRED_FILE,
                message=f"Required file missing: {part}",
                file=part,
                suggestion=(
                    "This file is essential for a valid package. "
                    "Restore it from a backup of the original file."
                ),
            )
            for part in self.layout.required_parts
            if not tree.path(part).is_file()
        ]
