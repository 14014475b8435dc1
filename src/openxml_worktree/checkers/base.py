"""Common base for work tree checkers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from openxml_worktree.errors import Finding, FindingCode, Severity
from openxml_worktree.fixes import read_part_text
from openxml_worktree.layout import DEFAULT_LAYOUT, PackageLayout

if TYPE_CHECKING:
    from openxml_worktree.scanner import ScannedTree

logger = logging.getLogger(__name__)


class Checker(ABC):
    """A single integrity check over a scanned work tree.

    Checkers only read the filesystem and never raise for problems in the
    tree: everything they find is returned as findings.
    """

    name: str = "checker"

    def __init__(self, layout: PackageLayout = DEFAULT_LAYOUT):
        self._layout = layout

    @property
    def layout(self) -> PackageLayout:
        return self._layout

    @abstractmethod
    def check(self, tree: ScannedTree) -> list[Finding]:
        """Run the check and return findings in discovery order."""


def read_error(file: str, exc: Exception) -> Finding:
    """Finding for a part that could not be read."""
    logger.warning("Could not read %s: %s", file, exc)
    return Finding(
        severity=Severity.ERROR,
        code=FindingCode.FILE_READ_ERROR,
        message=f"Could not read file: {exc}",
        file=file,
    )


def read_text(tree: ScannedTree, file: str, findings: list[Finding]) -> str | None:
    """Read a part as text, recording a FILE_READ_ERROR finding on failure."""
    try:
        return read_part_text(tree.path(file))
    except (OSError, UnicodeDecodeError) as exc:
        findings.append(read_error(file, exc))
        return None
