"""Merging of checker findings into a report."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from openxml_worktree.errors import FindingCode, Severity, ValidationReport

if TYPE_CHECKING:
    from collections.abc import Iterable

    from openxml_worktree.errors import Finding


class ReportAggregator:
    """Collects findings, in checker order, into severity buckets."""

    def __init__(self, root: str | Path):
        self._report = ValidationReport(root=Path(root))
        self._unreadable: set[str] = set()

    def add(self, findings: Iterable[Finding]) -> None:
        """Add one checker's findings, keeping their order."""
        for finding in findings:
            if finding.code == FindingCode.FILE_READ_ERROR:
                # Several checkers may fail on the same file; report it once.
                if finding.file in self._unreadable:
                    continue
                self._unreadable.add(finding.file or "")
            self._bucket(finding.severity).append(finding)

    def _bucket(self, severity: Severity) -> list[Finding]:
        if severity == Severity.ERROR:
            return self._report.errors
        if severity == Severity.WARNING:
            return self._report.warnings
        return self._report.info

    def build(self) -> ValidationReport:
        return self._report
