"""Main work tree validator - entry point for validation and repair."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from openxml_worktree.autofix import AutoFixEngine, FixSummary
from openxml_worktree.checkers import (
    ContentTypeChecker,
    OrphanPartDetector,
    RelationshipIntegrityChecker,
    RequiredPartChecker,
    WellFormednessChecker,
)
from openxml_worktree.layout import DEFAULT_LAYOUT, PackageLayout
from openxml_worktree.report import ReportAggregator
from openxml_worktree.scanner import PackageScanner

if TYPE_CHECKING:
    from collections.abc import Sequence

    from openxml_worktree.checkers import Checker
    from openxml_worktree.errors import Finding, ValidationReport
    from openxml_worktree.scanner import ScannedTree

logger = logging.getLogger(__name__)


def default_checkers(layout: PackageLayout = DEFAULT_LAYOUT) -> list[Checker]:
    """The checkers run by default, in report order."""
    return [
        RequiredPartChecker(layout),
        WellFormednessChecker(layout),
        RelationshipIntegrityChecker(layout),
        ContentTypeChecker(layout),
        OrphanPartDetector(layout),
    ]


@dataclass
class FixCycleResult:
    """Result of a check, fix, re-check cycle."""

    report: ValidationReport  # Always from a fresh validation run
    initial_report: ValidationReport
    summary: FixSummary
    passes: int

    @property
    def fixed(self) -> int:
        return self.summary.fixed

    @property
    def failed(self) -> int:
        return self.summary.failed


class WorkTreeValidator:
    """Validator for unpacked Open XML packages.

    Example:
        validator = WorkTreeValidator()
        report = validator.validate("work")
        if not report.valid:
            for finding in report.errors:
                print(finding)

        # Repair what can be repaired, then look at a fresh report
        result = validator.validate_and_fix("work")
        print(result.fixed, result.report.valid)
    """

    def __init__(
        self,
        layout: PackageLayout = DEFAULT_LAYOUT,
        checkers: Sequence[Checker] | None = None,
        jobs: int = 1,
    ):
        """Initialize the validator.

        Args:
            layout: Conventional paths of the package being checked.
            checkers: Checkers to run, in report order. Defaults to all.
            jobs: Number of threads used to run checkers. Checkers only read
                  the tree, so they may run concurrently; findings are still
                  merged in checker order.
        """
        self._layout = layout
        self._scanner = PackageScanner(layout)
        self._checkers = list(checkers) if checkers is not None else default_checkers(layout)
        self._jobs = max(1, jobs)

    @property
    def layout(self) -> PackageLayout:
        return self._layout

    @property
    def checkers(self) -> list[Checker]:
        return list(self._checkers)

    def validate(self, root: str | Path) -> ValidationReport:
        """Validate a work tree.

        Raises:
            WorkTreeError: If the root is missing or not a directory.
        """
        tree = self._scanner.scan(root)
        aggregator = ReportAggregator(tree.root)
        for findings in self._run_checkers(tree):
            aggregator.add(findings)

        report = aggregator.build()
        logger.debug(
            "Validated %s: %d error(s), %d warning(s)",
            tree.root,
            report.error_count,
            report.warning_count,
        )
        return report

    def is_valid(self, root: str | Path) -> bool:
        return self.validate(root).valid

    def _run_checkers(self, tree: ScannedTree) -> list[list[Finding]]:
        if self._jobs == 1 or len(self._checkers) < 2:
            return [checker.check(tree) for checker in self._checkers]

        with ThreadPoolExecutor(max_workers=self._jobs) as executor:
            futures = [executor.submit(checker.check, tree) for checker in self._checkers]
            return [future.result() for future in futures]

    def validate_and_fix(self, root: str | Path, max_passes: int = 1) -> FixCycleResult:
        """Validate, apply available fixes, and validate again.

        Each pass fixes what the previous report marked fixable, then runs
        every checker from scratch. Passes stop early once nothing could be
        fixed or nothing fixable remains.

        Args:
            root: The work tree.
            max_passes: Upper bound on fix passes.
        """
        initial = self.validate(root)
        report = initial
        engine = AutoFixEngine(initial.root)
        summary = FixSummary()
        passes = 0

        while passes < max_passes and report.fixable:
            passes += 1
            pass_summary = engine.apply_all(report.fixable)
            summary.merge(pass_summary)
            logger.info(
                "Fix pass %d: fixed %d issue(s), %d could not be fixed",
                passes,
                pass_summary.fixed,
                pass_summary.failed,
            )
            if pass_summary.fixed == 0:
                break
            report = self.validate(root)

        return FixCycleResult(
            report=report,
            initial_report=initial,
            summary=summary,
            passes=passes,
        )


def validate_worktree(path: str | Path, layout: PackageLayout = DEFAULT_LAYOUT) -> ValidationReport:
    """Validate a work tree with the default checkers.

    Example:
        report = validate_worktree("work")
        print(report.valid)
    """
    return WorkTreeValidator(layout=layout).validate(path)


def is_valid_worktree(path: str | Path) -> bool:
    """Quick check: can this work tree be packaged?"""
    return WorkTreeValidator().is_valid(path)
