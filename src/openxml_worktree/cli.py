"""Command-line interface for openxml-worktree."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from openxml_worktree.errors import Finding, ValidationReport, WorkTreeError
from openxml_worktree.layout import PackageLayout
from openxml_worktree.validator import FixCycleResult, WorkTreeValidator

console = Console()
error_console = Console(stderr=True)

FIX_HINT = "Fixable: run with --fix to auto-repair"


@click.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--fix", is_flag=True, help="Attempt to repair fixable issues, then re-validate.")
@click.option(
    "--passes",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Maximum fix/re-validate passes (with --fix).",
)
@click.option(
    "--output",
    "-o",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format.",
)
@click.option(
    "--slides-dir",
    default=PackageLayout().slides_dir,
    show_default=True,
    help="Directory holding the numbered slide parts.",
)
@click.option(
    "--jobs",
    "-j",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Run checkers on this many threads.",
)
@click.option("--quiet", "-q", is_flag=True, help="Only output problems, no success messages.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(
    path: Path,
    fix: bool,
    passes: int,
    output: str,
    slides_dir: str,
    jobs: int,
    quiet: bool,
    verbose: bool,
) -> None:
    """Validate an unpacked Open XML package before it is re-zipped.

    PATH is the root of the work tree (the directory holding
    [Content_Types].xml). Exits with status 1 while errors remain.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    layout = PackageLayout(slides_dir=slides_dir.strip("/"))
    validator = WorkTreeValidator(layout=layout, jobs=jobs)

    cycle: FixCycleResult | None = None
    try:
        if fix:
            cycle = validator.validate_and_fix(path, max_passes=passes)
            report = cycle.report
        else:
            report = validator.validate(path)
    except WorkTreeError as exc:
        error_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(2)

    if output == "json":
        _output_json(report, cycle)
    else:
        if cycle is not None:
            _output_fixes(cycle)
        _output_text(report, fixing=fix, quiet=quiet)

    sys.exit(0 if report.valid else 1)


def _output_fixes(cycle: FixCycleResult) -> None:
    """Output per-finding fix outcomes."""
    if not cycle.summary.outcomes:
        return

    console.print("[cyan]Attempting to fix recoverable errors...[/cyan]")
    for finding, ok in cycle.summary.outcomes:
        if ok:
            console.print(f"  [green]✓[/green] Fixed: {escape(finding.message)}")
        else:
            console.print(f"  [red]✗[/red] Could not fix: {escape(finding.message)}")
    console.print(
        f"\n[cyan]Fixed {cycle.fixed} issue(s), {cycle.failed} could not be fixed "
        f"({cycle.passes} pass(es))[/cyan]\n"
    )


def _print_finding(finding: Finding, label: str, style: str, fixing: bool) -> None:
    console.print()
    console.print(f"[{style}]{label}:[/{style}] {escape(finding.message)}")
    if finding.location:
        console.print(f"  [dim]File: {escape(finding.location)}[/dim]")
    if finding.suggestion:
        console.print(f"  [yellow]Suggestion:[/yellow] {escape(finding.suggestion)}")
    if finding.fixable and not fixing:
        console.print(f"  [cyan]{FIX_HINT}[/cyan]")


def _output_text(report: ValidationReport, fixing: bool, quiet: bool) -> None:
    """Output a report as formatted text."""
    if not report.errors and not report.warnings:
        if not quiet:
            console.print("[green]✓[/green] All validations passed")
        for finding in report.info:
            _print_finding(finding, "ℹ Info", "blue", fixing)
        return

    for finding in report.errors:
        _print_finding(finding, "✗ Error", "red", fixing)
    for finding in report.warnings:
        _print_finding(finding, "⚠ Warning", "yellow", fixing)
    for finding in report.info:
        _print_finding(finding, "ℹ Info", "blue", fixing)

    console.print()
    fixable = len(report.fixable)
    if report.errors:
        console.print(
            f"[red]Found {report.error_count} error(s), "
            f"{report.warning_count} warning(s)[/red]"
        )
        if fixable and not fixing:
            console.print(
                f"[cyan]{fixable} issue(s) may be auto-fixable. "
                f"Run with --fix to attempt repair.[/cyan]"
            )
    else:
        console.print(f"[yellow]Found {report.warning_count} warning(s), but no errors[/yellow]")


def _finding_to_dict(finding: Finding) -> dict[str, object]:
    fix = None
    if finding.fix is not None:
        fix = {"action": type(finding.fix).__name__, **asdict(finding.fix)}
    return {
        "severity": finding.severity.value,
        "code": finding.code.value,
        "message": finding.message,
        "file": finding.file,
        "line": finding.line,
        "suggestion": finding.suggestion,
        "fixable": finding.fixable,
        "fix": fix,
    }


def _output_json(report: ValidationReport, cycle: FixCycleResult | None) -> None:
    """Output a report as JSON."""
    output: dict[str, object] = {
        "root": str(report.root),
        "valid": report.valid,
        "errors": [_finding_to_dict(f) for f in report.errors],
        "warnings": [_finding_to_dict(f) for f in report.warnings],
        "info": [_finding_to_dict(f) for f in report.info],
        "fix": None,
    }
    if cycle is not None:
        output["fix"] = {
            "fixed": cycle.fixed,
            "failed": cycle.failed,
            "passes": cycle.passes,
        }

    console.print_json(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
