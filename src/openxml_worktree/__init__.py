"""openxml-worktree - integrity checks and repairs for unpacked Open XML packages.

Validate an unpacked PPTX before it is zipped back up.

Example:
    from openxml_worktree import validate_worktree, is_valid_worktree

    # Quick check
    if is_valid_worktree("work"):
        print("Ready to package")

    # Detailed validation
    report = validate_worktree("work")
    for finding in report.errors:
        print(finding)

    # Repair known corruption, then re-check
    from openxml_worktree import WorkTreeValidator

    result = WorkTreeValidator().validate_and_fix("work", max_passes=3)
    print(f"Fixed {result.fixed}, valid: {result.report.valid}")
"""

from openxml_worktree.autofix import AutoFixEngine, FixSummary
from openxml_worktree.errors import (
    Finding,
    FindingCode,
    Severity,
    ValidationReport,
    WorkTreeError,
)
from openxml_worktree.fixes import DeleteFiles, FixAction, InsertClosingTag, RemoveXmlFragment
from openxml_worktree.layout import DEFAULT_LAYOUT, PackageLayout
from openxml_worktree.scanner import PackageScanner, ScannedTree
from openxml_worktree.validator import (
    FixCycleResult,
    WorkTreeValidator,
    is_valid_worktree,
    validate_worktree,
)

__version__ = "0.1.0"

__all__ = [
    # Main API
    "WorkTreeValidator",
    "validate_worktree",
    "is_valid_worktree",
    "FixCycleResult",
    # Reports and findings
    "ValidationReport",
    "Finding",
    "FindingCode",
    "Severity",
    "WorkTreeError",
    # Configuration
    "PackageLayout",
    "DEFAULT_LAYOUT",
    # Scanning
    "PackageScanner",
    "ScannedTree",
    # Repairs
    "AutoFixEngine",
    "FixSummary",
    "FixAction",
    "RemoveXmlFragment",
    "DeleteFiles",
    "InsertClosingTag",
]
