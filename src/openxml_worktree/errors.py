"""Finding types, severities and the validation report."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from openxml_worktree.fixes import FixAction


class Severity(Enum):
    """Severity levels for findings."""

    ERROR = "error"  # Blocks packaging
    WARNING = "warning"  # Tolerated by consumers, always listed
    INFO = "info"  # Informational


class FindingCode(Enum):
    """Stable finding codes."""

    MISSING_REQUIRED_FILE = "MISSING_REQUIRED_FILE"
    MALFORMED_XML = "MALFORMED_XML"
    FILE_READ_ERROR = "FILE_READ_ERROR"
    BROKEN_RELATIONSHIP = "BROKEN_RELATIONSHIP"
    MISSING_CONTENT_TYPE_TARGET = "MISSING_CONTENT_TYPE_TARGET"
    ORPHAN_SLIDE = "ORPHAN_SLIDE"


@dataclass(frozen=True)
class Finding:
    """A single integrity problem found in a work tree."""

    severity: Severity
    code: FindingCode
    message: str
    file: str | None = None  # Root-relative POSIX path, e.g. "ppt/slides/slide1.xml"
    line: int | None = None
    suggestion: str | None = None
    fix: FixAction | None = None

    @property
    def fixable(self) -> bool:
        return self.fix is not None

    @property
    def location(self) -> str:
        if not self.file:
            return ""
        if self.line:
            return f"{self.file}:{self.line}"
        return self.file

    def __str__(self) -> str:
        location = self.location
        if location:
            return f"[{self.code.value}] {location}: {self.message}"
        return f"[{self.code.value}] {self.message}"


@dataclass
class ValidationReport:
    """Result of validating a work tree."""

    root: Path
    errors: list[Finding] = field(default_factory=list)
    warnings: list[Finding] = field(default_factory=list)
    info: list[Finding] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def findings(self) -> list[Finding]:
        """All findings, errors first."""
        return [*self.errors, *self.warnings, *self.info]

    @property
    def fixable(self) -> list[Finding]:
        """Errors and warnings that carry a fix action, in report order."""
        return [f for f in (*self.errors, *self.warnings) if f.fixable]


class WorkTreeError(Exception):
    """Raised when a work tree cannot be validated at all."""

    def __init__(self, message: str, root: Path | None = None):
        super().__init__(message)
        self.root = root
