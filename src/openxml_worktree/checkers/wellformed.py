"""XML well-formedness check."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from lxml import etree

from openxml_worktree.checkers.base import Checker, read_error
from openxml_worktree.errors import Finding, FindingCode, Severity
from openxml_worktree.fixes import InsertClosingTag

if TYPE_CHECKING:
    from openxml_worktree.scanner import ScannedTree

logger = logging.getLogger(__name__)

# libxml2 names the unclosed element (local name only) and the line it was opened on.
_TAG_MISMATCH_RE = re.compile(
    r"Opening and ending tag mismatch: (?P<name>[^\s]+) line (?P<line>\d+) and"
)
_EXPECTED_CLOSING_RE = re.compile(
    r"[Ee]xpected closing tag (?:for element )?['`\"<]?(?P<name>[\w:.-]+)"
)


def unclosed_element(message: str) -> tuple[str, int | None] | None:
    """Recognize a parser message about an element that was never closed.

    Returns:
        ``(element name, line it was opened on)`` or None for any other
        error. The line is None when the message does not carry it.
    """
    match = _TAG_MISMATCH_RE.search(message)
    if match:
        line = int(match.group("line"))
        return match.group("name"), line or None
    match = _EXPECTED_CLOSING_RE.search(message)
    if match:
        return match.group("name"), None
    return None


def qualify_element(name: str, line_text: str) -> str:
    """Recover the prefixed name of an element from the line that opens it.

    The parser reports "t" for "<a:t>"; the repair needs the name as written.
    """
    if ":" in name:
        return name
    match = re.search(rf"<((?:[\w.-]+:)?{re.escape(name)})(?=[\s/>])", line_text)
    return match.group(1) if match else name


class WellFormednessChecker(Checker):
    """Parses every XML and relationship part with a strict parser.

    Parts that cannot be read, or are not UTF-8, are reported as
    FILE_READ_ERROR, the same way the text-based checkers report them.
    """

    name = "well-formedness"

    def check(self, tree: ScannedTree) -> list[Finding]:
        findings: list[Finding] = []
        parser = etree.XMLParser(recover=False, resolve_entities=False, no_network=True)

        for part in (*tree.xml_parts, *tree.rels_parts):
            try:
                data = tree.path(part).read_bytes()
                data.decode("utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                findings.append(read_error(part, exc))
                continue

            try:
                etree.fromstring(data, parser)
            except etree.XMLSyntaxError as exc:
                findings.append(self._malformed(part, data, exc))

        logger.debug("%s: %d finding(s)", self.name, len(findings))
        return findings

    def _malformed(self, part: str, data: bytes, exc: etree.XMLSyntaxError) -> Finding:
        message = exc.msg or str(exc)
        line = exc.lineno or None
        fix = None

        unclosed = unclosed_element(message)
        if unclosed is not None:
            name, open_line = unclosed
            target_line = open_line or line or 1
            lines = data.decode("utf-8", errors="replace").split("\n")
            line_text = lines[target_line - 1] if target_line <= len(lines) else ""
            fix = InsertClosingTag(
                file=part,
                line=target_line,
                element=qualify_element(name, line_text),
            )

        return Finding(
            severity=Severity.ERROR,
            code=FindingCode.MALFORMED_XML,
            message=f"XML syntax error: {message}",
            file=part,
            line=line,
            suggestion="Fix the XML syntax error and run validation again.",
            fix=fix,
        )
