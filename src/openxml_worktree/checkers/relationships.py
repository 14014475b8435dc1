"""Relationship target resolution check."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from openxml_worktree.checkers.base import Checker, read_text
from openxml_worktree.errors import Finding, FindingCode, Severity
from openxml_worktree.fixes import RemoveXmlFragment
from openxml_worktree.relationships import iter_relationships

if TYPE_CHECKING:
    from openxml_worktree.scanner import ScannedTree

logger = logging.getLogger(__name__)


class RelationshipIntegrityChecker(Checker):
    """Reports internal relationship targets that do not exist on disk."""

    name = "relationships"

    def check(self, tree: ScannedTree) -> list[Finding]:
        findings: list[Finding] = []

        for rels_part in tree.rels_parts:
            text = read_text(tree, rels_part, findings)
            if text is None:
                continue

            for rel in iter_relationships(text, rels_part):
                if rel.is_external:
                    continue
                resolved = rel.resolve_target()
                if resolved is not None and tree.exists(resolved):
                    continue

                findings.append(
                    Finding(
                        severity=Severity.ERROR,
                        code=FindingCode.BROKEN_RELATIONSHIP,
                        message=f"Broken relationship: {rel.target} does not exist",
                        file=rels_part,
                        suggestion=(
                            f"Add the missing file or remove the relationship "
                            f"from {rels_part}"
                        ),
                        fix=RemoveXmlFragment(file=rels_part, fragment=rel.fragment),
                    )
                )

        logger.debug("%s: %d finding(s)", self.name, len(findings))
        return findings
