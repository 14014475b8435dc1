"""Integrity checks over an unpacked package."""

from openxml_worktree.checkers.base import Checker
from openxml_worktree.checkers.content_types import ContentTypeChecker
from openxml_worktree.checkers.orphans import OrphanPartDetector
from openxml_worktree.checkers.relationships import RelationshipIntegrityChecker
from openxml_worktree.checkers.required import RequiredPartChecker
from openxml_worktree.checkers.wellformed import WellFormednessChecker

__all__ = [
    "Checker",
    "RequiredPartChecker",
    "WellFormednessChecker",
    "RelationshipIntegrityChecker",
    "ContentTypeChecker",
    "OrphanPartDetector",
]
